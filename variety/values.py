"""
This module defines the run-time manifestation of a variant: an immutable tagged value.
All variants share the one Value class; the tag is the variant itself.
"""
from copy import deepcopy
from typing import Any
from .diagnostics import UnknownFieldError

class Value:
	"""
	An instance of some variant. Field values are stored once and never mutated.
	Equality is structural: same variant, field-wise equal values.
	"""
	__slots__ = ("_variant", "_values")

	def __init__(self, variant, values:tuple):
		assert isinstance(values, tuple) and len(values) == len(variant.fields), (variant, values)
		object.__setattr__(self, "_variant", variant)
		object.__setattr__(self, "_values", values)

	def __getattr__(self, name):
		# Only called when ordinary lookup fails, which is how field access gets here.
		if name.startswith("_"): raise AttributeError(name)
		position = self._variant.position(name)
		if position is None:
			raise AttributeError("<%s> has no field %r" % (self._variant.name, name))
		return self._values[position]

	def __setattr__(self, name, value):
		raise AttributeError("Instances of <%s> are immutable. Try copy() instead." % self._variant.name)

	def __delattr__(self, name):
		raise AttributeError("Instances of <%s> are immutable." % self._variant.name)

	def __eq__(self, other):
		if not isinstance(other, Value): return NotImplemented
		return self._variant is other._variant and self._values == other._values

	def __hash__(self):
		return hash((self._variant, self._values))

	def __repr__(self):
		variant = self._variant
		if not variant.fields: return variant.name
		inside = ", ".join("%s=%r" % (f.name, x) for f, x in zip(variant.fields, self._values))
		return "%s(%s)" % (variant.name, inside)

	def __iter__(self):
		""" Positional destructuring, in field order. """
		return iter(self._values)

	def __copy__(self): return self

	def __deepcopy__(self, memo):
		if not self._values: return self
		return Value(self._variant, deepcopy(self._values, memo))

	def copy(self, **overrides) -> "Value":
		"""
		A new instance of the same variant, with the named fields replaced
		and all the others carried over. The original is left alone.
		"""
		variant = self._variant
		unknown = [name for name in overrides if variant.position(name) is None]
		if unknown: raise UnknownFieldError(variant, unknown)
		if not variant.fields: return self
		values = tuple(overrides.get(f.name, x) for f, x in zip(variant.fields, self._values))
		return Value(variant, variant.check(values))

###############################################################################

def variant_of(value:Value):
	return value._variant

def fields_of(value:Value) -> tuple:
	return value._values

def as_dict(value:Value) -> dict[str, Any]:
	return {f.name: x for f, x in zip(value._variant.fields, value._values)}

def memberships(value:Value) -> tuple:
	""" Every union the value's variant belongs to. """
	return tuple(value._variant.unions)

def equal(a, b) -> bool:
	""" Value-equality: field by field, regardless of identity. """
	return a == b

def same(a, b) -> bool:
	""" Identity: the very same object. """
	return a is b
