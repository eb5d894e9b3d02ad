"""
These most-fundamental notions are separate from the rest to avoid
circular-import scenarios: Variants and Unions both need to check
field constraints, and a constraint may itself be a Variant or Union.
"""
import types, typing
from typing import Any, NamedTuple
from .diagnostics import InvalidVariantError

class _Missing:
	""" Marks a field which has no default. """
	def __repr__(self): return "MISSING"

MISSING = _Missing()

class Symbol:
	"""
	Any named-and-defined thing that may be found in a registry.
	Thus, variants and unions.
	"""
	name: str

	def __init__(self, name:str):
		if not (isinstance(name, str) and name.isidentifier()):
			raise InvalidVariantError("%r is not a suitable name for a %s." % (name, type(self).__name__))
		self.name = name
	def __repr__(self): return "{%s:%s}" % (self.name, type(self).__name__)

	def admits(self, value:Any) -> bool:
		""" Is the value an instance of this symbol? """
		raise NotImplementedError(type(self))

class Field(NamedTuple):
	name: str
	constraint: tuple  # Alternatives: types, Symbols, None, or names of symbols not yet resolved.
	default: Any = MISSING

	def has_default(self) -> bool: return self.default is not MISSING

def field(*constraint, default=MISSING) -> Field:
	"""
	Declare a field with a default, or with more than one admissible type.
	The variant being defined supplies the name.
	"""
	return Field("", constraint or (object,), default)

def as_constraint(spec) -> tuple:
	if isinstance(spec, tuple): return spec or (object,)
	return (spec,)

###############################################################################

def admits(constraint:tuple, value:Any) -> bool:
	""" Does any alternative of the constraint admit the value? """
	return any(_admits_one(alt, value) for alt in constraint)

def _admits_one(alt, value) -> bool:
	if alt is None: return value is None
	if alt is object or alt is Any: return True
	if isinstance(alt, Symbol): return alt.admits(value)
	if isinstance(alt, str):
		raise InvalidVariantError("The forward reference %r is not resolved; seal its registry first." % alt)
	if alt is float: return isinstance(value, (int, float)) and not isinstance(value, bool)
	origin = typing.get_origin(alt)
	if origin is not None:
		# Parameterized generics get checked by their origin only.
		if origin in (typing.Union, types.UnionType): return admits(typing.get_args(alt), value)
		if origin is typing.Literal: return value in typing.get_args(alt)
		if isinstance(origin, type): return isinstance(value, origin)
		raise InvalidVariantError("%r cannot serve as a field constraint." % (alt,))
	if isinstance(alt, type): return isinstance(value, alt)
	raise InvalidVariantError("%r cannot serve as a field constraint." % (alt,))

def describe(constraint:tuple) -> str:
	return " | ".join(_describe_one(alt) for alt in constraint)

def _describe_one(alt) -> str:
	if alt is None: return "None"
	if isinstance(alt, Symbol): return alt.name
	if isinstance(alt, str): return alt
	if isinstance(alt, type) and typing.get_origin(alt) is None: return alt.__name__
	return repr(alt)
