"""
The definitions of variants and unions.

A Variant is one case of a tagged union: a name (which serves as its tag)
and an ordered set of named, constrained fields. Calling a variant constructs
an immutable Value. A Union is a closed set of variants, possibly gathered
through sub-unions. Its tag space gets filled in when a Registry seals it,
after which the member set is fixed.
"""
from typing import Any, Iterable, Iterator, Optional, Sequence
from .diagnostics import InvalidVariantError, NotAMemberError, UnknownFieldError
from .ontology import Symbol, Field, as_constraint, admits, describe
from .space import Layer, AlreadyExists
from .values import Value, variant_of

RESERVED = frozenset(["copy"])

class Variant(Symbol):
	fields: tuple[Field, ...]
	field_space: Layer[Field]
	unions: list["Union"]  # Sealing fills this in: every union with this variant among its cases.

	def __init__(self, name:str, /, **fields):
		super().__init__(name)
		self.unions = []
		self._singleton = None
		self._install_fields(fields.items())

	@classmethod
	def from_descriptor(cls, name:str, pairs:Iterable[tuple[str, Any]]) -> "Variant":
		""" From a name and an ordered list of (field-name, field-type) pairs. """
		variant = cls(name)
		variant._install_fields(pairs)
		return variant

	def _install_fields(self, pairs:Iterable[tuple[str, Any]]):
		space = Layer()
		seen_default = False
		for name, spec in pairs:
			if not (isinstance(name, str) and name.isidentifier()) or name.startswith("_") or name in RESERVED:
				raise InvalidVariantError("Variant <%s> cannot have a field called %r." % (self.name, name))
			if isinstance(spec, Field): it = spec._replace(name=name)
			else: it = Field(name, as_constraint(spec))
			try: space.mount(name, it)
			except AlreadyExists:
				raise InvalidVariantError("Variant <%s> declares field %r more than once." % (self.name, name)) from None
			if it.has_default(): seen_default = True
			elif seen_default:
				pattern = "In variant <%s>, field %r lacks a default but follows a field which has one."
				raise InvalidVariantError(pattern % (self.name, name))
		self.field_space = space.freeze()
		self.fields = tuple(space.each_symbol())
		self._position = {f.name: i for i, f in enumerate(self.fields)}

	def field_names(self) -> list[str]:
		return [f.name for f in self.fields]

	def position(self, name:str) -> Optional[int]:
		return self._position.get(name)

	def is_nullary(self) -> bool: return not self.fields

	def leaves(self) -> tuple["Variant", ...]: return (self,)

	def admits(self, value:Any) -> bool:
		return isinstance(value, Value) and variant_of(value) is self

	def resolve_fields(self, resolve):
		""" The registry calls this to replace forward references within field constraints. """
		self.fields = tuple(f._replace(constraint=tuple(map(resolve, f.constraint))) for f in self.fields)

	def bind(self, args:Sequence, kwargs:dict) -> tuple:
		""" Line up constructor arguments with fields, the same way a function call would. """
		if len(args) > len(self.fields):
			pattern = "<%s> has %d field(s) but got %d positional argument(s)."
			raise InvalidVariantError(pattern % (self.name, len(self.fields), len(args)))
		unknown = [k for k in kwargs if k not in self._position]
		if unknown: raise UnknownFieldError(self, unknown)
		values = []
		for i, f in enumerate(self.fields):
			if i < len(args):
				if f.name in kwargs:
					raise InvalidVariantError("<%s> got field %r twice." % (self.name, f.name))
				values.append(args[i])
			elif f.name in kwargs: values.append(kwargs[f.name])
			elif f.has_default(): values.append(f.default)
			else: raise InvalidVariantError("<%s> needs a value for field %r." % (self.name, f.name))
		return self.check(values)

	def check(self, values:Sequence) -> tuple:
		for f, x in zip(self.fields, values):
			if not admits(f.constraint, x):
				pattern = "Field %r of <%s> must be %s, not %r."
				raise InvalidVariantError(pattern % (f.name, self.name, describe(f.constraint), x))
		return tuple(values)

	def __call__(self, *args, **kwargs) -> Value:
		if self.fields or args or kwargs:
			return Value(self, self.bind(args, kwargs))
		# Nullary variants have exactly one instance.
		if self._singleton is None:
			self._singleton = Value(self, ())
		return self._singleton

	def __repr__(self):
		if not self.fields: return "<%s>" % self.name
		return "<%s(%s)>" % (self.name, ", ".join("%s:%s" % (f.name, describe(f.constraint)) for f in self.fields))

###############################################################################

def _as_member(item):
	if isinstance(item, (Symbol, str)): return item
	if isinstance(item, tuple) and len(item) == 2:
		return Variant.from_descriptor(*item)
	raise InvalidVariantError("%r can be neither a variant nor a union." % (item,))

class Union(Symbol):
	"""
	A closed set of variants. Members may be variants, other unions (whose
	variants all become cases of this one), names of either (resolved when
	the registry seals), or (name, field-pairs) descriptors.
	"""
	members: list  # Resolved to Symbols during sealing.
	member_space: Layer[Symbol]  # Direct members by name; sealing fills this.
	tag_space: Layer[Variant]  # Every case by tag; sealing fills this.
	sealed: bool

	def __init__(self, name:str, /, *members):
		super().__init__(name)
		if not members:
			raise InvalidVariantError("Union <%s> needs at least one member." % name)
		self.members = [_as_member(m) for m in members]
		self.member_space = Layer()
		self.tag_space = Layer()
		self.sealed = False
		self._ordinal = {}

	def _finish(self):
		""" Sealing calls this once the tag space is complete. """
		self.member_space.freeze()
		self.tag_space.freeze()
		self._ordinal = {tag: i for i, tag in enumerate(self.tag_space)}
		self.sealed = True

	def _require_sealed(self):
		if not self.sealed:
			raise InvalidVariantError("Union <%s> is not sealed yet." % self.name)

	def cases(self) -> tuple[Variant, ...]:
		self._require_sealed()
		return tuple(self.tag_space.each_symbol())

	def leaves(self) -> tuple[Variant, ...]: return self.cases()

	def tags(self) -> tuple[str, ...]:
		self._require_sealed()
		return tuple(self.tag_space)

	def __iter__(self) -> Iterator[Variant]: return iter(self.cases())
	def __len__(self) -> int: return len(self.cases())

	def ordinal(self, tag:str) -> int:
		""" The integer discriminant of a tag, stable in declaration order. """
		self._require_sealed()
		return self._ordinal[tag]

	def variant(self, tag:str) -> Variant:
		self._require_sealed()
		it = self.tag_space.symbol(tag)
		if it is None: raise KeyError(tag)
		return it

	def __getattr__(self, name):
		if name.startswith("_"): raise AttributeError(name)
		for space in (self.__dict__.get("member_space"), self.__dict__.get("tag_space")):
			if space is not None and name in space:
				return space.symbol(name)
		raise AttributeError("Union <%s> has no member called %r" % (self.__dict__.get("name"), name))

	def admits(self, value:Any) -> bool:
		self._require_sealed()
		if not isinstance(value, Value): return False
		variant = variant_of(value)
		return self.tag_space.symbol(variant.name) is variant

	def tag_of(self, value:Any) -> str:
		""" The tag of the value within this union's own tag space. """
		if not self.admits(value): raise NotAMemberError(self, value)
		return variant_of(value).name

	def covers(self, symbol:Symbol) -> bool:
		""" Is every case of the symbol (a variant, or a sealed union) also a case of this union? """
		return all(self.tag_space.symbol(v.name) is v for v in symbol.leaves())

	def __contains__(self, item) -> bool:
		if isinstance(item, Variant):
			self._require_sealed()
			return self.tag_space.symbol(item.name) is item
		return self.admits(item)

	def __bool__(self): return True
	def __repr__(self): return "{%s:Union}" % self.name
