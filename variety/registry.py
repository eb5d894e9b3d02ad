"""
All the definition resolution stuff goes here.

A Registry collects variants and unions by name, so they may refer to each
other (and to themselves, within field types) before all of them exist.
Sealing runs a few passes in order. By the time they finish, every forward
reference points to its symbol, every union knows its complete tag space,
and the registry accepts no further definitions.
"""
from typing import Optional
from boozetools.support.foundation import Visitor, strongly_connected_components_hashable
from .diagnostics import Report, InvalidVariantError, TooManyIssues
from .ontology import Symbol
from .definition import Variant, Union
from .space import Layer, AlreadyExists

class Registry:
	symbols: Layer[Symbol]

	def __init__(self, name:str="", *, report:Optional[Report]=None):
		self.name = name
		self.report = report if report is not None else Report()
		self.symbols = Layer()
		self.sealed = False
		self._redefined = []

	def __repr__(self): return "<Registry %r>" % self.name

	def define(self, symbol:Symbol) -> Symbol:
		""" Add an already-made variant or union under its own name. """
		assert isinstance(symbol, Symbol), type(symbol)
		if self.sealed:
			raise InvalidVariantError("Registry %r is sealed; nothing more may be defined in it." % self.name)
		try: self.symbols.mount(symbol.name, symbol)
		except AlreadyExists:
			# Complain when sealing, so one attempt explains everything.
			self._redefined.append((self.symbols.symbol(symbol.name), symbol))
		return symbol

	def variant(self, name:str, /, **fields) -> Variant:
		return self.define(Variant(name, **fields))

	def union(self, name:str, /, *members) -> Union:
		return self.define(Union(name, *members))

	def __contains__(self, name:str) -> bool:
		return name in self.symbols

	def __getitem__(self, name:str) -> Symbol:
		symbol = self.symbols.symbol(name)
		if symbol is None: raise KeyError(name)
		return symbol

	def __getattr__(self, name):
		if name.startswith("_") or "symbols" not in self.__dict__: raise AttributeError(name)
		symbol = self.symbols.symbol(name)
		if symbol is None: raise AttributeError("Registry %r has nothing called %r" % (self.name, name))
		return symbol

	def seal(self) -> "Registry":
		"""
		Resolve, check, and freeze everything defined so far.
		On trouble, raise InvalidVariantError naming the pass and carrying every complaint.
		Afterwards the report holds the complaints of this attempt only.
		"""
		if self.sealed: return self
		report = self.report
		report.reset()
		try:
			for first, guilty in self._redefined:
				report.redefined(guilty.name, first, guilty)
			report.fail_if_sick("define", "Registry %r has conflicting definitions." % self.name)

			report.info("Registry %r: resolving %d name(s)" % (self.name, len(self.symbols)))
			resolver = Resolver(self.symbols, report)
			for symbol in self.symbols.each_symbol():
				resolver.visit(symbol)
			report.fail_if_sick("resolve", "Registry %r has unresolved references." % self.name)

			_report_circular_unions(resolver.nesting, report)
			report.fail_if_sick("circular", "Registry %r has circular unions." % self.name)

			flattener = Flattener(report)
			for union in resolver.nesting:
				flattener.visit(union)
			report.fail_if_sick("flatten", "Registry %r has colliding tags." % self.name)
		except TooManyIssues:
			raise InvalidVariantError("Giving up on registry %r after a few issues." % self.name, issues=report.issues) from None
		for union in flattener.done:
			union._finish()
			for leaf in union.tag_space.each_symbol():
				leaf.unions.append(union)
			report.info("Registry %r: sealed <%s> with tags %s" % (self.name, union.name, ", ".join(union.tags())))
		self.symbols.freeze()
		self.sealed = True
		return self

	def unions(self) -> list[Union]:
		return [s for s in self.symbols.each_symbol() if isinstance(s, Union)]

	def variants(self) -> list[Variant]:
		return [s for s in self.symbols.each_symbol() if isinstance(s, Variant)]

def define_union(name:str, /, *members, report:Optional[Report]=None) -> Union:
	""" Define and seal a single union in one step. """
	registry = Registry(name, report=report)
	union = registry.union(name, *members)
	registry.seal()
	return union

###############################################################################

class Resolver(Visitor):
	"""
	Replaces names with the symbols they refer to, within union members and
	field constraints. Also maps out which unions directly contain which others.
	"""
	nesting: dict[Union, list[Union]]

	def __init__(self, symbols:Layer[Symbol], report:Report):
		self.symbols = symbols
		self.report = report
		self.nesting = {}
		self._seen = set()

	def _lookup(self, name:str, where:Symbol):
		symbol = self.symbols.symbol(name)
		if symbol is None: self.report.undefined_name(name, where)
		return symbol

	def visit_Symbol(self, symbol:Symbol):
		pass

	def visit_Variant(self, variant:Variant):
		if variant in self._seen: return
		self._seen.add(variant)
		def resolve(alt):
			if isinstance(alt, str):
				found = self._lookup(alt, variant)
				return alt if found is None else found
			return alt
		variant.resolve_fields(resolve)

	def visit_Union(self, union:Union):
		if union in self._seen or union.sealed: return
		self._seen.add(union)
		members = []
		for member in union.members:
			if isinstance(member, str):
				found = self._lookup(member, union)
				if found is None: continue
				if not isinstance(found, (Variant, Union)):
					self.report.not_a_union_member(found, union)
					continue
				member = found
			members.append(member)
		union.members = members
		self.nesting[union] = [m for m in members if isinstance(m, Union) and not m.sealed]
		for member in members:
			self.visit(member)

def _report_circular_unions(graph:dict, report:Report):
	for scc in strongly_connected_components_hashable(graph):
		if len(scc) == 1:
			node = scc[0]
			if node in graph[node]:
				report.circular_union(scc)
		else:
			report.circular_union(scc)

class Flattener(Visitor):
	""" Works out the complete tag space of each union, from the bottom up. """
	done: list[Union]

	def __init__(self, report:Report):
		self.report = report
		self.done = []

	def visit_Variant(self, variant:Variant):
		return (variant,)

	def visit_Union(self, union:Union):
		if union.sealed or union in self.done:
			return tuple(union.tag_space.each_symbol())
		for member in union.members:
			prior = union.member_space.symbol(member.name)
			if prior is None: union.member_space.mount(member.name, member)
			elif prior is not member: self.report.tag_collision(union, member.name, prior, member)
			for leaf in self.visit(member):
				existing = union.tag_space.symbol(leaf.name)
				if existing is None:
					union.tag_space.mount(leaf.name, leaf)
				elif existing is not leaf:
					self.report.tag_collision(union, leaf.name, existing, leaf)
		self.done.append(union)
		return tuple(union.tag_space.each_symbol())
