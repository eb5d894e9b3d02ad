"""
Exhaustive, guard-refined dispatch over the cases of a union.

A Match gets built once, from a union and a table of entries. At that point
it checks that every entry refers to cases of the union, that no entry is
unreachable, and that every case has somewhere to go or else a fallback exists.
After that it is a pure dispatcher with no state of its own to disturb.

Table entries are keyed by a tag, by a Variant, or by a sub-Union standing
for its whole family. Handlers keyed by a variant receive its fields in order.
Handlers keyed by a union (and the fallback) receive the value itself, since
its shape is not known in advance. Guards get the same arguments as their handlers.
"""
from typing import Any, Callable, Iterable, Mapping, NamedTuple, Optional
from .diagnostics import Report, NonExhaustiveMatchError
from .ontology import Symbol
from .definition import Variant, Union
from .values import fields_of

class Case(NamedTuple):
	key: Any  # A tag, a Variant, or a sub-Union.
	handler: Callable
	guard: Optional[Callable] = None

	def __repr__(self):
		key = self.key if isinstance(self.key, str) else self.key.name
		return "<case %s%s>" % (key, "" if self.guard is None else " if ...")

class _Entry(NamedTuple):
	case: Case
	symbol: Symbol
	spread: bool

	def tags(self) -> list[str]:
		return [v.name for v in self.symbol.leaves()]

	def arguments(self, value) -> tuple:
		return fields_of(value) if self.spread else (value,)

	def applies(self, value) -> bool:
		guard = self.case.guard
		return guard is None or bool(guard(*self.arguments(value)))

	def apply(self, value):
		return self.case.handler(*self.arguments(value))

def _as_cases(table) -> Iterable[Case]:
	if isinstance(table, Mapping):
		return [Case(key, handler) for key, handler in table.items()]
	return [item if isinstance(item, Case) else Case(*item) for item in table]

class Match:
	union: Union
	otherwise: Optional[Callable]
	_dispatch: dict[str, list[_Entry]]

	def __init__(self, union:Union, table, otherwise:Optional[Callable]=None, *, report:Optional[Report]=None):
		assert isinstance(union, Union), type(union)
		self.union = union
		self.otherwise = otherwise
		report = report if report is not None else Report()
		report.reset()

		# Check for typos and things from other unions.
		entries = []
		for case in _as_cases(table):
			assert callable(case.handler), case
			symbol = self._resolve(case.key)
			if symbol is None: report.not_a_case_of(case.key, union)
			else: entries.append(_Entry(case, symbol, isinstance(symbol, Variant)))
		report.fail_if_sick("match", "This match refers to things that are not cases of <%s>." % union.name)

		# Check for unreachable entries.
		self._dispatch = {tag:[] for tag in union.tags()}
		unguarded = {}
		for entry in entries:
			tags = entry.tags()
			if entry.case.guard is None:
				if all(t in unguarded for t in tags):
					report.redundant_pattern(unguarded[tags[0]].case, entry.case)
				for t in tags: unguarded.setdefault(t, entry)
			for t in tags: self._dispatch[t].append(entry)
		report.fail_if_sick("match", "This match over <%s> has unreachable entries." % union.name)

		# Check for exhaustiveness.
		missing = [tag for tag, each in self._dispatch.items() if not each]
		if missing and otherwise is None:
			raise NonExhaustiveMatchError(union, missing)
		if otherwise is not None and len(unguarded) == len(self._dispatch):
			report.redundant_else(union)

	def _resolve(self, key) -> Optional[Symbol]:
		union = self.union
		if isinstance(key, str):
			symbol = union.tag_space.symbol(key)
			if symbol is None: symbol = union.member_space.symbol(key)
			if isinstance(symbol, Union) and not union.covers(symbol): return None
			return symbol
		if isinstance(key, Variant):
			return key if key in union else None
		if isinstance(key, Union):
			return key if key.sealed and union.covers(key) else None
		return None

	def __call__(self, value):
		tag = self.union.tag_of(value)
		for entry in self._dispatch[tag]:
			if entry.applies(value):
				return entry.apply(value)
		if self.otherwise is not None:
			return self.otherwise(value)
		raise NonExhaustiveMatchError(self.union, (tag,))

	def __repr__(self): return "<Match over %s>" % self.union.name

def match(value, union:Union, table, otherwise:Optional[Callable]=None):
	""" Build a match and apply it, all in one go. """
	return Match(union, table, otherwise)(value)
