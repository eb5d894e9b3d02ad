"""
Everything that can go wrong while defining or using tagged unions,
together with the Report which collects complaints during the sealing passes
so that one attempt can explain every problem at once.
"""
import sys
from typing import Any, Iterable, NamedTuple, Sequence

class VarietyError(Exception):
	""" Base of everything this package raises on purpose. """

class InvalidVariantError(VarietyError):
	"""
	A union or variant definition is malformed, or a constructor got a bad field value.

	When a Registry fails to seal, `phase` names the pass fraught with error.
	The end-user might not care about that, but it's handy for testing.
	"""
	def __init__(self, message:str, *, phase:str=None, issues:Sequence["Complaint"]=()):
		super().__init__(message)
		self.phase = phase
		self.issues = list(issues)

	def __str__(self):
		lines = [self.args[0]]
		lines.extend(str(i) for i in self.issues)
		return "\n".join(lines)

class UnknownFieldError(VarietyError):
	""" Named one or more fields that the variant does not have. """
	def __init__(self, variant, names:Iterable[str]):
		self.variant = variant
		self.names = tuple(names)
		pattern = "Variant <%s> has no field called %s."
		super().__init__(pattern % (variant.name, ", ".join(map(repr, self.names))))

class NonExhaustiveMatchError(VarietyError):
	""" A match neither covers some tag nor supplies a fallback. """
	def __init__(self, union, missing:Iterable[str]):
		self.union = union
		self.missing = tuple(missing)
		pattern = "This match does not cover all the cases of <%s> and lacks a fallback. Missing: %s"
		super().__init__(pattern % (union.name, ", ".join(self.missing)))

class NotAMemberError(VarietyError, TypeError):
	""" Asked a union about a value which is not one of its cases. """
	def __init__(self, union, value:Any):
		self.union = union
		self.value = value
		super().__init__("%r is not a case of <%s>." % (value, union.name))

class TooManyIssues(Exception):
	pass

###############################################################################

class Complaint(NamedTuple):
	intro: str
	culprits: tuple[str, ...] = ()
	def __str__(self):
		return "\n".join([" - " + self.intro, *("     " + c for c in self.culprits)])

class Report:
	""" Collects complaints, and narrates to stderr when asked to be verbose. """
	_issues: list[Complaint]

	def __init__(self, *, verbose:int=0, max_issues=30):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	@property
	def issues(self) -> list[Complaint]: return list(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Complaint):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self._issues:
			print(i, file=sys.stderr)

	def fail_if_sick(self, phase:str, summary:str):
		""" Does what it says on the tin """
		if self._issues:
			raise InvalidVariantError(summary, phase=phase, issues=self._issues)

	# Methods the definition pass calls:

	def redefined(self, name:str, first, guilty):
		intro = "The name %r is defined more than once in the same registry." % name
		self.issue(Complaint(intro, (repr(first), repr(guilty))))

	# Methods the resolver calls:

	def undefined_name(self, name:str, where):
		intro = "I don't see what %r refers to." % name
		self.issue(Complaint(intro, (repr(where),)))

	def not_a_union_member(self, guilty, union):
		intro = "Only variants and unions may be members of <%s>." % union.name
		self.issue(Complaint(intro, (repr(guilty),)))

	def circular_union(self, scc:Sequence):
		intro = "What we have here is a circular union-definition."
		self.issue(Complaint(intro, tuple(repr(node) for node in scc)))

	def tag_collision(self, union, tag:str, first, second):
		intro = "Two different variants share the tag %r within <%s>." % (tag, union.name)
		self.issue(Complaint(intro, (repr(first), repr(second))))

	# Methods the match-checker calls:

	def not_a_case_of(self, key, union):
		intro = "This key is not a member of the union <%s>." % union.name
		self.issue(Complaint(intro, (repr(key),)))

	def redundant_pattern(self, prior, new):
		intro = "These two entries are the same, or overlap, or are redundant."
		self.issue(Complaint(intro, ("First: %r" % (prior,), "Not First: %r" % (new,))))

	def redundant_else(self, union):
		self.info("A match over <%s> covers every case, so its fallback can never run." % union.name)
