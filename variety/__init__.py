"""
Tagged unions for Python: closed sets of immutable variants,
and matches that are checked for exhaustiveness before they ever run.
"""
from .diagnostics import (
	VarietyError, InvalidVariantError, UnknownFieldError,
	NonExhaustiveMatchError, NotAMemberError, Report,
)
from .ontology import field, MISSING
from .definition import Variant, Union
from .values import Value, equal, same, memberships
from .registry import Registry, define_union
from .matching import Case, Match, match
