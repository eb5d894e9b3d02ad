"""
The two-case outcome convention.

Rather than raising, a fallible step may answer with Success(value) or
Failure(error), where the error is a description of what went wrong.
Nothing in this package insists on it; it is simply on offer.
"""
from typing import Any, Callable
from .registry import Registry
from .matching import Match

outcomes = Registry("outcomes")
Success = outcomes.variant("Success", value=object)
Failure = outcomes.variant("Failure", error=str)
Result = outcomes.union("Result", Success, Failure)
outcomes.seal()

def attempt(fn:Callable, *args, catch=(Exception,), **kwargs):
	""" Call fn, turning any exception of the given kinds into a Failure. """
	try: value = fn(*args, **kwargs)
	except catch as ex: return Failure(describe_exception(ex))
	return Success(value)

def describe_exception(ex:BaseException) -> str:
	text = str(ex)
	return "%s: %s" % (type(ex).__name__, text) if text else type(ex).__name__

def fold(result, on_success:Callable[[Any], Any], on_failure:Callable[[str], Any]):
	""" Send a result to whichever handler suits. """
	return Match(Result, {Success: on_success, Failure: on_failure})(result)

def value_or(result, default):
	return fold(result, lambda value: value, lambda error: default)

def is_success(result) -> bool:
	return Success.admits(result)
