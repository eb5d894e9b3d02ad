"""
Helpers for attaching behavior by composition rather than inheritance:
explicit forwarding to an owned delegate, cells which consult callbacks
around every change, cells which compute their value just once,
and attributes which log each time they are read or written.
"""
from threading import Lock
from typing import Any, Callable, Optional

def forwarding(attribute:str, *names:str):
	"""
	Class decorator: for each name, write a method onto the class which
	forwards the call to the same-named method of `self.<attribute>`.
	Methods the class defines for itself are left alone.
	"""
	def decorate(cls):
		for name in names:
			if name not in cls.__dict__:
				setattr(cls, name, _forwarder(attribute, name))
		return cls
	return decorate

def _forwarder(attribute:str, name:str):
	def forward(self, *args, **kwargs):
		return getattr(getattr(self, attribute), name)(*args, **kwargs)
	forward.__name__ = name
	forward.__qualname__ = name
	forward.__doc__ = "Forwards to self.%s.%s" % (attribute, name)
	return forward

###############################################################################

Hook = Callable[[Any, Any], Any]

class Watched:
	"""
	A cell whose setter asks `before(old, new)` whether to accept a change,
	then tells `after(old, new)` once it has happened. Either may be absent.
	"""
	def __init__(self, initial, *, before:Optional[Hook]=None, after:Optional[Hook]=None):
		self._value = initial
		self._before = before
		self._after = after

	def get(self): return self._value

	def set(self, new) -> bool:
		""" Returns whether the change was accepted. """
		old = self._value
		if self._before is not None and not self._before(old, new):
			return False
		self._value = new
		if self._after is not None:
			self._after(old, new)
		return True

	def __repr__(self): return "<Watched %r>" % (self._value,)

def observable(initial, on_change:Hook) -> Watched:
	return Watched(initial, after=on_change)

def vetoable(initial, accept:Hook) -> Watched:
	return Watched(initial, before=accept)

###############################################################################

_ABSENT = object()

class Lazy:
	"""
	Computes its value on first access, then returns the same value forever.
	The lock makes sure the factory runs at most once, even among threads.
	"""
	def __init__(self, factory:Callable[[], Any]):
		self._factory = factory
		self._value = _ABSENT
		self._mutex = Lock()

	def is_initialized(self) -> bool:
		return self._value is not _ABSENT

	@property
	def value(self):
		if self._value is _ABSENT:
			self._mutex.acquire()
			try:
				if self._value is _ABSENT:
					self._value = self._factory()
					del self._factory
			finally:
				self._mutex.release()
		return self._value

	def __repr__(self):
		return "<Lazy %r>" % (self._value,) if self.is_initialized() else "<Lazy (pending)>"

###############################################################################

class Logged:
	"""
	A descriptor for an attribute which reports every read and every write.
	Each instance of the owning class starts out holding `initial`.
	"""
	def __init__(self, initial, *, log:Callable[[str], Any]=print):
		self._initial = initial
		self._log = log

	def __set_name__(self, owner, name:str):
		self.name = name
		self._slot = "_logged_" + name

	def __get__(self, instance, owner=None):
		if instance is None: return self
		value = instance.__dict__.get(self._slot, self._initial)
		self._log("  Getting %s = %s" % (self.name, value))
		return value

	def __set__(self, instance, value):
		old = instance.__dict__.get(self._slot, self._initial)
		self._log("  Setting %s from %s to %s" % (self.name, old, value))
		instance.__dict__[self._slot] = value
