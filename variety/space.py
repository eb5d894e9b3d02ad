"""
Name-spaces for variants, unions, and the tags within a union.
"""

from typing import Generic, Iterable, Iterator, Optional, TypeVar

class AlreadyExists(KeyError): pass
class Frozen(KeyError): pass

T = TypeVar('T')

class Layer(Generic[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys, and it can be frozen. """
	_symbol: dict[str, T]

	def __init__(self):
		self._symbol = {}
		self._frozen = False

	def __contains__(self, key: str) -> bool:
		return key in self._symbol

	def __len__(self) -> int:
		return len(self._symbol)

	def __iter__(self) -> Iterator[str]:
		return iter(self._symbol)

	def symbol(self, key: str) -> Optional[T]:
		return self._symbol.get(key)

	def mount(self, key:str, symbol:T) -> T:
		if self._frozen:
			raise Frozen(key)
		if key in self._symbol:
			raise AlreadyExists(key)
		else:
			self._symbol[key] = symbol
			return symbol

	def freeze(self) -> "Layer[T]":
		self._frozen = True
		return self

	def is_frozen(self) -> bool: return self._frozen

	def each_symbol(self) -> Iterable[T]:
		return self._symbol.values()

	def items(self) -> Iterable[tuple[str, T]]:
		return self._symbol.items()
