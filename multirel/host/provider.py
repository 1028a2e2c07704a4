# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lazily evaluated values.

A `Provider` wraps a zero-argument factory. The factory runs the first time
`get()` is called and the result is cached for the lifetime of the provider;
every later `get()` returns the same object. `CollectionProvider` marks a
provider whose value is a collection of items that are realized one by one.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")
U = TypeVar("U")

_UNSET: Any = object()


class Provider(Generic[T]):
	"""A value computed on first use and memoized afterwards."""

	__slots__ = ("_factory", "_value", "name")

	def __init__(self, factory: Callable[[], T], *, name: str | None = None) -> None:
		self._factory: Callable[[], T] | None = factory
		self._value: Any = _UNSET
		self.name = name

	@classmethod
	def of(cls, value: T, *, name: str | None = None) -> "Provider[T]":
		"""Return an already-realized provider holding `value`."""
		p: Provider[T] = cls(lambda: value, name=name)
		p.get()
		return p

	@property
	def realized(self) -> bool:
		return self._value is not _UNSET

	def get(self) -> T:
		if self._value is _UNSET:
			factory = self._factory
			assert factory is not None
			self._value = factory()
			# Drop the factory so captured state can be collected.
			self._factory = None
		return self._value

	def map(self, fn: Callable[[T], U]) -> "Provider[U]":
		return Provider(lambda: fn(self.get()), name=self.name)

	def __repr__(self) -> str:
		label = self.name or "anonymous"
		if self.realized:
			return f"{type(self).__name__}({label}={self._value!r})"
		return f"{type(self).__name__}({label}, unrealized)"


class CollectionProvider(Provider[Iterable[Any]]):
	"""
	A provider of a collection.

	Items of the collection may themselves be providers; they are realized
	individually by `realize_all`.
	"""

	__slots__ = ()


def lazy(factory: Callable[[], T], *, name: str | None = None) -> Provider[T]:
	return Provider(factory, name=name)


def lazy_all(factory: Callable[[], Iterable[Any]], *, name: str | None = None) -> CollectionProvider:
	return CollectionProvider(factory, name=name)


def realize(value: Provider[T] | T) -> T:
	"""Force `value` when it is a provider, otherwise return it unchanged."""
	if isinstance(value, Provider):
		return value.get()
	return value


def realize_all(values: Iterable[Any]) -> list[Any]:
	return [realize(v) for v in values]
