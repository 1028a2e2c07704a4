# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolution units: the per-`add` wrapper around the dependency items of one
tier contribution.

`add` accepts a dependency in three shapes: the dependency itself (or a list
of them), a `Provider` of one dependency, or a `CollectionProvider` of many.
`normalize_source` folds all of them into a single provider of a dependency
list, so the rest of the code only ever sees one form.
"""

from __future__ import annotations

from typing import Any, Callable

from multirel.host.archive import ArchiveTask
from multirel.host.dependencies import Dependency, Resolver, dependency_of
from multirel.host.files import FileTree
from multirel.host.provider import CollectionProvider, Provider, lazy, realize


def normalize_source(source: Any) -> Provider[list[Dependency]]:
	if isinstance(source, CollectionProvider):
		return source.map(lambda items: [dependency_of(realize(i)) for i in items])
	if isinstance(source, Provider):
		return source.map(lambda item: [dependency_of(item)])
	if isinstance(source, (list, tuple)):
		items = list(source)
		return lazy(lambda: [dependency_of(realize(i)) for i in items])
	return Provider.of([dependency_of(source)])


def describe_first(source: Any) -> str | None:
	"""Describe the first dependency item of `source` without realizing anything."""
	if isinstance(source, (list, tuple)):
		if not source:
			return None
		source = source[0]
	if isinstance(source, Provider):
		return repr(source)
	try:
		return str(dependency_of(source))
	except (TypeError, ValueError):
		return repr(source)


class ResolutionUnit:
	"""
	An independently configurable set of dependencies whose files are
	realized at most once.

	Units start non-transitive. Options may flip `transitive` or add more
	dependencies until the unit is locked; after that it is read-only.
	"""

	def __init__(self, name: str, items: Provider[list[Dependency]], resolver: Resolver) -> None:
		self.name = name
		self._items = items
		self._extra: list[Dependency] = []
		self._transitive = False
		self._locked = False
		self._resolver = resolver
		self._files = lazy(self._resolve, name=f"{name}:files")

	@property
	def transitive(self) -> bool:
		return self._transitive

	@transitive.setter
	def transitive(self, value: bool) -> None:
		self._check_mutable()
		self._transitive = bool(value)

	@property
	def locked(self) -> bool:
		return self._locked

	def add(self, notation: Any) -> None:
		self._check_mutable()
		self._extra.append(dependency_of(notation))

	def configure(self, options: Callable[["ResolutionUnit"], Any] | None) -> "ResolutionUnit":
		"""Apply caller options, then lock the unit."""
		if options is not None:
			options(self)
		self._locked = True
		return self

	def dependencies(self) -> list[Dependency]:
		return list(self._items.get()) + list(self._extra)

	def files(self) -> list[FileTree]:
		return self._files.get()

	def build_dependencies(self) -> list[ArchiveTask]:
		return self._resolver.build_dependencies(self.dependencies(), transitive=self._transitive)

	def _resolve(self) -> list[FileTree]:
		return self._resolver.resolve(self.dependencies(), transitive=self._transitive)

	def _check_mutable(self) -> None:
		if self._locked:
			raise ValueError(f"resolution unit '{self.name}' can no longer be configured")

	def __repr__(self) -> str:
		return f"ResolutionUnit({self.name!r}, transitive={self._transitive})"
