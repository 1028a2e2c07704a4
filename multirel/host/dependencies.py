# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dependency notations and the file resolver.

The host knows two kinds of dependency:
- `FileDependency`: an archive file or a directory on disk,
- `ArchiveDependency`: the output of another archive task in the build.

Either may list further dependencies in `requires`; the resolver follows them
only when asked to resolve transitively.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Union

from multirel.diagnostics import Problems
from multirel.host.archive import ArchiveTask
from multirel.host.files import FileTree


@dataclass(frozen=True)
class FileDependency:
	path: Path
	requires: tuple[Any, ...] = ()

	def __str__(self) -> str:
		return f"files({self.path})"


@dataclass(frozen=True)
class ArchiveDependency:
	task: ArchiveTask
	requires: tuple[Any, ...] = ()

	def __str__(self) -> str:
		return f"task({self.task.name})"


Dependency = Union[FileDependency, ArchiveDependency]


def dependency_of(notation: Any) -> Dependency:
	"""Convert a path, file name or archive task into a dependency."""
	if isinstance(notation, (FileDependency, ArchiveDependency)):
		return notation
	if isinstance(notation, ArchiveTask):
		return ArchiveDependency(task=notation)
	if isinstance(notation, (str, Path)):
		if not str(notation):
			raise ValueError("file dependency path must be non-empty")
		return FileDependency(path=Path(notation))
	raise TypeError(f"cannot use {type(notation).__name__} as a dependency: {notation!r}")


class Resolver:
	def __init__(self, problems: Problems | None = None) -> None:
		self.problems = problems

	def walk(self, dependencies: Iterable[Dependency], *, transitive: bool) -> list[Dependency]:
		"""The dependencies in first-seen order, following `requires` if transitive."""
		out: list[Dependency] = []
		stack = list(dependencies)
		stack.reverse()
		while stack:
			dep = stack.pop()
			if dep in out:
				continue
			out.append(dep)
			if transitive:
				stack.extend(reversed([dependency_of(r) for r in dep.requires]))
		return out

	def resolve(self, dependencies: Iterable[Dependency], *, transitive: bool) -> list[FileTree]:
		trees: list[FileTree] = []
		for dep in self.walk(dependencies, transitive=transitive):
			if isinstance(dep, ArchiveDependency):
				trees.append(dep.task.tree(self.problems))
			else:
				trees.append(FileTree.of_file(dep.path))
		return trees

	def build_dependencies(self, dependencies: Iterable[Dependency], *, transitive: bool) -> list[ArchiveTask]:
		return [d.task for d in self.walk(dependencies, transitive=transitive) if isinstance(d, ArchiveDependency)]
