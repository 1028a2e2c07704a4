# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Archive tasks and deterministic archive output.

An `ArchiveTask` is described by copy specs: a root spec (content placed at the
archive root), root specs inherited by reference from other archive tasks, and
any number of child specs placed under a path prefix. Nothing is read until
`layout()` evaluates the specs into a path -> entry map.

Written archives are deterministic:
- the manifest is written first, then entries in sorted order,
- entries use fixed timestamps,
- no compression (STORE) to avoid platform-dependent compression outputs.
"""

from __future__ import annotations

import functools
import re
import zipfile
from dataclasses import replace
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, Iterable

from multirel.diagnostics import Diagnostic, Problems
from multirel.host.files import FileEntry, FileTree, normalize_entry_path
from multirel.host.manifest import MANIFEST_PATH, Manifest
from multirel.host.provider import Provider, realize

BUILD_GROUP = "build"


class Duplicates(str, Enum):
	"""What to do when two entries land on the same archive path."""

	EXCLUDE = "exclude"  # keep the first entry silently
	WARN = "warn"  # keep the first entry and report a warning


@functools.lru_cache(maxsize=None)
def _pattern_regex(pattern: str) -> re.Pattern[str]:
	"""
	Compile an Ant-style path pattern.

	`**` matches any number of directories (including none), `*` matches within
	one path segment, `?` matches one character. A trailing `/**` also matches
	the directory itself.
	"""
	out: list[str] = []
	i = 0
	while i < len(pattern):
		if pattern.startswith("**/", i):
			out.append("(?:.*/)?")
			i += 3
		elif pattern.startswith("/**", i) and i + 3 == len(pattern):
			out.append("(?:/.*)?")
			i += 3
		elif pattern.startswith("**", i):
			out.append(".*")
			i += 2
		elif pattern[i] == "*":
			out.append("[^/]*")
			i += 1
		elif pattern[i] == "?":
			out.append("[^/]")
			i += 1
		else:
			out.append(re.escape(pattern[i]))
			i += 1
	return re.compile("".join(out))


def path_matches(pattern: str, path: str) -> bool:
	return _pattern_regex(pattern).fullmatch(path) is not None


class CopySpec:
	def __init__(self, into: str = "", *, duplicates: Duplicates = Duplicates.EXCLUDE) -> None:
		self.into = normalize_entry_path(into, what="copy destination") if into else ""
		self.duplicates = duplicates
		self.excludes: list[str] = []
		self._sources: list[Any] = []

	def from_(self, source: FileTree | Provider[Any]) -> "CopySpec":
		"""Add a tree, a provider of a tree, or a provider of a list of trees."""
		self._sources.append(source)
		return self

	def exclude(self, *patterns: str) -> "CopySpec":
		self.excludes.extend(patterns)
		return self

	@property
	def source_count(self) -> int:
		return len(self._sources)

	def trees(self) -> list[FileTree]:
		out: list[FileTree] = []
		for source in self._sources:
			value = realize(source)
			if isinstance(value, FileTree):
				out.append(value)
			else:
				out.extend(value)
		return out

	def is_excluded(self, path: str) -> bool:
		return any(path_matches(p, path) for p in self.excludes)

	def target(self, path: str) -> str:
		if not self.into:
			return path
		return str(PurePosixPath(self.into) / path)

	def __repr__(self) -> str:
		return f"CopySpec(into={self.into!r}, sources={len(self._sources)}, duplicates={self.duplicates.value})"


class ArchiveTask:
	def __init__(self, name: str, *, group: str | None = BUILD_GROUP, manifest: Manifest | None = None) -> None:
		if not name:
			raise ValueError("archive task name must be non-empty")
		self.name = name
		self.group = group
		self.manifest = manifest if manifest is not None else Manifest()
		self.root = CopySpec()
		self.children: list[CopySpec] = []
		self._inherited: list[ArchiveTask] = []
		self._depends_on: list[Any] = []

	def from_(self, source: FileTree | Provider[Any]) -> "ArchiveTask":
		self.root.from_(source)
		return self

	def with_(self, other: "ArchiveTask") -> "ArchiveTask":
		"""Include `other`'s root content by reference (later changes show up here)."""
		if other is self:
			raise ValueError(f"archive task '{self.name}' cannot include itself")
		self._inherited.append(other)
		return self

	def into(self, prefix: str, *, duplicates: Duplicates = Duplicates.EXCLUDE) -> CopySpec:
		spec = CopySpec(prefix, duplicates=duplicates)
		self.children.append(spec)
		return spec

	def depends_on(self, *deps: "ArchiveTask | Provider[Any]") -> "ArchiveTask":
		self._depends_on.extend(deps)
		return self

	def task_dependencies(self) -> list["ArchiveTask"]:
		out: list[ArchiveTask] = []
		for dep in self._depends_on:
			value = realize(dep)
			items: Iterable[Any] = [value] if isinstance(value, ArchiveTask) else value
			for task in items:
				if not any(task is seen for seen in out):
					out.append(task)
		return out

	def root_specs(self) -> list[CopySpec]:
		out: list[CopySpec] = []
		for base in self._inherited:
			out.extend(base.root_specs())
		out.append(self.root)
		return out

	def layout(self, problems: Problems | None = None) -> dict[str, FileEntry]:
		"""
		Evaluate every copy spec into the final path -> entry map.

		Specs are applied root first, then children in declaration order. The
		first entry to claim a path keeps it; later ones are dropped, with a
		warning when the claiming spec says `Duplicates.WARN`.
		"""
		out: dict[str, FileEntry] = {}
		for spec in self.root_specs() + self.children:
			for tree in spec.trees():
				for entry in tree.entries():
					if spec.is_excluded(entry.path):
						continue
					target = spec.target(entry.path)
					if target == MANIFEST_PATH:
						# The task's own manifest always wins.
						continue
					kept = out.get(target)
					if kept is None:
						out[target] = entry
						continue
					if spec.duplicates is Duplicates.WARN and problems is not None:
						problems.report(
							Diagnostic(
								message=f"duplicate path '{target}' in archive '{self.name}'; keeping the first entry",
								code="DUPLICATE_PATH",
								phase="archive",
								severity="warning",
								notes=[f"kept: {kept.origin}", f"ignored: {entry.origin}"],
							)
						)
		return out

	def tree(self, problems: Problems | None = None) -> FileTree:
		"""The archive's content as a file tree, without the manifest."""

		def load() -> list[FileEntry]:
			return [replace(e, path=p) for p, e in sorted(self.layout(problems).items())]

		return FileTree(self.name, load)

	def __repr__(self) -> str:
		return f"ArchiveTask({self.name!r})"


def _zipinfo(name: str) -> zipfile.ZipInfo:
	"""
	Create a ZipInfo with deterministic metadata.

	- fixed timestamp (Zip's earliest representable time)
	- no extra fields
	"""
	zi = zipfile.ZipInfo(filename=name)
	zi.date_time = (1980, 1, 1, 0, 0, 0)
	return zi


def write_archive(task: ArchiveTask, path: Path, problems: Problems | None = None) -> list[str]:
	"""Write `task` as a zip archive at `path`; returns the entry names written."""
	layout = task.layout(problems)
	path.parent.mkdir(parents=True, exist_ok=True)
	names = [MANIFEST_PATH]
	with zipfile.ZipFile(path, mode="w") as zf:
		zf.writestr(_zipinfo(MANIFEST_PATH), task.manifest.render(), compress_type=zipfile.ZIP_STORED)
		for name in sorted(layout):
			zf.writestr(_zipinfo(name), layout[name].read(), compress_type=zipfile.ZIP_STORED)
			names.append(name)
	return names
