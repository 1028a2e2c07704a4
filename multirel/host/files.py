# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
File trees: ordered collections of archive entries.

A tree is read lazily. Building a `FileTree` never touches the file system;
listing its entries does (once), and reading an entry's bytes happens only
when the archive is written.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Mapping


def normalize_entry_path(path_str: str, *, what: str = "entry path") -> str:
	"""Return `path_str` as a clean relative POSIX path or raise ValueError."""
	p = PurePosixPath(path_str.replace("\\", "/"))
	if p.is_absolute():
		raise ValueError(f"{what} must be a relative path, got: {path_str}")
	if not p.parts or str(p) == ".":
		raise ValueError(f"{what} must be non-empty, got: {path_str}")
	if any(part in (".", "..") for part in p.parts):
		raise ValueError(f"{what} must not contain '.' or '..', got: {path_str}")
	return str(p)


@dataclass(frozen=True)
class FileEntry:
	"""One file of a tree. `origin` names the tree it came from."""

	path: str
	origin: str
	read: Callable[[], bytes] = field(compare=False, repr=False)


class FileTree:
	def __init__(self, name: str, loader: Callable[[], Iterable[FileEntry]]) -> None:
		self.name = name
		self._loader = loader
		self._entries: list[FileEntry] | None = None

	def entries(self) -> list[FileEntry]:
		if self._entries is None:
			self._entries = list(self._loader())
		return list(self._entries)

	def paths(self) -> list[str]:
		return [e.path for e in self.entries()]

	def __repr__(self) -> str:
		return f"FileTree({self.name!r})"

	@classmethod
	def from_mapping(cls, name: str, files: Mapping[str, bytes]) -> "FileTree":
		"""An in-memory tree; mostly useful for tests and generated content."""
		frozen = {normalize_entry_path(k): bytes(v) for k, v in files.items()}

		def load() -> list[FileEntry]:
			return [FileEntry(path=k, origin=name, read=lambda data=v: data) for k, v in frozen.items()]

		return cls(name, load)

	@classmethod
	def from_directory(cls, root: Path) -> "FileTree":
		def load() -> list[FileEntry]:
			if not root.is_dir():
				raise ValueError(f"missing directory: {root}")
			out: list[FileEntry] = []
			for p in sorted(root.rglob("*")):
				if not p.is_file():
					continue
				rel = normalize_entry_path(p.relative_to(root).as_posix())
				out.append(FileEntry(path=rel, origin=str(root), read=p.read_bytes))
			return out

		return cls(str(root), load)

	@classmethod
	def from_zip(cls, archive: Path) -> "FileTree":
		def read_member(member: str) -> bytes:
			with zipfile.ZipFile(archive) as zf:
				return zf.read(member)

		def load() -> list[FileEntry]:
			if not archive.is_file():
				raise ValueError(f"missing archive: {archive}")
			out: list[FileEntry] = []
			with zipfile.ZipFile(archive) as zf:
				for info in zf.infolist():
					if info.is_dir():
						continue
					rel = normalize_entry_path(info.filename, what=f"entry of {archive}")
					out.append(FileEntry(path=rel, origin=str(archive), read=lambda m=info.filename: read_member(m)))
			return out

		return cls(str(archive), load)

	@classmethod
	def of_file(cls, path: Path) -> "FileTree":
		"""A directory becomes a directory tree; anything else is opened as a zip."""
		if path.is_dir():
			return cls.from_directory(path)
		return cls.from_zip(path)
