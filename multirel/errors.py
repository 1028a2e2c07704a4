# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MultiReleaseError(Exception):
	"""
	A structured, serializable error for multi-release assembly.

	`reason_code` is stable and meant for tooling; `message` is for humans.
	"""

	reason_code: str
	message: str
	project: str | None = None
	source_set: str | None = None
	archive: str | None = None
	tier: int | None = None
	dependency: str | None = None
	declaration_path: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"project": self.project,
			"source_set": self.source_set,
			"archive": self.archive,
			"tier": self.tier,
			"dependency": self.dependency,
			"declaration_path": self.declaration_path,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.project:
			parts.append(f"project={self.project}")
		if self.source_set:
			parts.append(f"source_set={self.source_set}")
		if self.archive:
			parts.append(f"archive={self.archive}")
		if self.tier is not None:
			parts.append(f"tier={self.tier}")
		if self.dependency:
			parts.append(f"dependency={self.dependency}")
		if self.declaration_path:
			parts.append(f"declaration_path={self.declaration_path}")
		return " ".join(parts)


class TierTooLowError(MultiReleaseError):
	"""A dependency was added for a tier that cannot carry versioned content."""


class SourceSetLookupError(MultiReleaseError):
	"""An archive could not be mapped back to the source set that produces it."""


class DeclarationError(MultiReleaseError):
	"""A build declaration file is malformed."""


class ContainerExistsError(MultiReleaseError):
	"""A container is already registered for the source set."""
