# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the host and the multi-release container.

Non-fatal events (advisories, duplicate archive paths) are recorded here
instead of being raised; fatal ones are raised as `MultiReleaseError` and also
recorded so a report can show everything that happened in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

SEVERITIES = ("advice", "warning", "error")


@dataclass
class Diagnostic:
	"""Represents a diagnostic (advice/warning/error)."""

	message: str
	code: str | None = None
	# Which part of the build produced it ("register", "add", "archive", ...).
	phase: str | None = None
	severity: str = "error"
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.severity not in SEVERITIES:
			raise ValueError(f"unknown diagnostic severity: {self.severity}")

	def to_dict(self) -> dict[str, Any]:
		return {
			"message": self.message,
			"code": self.code,
			"phase": self.phase,
			"severity": self.severity,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		head = f"{self.phase or 'build'}: {self.severity}: {self.message}"
		if self.code:
			head += f" [{self.code}]"
		return "\n".join([head] + [f"  note: {n}" for n in self.notes])


class Problems:
	"""Collects the diagnostics reported while configuring one project."""

	def __init__(self) -> None:
		self._diagnostics: list[Diagnostic] = []

	def report(self, diag: Diagnostic) -> Diagnostic:
		self._diagnostics.append(diag)
		return diag

	def with_severity(self, severity: str) -> list[Diagnostic]:
		return [d for d in self._diagnostics if d.severity == severity]

	def with_code(self, code: str) -> list[Diagnostic]:
		return [d for d in self._diagnostics if d.code == code]

	@property
	def warnings(self) -> list[Diagnostic]:
		return self.with_severity("warning")

	@property
	def errors(self) -> list[Diagnostic]:
		return self.with_severity("error")

	def __iter__(self) -> Iterator[Diagnostic]:
		return iter(list(self._diagnostics))

	def __len__(self) -> int:
		return len(self._diagnostics)
