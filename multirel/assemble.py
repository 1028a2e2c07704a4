# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from multirel.declaration_v0 import build_project, load_declaration_v0
from multirel.diagnostics import Diagnostic
from multirel.errors import MultiReleaseError
from multirel.host.archive import write_archive
from multirel.host.manifest import MANIFEST_PATH


@dataclass(frozen=True)
class AssembleOptions:
	declaration_path: Path
	out_dir: Path | None = None  # default: <declaration dir>/build/libs
	dry_run: bool = False


@dataclass(frozen=True)
class AssembledArchive:
	name: str
	source_set: str
	path: str | None  # None for dry runs
	tiers: list[int]
	depends_on: list[str]
	entries: list[str]

	def to_dict(self) -> dict[str, Any]:
		return {
			"name": self.name,
			"source_set": self.source_set,
			"path": self.path,
			"tiers": list(self.tiers),
			"depends_on": list(self.depends_on),
			"entries": list(self.entries),
		}


@dataclass(frozen=True)
class AssembleReport:
	ok: bool
	project: str | None
	archives: list[AssembledArchive]
	containers: list[dict[str, Any]]
	diagnostics: list[Diagnostic]
	errors: list[MultiReleaseError]

	def to_dict(self) -> dict[str, Any]:
		return {
			"ok": self.ok,
			"project": self.project,
			"archives": [a.to_dict() for a in self.archives],
			"containers": list(self.containers),
			"diagnostics": [d.to_dict() for d in self.diagnostics],
			"errors": [e.to_dict() for e in sorted(self.errors, key=lambda e: (e.reason_code, e.archive or ""))],
		}


def assemble_v0(opts: AssembleOptions) -> AssembleReport:
	"""
	Load a build declaration, evaluate it and write every composite archive.

	Declaration and registration errors stop before anything is written. An
	archive that fails to write is reported and the remaining archives are
	still attempted.
	"""
	try:
		decl = load_declaration_v0(opts.declaration_path)
		project, extension = build_project(decl)
	except MultiReleaseError as err:
		return AssembleReport(ok=False, project=None, archives=[], containers=[], diagnostics=[], errors=[err])

	project.evaluate()
	out_dir = opts.out_dir if opts.out_dir is not None else decl.root / "build" / "libs"

	archives: list[AssembledArchive] = []
	errors: list[MultiReleaseError] = []
	for container in extension.containers:
		task = container.archive
		try:
			if opts.dry_run:
				path = None
				entries = [MANIFEST_PATH] + sorted(task.layout(project.problems))
			else:
				out = out_dir / f"{project.name}-{task.name}.jar"
				entries = write_archive(task, out, project.problems)
				path = str(out)
			depends_on = [t.name for t in task.task_dependencies()]
		except (OSError, ValueError, zipfile.BadZipFile) as err:
			errors.append(
				MultiReleaseError(
					reason_code="ARCHIVE_FAILED",
					message=str(err),
					project=project.name,
					source_set=container.source_set.name,
					archive=task.name,
				)
			)
			continue
		archives.append(
			AssembledArchive(
				name=task.name,
				source_set=container.source_set.name,
				path=path,
				tiers=container.tiers(),
				depends_on=depends_on,
				entries=entries,
			)
		)

	return AssembleReport(
		ok=not errors,
		project=project.name,
		archives=archives,
		containers=[c.to_dict() for c in extension.containers],
		diagnostics=list(project.problems),
		errors=errors,
	)
