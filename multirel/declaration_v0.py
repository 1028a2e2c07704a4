# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Build declaration (v0).

A small JSON document describing one project: its source sets (directories
whose files form the base archive), and the multi-release containers with
their tier contributions. Paths are relative to the declaration file.

Validation is strict: unknown fields are rejected and every error names the
offending field, so a typo never silently drops a tier.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from multirel.errors import DeclarationError
from multirel.extension import MultiReleaseExtension
from multirel.host.files import FileTree
from multirel.host.project import Project
from multirel.plugin import apply
from multirel.unit import ResolutionUnit
from multirel.version import LanguageVersion, to_tier

DECLARATION_FORMAT = "multirel-build"
DECLARATION_VERSION = 0


@dataclass(frozen=True)
class TierDeclaration:
	tier: int
	files: list[Path]
	transitive: bool = False


@dataclass(frozen=True)
class ContainerDeclaration:
	source_set: str | None
	archive: str | None
	tiers: list[TierDeclaration]


@dataclass(frozen=True)
class SourceSetDeclaration:
	name: str
	dirs: list[Path]
	manifest: dict[str, str] = field(default_factory=dict)
	sources: list[Path] | None = None
	javadoc: list[Path] | None = None


@dataclass(frozen=True)
class BuildDeclaration:
	path: Path
	project: str
	source_sets: list[SourceSetDeclaration]
	containers: list[ContainerDeclaration]
	# Tiers added through the extension itself, i.e. to the current container.
	tiers: list[TierDeclaration] = field(default_factory=list)

	@property
	def root(self) -> Path:
		return self.path.parent


class _Loader:
	def __init__(self, path: Path) -> None:
		self.path = path
		self.root = path.parent

	def fail(self, message: str) -> DeclarationError:
		return DeclarationError(reason_code="DECLARATION_INVALID", message=message, declaration_path=str(self.path))

	def check_fields(self, obj: dict[str, Any], allowed: set[str], *, what: str) -> None:
		unknown = sorted(set(obj.keys()) - allowed)
		if unknown:
			raise self.fail(f"{what} has unknown fields: {', '.join(unknown)}")

	def object(self, value: Any, *, what: str) -> dict[str, Any]:
		if not isinstance(value, dict):
			raise self.fail(f"{what} must be an object")
		return value

	def name(self, value: Any, *, what: str) -> str:
		if not isinstance(value, str) or not value:
			raise self.fail(f"{what} must be a non-empty string")
		return value

	def paths(self, value: Any, *, what: str, dirs: bool) -> list[Path]:
		if not isinstance(value, list) or any((not isinstance(p, str) or not p) for p in value):
			raise self.fail(f"{what} must be a list of non-empty strings")
		out: list[Path] = []
		for raw in value:
			p = (self.root / raw).resolve()
			if dirs and not p.is_dir():
				raise self.fail(f"{what}: directory does not exist: {raw}")
			if not dirs and not p.exists():
				raise self.fail(f"{what}: file does not exist: {raw}")
			out.append(p)
		return out

	def tier(self, raw: Any, *, what: str) -> TierDeclaration:
		obj = self.object(raw, what=what)
		self.check_fields(obj, {"tier", "files", "transitive"}, what=what)
		tier_raw = obj.get("tier")
		if isinstance(tier_raw, bool) or not isinstance(tier_raw, (int, str)):
			raise self.fail(f"{what} field 'tier' must be an integer or a version string")
		try:
			tier = to_tier(LanguageVersion.of(tier_raw) if isinstance(tier_raw, str) else tier_raw)
		except ValueError as err:
			raise self.fail(f"{what} field 'tier': {err}") from err
		files = self.paths(obj.get("files"), what=f"{what} field 'files'", dirs=False)
		if not files:
			raise self.fail(f"{what} field 'files' must not be empty")
		transitive = obj.get("transitive", False)
		if not isinstance(transitive, bool):
			raise self.fail(f"{what} field 'transitive' must be a boolean")
		return TierDeclaration(tier=tier, files=files, transitive=transitive)

	def tiers(self, raw: Any, *, what: str) -> list[TierDeclaration]:
		if not isinstance(raw, list):
			raise self.fail(f"{what} must be a list")
		return [self.tier(t, what=f"{what}[{i}]") for i, t in enumerate(raw)]

	def source_set(self, name: str, raw: Any) -> SourceSetDeclaration:
		what = f"source set '{name}'"
		obj = self.object(raw, what=what)
		self.check_fields(obj, {"dirs", "manifest", "sources", "javadoc", "x"}, what=what)
		dirs = self.paths(obj.get("dirs"), what=f"{what} field 'dirs'", dirs=True)
		manifest_raw = obj.get("manifest", {})
		if not isinstance(manifest_raw, dict) or any(
			(not isinstance(k, str) or not isinstance(v, str)) for k, v in manifest_raw.items()
		):
			raise self.fail(f"{what} field 'manifest' must be an object of strings")
		sources = self.paths(obj["sources"], what=f"{what} field 'sources'", dirs=True) if "sources" in obj else None
		javadoc = self.paths(obj["javadoc"], what=f"{what} field 'javadoc'", dirs=True) if "javadoc" in obj else None
		return SourceSetDeclaration(name=name, dirs=dirs, manifest=dict(manifest_raw), sources=sources, javadoc=javadoc)

	def container(self, raw: Any, *, what: str) -> ContainerDeclaration:
		obj = self.object(raw, what=what)
		self.check_fields(obj, {"source_set", "archive", "tiers", "x"}, what=what)
		source_set = self.name(obj["source_set"], what=f"{what} field 'source_set'") if "source_set" in obj else None
		archive = self.name(obj["archive"], what=f"{what} field 'archive'") if "archive" in obj else None
		return ContainerDeclaration(
			source_set=source_set,
			archive=archive,
			tiers=self.tiers(obj.get("tiers", []), what=f"{what} field 'tiers'"),
		)

	def load(self) -> BuildDeclaration:
		try:
			data = json.loads(self.path.read_text(encoding="utf-8"))
		except OSError as err:
			raise self.fail(f"cannot read build declaration: {err}") from err
		except json.JSONDecodeError as err:
			raise self.fail(f"build declaration is not valid JSON: {err}") from err
		obj = self.object(data, what="build declaration")
		if obj.get("format") != DECLARATION_FORMAT or obj.get("version") != DECLARATION_VERSION:
			raise self.fail("unsupported build declaration format/version")
		self.check_fields(
			obj,
			{"format", "version", "project", "source_sets", "containers", "tiers", "x"},
			what="build declaration",
		)
		if "x" in obj and not isinstance(obj.get("x"), dict):
			raise self.fail("build declaration top-level 'x' must be an object")
		project = self.name(obj.get("project"), what="build declaration field 'project'")
		source_sets_raw = self.object(obj.get("source_sets"), what="build declaration field 'source_sets'")
		if not source_sets_raw:
			raise self.fail("build declaration must declare at least one source set")
		source_sets = [self.source_set(self.name(k, what="source set name"), v) for k, v in source_sets_raw.items()]
		containers_raw = obj.get("containers", [])
		if not isinstance(containers_raw, list):
			raise self.fail("build declaration field 'containers' must be a list")
		containers = [self.container(c, what=f"containers[{i}]") for i, c in enumerate(containers_raw)]
		tiers = self.tiers(obj.get("tiers", []), what="build declaration field 'tiers'")
		return BuildDeclaration(
			path=self.path,
			project=project,
			source_sets=source_sets,
			containers=containers,
			tiers=tiers,
		)


def load_declaration_v0(path: Path) -> BuildDeclaration:
	return _Loader(path).load()


def _options(tier: TierDeclaration) -> Callable[[ResolutionUnit], None]:
	def configure(unit: ResolutionUnit) -> None:
		unit.transitive = tier.transitive

	return configure


def build_project(decl: BuildDeclaration) -> tuple[Project, MultiReleaseExtension]:
	"""
	Materialize `decl` into a host project with the extension applied.

	Declarations are only recorded here; the caller decides when the project
	is evaluated.
	"""
	project = Project(decl.project, root=decl.root)
	for ss in decl.source_sets:
		source_set = project.create_source_set(
			ss.name,
			output=[FileTree.from_directory(d) for d in ss.dirs],
			manifest=ss.manifest,
		)
		if ss.sources is not None:
			project.create_documentation_variant(source_set, "sources", dirs=ss.sources)
		if ss.javadoc is not None:
			project.create_documentation_variant(source_set, "javadoc", dirs=ss.javadoc)

	extension = apply(project)
	for i, c in enumerate(decl.containers):
		try:
			container = extension.register(c.source_set, archive=c.archive)
		except KeyError as err:
			raise DeclarationError(
				reason_code="DECLARATION_INVALID",
				message=f"containers[{i}]: {err.args[0]}",
				project=decl.project,
				declaration_path=str(decl.path),
			) from err
		for t in c.tiers:
			container.add(t.tier, list(t.files), _options(t))
	for t in decl.tiers:
		try:
			extension.add(t.tier, list(t.files), _options(t))
		except KeyError as err:
			# Top-level tiers fall back to the default container (main/jar).
			raise DeclarationError(
				reason_code="DECLARATION_INVALID",
				message=f"tiers: {err.args[0]}",
				project=decl.project,
				declaration_path=str(decl.path),
			) from err
	return project, extension
