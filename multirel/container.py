# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Multi-release container.

One container exists per (source set, archive) pair. Construction eagerly
creates:
- the composite archive task `multiRelease<Archive>`, which includes the base
  archive's content by reference and carries `Multi-Release: true`,
- the consumable variants `multiReleaseApiElements` and
  `multiReleaseRuntimeElements` (names prefixed for non-main source sets),
- the publishable component `multiRelease[<SourceSet>]Java`.

`add(tier, source)` only records a contribution while the project is still
declaring. When the project fires `declarations_complete` the container
finalizes: every tier becomes one copy spec under `META-INF/versions/<tier>`
holding the union of that tier's resolved files.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable

from multirel.host.archive import ArchiveTask, CopySpec, Duplicates
from multirel.host.attributes import Attribute
from multirel.host.configuration import Configuration, SoftwareComponent
from multirel.host.manifest import Manifest
from multirel.host.project import Project, SourceSet
from multirel.host.provider import lazy
from multirel.problems import MultiReleaseProblems
from multirel.unit import ResolutionUnit, describe_first, normalize_source
from multirel.util import MULTI_RELEASE_PREFIX, capitalize, multi_release_name, uncapitalize
from multirel.version import to_tier, validate_tier

ATTRIBUTE_NAMESPACE = "net.minecraftforge.multi-release"
MULTI_RELEASE_MANIFEST_ATTRIBUTE = "Multi-Release"
VERSIONS_ROOT = "META-INF/versions"
# Per-dependency metadata (manifests, signatures) must not leak into the
# merged layout.
METADATA_EXCLUDE = "**/META-INF/**"


class ContainerState(str, Enum):
	DECLARING = "declaring"
	FINALIZED = "finalized"


@dataclass(frozen=True)
class TierContribution:
	tier: int
	unit: ResolutionUnit


class MultiReleaseContainer:
	def __init__(self, project: Project, source_set: SourceSet, base_archive: ArchiveTask) -> None:
		self.project = project
		self.source_set = source_set
		self.base_archive = base_archive
		self._problems = MultiReleaseProblems(project.problems)

		self.state = ContainerState.DECLARING
		self._contributions: list[TierContribution] = []
		self._pending: list[TierContribution] = []
		self._overlays: dict[int, CopySpec] = {}

		self.archive = self._create_archive()
		self.attribute = Attribute.of(f"{ATTRIBUTE_NAMESPACE}.{source_set.name}", bool)
		self.api_elements = self._create_variant(project.configuration(source_set.api_elements_name))
		self.runtime_elements = self._create_variant(project.configuration(source_set.runtime_elements_name))
		self.component = self._create_component()

		project.declarations_complete.subscribe(self.finalize)

	# Setup

	def _create_archive(self) -> ArchiveTask:
		base = self.base_archive
		task = ArchiveTask(multi_release_name(base.name), manifest=Manifest(inherit=base.manifest))
		task.depends_on(base)
		task.with_(base)
		task.manifest.put(MULTI_RELEASE_MANIFEST_ATTRIBUTE, "true")
		return self.project.register_task(task)

	def _create_variant(self, base: Configuration) -> Configuration:
		variant = Configuration(multi_release_name(base.name), consumable=True)
		if base.description:
			variant.description = "Multi-release " + uncapitalize(base.description)
		variant.attributes.attribute(self.attribute, True)
		variant.attributes.add_all_later(base.attributes)
		variant.outgoing(self.archive)
		variant.extend(base)
		return self.project.register_configuration(variant)

	def _create_component(self) -> SoftwareComponent:
		suffix = "" if self.source_set.is_main else capitalize(self.source_set.name)
		component = SoftwareComponent(f"{MULTI_RELEASE_PREFIX}{suffix}Java")
		component.add_variants_from(self.api_elements, scope="compile")
		component.add_variants_from(self.runtime_elements, scope="runtime")

		def add_documentation_variants() -> None:
			for name in (self.source_set.sources_elements_name, self.source_set.javadoc_elements_name):
				conf = self.project.find_configuration(name)
				if conf is not None:
					component.add_variants_from(conf, scope="runtime", optional=True)

		self.project.declarations_complete.subscribe(add_documentation_variants)
		return self.project.add_component(component)

	# Contributions

	def add(self, tier: Any, source: Any, options: Callable[[ResolutionUnit], Any] | None = None) -> TierContribution:
		"""
		Declare that `source`'s files belong under tier `tier`.

		`tier` is an int or a language version; `source` is a dependency, a list
		of them, a provider of one, or a collection provider. `options` may
		configure the resolution unit (e.g. `unit.transitive = True`) before it
		is locked. Raises `TierTooLowError` for tiers up to 8, in which case
		nothing is recorded.
		"""
		tier = to_tier(tier)
		err = validate_tier(tier, describe_first(source))
		if err is not None:
			err = replace(
				err,
				project=self.project.name,
				source_set=self.source_set.name,
				archive=self.archive.name,
			)
			raise self._problems.report_tier_too_low(err)

		unit = ResolutionUnit(
			f"{self.archive.name}Tier{tier}_{len(self._contributions)}",
			normalize_source(source),
			self.project.resolver,
		)
		unit.configure(options)

		contribution = TierContribution(tier=tier, unit=unit)
		self._contributions.append(contribution)
		if self.state is ContainerState.FINALIZED:
			# Declared after the fact: apply right away.
			self._apply(contribution)
		else:
			self._pending.append(contribution)
		return contribution

	def contributions(self, tier: int | None = None) -> list[TierContribution]:
		if tier is None:
			return list(self._contributions)
		return [c for c in self._contributions if c.tier == tier]

	def tiers(self) -> list[int]:
		"""Distinct tiers in the order they were first declared."""
		out: list[int] = []
		for c in self._contributions:
			if c.tier not in out:
				out.append(c.tier)
		return out

	# Finalization

	@property
	def finalized(self) -> bool:
		return self.state is ContainerState.FINALIZED

	def finalize(self) -> None:
		"""Apply every pending contribution to the composite archive. Idempotent."""
		self.state = ContainerState.FINALIZED
		pending, self._pending = self._pending, []
		for contribution in pending:
			self._apply(contribution)

	def overlays(self) -> list[tuple[int, CopySpec]]:
		return list(self._overlays.items())

	def _apply(self, contribution: TierContribution) -> None:
		tier = contribution.tier
		unit = contribution.unit
		spec = self._overlays.get(tier)
		if spec is None:
			spec = self.archive.into(f"{VERSIONS_ROOT}/{tier}", duplicates=Duplicates.WARN)
			spec.exclude(METADATA_EXCLUDE)
			self._overlays[tier] = spec
		self.archive.depends_on(lazy(unit.build_dependencies, name=f"{unit.name}:buildDependencies"))
		spec.from_(lazy(unit.files, name=f"{unit.name}:trees"))

	def to_dict(self) -> dict[str, Any]:
		return {
			"source_set": self.source_set.name,
			"base_archive": self.base_archive.name,
			"archive": self.archive.name,
			"attribute": self.attribute.name,
			"state": self.state.value,
			"variants": [self.api_elements.name, self.runtime_elements.name],
			"component": self.component.to_dict(),
			"tiers": {
				str(tier): [c.unit.name for c in self.contributions(tier)] for tier in self.tiers()
			},
		}

	def __repr__(self) -> str:
		return f"MultiReleaseContainer({self.source_set.name!r}, {self.archive.name!r})"
