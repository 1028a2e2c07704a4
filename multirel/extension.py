# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The `multiRelease` extension.

It registers containers and points at the most recently registered one; the
container surface (`archive`, `api_elements`, `runtime_elements`, `component`,
`add`) is forwarded to that container. Using the forwarded surface before any
registration registers the default container (main source set, `jar` task)
and records an advisory, so the fallback is visible rather than silent.
"""

from __future__ import annotations

from typing import Any, Callable

from multirel.container import MultiReleaseContainer, TierContribution
from multirel.host.archive import ArchiveTask
from multirel.host.configuration import Configuration, SoftwareComponent
from multirel.host.project import Project, SourceSet
from multirel.host.provider import realize
from multirel.problems import MultiReleaseProblems
from multirel.unit import ResolutionUnit
from multirel.util import find_source_set_from_archive


class MultiReleaseExtension:
	NAME = "multiRelease"

	def __init__(self, project: Project, name: str = NAME) -> None:
		self.project = project
		self.name = name
		self._problems = MultiReleaseProblems(project.problems)
		self._container: MultiReleaseContainer | None = None
		self.containers: list[MultiReleaseContainer] = []

	# Registering containers

	def register(
		self,
		source_set: Any = None,
		archive: Any = None,
		action: Callable[[MultiReleaseContainer], Any] | None = None,
	) -> MultiReleaseContainer:
		"""
		Register a container and make it the current one.

		- no arguments: the main source set and its jar task,
		- `archive` only: the source set whose jar task it is,
		- `source_set` only: that source set's jar task,
		- both: exactly those.

		Either argument may be the object, its name, or a provider of it. A
		lone archive task passed positionally is treated as `archive`. Strings
		in the first position name source sets.
		"""
		source_set = realize(source_set)
		archive = realize(archive)
		if isinstance(source_set, ArchiveTask) and archive is None:
			source_set, archive = None, source_set
		if isinstance(source_set, str):
			source_set = self.project.source_set(source_set)
		if isinstance(archive, str):
			archive = self.project.task(archive)

		if source_set is None:
			if archive is None:
				source_set = self.project.source_set(SourceSet.MAIN)
			else:
				source_set = find_source_set_from_archive(self.project, archive.name)
				if source_set is None:
					raise self._problems.source_set_not_found(self.project.name, archive.name)
		if archive is None:
			archive = self.project.task(source_set.jar_task_name)

		if not isinstance(source_set, SourceSet):
			raise TypeError(f"expected a source set, got {type(source_set).__name__}")
		if not isinstance(archive, ArchiveTask):
			raise TypeError(f"expected an archive task, got {type(archive).__name__}")

		if self.find(source_set) is not None:
			raise self._problems.container_exists(self.project.name, source_set.name, archive.name)
		if any(c.base_archive is archive for c in self.containers):
			raise self._problems.archive_taken(self.project.name, source_set.name, archive.name)

		container = MultiReleaseContainer(self.project, source_set, archive)
		self.containers.append(container)
		self._container = container
		if action is not None:
			action(container)
		return container

	def find(self, source_set: SourceSet | str) -> MultiReleaseContainer | None:
		name = source_set if isinstance(source_set, str) else source_set.name
		for container in self.containers:
			if container.source_set.name == name:
				return container
		return None

	@property
	def container(self) -> MultiReleaseContainer:
		"""The last registered container, registering the default one if needed."""
		if self._container is None:
			self._problems.report_container_not_registered(self.name)
			self.register()
		assert self._container is not None
		return self._container

	# Container delegation

	@property
	def archive(self) -> ArchiveTask:
		return self.container.archive

	@property
	def api_elements(self) -> Configuration:
		return self.container.api_elements

	@property
	def runtime_elements(self) -> Configuration:
		return self.container.runtime_elements

	@property
	def component(self) -> SoftwareComponent:
		return self.container.component

	def add(self, tier: Any, source: Any, options: Callable[[ResolutionUnit], Any] | None = None) -> TierContribution:
		return self.container.add(tier, source, options)
