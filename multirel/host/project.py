# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Projects and source sets.

A source set follows the usual Java conventions: the `main` source set owns
the `jar` task and the `apiElements` / `runtimeElements` configurations; any
other source set prefixes those names with its own (`testJar`,
`testApiElements`, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from multirel.diagnostics import Problems
from multirel.host.archive import ArchiveTask
from multirel.host.attributes import Attribute
from multirel.host.configuration import Configuration, SoftwareComponent
from multirel.host.dependencies import Resolver
from multirel.host.events import OneShotEvent
from multirel.host.files import FileTree
from multirel.host.manifest import Manifest
from multirel.util import capitalize

USAGE_ATTRIBUTE = Attribute.of("org.gradle.usage", str)
CATEGORY_ATTRIBUTE = Attribute.of("org.gradle.category", str)
DOCS_TYPE_ATTRIBUTE = Attribute.of("org.gradle.docstype", str)

DOCUMENTATION_KINDS = ("sources", "javadoc")


class SourceSet:
	MAIN = "main"

	def __init__(self, name: str) -> None:
		if not name:
			raise ValueError("source set name must be non-empty")
		self.name = name
		self.output: list[Any] = []

	@property
	def is_main(self) -> bool:
		return self.name == SourceSet.MAIN

	def task_name(self, verb: str) -> str:
		return verb if self.is_main else self.name + capitalize(verb)

	def configuration_name(self, base: str) -> str:
		return base if self.is_main else self.name + capitalize(base)

	@property
	def jar_task_name(self) -> str:
		return self.task_name("jar")

	@property
	def api_elements_name(self) -> str:
		return self.configuration_name("apiElements")

	@property
	def runtime_elements_name(self) -> str:
		return self.configuration_name("runtimeElements")

	@property
	def sources_elements_name(self) -> str:
		return self.configuration_name("sourcesElements")

	@property
	def javadoc_elements_name(self) -> str:
		return self.configuration_name("javadocElements")

	def __repr__(self) -> str:
		return f"SourceSet({self.name!r})"


class Project:
	def __init__(self, name: str, *, root: Path | None = None) -> None:
		if not name:
			raise ValueError("project name must be non-empty")
		self.name = name
		self.root = root if root is not None else Path.cwd()
		self.problems = Problems()
		self.resolver = Resolver(self.problems)
		self.source_sets: dict[str, SourceSet] = {}
		self.tasks: dict[str, ArchiveTask] = {}
		self.configurations: dict[str, Configuration] = {}
		self.components: dict[str, SoftwareComponent] = {}
		self.extensions: dict[str, Any] = {}
		# Fired once every declaration for this project has been made.
		self.declarations_complete = OneShotEvent(f"{name}:declarations-complete")

	# Registries

	def register_task(self, task: ArchiveTask) -> ArchiveTask:
		if task.name in self.tasks:
			raise ValueError(f"task '{task.name}' already exists in project '{self.name}'")
		self.tasks[task.name] = task
		return task

	def task(self, name: str) -> ArchiveTask:
		try:
			return self.tasks[name]
		except KeyError:
			raise KeyError(f"task '{name}' not found in project '{self.name}'") from None

	def register_configuration(self, configuration: Configuration) -> Configuration:
		if configuration.name in self.configurations:
			raise ValueError(f"configuration '{configuration.name}' already exists in project '{self.name}'")
		self.configurations[configuration.name] = configuration
		return configuration

	def configuration(self, name: str) -> Configuration:
		try:
			return self.configurations[name]
		except KeyError:
			raise KeyError(f"configuration '{name}' not found in project '{self.name}'") from None

	def find_configuration(self, name: str) -> Configuration | None:
		return self.configurations.get(name)

	def add_component(self, component: SoftwareComponent) -> SoftwareComponent:
		if component.name in self.components:
			raise ValueError(f"component '{component.name}' already exists in project '{self.name}'")
		self.components[component.name] = component
		return component

	def source_set(self, name: str) -> SourceSet:
		try:
			return self.source_sets[name]
		except KeyError:
			raise KeyError(f"source set '{name}' not found in project '{self.name}'") from None

	# Java conventions

	def create_source_set(
		self,
		name: str,
		*,
		output: Iterable[Any] = (),
		manifest: dict[str, str] | None = None,
	) -> SourceSet:
		"""
		Create a source set together with its jar task and its api/runtime
		element configurations.

		`output` items are file trees or providers of them; each becomes part
		of the jar's root content.
		"""
		if name in self.source_sets:
			raise ValueError(f"source set '{name}' already exists in project '{self.name}'")
		source_set = SourceSet(name)
		source_set.output.extend(output)
		self.source_sets[name] = source_set

		jar = ArchiveTask(source_set.jar_task_name, manifest=Manifest(manifest))
		for item in source_set.output:
			jar.from_(item)
		self.register_task(jar)

		label = "main" if source_set.is_main else f"'{name}'"
		api = Configuration(
			source_set.api_elements_name,
			description=f"API elements for the {label} feature.",
			consumable=True,
		)
		api.attributes.attribute(USAGE_ATTRIBUTE, "java-api")
		api.outgoing(jar)
		runtime = Configuration(
			source_set.runtime_elements_name,
			description=f"Runtime elements for the {label} feature.",
			consumable=True,
		)
		runtime.attributes.attribute(USAGE_ATTRIBUTE, "java-runtime")
		runtime.outgoing(jar)
		self.register_configuration(api)
		self.register_configuration(runtime)
		return source_set

	def create_documentation_variant(self, source_set: SourceSet, kind: str, *, dirs: Iterable[Path] = ()) -> Configuration:
		"""Create the `sourcesElements` or `javadocElements` variant of a source set."""
		if kind not in DOCUMENTATION_KINDS:
			raise ValueError(f"unknown documentation kind '{kind}'")
		task = ArchiveTask(source_set.task_name(f"{kind}Jar"), group="documentation")
		for d in dirs:
			task.from_(FileTree.from_directory(d))
		self.register_task(task)
		conf_name = source_set.sources_elements_name if kind == "sources" else source_set.javadoc_elements_name
		conf = Configuration(conf_name, description=f"{capitalize(kind)} elements for {source_set.name}.", consumable=True)
		conf.attributes.attribute(USAGE_ATTRIBUTE, "java-runtime")
		conf.attributes.attribute(CATEGORY_ATTRIBUTE, "documentation")
		conf.attributes.attribute(DOCS_TYPE_ATTRIBUTE, kind)
		conf.outgoing(task)
		return self.register_configuration(conf)

	# Lifecycle

	@property
	def evaluated(self) -> bool:
		return self.declarations_complete.fired

	def evaluate(self) -> bool:
		"""Signal that all declarations are complete; returns False if already signalled."""
		return self.declarations_complete.fire()

	def __repr__(self) -> str:
		return f"Project({self.name!r})"
