# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from multirel.host.attributes import AttributeContainer

MAVEN_SCOPES = ("compile", "runtime")


class Configuration:
	"""
	A named bucket of dependencies plus the artifacts it publishes.

	`extends_from` is live: `all_dependencies()` walks the hierarchy on every
	call instead of copying the parents' dependencies.
	"""

	def __init__(self, name: str, *, description: str | None = None, consumable: bool = False) -> None:
		if not name:
			raise ValueError("configuration name must be non-empty")
		self.name = name
		self.description = description
		self.consumable = consumable
		self.attributes = AttributeContainer()
		self.dependencies: list[Any] = []
		self.extends_from: list[Configuration] = []
		self.artifacts: list[Any] = []

	def extend(self, *parents: "Configuration") -> "Configuration":
		for parent in parents:
			if parent is self or self in parent.hierarchy():
				raise ValueError(f"configuration '{self.name}' cannot extend '{parent.name}': cycle")
			self.extends_from.append(parent)
		return self

	def hierarchy(self) -> list["Configuration"]:
		"""This configuration followed by every configuration it extends."""
		out: list[Configuration] = [self]
		for parent in self.extends_from:
			for conf in parent.hierarchy():
				if not any(conf is seen for seen in out):
					out.append(conf)
		return out

	def all_dependencies(self) -> list[Any]:
		out: list[Any] = []
		for conf in self.hierarchy():
			for dep in conf.dependencies:
				if dep not in out:
					out.append(dep)
		return out

	def outgoing(self, artifact: Any) -> "Configuration":
		self.artifacts.append(artifact)
		return self

	def __repr__(self) -> str:
		return f"Configuration({self.name!r})"


@dataclass(frozen=True)
class ComponentVariant:
	configuration: Configuration
	scope: str
	optional: bool = False


class SoftwareComponent:
	"""A publishable unit made of configurations mapped to Maven scopes."""

	def __init__(self, name: str) -> None:
		self.name = name
		self.variants: list[ComponentVariant] = []

	def add_variants_from(self, configuration: Configuration, *, scope: str, optional: bool = False) -> None:
		if scope not in MAVEN_SCOPES:
			raise ValueError(f"unknown maven scope '{scope}'")
		if any(v.configuration is configuration for v in self.variants):
			raise ValueError(f"component '{self.name}' already has variant '{configuration.name}'")
		self.variants.append(ComponentVariant(configuration=configuration, scope=scope, optional=optional))

	def variant_names(self) -> list[str]:
		return [v.configuration.name for v in self.variants]

	def to_dict(self) -> dict[str, Any]:
		return {
			"name": self.name,
			"variants": [
				{"name": v.configuration.name, "scope": v.scope, "optional": v.optional} for v in self.variants
			],
		}

	def __repr__(self) -> str:
		return f"SoftwareComponent({self.name!r})"
