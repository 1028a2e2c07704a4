# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Typed variant attributes.

An `AttributeContainer` holds its own values plus any number of inherited
containers. Reads always recompute base-then-own, so a change made to an
inherited container after the fact is visible through every container that
inherits it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(frozen=True)
class Attribute:
	"""A named attribute key with the Python type its values must have."""

	name: str
	type: type

	@classmethod
	def of(cls, name: str, type_: type) -> "Attribute":
		if not name:
			raise ValueError("attribute name must be non-empty")
		return cls(name=name, type=type_)

	def __str__(self) -> str:
		return self.name


class AttributeContainer:
	def __init__(self) -> None:
		self._own: dict[Attribute, Any] = {}
		self._inherited: list[AttributeContainer] = []

	def attribute(self, key: Attribute, value: Any) -> "AttributeContainer":
		if not isinstance(value, key.type) or (key.type is not bool and isinstance(value, bool)):
			raise TypeError(f"attribute '{key.name}' expects {key.type.__name__}, got {type(value).__name__}")
		self._own[key] = value
		return self

	def add_all_later(self, other: "AttributeContainer") -> "AttributeContainer":
		"""Inherit every attribute of `other`, as it is at read time."""
		if other is self:
			raise ValueError("attribute container cannot inherit from itself")
		self._inherited.append(other)
		return self

	def as_dict(self) -> dict[Attribute, Any]:
		out: dict[Attribute, Any] = {}
		for base in self._inherited:
			out.update(base.as_dict())
		# Own values win over inherited ones.
		out.update(self._own)
		return out

	def get(self, key: Attribute) -> Any | None:
		return self.as_dict().get(key)

	def keys(self) -> list[Attribute]:
		return list(self.as_dict().keys())

	def __contains__(self, key: object) -> bool:
		return key in self.as_dict()

	def __iter__(self) -> Iterator[Attribute]:
		return iter(self.keys())

	def __len__(self) -> int:
		return len(self.as_dict())

	def to_json(self) -> dict[str, Any]:
		return {k.name: v for k, v in sorted(self.as_dict().items(), key=lambda kv: kv[0].name)}
