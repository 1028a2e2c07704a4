# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Capability tiers.

A tier is the minimum runtime version needed to use a slice of archive
content. Versioned content starts at 9; anything at or below the floor belongs
in the base archive (or a separately built one) instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from multirel.errors import TierTooLowError

TIER_FLOOR = 8
MIN_TIER = TIER_FLOOR + 1

_VERSION_RE = re.compile(r"^(?:1\.(\d+)|(\d+))$")


@dataclass(frozen=True, order=True)
class LanguageVersion:
	"""A runtime language version such as 11 or 17 (legacy `1.8` is 8)."""

	version: int

	@classmethod
	def of(cls, value: int | str) -> "LanguageVersion":
		if isinstance(value, bool):
			raise TypeError("language version must be an int or a string, not bool")
		if isinstance(value, int):
			if value <= 0:
				raise ValueError(f"language version must be positive, got: {value}")
			return cls(value)
		if isinstance(value, str):
			m = _VERSION_RE.match(value.strip())
			if m is None:
				raise ValueError(f"invalid language version: {value!r}")
			return cls.of(int(m.group(1) or m.group(2)))
		raise TypeError(f"language version must be an int or a string, got {type(value).__name__}")

	def as_int(self) -> int:
		return self.version

	def __str__(self) -> str:
		return str(self.version)


def to_tier(value: Any) -> int:
	"""Normalize an int or a version object (anything with `as_int()`) to a tier."""
	if isinstance(value, bool):
		raise TypeError("tier must be an int or a language version, not bool")
	if isinstance(value, int):
		return value
	as_int = getattr(value, "as_int", None)
	if callable(as_int):
		return to_tier(as_int())
	raise TypeError(f"tier must be an int or a language version, got {type(value).__name__}")


def is_supported_tier(tier: int) -> bool:
	return tier > TIER_FLOOR


def validate_tier(tier: int, dependency: str | None = None) -> TierTooLowError | None:
	"""Return the error for an unsupported tier, or None. Never raises."""
	if is_supported_tier(tier):
		return None
	return TierTooLowError(
		reason_code="TIER_TOO_LOW",
		message=f"Multi-release version {tier} is too low, minimum is {MIN_TIER}",
		tier=tier,
		dependency=dependency,
	)
