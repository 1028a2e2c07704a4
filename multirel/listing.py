# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from multirel.host.manifest import MANIFEST_PATH, parse_manifest

BASE_TIER = "base"

_VERSIONED_RE = re.compile(r"^META-INF/versions/(\d+)/(.+)$")


@dataclass(frozen=True)
class ArchiveListing:
	path: Path
	manifest: dict[str, str]
	tiers: dict[str, list[str]]  # "base" or the tier number -> entry paths

	@property
	def multi_release(self) -> bool:
		return self.manifest.get("Multi-Release", "").strip().lower() == "true"

	def to_dict(self) -> dict[str, Any]:
		return {
			"path": str(self.path),
			"multi_release": self.multi_release,
			"manifest": dict(self.manifest),
			"tiers": {k: list(v) for k, v in self.tiers.items()},
		}


def _tier_key(key: str) -> tuple[int, int]:
	return (-1, 0) if key == BASE_TIER else (0, int(key))


def list_archive(path: Path) -> ArchiveListing:
	"""Group an archive's entries by tier; versioned paths are shown relative to their tier."""
	manifest: dict[str, str] = {}
	tiers: dict[str, list[str]] = {}
	with zipfile.ZipFile(path) as zf:
		for info in zf.infolist():
			if info.is_dir():
				continue
			if info.filename == MANIFEST_PATH:
				manifest = parse_manifest(zf.read(info))
				continue
			m = _VERSIONED_RE.match(info.filename)
			if m is None:
				tiers.setdefault(BASE_TIER, []).append(info.filename)
			else:
				tiers.setdefault(str(int(m.group(1))), []).append(m.group(2))
	ordered = {k: sorted(tiers[k]) for k in sorted(tiers, key=_tier_key)}
	return ArchiveListing(path=path, manifest=manifest, tiers=ordered)
