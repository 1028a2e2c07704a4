# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from multirel.host.project import Project, SourceSet

MULTI_RELEASE_PREFIX = "multiRelease"


def capitalize(s: str) -> str:
	"""Upper-case the first character only (`jar` -> `Jar`, `apiElements` -> `ApiElements`)."""
	return s[:1].upper() + s[1:]


def uncapitalize(s: str) -> str:
	return s[:1].lower() + s[1:]


def multi_release_name(base_name: str) -> str:
	return MULTI_RELEASE_PREFIX + capitalize(base_name)


def find_source_set_from_archive(project: "Project", archive_name: str) -> "SourceSet | None":
	for source_set in project.source_sets.values():
		if source_set.jar_task_name == archive_name:
			return source_set
	return None
