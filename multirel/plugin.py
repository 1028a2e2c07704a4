# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from multirel.extension import MultiReleaseExtension
from multirel.host.project import Project


def apply(project: Project, name: str = MultiReleaseExtension.NAME) -> MultiReleaseExtension:
	"""Install the multi-release extension on `project` under `name`."""
	if name in project.extensions:
		raise ValueError(f"extension '{name}' already exists in project '{project.name}'")
	extension = MultiReleaseExtension(project, name)
	project.extensions[name] = extension
	return extension
