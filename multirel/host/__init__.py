# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Minimal in-process build host.

The multi-release container only declares structure; something still has to
run tasks, resolve dependencies into files and write archives. This package is
that something, reduced to the surface the container talks to:

- `provider`: lazily evaluated values, realized at most once
- `events`: the one-shot "declarations complete" signal
- `attributes` / `manifest`: live derived views over a base
- `files` / `archive`: file trees, copy specs and deterministic zip output
- `configuration`: consumable configurations and software components
- `dependencies`: dependency notations and the file resolver
- `project`: source sets and the registries tying it all together
"""

from __future__ import annotations

__all__ = [
	"archive",
	"attributes",
	"configuration",
	"dependencies",
	"events",
	"files",
	"manifest",
	"project",
	"provider",
]
