# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
multirel: multi-release archive assembly.

A container folds tier-scoped dependency contents into a composite archive
under `META-INF/versions/<tier>/` and exposes consumable variants of it:

  host:       minimal in-process build host (providers, tasks, configurations)
  container:  the per-(source set, archive) registry and assembler
  extension:  registration and delegation surface
  cli:        `multirel assemble` / `multirel inspect`
"""

__all__ = ["container", "extension", "host", "plugin"]
