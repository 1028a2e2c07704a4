# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from multirel.diagnostics import Diagnostic, Problems
from multirel.errors import ContainerExistsError, SourceSetLookupError, TierTooLowError

CONTAINER_NOT_REGISTERED = "multi-release-extension-without-container"
TIER_TOO_LOW = "multi-release-version-too-low"
SOURCE_SET_NOT_FOUND = "multi-release-source-set-not-found"
CONTAINER_EXISTS = "multi-release-container-exists"


class MultiReleaseProblems:
	"""Reports multi-release problems into a project's diagnostic sink."""

	def __init__(self, sink: Problems) -> None:
		self.sink = sink

	def report_container_not_registered(self, extension_name: str) -> Diagnostic:
		return self.sink.report(
			Diagnostic(
				message="Multi-release container was not registered",
				code=CONTAINER_NOT_REGISTERED,
				phase="register",
				severity="advice",
				notes=[
					"Attempted to use multi-release functionality before the first container has been registered.",
					"The default functionality was used: the 'main' source set and the 'jar' task.",
					f"Register the container using `{extension_name}.register` before using any other functionality.",
				],
			)
		)

	def report_tier_too_low(self, err: TierTooLowError) -> TierTooLowError:
		"""Record `err` and hand it back for the caller to raise."""
		self.sink.report(
			Diagnostic(
				message=err.message,
				code=TIER_TOO_LOW,
				phase="add",
				severity="error",
				notes=[
					f"Affected dependency: {err.dependency}",
					"Use at least language level 9 for multi-release dependencies.",
					"Use separately-built archives for versions lower than 9.",
				],
			)
		)
		return err

	def source_set_not_found(self, project: str, archive_name: str) -> SourceSetLookupError:
		err = SourceSetLookupError(
			reason_code="SOURCE_SET_NOT_FOUND",
			message=f"Could not find source set for archive task {archive_name}",
			project=project,
			archive=archive_name,
		)
		self.sink.report(Diagnostic(message=err.message, code=SOURCE_SET_NOT_FOUND, phase="register"))
		return err

	def container_exists(self, project: str, source_set: str, archive: str) -> ContainerExistsError:
		err = ContainerExistsError(
			reason_code="CONTAINER_EXISTS",
			message=f"A multi-release container is already registered for source set '{source_set}'",
			project=project,
			source_set=source_set,
			archive=archive,
		)
		self.sink.report(Diagnostic(message=err.message, code=CONTAINER_EXISTS, phase="register"))
		return err

	def archive_taken(self, project: str, source_set: str, archive: str) -> ContainerExistsError:
		err = ContainerExistsError(
			reason_code="CONTAINER_EXISTS",
			message=f"A multi-release container is already registered for archive task '{archive}'",
			project=project,
			source_set=source_set,
			archive=archive,
		)
		self.sink.report(Diagnostic(message=err.message, code=CONTAINER_EXISTS, phase="register"))
		return err
