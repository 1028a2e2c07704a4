# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Archive manifests (`META-INF/MANIFEST.MF`).

Only the main section is modelled. Rendering follows the manifest text rules:
`Name: value` lines terminated by CRLF, no line longer than 72 bytes
(continuation lines start with a single space), and a trailing blank line.
"""

from __future__ import annotations

MANIFEST_PATH = "META-INF/MANIFEST.MF"
MANIFEST_VERSION = "Manifest-Version"

_MAX_LINE_BYTES = 72


class Manifest:
	"""
	Manifest main attributes, optionally layered over an inherited manifest.

	`attributes()` recomputes inherited-then-own on every call; own entries
	override inherited ones with the same name.
	"""

	def __init__(self, attributes: dict[str, str] | None = None, *, inherit: "Manifest | None" = None) -> None:
		self._own: dict[str, str] = {}
		self._inherit = inherit
		for key, value in (attributes or {}).items():
			self.put(key, value)

	def put(self, key: str, value: str) -> "Manifest":
		if not key or any(c in key for c in ": \r\n"):
			raise ValueError(f"invalid manifest attribute name: {key!r}")
		if "\r" in value or "\n" in value:
			raise ValueError(f"manifest attribute '{key}' must be a single line")
		self._own[key] = value
		return self

	def get(self, key: str) -> str | None:
		return self.attributes().get(key)

	def attributes(self) -> dict[str, str]:
		out: dict[str, str] = {}
		if self._inherit is not None:
			out.update(self._inherit.attributes())
		out.update(self._own)
		return out

	def render(self) -> bytes:
		attrs = self.attributes()
		version = attrs.pop(MANIFEST_VERSION, "1.0")
		lines = [_wrap_line(f"{MANIFEST_VERSION}: {version}")]
		for key, value in attrs.items():
			lines.append(_wrap_line(f"{key}: {value}"))
		return b"".join(lines) + b"\r\n"


def _wrap_line(line: str) -> bytes:
	out: list[bytes] = []
	chunk = b""
	for ch in line:
		enc = ch.encode("utf-8")
		if len(chunk) + len(enc) > _MAX_LINE_BYTES:
			out.append(chunk + b"\r\n")
			chunk = b" "
		chunk += enc
	out.append(chunk + b"\r\n")
	return b"".join(out)


def parse_manifest(data: bytes) -> dict[str, str]:
	"""Parse the main section of a manifest into an attribute dict."""
	text = data.decode("utf-8")
	logical: list[str] = []
	for raw in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
		if raw == "":
			# Main section ends at the first blank line.
			if logical:
				break
			continue
		if raw.startswith(" "):
			if not logical:
				raise ValueError("manifest continuation line without a header")
			logical[-1] += raw[1:]
			continue
		logical.append(raw)
	out: dict[str, str] = {}
	for line in logical:
		key, sep, value = line.partition(": ")
		if not sep:
			raise ValueError(f"malformed manifest line: {line!r}")
		out[key] = value
	return out
