# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from multirel.diagnostics import Problems
from multirel.host.archive import ArchiveTask, Duplicates, path_matches, write_archive
from multirel.host.files import FileTree, normalize_entry_path
from multirel.host.manifest import MANIFEST_PATH, Manifest, parse_manifest
from multirel.host.provider import lazy
from multirel.test_support import tree, write_files, write_zip


@pytest.mark.parametrize(
	"path,expected",
	[
		("META-INF/MANIFEST.MF", True),
		("a/b/META-INF/services/x", True),
		("META-INF", True),
		("x.class", False),
		("MYMETA-INF/x", False),
		("a/bMETA-INF/x", False),
	],
)
def test_metadata_pattern(path: str, expected: bool) -> None:
	assert path_matches("**/META-INF/**", path) is expected


def test_single_segment_wildcards() -> None:
	assert path_matches("*.class", "A.class")
	assert not path_matches("*.class", "pkg/A.class")
	assert path_matches("pkg/?.class", "pkg/A.class")


def test_layout_root_then_children_with_prefix() -> None:
	task = ArchiveTask("jar")
	task.from_(tree("classes", ["x.class"]))
	task.into("META-INF/versions/9").from_(tree("dep", ["y.class"]))
	assert sorted(task.layout()) == ["META-INF/versions/9/y.class", "x.class"]


def test_layout_keeps_first_and_warns() -> None:
	problems = Problems()
	task = ArchiveTask("jar")
	spec = task.into("v", duplicates=Duplicates.WARN)
	spec.from_(tree("first", {"a.class": b"1"}))
	spec.from_(tree("second", {"a.class": b"2"}))
	layout = task.layout(problems)
	assert layout["v/a.class"].read() == b"1"
	assert len(problems.warnings) == 1
	diag = problems.warnings[0]
	assert diag.code == "DUPLICATE_PATH"
	assert "kept: first" in diag.notes
	assert "ignored: second" in diag.notes


def test_layout_exclude_silently_keeps_first() -> None:
	problems = Problems()
	task = ArchiveTask("jar")
	task.from_(tree("first", {"a.class": b"1"}))
	task.from_(tree("second", {"a.class": b"2"}))
	assert task.layout(problems)["a.class"].read() == b"1"
	assert len(problems) == 0


def test_with_includes_base_content_live() -> None:
	base = ArchiveTask("jar")
	base.from_(tree("classes", ["x.class"]))
	composite = ArchiveTask("multiReleaseJar").with_(base)
	base.from_(tree("more", ["late.class"]))
	assert sorted(composite.layout()) == ["late.class", "x.class"]


def test_excluded_paths_are_dropped() -> None:
	task = ArchiveTask("jar")
	task.into("v").exclude("**/META-INF/**").from_(tree("dep", ["META-INF/MANIFEST.MF", "a/META-INF/x", "ok.class"]))
	assert list(task.layout()) == ["v/ok.class"]


def test_task_dependencies_flatten_providers() -> None:
	a = ArchiveTask("a")
	b = ArchiveTask("b")
	task = ArchiveTask("jar").depends_on(a, lazy(lambda: [b, a]))
	assert task.task_dependencies() == [a, b]


def test_write_archive_is_deterministic(tmp_path: Path) -> None:
	task = ArchiveTask("jar", manifest=Manifest({"Implementation-Title": "demo"}))
	task.from_(tree("classes", ["b.class", "a.class", "META-INF/MANIFEST.MF"]))
	out1 = tmp_path / "1.jar"
	out2 = tmp_path / "2.jar"
	names = write_archive(task, out1)
	write_archive(task, out2)
	assert out1.read_bytes() == out2.read_bytes()
	assert names == [MANIFEST_PATH, "a.class", "b.class"]
	with zipfile.ZipFile(out1) as zf:
		assert zf.namelist()[0] == MANIFEST_PATH
		manifest = parse_manifest(zf.read(MANIFEST_PATH))
	assert manifest == {"Manifest-Version": "1.0", "Implementation-Title": "demo"}


def test_file_trees_from_disk(tmp_path: Path) -> None:
	root = write_files(tmp_path / "classes", ["pkg/A.class", "B.class"])
	jar = write_zip(tmp_path / "dep.jar", {"pkg/": b"", "C.class": b"c"})
	assert FileTree.of_file(root).paths() == ["B.class", "pkg/A.class"]
	entries = FileTree.of_file(jar).entries()
	assert [e.path for e in entries] == ["C.class"]
	assert entries[0].read() == b"c"


def test_missing_inputs_fail_on_read(tmp_path: Path) -> None:
	missing = FileTree.from_zip(tmp_path / "nope.jar")
	with pytest.raises(ValueError, match="missing archive"):
		missing.entries()


@pytest.mark.parametrize("bad", ["/abs", "../up", "a/../b", "."])
def test_entry_paths_must_be_clean(bad: str) -> None:
	with pytest.raises(ValueError):
		normalize_entry_path(bad)


def test_manifest_inherits_live_and_wraps_long_lines() -> None:
	base = Manifest({"Created-By": "multirel"})
	derived = Manifest(inherit=base).put("Multi-Release", "true")
	base.put("Implementation-Version", "1.0")
	assert derived.attributes() == {"Created-By": "multirel", "Implementation-Version": "1.0", "Multi-Release": "true"}
	assert "Multi-Release" not in base.attributes()

	long_value = "x" * 150
	rendered = Manifest({"Class-Path": long_value}).render()
	for line in rendered.split(b"\r\n"):
		assert len(line) <= 72
	assert parse_manifest(rendered)["Class-Path"] == long_value


def test_manifest_rejects_bad_names() -> None:
	with pytest.raises(ValueError):
		Manifest().put("Bad Name", "x")
	with pytest.raises(ValueError):
		Manifest().put("Name", "two\nlines")
