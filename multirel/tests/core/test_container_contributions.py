# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from multirel.errors import TierTooLowError
from multirel.host.dependencies import FileDependency
from multirel.host.provider import lazy, lazy_all
from multirel.problems import TIER_TOO_LOW
from multirel.test_support import make_extension, make_project, write_zip
from multirel.version import LanguageVersion


def test_low_tier_is_rejected_without_recording(tmp_path: Path) -> None:
	ext = make_extension()
	container = ext.register()
	dep = write_zip(tmp_path / "old.jar", ["o.class"])
	with pytest.raises(TierTooLowError) as excinfo:
		container.add(8, dep)
	err = excinfo.value
	assert err.tier == 8
	assert err.project == "demo"
	assert err.source_set == "main"
	assert err.archive == "multiReleaseJar"
	assert err.dependency == f"files({dep})"
	assert container.contributions() == []
	diags = ext.project.problems.with_code(TIER_TOO_LOW)
	assert len(diags) == 1
	assert diags[0].severity == "error"
	assert f"Affected dependency: files({dep})" in diags[0].notes


def test_contributions_accumulate_per_tier(tmp_path: Path) -> None:
	container = make_extension().register()
	a = write_zip(tmp_path / "a.jar", ["a.class"])
	b = write_zip(tmp_path / "b.jar", ["b.class"])
	c = write_zip(tmp_path / "c.jar", ["c.class"])
	container.add(11, a)
	container.add(9, b)
	container.add(LanguageVersion.of("11"), c)
	assert len(container.contributions()) == 3
	assert len(container.contributions(11)) == 2
	assert container.tiers() == [11, 9]
	assert [c.unit.name for c in container.contributions(11)] == [
		"multiReleaseJarTier11_0",
		"multiReleaseJarTier11_2",
	]


def test_lazy_sources_are_realized_once(tmp_path: Path) -> None:
	project = make_project()
	container = make_extension(project).register()
	calls: list[str] = []
	dep = write_zip(tmp_path / "lazy.jar", ["l.class"])

	def produce() -> Path:
		calls.append("produce")
		return dep

	source = lazy(produce, name="lazyJar")
	container.add(9, source)
	assert calls == []
	project.evaluate()
	assert calls == []
	assert "META-INF/versions/9/l.class" in container.archive.layout()
	container.archive.layout()
	assert calls == ["produce"]


def test_collection_providers_and_lists_are_accepted(tmp_path: Path) -> None:
	project = make_project()
	container = make_extension(project).register()
	a = write_zip(tmp_path / "a.jar", ["a.class"])
	b = write_zip(tmp_path / "b.jar", ["b.class"])
	container.add(9, lazy_all(lambda: [lazy(lambda: a), b]))
	container.add(10, [str(a), b])
	project.evaluate()
	layout = container.archive.layout()
	assert {"META-INF/versions/9/a.class", "META-INF/versions/9/b.class"} <= set(layout)
	assert {"META-INF/versions/10/a.class", "META-INF/versions/10/b.class"} <= set(layout)


def test_options_configure_then_lock_the_unit(tmp_path: Path) -> None:
	project = make_project()
	container = make_extension(project).register()
	leaf = FileDependency(path=write_zip(tmp_path / "leaf.jar", ["leaf.class"]))
	top = FileDependency(path=write_zip(tmp_path / "top.jar", ["top.class"]), requires=(leaf,))

	plain = container.add(9, top)
	transitive = container.add(10, top, lambda unit: setattr(unit, "transitive", True))
	assert not plain.unit.transitive
	assert transitive.unit.transitive
	assert transitive.unit.locked
	with pytest.raises(ValueError, match="can no longer be configured"):
		transitive.unit.transitive = False
	with pytest.raises(ValueError, match="can no longer be configured"):
		plain.unit.add("more.jar")

	project.evaluate()
	layout = container.archive.layout()
	assert "META-INF/versions/9/top.class" in layout
	assert "META-INF/versions/9/leaf.class" not in layout
	assert "META-INF/versions/10/leaf.class" in layout


def test_options_may_add_dependencies(tmp_path: Path) -> None:
	project = make_project()
	container = make_extension(project).register()
	a = write_zip(tmp_path / "a.jar", ["a.class"])
	extra = write_zip(tmp_path / "extra.jar", ["extra.class"])
	container.add(9, a, lambda unit: unit.add(extra))
	project.evaluate()
	assert "META-INF/versions/9/extra.class" in container.archive.layout()


def test_low_tier_wins_over_unusable_source() -> None:
	container = make_extension().register()
	with pytest.raises(TierTooLowError) as excinfo:
		container.add(8, 42)
	assert excinfo.value.dependency == "42"
	assert container.contributions() == []


def test_unusable_source_is_rejected_for_valid_tier() -> None:
	container = make_extension().register()
	with pytest.raises(TypeError):
		container.add(9, 42)
	assert container.contributions() == []
