# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from multirel.host.archive import ArchiveTask
from multirel.host.attributes import Attribute, AttributeContainer
from multirel.host.configuration import Configuration, SoftwareComponent
from multirel.host.dependencies import ArchiveDependency, FileDependency, Resolver, dependency_of
from multirel.test_support import make_project, tree, write_zip

COLOR = Attribute.of("color", str)
FLAG = Attribute.of("flag", bool)


def test_attribute_container_reads_base_late() -> None:
	base = AttributeContainer()
	derived = AttributeContainer().attribute(FLAG, True).add_all_later(base)
	assert derived.as_dict() == {FLAG: True}
	base.attribute(COLOR, "red")
	assert derived.get(COLOR) == "red"
	assert COLOR in derived
	assert len(derived) == 2
	assert derived.to_json() == {"color": "red", "flag": True}


def test_own_attribute_wins_over_inherited() -> None:
	base = AttributeContainer().attribute(FLAG, False)
	derived = AttributeContainer().attribute(FLAG, True).add_all_later(base)
	assert derived.get(FLAG) is True


def test_attribute_values_are_type_checked() -> None:
	with pytest.raises(TypeError):
		AttributeContainer().attribute(FLAG, "yes")
	with pytest.raises(TypeError):
		AttributeContainer().attribute(Attribute.of("n", int), True)


def test_configuration_hierarchy_is_live() -> None:
	base = Configuration("apiElements")
	derived = Configuration("multiReleaseApiElements").extend(base)
	base.dependencies.append("late")
	derived.dependencies.append("own")
	assert derived.all_dependencies() == ["own", "late"]
	with pytest.raises(ValueError, match="cycle"):
		base.extend(derived)


def test_component_rejects_duplicate_variants_and_unknown_scopes() -> None:
	conf = Configuration("apiElements")
	component = SoftwareComponent("java")
	component.add_variants_from(conf, scope="compile")
	with pytest.raises(ValueError, match="already has variant"):
		component.add_variants_from(conf, scope="runtime")
	with pytest.raises(ValueError, match="unknown maven scope"):
		component.add_variants_from(Configuration("other"), scope="test")


def test_dependency_notations() -> None:
	task = ArchiveTask("jar")
	assert dependency_of("a.jar") == FileDependency(path=Path("a.jar"))
	assert dependency_of(task) == ArchiveDependency(task=task)
	with pytest.raises(TypeError):
		dependency_of(42)


def test_resolver_follows_requires_only_when_transitive(tmp_path: Path) -> None:
	leaf = FileDependency(path=write_zip(tmp_path / "leaf.jar", ["leaf.class"]))
	top = FileDependency(path=write_zip(tmp_path / "top.jar", ["top.class"]), requires=(leaf,))
	resolver = Resolver()
	assert resolver.walk([top], transitive=False) == [top]
	assert resolver.walk([top], transitive=True) == [top, leaf]
	trees = resolver.resolve([top, leaf], transitive=True)
	assert [t.paths() for t in trees] == [["top.class"], ["leaf.class"]]


def test_archive_dependencies_resolve_to_layout_and_build_order() -> None:
	other = ArchiveTask("otherJar").from_(tree("other", ["o.class"]))
	resolver = Resolver()
	dep = ArchiveDependency(task=other)
	assert [t.paths() for t in resolver.resolve([dep], transitive=False)] == [["o.class"]]
	assert resolver.build_dependencies([dep], transitive=False) == [other]


def test_project_conventions() -> None:
	project = make_project(extra_source_sets={"java17": ["j17.class"]})
	main = project.source_set("main")
	java17 = project.source_set("java17")
	assert main.jar_task_name == "jar"
	assert java17.jar_task_name == "java17Jar"
	assert java17.api_elements_name == "java17ApiElements"
	assert java17.sources_elements_name == "java17SourcesElements"
	api = project.configuration("apiElements")
	assert api.consumable
	assert api.artifacts == [project.task("jar")]
	with pytest.raises(KeyError, match="not found"):
		project.task("nope")
	with pytest.raises(ValueError, match="already exists"):
		project.create_source_set("main")


def test_documentation_variant() -> None:
	project = make_project()
	conf = project.create_documentation_variant(project.source_set("main"), "javadoc")
	assert conf.name == "javadocElements"
	assert project.task("javadocJar") in conf.artifacts
	with pytest.raises(ValueError, match="unknown documentation kind"):
		project.create_documentation_variant(project.source_set("main"), "readme")
