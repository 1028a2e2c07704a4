# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from multirel.host.attributes import Attribute
from multirel.host.project import USAGE_ATTRIBUTE
from multirel.test_support import make_extension, make_project


def test_main_container_names() -> None:
	project = make_project()
	container = make_extension(project).register()
	assert container.archive.name == "multiReleaseJar"
	assert container.api_elements.name == "multiReleaseApiElements"
	assert container.runtime_elements.name == "multiReleaseRuntimeElements"
	assert container.component.name == "multiReleaseJava"
	assert container.attribute.name == "net.minecraftforge.multi-release.main"
	assert project.task("multiReleaseJar") is container.archive
	assert project.configuration("multiReleaseApiElements") is container.api_elements
	assert project.components["multiReleaseJava"] is container.component


def test_non_main_container_names() -> None:
	project = make_project(extra_source_sets={"java17": ["j.class"]})
	container = make_extension(project).register("java17")
	assert container.archive.name == "multiReleaseJava17Jar"
	assert container.api_elements.name == "multiReleaseJava17ApiElements"
	assert container.runtime_elements.name == "multiReleaseJava17RuntimeElements"
	assert container.component.name == "multiReleaseJava17Java"
	assert container.attribute.name == "net.minecraftforge.multi-release.java17"


def test_archive_carries_marker_and_base_manifest() -> None:
	project = make_project()
	project.task("jar").manifest.put("Implementation-Title", "demo")
	container = make_extension(project).register()
	attributes = container.archive.manifest.attributes()
	assert attributes["Multi-Release"] == "true"
	assert attributes["Implementation-Title"] == "demo"
	assert "Multi-Release" not in project.task("jar").manifest.attributes()
	assert container.archive.group == "build"


def test_variants_mirror_base_configurations() -> None:
	project = make_project()
	container = make_extension(project).register()
	api = project.configuration("apiElements")
	runtime = project.configuration("runtimeElements")
	variant = container.runtime_elements
	assert variant.consumable
	assert variant.description == "Multi-release runtime elements for the main feature."
	assert variant.extends_from == [runtime]
	assert variant.artifacts == [container.archive]
	assert container.api_elements.extends_from == [api]

	assert variant.attributes.get(container.attribute) is True
	assert variant.attributes.get(USAGE_ATTRIBUTE) == "java-runtime"
	assert container.attribute not in runtime.attributes


def test_variant_attributes_and_dependencies_bind_late() -> None:
	project = make_project()
	container = make_extension(project).register()
	runtime = project.configuration("runtimeElements")
	env = Attribute.of("org.gradle.jvm.environment", str)
	runtime.attributes.attribute(env, "standard-jvm")
	runtime.dependencies.append("org.example:lib:1.0")
	assert container.runtime_elements.attributes.get(env) == "standard-jvm"
	assert container.runtime_elements.all_dependencies() == ["org.example:lib:1.0"]


def test_component_variants() -> None:
	container = make_extension().register()
	assert container.component.to_dict() == {
		"name": "multiReleaseJava",
		"variants": [
			{"name": "multiReleaseApiElements", "scope": "compile", "optional": False},
			{"name": "multiReleaseRuntimeElements", "scope": "runtime", "optional": False},
		],
	}


def test_documentation_variants_join_component_once_declared() -> None:
	project = make_project()
	container = make_extension(project).register()
	main = project.source_set("main")
	project.create_documentation_variant(main, "sources")
	project.create_documentation_variant(main, "javadoc")
	assert len(container.component.variants) == 2
	project.evaluate()
	optional = [v for v in container.component.variants if v.optional]
	assert [v.configuration.name for v in optional] == ["sourcesElements", "javadocElements"]
	assert all(v.scope == "runtime" for v in optional)


def test_component_without_documentation_variants() -> None:
	project = make_project()
	container = make_extension(project).register()
	project.evaluate()
	assert container.component.variant_names() == ["multiReleaseApiElements", "multiReleaseRuntimeElements"]
