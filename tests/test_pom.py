"""
Unit tests for the pom.xml loader.
"""

import xml.etree.ElementTree as ET

import pytest

from eclipse_aggregator.errors import DescriptorParseError
from eclipse_aggregator.pom import load_project, parse_configuration

from conftest import multi_source_body


class TestLoadProject:
    def test_defaults_resolved_against_basedir(self, tmp_path, write_pom):
        pom = write_pom(tmp_path / "core", "core")

        project = load_project(pom)

        base = (tmp_path / "core").resolve().as_posix()
        assert project.id == "org.example:core:jar:1.0"
        assert project.basedir == (tmp_path / "core").resolve()
        assert project.compile_source_roots == [f"{base}/src/main/java"]
        assert project.build.test_source_directory == f"{base}/src/test/java"
        assert project.build.resources == [f"{base}/src/main/resources"]
        assert project.build.plugin_management is None

    def test_custom_directories_and_properties(self, tmp_path, write_pom):
        body = """
  <properties><gen.dir>target/gen</gen.dir></properties>
  <build>
    <sourceDirectory>${basedir}/src/java</sourceDirectory>
    <testSourceDirectory>${gen.dir}/test</testSourceDirectory>
  </build>
"""
        pom = write_pom(tmp_path, "custom", body)

        project = load_project(pom)

        base = tmp_path.resolve().as_posix()
        assert project.compile_source_roots == [f"{base}/src/java"]
        assert project.test_source_directory == f"{base}/target/gen/test"

    def test_parent_coordinates_are_inherited(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text(
            "<project><parent><groupId>org.parent</groupId><artifactId>p</artifactId>"
            "<version>2.0</version></parent><artifactId>child</artifactId></project>",
            encoding="utf-8",
        )

        project = load_project(pom)

        assert project.group_id == "org.parent"
        assert project.version == "2.0"
        assert project.id == "org.parent:child:jar:2.0"

    def test_builtin_properties_in_plugin_configuration(self, tmp_path, write_pom):
        pom = write_pom(tmp_path, "gen", multi_source_body(
            "${project.build.directory}/src/main/java",
            "${pom.basedir}/gen",
            "${project.artifactId}-${project.version}",
        ))

        project = load_project(pom)

        base = tmp_path.resolve().as_posix()
        directories = project.build.plugin_management[0].configuration.first_child()
        assert [c.value for c in directories.children] == [
            f"{base}/target/src/main/java",
            f"{base}/gen",
            "gen-1.0",
        ]

    def test_custom_build_directory(self, tmp_path, write_pom):
        body = """
  <build>
    <directory>${basedir}/out</directory>
    <testSourceDirectory>${project.build.directory}/generated-tests</testSourceDirectory>
  </build>
"""
        pom = write_pom(tmp_path, "custom", body)

        project = load_project(pom)

        assert project.test_source_directory == f"{tmp_path.resolve().as_posix()}/out/generated-tests"

    def test_plugin_management_configuration_tree(self, tmp_path, write_pom):
        pom = write_pom(tmp_path, "gen", multi_source_body("target/src", "gen/java"))

        project = load_project(pom)

        plugin = project.build.plugin_management[0]
        assert plugin.artifact_id == "andromda-multi-source-plugin"
        directories = plugin.configuration.first_child()
        assert directories.name == "sourceDirectories"
        assert [c.value for c in directories.children] == ["target/src", "gen/java"]

    def test_execution_root_flag(self, tmp_path, write_pom):
        pom = write_pom(tmp_path, "root", packaging="pom")

        assert load_project(pom, execution_root=tmp_path).execution_root is True
        assert load_project(pom, execution_root=tmp_path / "other").execution_root is False
        assert load_project(pom).execution_root is False

    def test_missing_file_is_skipped(self, tmp_path):
        assert load_project(tmp_path / "pom.xml") is None

    def test_non_project_root_is_skipped(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<settings/>", encoding="utf-8")
        assert load_project(pom) is None

    def test_malformed_xml_is_structural(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project><artifactId>broken</project>", encoding="utf-8")
        with pytest.raises(DescriptorParseError):
            load_project(pom)

    def test_missing_artifact_id_is_structural(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project><groupId>g</groupId></project>", encoding="utf-8")
        with pytest.raises(DescriptorParseError, match="artifactId"):
            load_project(pom)


class TestParseConfiguration:
    def test_none(self):
        assert parse_configuration(None) is None

    def test_order_and_blank_values(self):
        element = ET.fromstring(
            "<configuration><dirs><d>a</d><!-- c --><d> b </d><d/></dirs></configuration>"
        )

        node = parse_configuration(element)

        assert node.name == "configuration"
        assert node.value is None
        assert [c.value for c in node.first_child().children] == ["a", "b", None]
