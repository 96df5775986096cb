"""
Unit tests for multi-source plugin directory extraction.
"""

from eclipse_aggregator.extractor import (
    MULTI_SOURCE_PLUGIN_ARTIFACT_ID,
    effective_configuration,
    extract_extra_source_directories,
    find_plugin,
)
from eclipse_aggregator.models import Build, ConfigNode, Plugin, PluginExecution
from eclipse_aggregator.pom import load_project

from conftest import multi_source_body


def _directories(*values, container="sourceDirectories"):
    return ConfigNode(
        name="configuration",
        children=[ConfigNode(
            name=container,
            children=[ConfigNode(name="directory", value=v) for v in values],
        )],
    )


def _build(*plugins):
    return Build(plugin_management=list(plugins))


class TestFindPlugin:
    def test_first_match_in_declaration_order(self, make_project):
        first = Plugin(artifact_id=MULTI_SOURCE_PLUGIN_ARTIFACT_ID, version="1")
        second = Plugin(artifact_id=MULTI_SOURCE_PLUGIN_ARTIFACT_ID, version="2")
        project = make_project(build=_build(Plugin(artifact_id="other"), first, second))

        assert find_plugin(project, MULTI_SOURCE_PLUGIN_ARTIFACT_ID) is first

    def test_no_build_or_management(self, make_project):
        assert find_plugin(make_project(), MULTI_SOURCE_PLUGIN_ARTIFACT_ID) is None
        assert find_plugin(make_project(build=Build()), MULTI_SOURCE_PLUGIN_ARTIFACT_ID) is None


class TestEffectiveConfiguration:
    def test_plugin_configuration_wins(self):
        own = _directories("a")
        plugin = Plugin(
            artifact_id="x",
            configuration=own,
            executions=[PluginExecution(configuration=_directories("b"))],
        )
        assert effective_configuration(plugin) is own

    def test_falls_back_to_first_execution(self):
        first = _directories("b")
        plugin = Plugin(
            artifact_id="x",
            executions=[PluginExecution(configuration=first), PluginExecution(configuration=_directories("c"))],
        )
        assert effective_configuration(plugin) is first

    def test_nothing_configured(self):
        assert effective_configuration(None) is None
        assert effective_configuration(Plugin(artifact_id="x")) is None
        assert effective_configuration(Plugin(artifact_id="x", executions=[PluginExecution()])) is None


class TestExtractExtraSourceDirectories:
    def _project(self, make_project, configuration=None, executions=()):
        plugin = Plugin(
            artifact_id=MULTI_SOURCE_PLUGIN_ARTIFACT_ID,
            configuration=configuration,
            executions=list(executions),
        )
        return make_project(basedir="/proj/mod1", build=_build(plugin))

    def test_relative_directory_is_resolved(self, make_project):
        project = self._project(make_project, _directories("gen/src"))
        assert extract_extra_source_directories(project) == ["/proj/mod1/gen/src"]

    def test_absolute_directory_is_kept(self, make_project):
        project = self._project(make_project, _directories("/proj/mod1/gen/src"))
        assert extract_extra_source_directories(project) == ["/proj/mod1/gen/src"]

    def test_values_are_normalized_in_order(self, make_project):
        project = self._project(
            make_project,
            _directories(" target\\src ", "/proj/mod1//gen/./java", None),
        )
        assert extract_extra_source_directories(project) == [
            "/proj/mod1/target/src",
            "/proj/mod1/gen/java",
        ]

    def test_execution_configuration_is_used(self, make_project):
        project = self._project(
            make_project,
            executions=[PluginExecution(id="multi", configuration=_directories("target/gen"))],
        )
        assert extract_extra_source_directories(project) == ["/proj/mod1/target/gen"]

    def test_container_name_is_not_significant(self, make_project):
        project = self._project(make_project, _directories("gen", container="dirs"))
        assert extract_extra_source_directories(project) == ["/proj/mod1/gen"]

    def test_missing_plugin_yields_empty(self, make_project):
        project = make_project(build=_build(Plugin(artifact_id="maven-compiler-plugin")))
        assert extract_extra_source_directories(project) == []

    def test_empty_configuration_yields_empty(self, make_project):
        assert extract_extra_source_directories(
            self._project(make_project, ConfigNode(name="configuration"))
        ) == []
        assert extract_extra_source_directories(
            self._project(make_project, _directories())
        ) == []

    def test_absolute_directory_outside_basedir_is_prefixed(self, make_project):
        project = self._project(make_project, _directories("/other/gen"))
        assert extract_extra_source_directories(project) == ["/proj/mod1/other/gen"]

    def test_trailing_separator_is_dropped(self, make_project):
        project = self._project(make_project, _directories("gen/src/", "/proj/mod1/gen/java/"))
        assert extract_extra_source_directories(project) == ["/proj/mod1/gen/src", "/proj/mod1/gen/java"]

    def test_build_directory_reference_from_pom(self, tmp_path, write_pom):
        pom = write_pom(tmp_path, "gen", multi_source_body("${project.build.directory}/src/main/java"))

        project = load_project(pom)

        base = tmp_path.resolve().as_posix()
        assert extract_extra_source_directories(project) == [f"{base}/target/src/main/java"]
