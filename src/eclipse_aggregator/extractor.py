# src/eclipse_aggregator/extractor.py
import logging
from typing import List, Optional

from .models import ConfigNode, Plugin, ProjectModel
from .paths import normalize_path, with_trailing_separator

logger = logging.getLogger(__name__)

# Code generator plugin whose configuration lists extra source directories:
#
#   <plugin>
#     <artifactId>andromda-multi-source-plugin</artifactId>
#     <configuration>
#       <sourceDirectories>
#         <directory>target/src/main/java</directory>
#       </sourceDirectories>
#     </configuration>
#   </plugin>
MULTI_SOURCE_PLUGIN_ARTIFACT_ID = "andromda-multi-source-plugin"


def find_plugin(project: ProjectModel, artifact_id: str) -> Optional[Plugin]:
    """First <pluginManagement> plugin with the given artifactId, in declaration order."""
    build = project.build
    if build is None or not build.plugin_management:
        return None
    for plugin in build.plugin_management:
        if plugin.artifact_id == artifact_id:
            return plugin
    return None


def effective_configuration(plugin: Optional[Plugin]) -> Optional[ConfigNode]:
    """
    Resolves which configuration applies to `plugin`:
    the plugin-level <configuration>, else the configuration of its first
    declared <execution>, else None.
    """
    if plugin is None:
        return None
    # 1순위: 플러그인 자체 설정
    if plugin.configuration is not None:
        return plugin.configuration
    # 2순위: 첫 번째 <execution>의 설정 (execution은 하나뿐이라고 가정)
    if plugin.executions:
        execution = plugin.executions[0]
        logger.debug(f"{plugin.key}: using configuration of execution '{execution.id}'")
        return execution.configuration
    # 3순위: 설정 없음
    return None


def extract_extra_source_directories(project: ProjectModel) -> List[str]:
    """
    Extra source directories declared for the multi-source plugin, as
    normalized absolute paths in declaration order.

    Relative entries are resolved against the project's base directory. A
    project without the plugin (or without directories) yields [].
    """
    configuration = effective_configuration(find_plugin(project, MULTI_SOURCE_PLUGIN_ARTIFACT_ID))
    if configuration is None:
        return []
    # 첫 번째 자식이 디렉토리 목록 컨테이너 (이름은 따지지 않음)
    directories = configuration.first_child()
    if directories is None or directories.child_count == 0:
        return []

    # 접두사 비교용: 끝에 '/'가 붙은 basedir
    base_directory = with_trailing_separator(project.basedir.as_posix())
    source_directories = []
    for child in directories.children:
        directory = normalize_path(child.value)
        if directory is None:
            continue  # 빈 <directory/>
        # basedir 아래가 아니면 상대 경로로 보고 basedir에 붙임
        if not directory.startswith(base_directory):
            directory = normalize_path(base_directory + child.value.strip())
        source_directories.append(directory)

    if source_directories:
        logger.debug(f"{project.id}: extra source directories {source_directories}")
    return source_directories
