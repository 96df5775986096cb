# src/eclipse_aggregator/pom.py
import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional

from .errors import DescriptorParseError
from .models import Build, ConfigNode, Plugin, PluginExecution, ProjectModel
from .paths import normalize_path

logger = logging.getLogger(__name__)

POM_FILE_NAME = "pom.xml"

# --- Maven 기본값 (super POM) ---
DEFAULT_BUILD_DIRECTORY = "target"
DEFAULT_SOURCE_DIRECTORY = "src/main/java"
DEFAULT_TEST_SOURCE_DIRECTORY = "src/test/java"
DEFAULT_RESOURCES_DIRECTORY = "src/main/resources"

# ${name} 형태의 프로퍼티 참조
_PROPERTY_REFERENCE = re.compile(r"\$\{([^}]+)\}")


# --- XML 탐색 헬퍼 (네임스페이스 무시) ---

def _local(tag: str) -> str:
    """Strips the '{namespace}' prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _child(element: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if element is None:
        return None
    for child in element:
        # 주석/처리 명령은 tag가 문자열이 아님 -> 건너뛰기
        if isinstance(child.tag, str) and _local(child.tag) == name:
            return child
    return None


def _children(element: Optional[ET.Element], name: str) -> List[ET.Element]:
    if element is None:
        return []
    return [c for c in element if isinstance(c.tag, str) and _local(c.tag) == name]


def _text(element: Optional[ET.Element], name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


# --- 프로퍼티 치환 및 경로 해석 ---

def _interpolate(text: Optional[str], properties: Dict[str, str]) -> Optional[str]:
    """Expands ${name} references; unknown names are left untouched."""
    if not text or not properties:
        return text
    return _PROPERTY_REFERENCE.sub(lambda m: properties.get(m.group(1), m.group(0)), text)


def _is_absolute(path: str) -> bool:
    # '/...' 또는 윈도우 드라이브 문자('C:...')
    return path.startswith("/") or (len(path) > 1 and path[1] == ":")


def _resolve(basedir: Path, value: Optional[str], default: str) -> str:
    """Resolves a build directory against basedir, the way Maven does."""
    normalized = normalize_path(value if value is not None else default)
    if _is_absolute(normalized):
        return normalized
    return normalize_path(f"{basedir.as_posix()}/{normalized}")


def _collect_properties(
    root: ET.Element,
    basedir: Path,
    group_id: Optional[str],
    artifact_id: str,
    version: Optional[str],
) -> Dict[str, str]:
    """
    User <properties> plus the Maven built-ins a plugin configuration usually
    refers to (basedir, project.build.directory, project coordinates).
    """
    properties = {}
    properties_element = _child(root, "properties")
    if properties_element is not None:
        for prop in properties_element:
            if isinstance(prop.tag, str):
                properties[_local(prop.tag)] = (prop.text or "").strip()

    # 내장 프로퍼티가 사용자 프로퍼티보다 우선 (Maven과 동일)
    base = basedir.as_posix()
    builtins = {
        "basedir": base,
        "project.basedir": base,
        "pom.basedir": base,                    # 예전 pom에서 쓰던 이름
        "project.artifactId": artifact_id,
        "pom.artifactId": artifact_id,
    }
    if group_id:
        builtins["project.groupId"] = group_id
        builtins["pom.groupId"] = group_id
    if version:
        builtins["project.version"] = version
        builtins["pom.version"] = version
    properties.update(builtins)

    # <build><directory> 자체도 ${basedir} 등을 참조할 수 있으므로 나중에 해석
    build_directory = _interpolate(_text(_child(root, "build"), "directory"), properties)
    properties["project.build.directory"] = _resolve(basedir, build_directory, DEFAULT_BUILD_DIRECTORY)
    properties["pom.build.directory"] = properties["project.build.directory"]
    return properties


def parse_configuration(
    element: Optional[ET.Element],
    properties: Optional[Dict[str, str]] = None,
) -> Optional[ConfigNode]:
    """
    Converts an XML element (usually <configuration>) into a ConfigNode tree.
    Comments and processing instructions are dropped; element order is kept.
    """
    if element is None:
        return None
    text = element.text.strip() if element.text else ""
    children = [
        parse_configuration(child, properties)
        for child in element
        if isinstance(child.tag, str)
    ]
    return ConfigNode(
        name=_local(element.tag),
        value=_interpolate(text, properties or {}) or None,
        children=children,
    )


# --- <build> 파싱 ---

def _parse_plugin(element: ET.Element, properties: Dict[str, str]) -> Optional[Plugin]:
    artifact_id = _text(element, "artifactId")
    if artifact_id is None:
        logger.debug("Ignoring <plugin> without artifactId")
        return None
    executions = [
        PluginExecution(
            id=_text(execution, "id"),
            configuration=parse_configuration(_child(execution, "configuration"), properties),
        )
        for execution in _children(_child(element, "executions"), "execution")
    ]
    plugin = Plugin(
        artifact_id=artifact_id,
        version=_interpolate(_text(element, "version"), properties),
        configuration=parse_configuration(_child(element, "configuration"), properties),
        executions=executions,
    )
    group_id = _text(element, "groupId")
    if group_id:
        plugin.group_id = group_id
    return plugin


def _parse_plugin_management(element: Optional[ET.Element], properties: Dict[str, str]) -> Optional[List[Plugin]]:
    plugin_management = _child(element, "pluginManagement")
    if plugin_management is None:
        return None
    plugins = []
    for plugin_element in _children(_child(plugin_management, "plugins"), "plugin"):
        plugin = _parse_plugin(plugin_element, properties)
        if plugin is not None:
            plugins.append(plugin)
    return plugins


def _parse_build(element: Optional[ET.Element], basedir: Path, properties: Dict[str, str]) -> Build:
    def directory(name: str, default: str) -> str:
        return _resolve(basedir, _interpolate(_text(element, name), properties), default)

    resources = [
        _resolve(basedir, _interpolate(_text(resource, "directory"), properties), DEFAULT_RESOURCES_DIRECTORY)
        for resource in _children(_child(element, "resources"), "resource")
    ]
    return Build(
        source_directory=directory("sourceDirectory", DEFAULT_SOURCE_DIRECTORY),
        test_source_directory=directory("testSourceDirectory", DEFAULT_TEST_SOURCE_DIRECTORY),
        # <resources>가 없으면 기본 리소스 디렉토리 하나
        resources=resources or [_resolve(basedir, None, DEFAULT_RESOURCES_DIRECTORY)],
        plugin_management=_parse_plugin_management(element, properties),
    )


def load_project(descriptor_path: Path, execution_root: Optional[Path] = None) -> Optional[ProjectModel]:
    """
    Builds a ProjectModel from a pom.xml.

    Returns None when the file is missing or is not a Maven <project>;
    raises DescriptorParseError when the XML itself is malformed or the
    project has no artifactId.
    """
    descriptor_path = Path(descriptor_path).resolve()
    if not descriptor_path.is_file():
        logger.debug(f"Descriptor not found: {descriptor_path}")
        return None

    # --- 1. XML 파싱 (깨진 XML은 구조적 오류) ---
    try:
        root = ET.parse(descriptor_path).getroot()
    except ET.ParseError as e:
        raise DescriptorParseError(descriptor_path, f"malformed XML ({e})") from e

    if _local(root.tag) != "project":
        logger.debug(f"{descriptor_path} has root <{_local(root.tag)}>, not <project>")
        return None

    artifact_id = _text(root, "artifactId")
    if artifact_id is None:
        raise DescriptorParseError(descriptor_path, "missing <artifactId>")

    # --- 2. 좌표 결정 (groupId/version은 <parent>에서 상속 가능) ---
    parent = _child(root, "parent")
    group_id = _text(root, "groupId") or _text(parent, "groupId")
    version = _text(root, "version") or _text(parent, "version")

    # --- 3. 프로퍼티 수집 후 <build> 해석 ---
    basedir = descriptor_path.parent
    properties = _collect_properties(root, basedir, group_id, artifact_id, version)
    build = _parse_build(_child(root, "build"), basedir, properties)
    is_root = execution_root is not None and Path(execution_root).resolve() == basedir

    return ProjectModel(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=_text(root, "packaging") or "jar",
        file=descriptor_path,
        basedir=basedir,
        build=build,
        compile_source_roots=[build.source_directory],
        execution_root=is_root,
    )
