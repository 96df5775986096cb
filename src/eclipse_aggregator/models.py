# src/eclipse_aggregator/models.py
from pydantic import BaseModel, ConfigDict, Field
from pathlib import Path
from typing import List, Optional

DEFAULT_PLUGIN_GROUP_ID = "org.apache.maven.plugins"


class ConfigNode(BaseModel):
    """
    Generic plugin configuration tree (name, text value, ordered children).
    Mirrors the XML under a <configuration> element.
    """
    # 임의의 추가 필드 허용 안 함
    model_config = ConfigDict(extra='forbid')

    name: str
    value: Optional[str] = None                 # 공백 제거 후 빈 문자열이면 None
    children: List["ConfigNode"] = Field(default_factory=list)  # 선언 순서 유지

    @property
    def child_count(self) -> int:
        return len(self.children)

    def first_child(self) -> Optional["ConfigNode"]:
        return self.children[0] if self.children else None


class PluginExecution(BaseModel):
    model_config = ConfigDict(extra='forbid')

    id: Optional[str] = None
    configuration: Optional[ConfigNode] = None


class Plugin(BaseModel):
    """A <plugin> entry from <pluginManagement>."""
    model_config = ConfigDict(extra='forbid')

    group_id: str = DEFAULT_PLUGIN_GROUP_ID
    artifact_id: str
    version: Optional[str] = None
    configuration: Optional[ConfigNode] = None
    executions: List[PluginExecution] = Field(default_factory=list)  # 선언 순서 유지

    @property
    def key(self) -> str:
        """group:artifact[:version], for log messages."""
        key = f"{self.group_id}:{self.artifact_id}"
        return f"{key}:{self.version}" if self.version else key


class Build(BaseModel):
    model_config = ConfigDict(extra='forbid')

    # 모든 디렉토리는 basedir 기준 절대 경로로 정규화된 상태
    source_directory: Optional[str] = None
    test_source_directory: Optional[str] = None
    resources: List[str] = Field(default_factory=list)
    # <pluginManagement> 블록이 아예 없으면 None
    plugin_management: Optional[List[Plugin]] = None


class ProjectModel(BaseModel):
    """
    In-memory model of one pom.xml.

    Instances are shared by reference across the pipeline and compared by
    identity: `compile_source_roots` is mutated in place during augmentation
    and restored afterwards, so two separate loads of the same file are two
    different projects.
    """
    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    group_id: Optional[str] = None              # 없으면 <parent>에서 상속
    artifact_id: str
    version: Optional[str] = None               # 없으면 <parent>에서 상속
    packaging: str = "jar"
    file: Path                                  # pom.xml 절대 경로
    basedir: Path                               # pom.xml이 있는 디렉토리
    build: Optional[Build] = None
    compile_source_roots: List[str] = Field(default_factory=list)  # 순서 중요, 제자리 수정됨
    execution_root: bool = False

    # pydantic 기본 비교는 필드 값 기준 -> 프로젝트는 객체 동일성으로 비교
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    @property
    def id(self) -> str:
        """Maven-style project id: group:artifact:packaging:version."""
        return f"{self.group_id}:{self.artifact_id}:{self.packaging}:{self.version}"

    @property
    def test_source_directory(self) -> Optional[str]:
        return self.build.test_source_directory if self.build else None


ConfigNode.model_rebuild()
