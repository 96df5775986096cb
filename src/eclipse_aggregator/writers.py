# src/eclipse_aggregator/writers.py
import logging
import typer
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Set

from .models import ProjectModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClasspathSettings:
    """Everything the classpath writer needs besides the projects."""
    repository_variable_name: str = "M2_REPO"
    artifact_types: List[str] = field(default_factory=lambda: ["jar"])
    resolve_transitive_dependencies: bool = True
    merge_file: Optional[str] = None
    excludes: Set[str] = field(default_factory=set)
    include_resources_directory: bool = True


class ProjectWriter(Protocol):
    def write(self, root_project: ProjectModel, project_name: str) -> None:
        ...


class ClasspathWriter(Protocol):
    def write(self, projects: List[ProjectModel], settings: ClasspathSettings) -> None:
        ...


# --- 기본 writer: IDE용 파일 대신 받은 내용을 출력 ---

class SummaryProjectWriter:
    """Prints the resolved root project instead of writing a .project file."""

    def __init__(self, echo=typer.echo):
        self._echo = echo
        self.written: Optional[str] = None

    def write(self, root_project: ProjectModel, project_name: str) -> None:
        self.written = project_name
        self._echo(f"Project: {project_name} ({root_project.id})")
        self._echo(f"  basedir: {root_project.basedir.as_posix()}")


class SummaryClasspathWriter:
    """
    Prints every module's compile source roots while they are augmented.
    The roots are copied because the caller restores them right after.
    """

    def __init__(self, echo=typer.echo):
        self._echo = echo
        self.source_roots: Dict[str, List[str]] = {}

    def write(self, projects: List[ProjectModel], settings: ClasspathSettings) -> None:
        self._echo(f"Modules: {len(projects)} (classpath variable {settings.repository_variable_name})")
        for project in projects:
            # 호출자가 곧바로 복원하므로 지금 상태를 복사해 둠
            roots = list(project.compile_source_roots)
            self.source_roots[project.id] = roots
            self._echo(f"  {project.id}")
            for root in roots:
                self._echo(f"    src: {root}")
            if settings.include_resources_directory and project.build is not None:
                for resource in project.build.resources:
                    self._echo(f"    res: {resource}")
        logger.debug(f"Summarized {len(projects)} module(s)")
