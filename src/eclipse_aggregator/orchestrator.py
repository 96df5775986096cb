# src/eclipse_aggregator/orchestrator.py
import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .aggregator import SourceRootSnapshot, augment_source_roots
from .config import GeneratorOptions
from .errors import AggregationError
from .loader import ProjectCache
from .models import ProjectModel
from .scanner import scan_descriptors
from .writers import ClasspathSettings, ClasspathWriter, ProjectWriter

logger = logging.getLogger(__name__)


class GenerationState(enum.Enum):
    INIT = "init"
    ROOT_RESOLVED = "root_resolved"
    DESCRIPTORS_SCANNED = "descriptors_scanned"
    PROJECTS_LOADED = "projects_loaded"
    SOURCE_ROOTS_SNAPSHOTTED = "source_roots_snapshotted"
    SOURCE_ROOTS_AUGMENTED = "source_roots_augmented"
    GENERATION_DELEGATED = "generation_delegated"
    RESTORED = "restored"
    DONE = "done"
    FAILED = "failed"


# FAILED는 어느 단계에서든 진입 가능하므로 순서 목록에서 제외
_ORDER = [state for state in GenerationState if state is not GenerationState.FAILED]


class AggregationSession:
    """
    State of one generate() invocation: the invoking project, the resolved
    root, the project cache and where in the pipeline we are.

    The cache lives exactly as long as the session; reset() clears it.
    """

    def __init__(self, project: ProjectModel, options: GeneratorOptions, cache: Optional[ProjectCache] = None):
        self.project = project
        self.options = options
        self.cache = cache if cache is not None else ProjectCache(execution_root=project.basedir)
        self.state = GenerationState.INIT
        self.descriptors: Optional[List[Path]] = None
        self._root: Optional[ProjectModel] = None

    def advance(self, state: GenerationState) -> None:
        """Moves to the next state; states cannot be skipped."""
        if state is GenerationState.FAILED:
            self.state = state
            return
        # 끝난 세션은 restart() 없이 진행 불가
        if self.state in (GenerationState.DONE, GenerationState.FAILED):
            raise RuntimeError(f"session already finished ({self.state.value})")
        expected = _ORDER[_ORDER.index(self.state) + 1]
        if state is not expected:
            raise RuntimeError(f"cannot go from {self.state.value} to {state.value}")
        logger.debug(f"session state: {state.value}")
        self.state = state

    def resolve_root(self, project: Optional[ProjectModel] = None) -> ProjectModel:
        """
        The aggregation root. Only "the invoking project is the root" is
        supported; parent poms are not walked.
        """
        if self._root is None:
            self._root = project if project is not None else self.project
        return self._root

    def scan(self) -> List[Path]:
        root = self.resolve_root()
        self.descriptors = scan_descriptors(root.basedir, self.options.includes, self.options.exclude_patterns)
        return self.descriptors

    def collect_projects(self) -> List[ProjectModel]:
        """
        The project set: the root first, then every scanned module.
        Scanning and loading happen once per session.
        """
        if not self.cache.collected:
            root = self.resolve_root()
            self.cache.add(root)
            descriptors = self.descriptors if self.descriptors is not None else self.scan()
            projects = self.cache.collect_projects(descriptors)
            # 실행한 pom은 보통 include 패턴에 걸리지 않음 -> 항상 맨 앞에
            projects[:] = [root] + [p for p in projects if p is not root]
        return self.cache.projects

    def restart(self) -> None:
        """
        Rewinds a finished session to INIT for another generate() run.
        The root, the scanned descriptors and the memoized project set are kept.
        """
        logger.debug(f"Restarting session (was {self.state.value})")
        self.state = GenerationState.INIT

    def reset(self) -> None:
        """Like restart(), but also forgets the root and the project cache."""
        self.cache.clear()
        self.descriptors = None
        self._root = None
        self.state = GenerationState.INIT


@dataclass
class GenerationResult:
    skipped: bool = False
    root: Optional[ProjectModel] = None
    projects: List[ProjectModel] = field(default_factory=list)
    state: GenerationState = GenerationState.INIT


def classpath_settings(options: GeneratorOptions) -> ClasspathSettings:
    return ClasspathSettings(
        repository_variable_name=options.repository_variable_name,
        artifact_types=list(options.classpath_artifact_types),
        resolve_transitive_dependencies=options.resolve_transitive_dependencies,
        merge_file=options.classpath_merge,
        excludes=set(options.classpath_excludes),
        include_resources_directory=options.include_resources_directory,
    )


def generate(
    project: ProjectModel,
    options: GeneratorOptions,
    project_writer: ProjectWriter,
    classpath_writer: ClasspathWriter,
    session: Optional[AggregationSession] = None,
) -> GenerationResult:
    """
    Aggregates every module below `project`, augments their compile source
    roots and hands them to the writers. Source roots are restored before
    returning, whether or not the writers succeed.

    Raises AggregationError (with the original error as __cause__) on any failure.
    """
    if not project.execution_root and not options.generate_projects_for_modules:
        logger.warning(
            f"Skipping module {project.id} because execution root project didn't "
            f"configure generate_projects_for_modules"
        )
        return GenerationResult(skipped=True)

    session = session if session is not None else AggregationSession(project, options)
    # 같은 세션으로 다시 호출된 경우: 캐시는 유지하고 상태만 처음으로
    if session.state in (GenerationState.DONE, GenerationState.FAILED):
        session.restart()
    try:
        # --- 1. 루트 결정 + 프로젝트 디스크립터 작성 ---
        root = session.resolve_root(project)
        session.advance(GenerationState.ROOT_RESOLVED)
        project_writer.write(root, options.project_name or project.artifact_id)

        # --- 2. 디스크립터 스캔 및 프로젝트 로드 (세션당 한 번) ---
        if not session.cache.collected:
            session.scan()
        session.advance(GenerationState.DESCRIPTORS_SCANNED)
        projects = session.collect_projects()
        session.advance(GenerationState.PROJECTS_LOADED)
        logger.info(f"Aggregating {len(projects)} project(s) under {root.basedir}")

        # --- 3. 소스 루트 스냅샷 -> 확장 -> 클래스패스 작성 -> (with 종료 시) 복원 ---
        with SourceRootSnapshot.capture(projects):
            session.advance(GenerationState.SOURCE_ROOTS_SNAPSHOTTED)
            for module in projects:
                augment_source_roots(module)
            session.advance(GenerationState.SOURCE_ROOTS_AUGMENTED)
            classpath_writer.write(projects, classpath_settings(options))
            session.advance(GenerationState.GENERATION_DELEGATED)
        session.advance(GenerationState.RESTORED)
        session.advance(GenerationState.DONE)
    except Exception as e:
        # 모든 실패는 원인을 붙인 AggregationError 하나로 전달
        failed_in = session.state
        session.advance(GenerationState.FAILED)
        logger.exception(f"Error creating eclipse configuration (after {failed_in.value})")
        raise AggregationError() from e

    return GenerationResult(root=root, projects=projects, state=session.state)
