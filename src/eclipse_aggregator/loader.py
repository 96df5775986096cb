# src/eclipse_aggregator/loader.py
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from .errors import DescriptorParseError, ProjectLoadError
from .models import ProjectModel
from .pom import load_project

logger = logging.getLogger(__name__)

ProjectLoaderFn = Callable[[Path, Optional[Path]], Optional[ProjectModel]]


class ProjectCache:
    """
    Session-scoped cache of loaded projects.

    Holds one ProjectModel per descriptor path plus the memoized project set,
    so every stage of a session shares the same model instances. Call
    clear() to start over (e.g. after the filesystem changed).
    """

    def __init__(self, loader: ProjectLoaderFn = load_project, execution_root: Optional[Path] = None):
        self._loader = loader
        self._execution_root = execution_root
        self._by_path: Dict[Path, ProjectModel] = {}
        self._projects: Optional[List[ProjectModel]] = None

    # 같은 파일을 다른 경로 표기로 요청해도 한 번만 로드되도록 절대 경로로 키 생성
    @staticmethod
    def _key(path: Path) -> Path:
        return Path(path).resolve()

    def add(self, project: ProjectModel) -> None:
        """Registers an already loaded project (e.g. the invoking one)."""
        self._by_path[self._key(project.file)] = project

    def load(self, path: Path) -> Optional[ProjectModel]:
        """
        Returns the project for `path`, loading it on first request.

        None means the descriptor could not be turned into a project and
        should be skipped. A structural parse failure raises ProjectLoadError.
        """
        key = self._key(path)
        cached = self._by_path.get(key)
        if cached is not None:
            return cached
        # 깨진 pom은 세션 전체를 실패시킴 (건너뛰지 않음)
        try:
            project = self._loader(key, self._execution_root)
        except DescriptorParseError as e:
            raise ProjectLoadError(key) from e
        # None(로드 불가)은 캐시하지 않음
        if project is not None:
            self._by_path[key] = project
        return project

    def collect_projects(self, descriptors: Iterable[Path]) -> List[ProjectModel]:
        """Loads every descriptor once; later calls return the same list object."""
        if self._projects is None:
            projects = []
            for descriptor in descriptors:
                project = self.load(descriptor)
                if project is None:
                    logger.warning(f"Could not load project from pom: {descriptor} - ignoring")
                    continue
                # 동일 객체가 두 번 들어오지 않도록 (모델은 동일성 비교)
                if any(project is known for known in projects):
                    continue
                logger.info(f"found project {project.id}")
                projects.append(project)
            self._projects = projects
        return self._projects

    # --- 조회 ---

    @property
    def collected(self) -> bool:
        return self._projects is not None

    @property
    def projects(self) -> List[ProjectModel]:
        """The memoized project set ([] before collect_projects() ran)."""
        return self._projects if self._projects is not None else []

    def clear(self) -> None:
        self._by_path.clear()
        self._projects = None
