# src/eclipse_aggregator/aggregator.py
import logging
from typing import List, Sequence, Tuple

from .extractor import extract_extra_source_directories
from .models import ProjectModel

logger = logging.getLogger(__name__)


def augment_source_roots(project: ProjectModel) -> List[str]:
    """
    Installs the union of the project's compile source roots, the
    multi-source plugin directories and the test source directory.

    First-seen order wins; the list is updated in place and returned.
    """
    # 기존 루트가 먼저 (중복은 처음 나온 것만)
    roots = list(dict.fromkeys(project.compile_source_roots))
    # 멀티 소스 플러그인 디렉토리 -> 테스트 소스 디렉토리 순으로 추가
    for directory in extract_extra_source_directories(project):
        if directory not in roots:
            roots.append(directory)
    test_source_directory = project.test_source_directory
    if test_source_directory is not None and test_source_directory.strip():
        if test_source_directory not in roots:
            roots.append(test_source_directory)

    # 리스트 객체 자체는 유지 (스냅샷이 같은 객체로 복원함)
    project.compile_source_roots[:] = roots
    return project.compile_source_roots


class SourceRootSnapshot:
    """
    Copy of each project's compile source roots taken before augmentation.

    restore() writes the copies back into the original list objects, once;
    later calls do nothing. Used as a context manager it restores on every
    exit path:

        with SourceRootSnapshot.capture(projects):
            for project in projects:
                augment_source_roots(project)
            ...
    """

    def __init__(self, entries: Sequence[Tuple[ProjectModel, List[str]]]):
        self._entries = list(entries)
        self._restored = False

    @classmethod
    def capture(cls, projects: Sequence[ProjectModel]) -> "SourceRootSnapshot":
        return cls([(project, list(project.compile_source_roots)) for project in projects])

    def restore(self) -> None:
        if self._restored:
            logger.debug("Source roots already restored; skipping.")
            return
        self._restored = True
        # 원래 리스트 객체에 내용만 되돌림
        for project, roots in self._entries:
            project.compile_source_roots[:] = roots
        logger.debug(f"Restored compile source roots of {len(self._entries)} project(s)")

    # --- 컨텍스트 매니저: 예외가 나도 반드시 복원 ---

    def __enter__(self) -> "SourceRootSnapshot":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

