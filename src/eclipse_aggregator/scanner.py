# src/eclipse_aggregator/scanner.py
import logging
import pathspec
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .pom import POM_FILE_NAME

logger = logging.getLogger(__name__)

# 루트 아래 한 단계 이상 깊이에 있는 모든 pom.xml
DEFAULT_INCLUDES = ("*/**/" + POM_FILE_NAME,)


def split_excludes(text: Optional[str]) -> List[str]:
    """Splits a comma-delimited exclude list, dropping blank entries."""
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def _build_spec(patterns: Iterable[str]) -> Optional[pathspec.PathSpec]:
    # 빈 패턴은 제거 (pathspec은 빈 줄을 무시하지만 None 구분을 위해)
    patterns = [p for p in patterns if p and p.strip()]
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines('gitwildmatch', patterns)


def scan_descriptors(
    base_dir: Path,
    includes: Sequence[str] = DEFAULT_INCLUDES,
    excludes: Sequence[str] = (),
    descriptor_name: str = POM_FILE_NAME,
) -> List[Path]:
    """
    Finds the descriptor files under base_dir matching the include patterns
    and none of the exclude patterns.

    Patterns are matched against the path relative to base_dir ('/' separated).
    Only files called `descriptor_name` are returned: a gitwildmatch pattern
    naming a directory matches every file below it, but a README next to a
    pom is never a descriptor. Results are absolute paths sorted by path
    segments, i.e. depth-first in lexical order. A missing base_dir yields [].
    """
    base_dir = Path(base_dir)
    if not base_dir.is_dir():
        logger.debug(f"Scan base directory {base_dir} does not exist; nothing to scan.")
        return []

    include_spec = _build_spec(includes)
    if include_spec is None:
        return []
    exclude_spec = _build_spec(excludes)

    matched = set()
    # descriptor 이름으로 먼저 좁힌 뒤 include/exclude 규칙 적용
    for item in base_dir.rglob(descriptor_name):
        if not item.is_file():
            continue
        # 규칙 비교는 base_dir 기준 상대 경로('/' 구분)로
        relative_path = item.relative_to(base_dir)
        relative = relative_path.as_posix()
        if not include_spec.match_file(relative):
            continue
        if exclude_spec is not None and exclude_spec.match_file(relative):
            logger.debug(f"Excluding {relative}")
            continue
        matched.add(relative_path)

    # 경로 구성요소 단위 정렬 -> 깊이 우선, 사전순
    descriptors = [base_dir / relative_path for relative_path in sorted(matched)]
    logger.debug(f"Matched {len(descriptors)} descriptor(s) under {base_dir}")
    return descriptors
