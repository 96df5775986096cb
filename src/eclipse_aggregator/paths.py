# src/eclipse_aggregator/paths.py
import posixpath
import re
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

# 연속된 구분자('//', '///' ...)를 하나로 합치기 위한 패턴
_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_path(path: Optional[PathLike]) -> Optional[str]:
    """
    경로 문자열을 비교 가능한 형태로 정규화합니다.
    Backslashes become forward slashes, repeated separators collapse,
    '.'/'..' segments are resolved lexically and any trailing '/' is dropped
    ('/' itself stays '/'), so '/proj/src/' and '/proj/src' compare equal.
    """
    if path is None:
        return None
    # 앞뒤 공백 제거 + 윈도우 구분자 통일
    text = str(path).strip().replace("\\", "/")
    if not text:
        return ""

    text = _REPEATED_SLASHES.sub("/", text)
    # normpath는 파일시스템을 건드리지 않음 (순수 문자열 처리)
    # 끝의 '/'도 여기서 제거됨 ('/' 단독은 그대로 유지)
    return posixpath.normpath(text)


def with_trailing_separator(path: PathLike) -> str:
    """Normalizes `path` and guarantees exactly one trailing '/' (for prefix checks)."""
    normalized = normalize_path(path) or ""
    return normalized if normalized.endswith("/") else normalized + "/"
