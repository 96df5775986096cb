# src/eclipse_aggregator/errors.py
from pathlib import Path
from typing import Optional


# --- 패키지 공통 예외 ---

class AggregatorError(Exception):
    """Base class for every error raised by eclipse_aggregator."""


class DescriptorParseError(AggregatorError):
    """The descriptor loader could not parse a pom.xml (structural failure)."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class ProjectLoadError(AggregatorError):
    """A matched descriptor failed structurally; aborts the whole aggregation."""

    def __init__(self, path: Path):
        super().__init__(f"Error loading {path}")
        self.path = path


class ConfigError(AggregatorError):
    """The options file is unreadable or does not validate."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


# --- generate() 호출자에게 전달되는 단일 실패 ---

class AggregationError(AggregatorError):
    """
    Single failure kind reported to callers of generate().
    The underlying error is always attached as __cause__.
    """

    def __init__(self, message: str = "Error creating eclipse configuration"):
        super().__init__(message)
