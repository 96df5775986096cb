# src/eclipse_aggregator/config.py
import logging
import yaml
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import List, Optional, Set

from .errors import ConfigError
from .scanner import DEFAULT_INCLUDES, split_excludes

logger = logging.getLogger(__name__)

# --config가 없을 때 프로젝트 디렉토리에서 찾는 옵션 파일
DEFAULT_OPTIONS_FILE = ".eagr.yaml"


class GeneratorOptions(BaseModel):
    """Invocation-level settings for one generate() run (YAML file or CLI flags)."""
    model_config = ConfigDict(extra='forbid')

    includes: List[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDES))
    exclude_poms: Optional[str] = None              # 쉼표로 구분된 glob 목록
    classpath_excludes: Set[str] = Field(default_factory=set)
    repository_variable_name: str = "M2_REPO"
    classpath_artifact_types: List[str] = Field(default_factory=lambda: ["jar"])
    resolve_transitive_dependencies: bool = True
    generate_projects_for_modules: bool = False
    include_resources_directory: bool = True
    project_name: Optional[str] = None
    classpath_merge: Optional[str] = None

    @field_validator('includes')
    @classmethod
    def _includes_not_empty(cls, value: List[str]) -> List[str]:
        value = [pattern.strip() for pattern in value if pattern and pattern.strip()]
        if not value:
            raise ValueError("at least one include pattern is required")
        return value

    @field_validator('classpath_artifact_types')
    @classmethod
    def _dedupe_types(cls, value: List[str]) -> List[str]:
        # 순서 유지 + 중복 제거
        return list(dict.fromkeys(value))

    @property
    def exclude_patterns(self) -> List[str]:
        return split_excludes(self.exclude_poms)


def load_options(path: Optional[Path]) -> GeneratorOptions:
    """
    Reads GeneratorOptions from a YAML mapping.
    A missing or empty file gives the defaults.
    """
    if path is None or not Path(path).is_file():
        return GeneratorOptions()

    path = Path(path)
    # --- 1. YAML 읽기 ---
    try:
        with open(path, 'rt', encoding='utf-8') as f:
            data = yaml.safe_load(f.read())
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML ({e})", path) from e

    # --- 2. 구조 확인 (빈 파일은 기본값) ---
    if data is None:
        logger.debug(f"Options file {path} is empty; using defaults.")
        return GeneratorOptions()
    if not isinstance(data, dict):
        raise ConfigError("expected a mapping at the top level", path)

    # --- 3. pydantic 검증 ---
    try:
        options = GeneratorOptions(**data)
    except ValidationError as e:
        raise ConfigError(str(e), path) from e
    logger.debug(f"Loaded options from {path}")
    return options
