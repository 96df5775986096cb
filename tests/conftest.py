"""
Shared pytest fixtures for eclipse_aggregator tests.

- write_pom: writes a minimal namespaced pom.xml into a directory
- make_project: builds a ProjectModel without touching the filesystem
"""

from pathlib import Path
from typing import Callable, Optional

import pytest

from eclipse_aggregator.models import Build, ProjectModel

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.example</groupId>
  <artifactId>{artifact_id}</artifactId>
  <version>1.0</version>
  <packaging>{packaging}</packaging>
{body}
</project>
"""

MULTI_SOURCE_PLUGIN = """
  <build>
    <pluginManagement>
      <plugins>
        <plugin>
          <groupId>org.andromda.maven.plugins</groupId>
          <artifactId>andromda-multi-source-plugin</artifactId>
          <configuration>
            <sourceDirectories>
{directories}
            </sourceDirectories>
          </configuration>
        </plugin>
      </plugins>
    </pluginManagement>
  </build>
"""


def multi_source_body(*directories: str) -> str:
    return MULTI_SOURCE_PLUGIN.format(
        directories="\n".join(f"              <directory>{d}</directory>" for d in directories)
    )


@pytest.fixture
def write_pom() -> Callable[..., Path]:
    def _write(directory: Path, artifact_id: str, body: str = "", packaging: str = "jar") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        pom = directory / "pom.xml"
        pom.write_text(
            POM_TEMPLATE.format(artifact_id=artifact_id, packaging=packaging, body=body),
            encoding="utf-8",
        )
        return pom
    return _write


@pytest.fixture
def make_project() -> Callable[..., ProjectModel]:
    def _make(
        basedir: str = "/proj/mod1",
        artifact_id: str = "mod1",
        roots: Optional[list] = None,
        build: Optional[Build] = None,
        execution_root: bool = False,
    ) -> ProjectModel:
        base = Path(basedir)
        return ProjectModel(
            group_id="org.example",
            artifact_id=artifact_id,
            version="1.0",
            file=base / "pom.xml",
            basedir=base,
            build=build,
            compile_source_roots=list(roots or []),
            execution_root=execution_root,
        )
    return _make
