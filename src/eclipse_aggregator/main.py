# src/eclipse_aggregator/main.py
import typer
from pathlib import Path
from typing_extensions import Annotated
from typing import List, Optional

from .config import DEFAULT_OPTIONS_FILE, GeneratorOptions, load_options
from .errors import AggregationError, ConfigError, DescriptorParseError
from .logging_config import setup_logging
from .orchestrator import generate
from .pom import POM_FILE_NAME, load_project
from .scanner import scan_descriptors, split_excludes
from .writers import SummaryClasspathWriter, SummaryProjectWriter

try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("eclipse-aggregator")
except PackageNotFoundError:
    # 패키지가 설치되지 않은 상태 (소스 체크아웃에서 실행)
    __version__ = "0.1.0"


# --- Typer 앱 생성 및 기본 설정 ---
app = typer.Typer(
    name="eagr",
    help="Aggregates the modules of a Maven project and resolves their compile source roots for Eclipse.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool):
    if value:
        typer.echo(f"eagr version: {__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    version: Annotated[Optional[bool], typer.Option(
        "--version", "-v",
        help="Show the application's version and exit.",
        callback=version_callback,
        is_eager=True,
    )] = None,
    verbose: Annotated[bool, typer.Option(
        "--verbose",
        help="Log debug output.",
    )] = False,
):
    """
    eagr: resolve multi-module compile source roots for IDE configuration.
    """
    setup_logging(verbose=verbose)


ProjectDir = Annotated[Path, typer.Argument(
    help="Directory holding the root pom.xml.",
    exists=True,
    file_okay=False,
    dir_okay=True,
    readable=True,
    resolve_path=True,
)]

IncludeOption = Annotated[Optional[List[str]], typer.Option(
    "--include", "-i",
    help="Glob of poms to aggregate (repeatable). Defaults to '*/**/pom.xml'.",
)]

ExcludeOption = Annotated[Optional[str], typer.Option(
    "--exclude", "-e",
    help="Comma-separated globs of poms to skip.",
)]


def _merge_options(
    base: GeneratorOptions,
    includes: Optional[List[str]] = None,
    exclude: Optional[str] = None,
    **overrides,
) -> GeneratorOptions:
    """Applies the CLI flags that were actually given on top of the options file."""
    update = {key: value for key, value in overrides.items() if value is not None}
    if includes:
        update["includes"] = includes
    if exclude is not None:
        update["exclude_poms"] = exclude
    # CLI 값도 파일 값과 같은 검증을 거치도록 다시 생성
    return GeneratorOptions(**{**base.model_dump(), **update})


# --- 'run' 하위 명령어 ---
@app.command()
def run(
    project_dir: ProjectDir = Path.cwd(),
    includes: IncludeOption = None,
    exclude: ExcludeOption = None,
    modules: Annotated[Optional[bool], typer.Option(
        "--modules/--no-modules",
        help="Also generate when PROJECT_DIR is not the execution root.",
    )] = None,
    transitive: Annotated[Optional[bool], typer.Option(
        "--transitive/--no-transitive",
        help="Resolve transitive dependencies into the classpath.",
    )] = None,
    resources: Annotated[Optional[bool], typer.Option(
        "--resources/--no-resources",
        help="Add resource directories to the classpath.",
    )] = None,
    name: Annotated[Optional[str], typer.Option(
        "--name", "-n",
        help="Eclipse project name. Defaults to the root artifactId.",
    )] = None,
    merge: Annotated[Optional[str], typer.Option(
        "--merge",
        help="File whose entries are merged into the generated classpath.",
    )] = None,
    artifact_types: Annotated[Optional[List[str]], typer.Option(
        "--artifact-type", "-t",
        help="Artifact type to put on the classpath (repeatable). Defaults to 'jar'.",
    )] = None,
    config: Annotated[Optional[Path], typer.Option(
        "--config", "-c",
        help=f"YAML options file. Defaults to {DEFAULT_OPTIONS_FILE} in PROJECT_DIR.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    )] = None,
    execution_root: Annotated[Optional[Path], typer.Option(
        "--execution-root",
        help="Directory the build was started from. Defaults to PROJECT_DIR.",
        file_okay=False,
        resolve_path=True,
    )] = None,
):
    """
    Aggregates every module pom under PROJECT_DIR, augments their compile
    source roots and prints what the Eclipse writers receive.
    """
    # --- 1. 옵션 병합 (파일 -> CLI 플래그 순) 및 루트 pom 로드 ---
    pom_path = project_dir / POM_FILE_NAME
    typer.echo(f"Root descriptor: {pom_path}")

    try:
        options = _merge_options(
            load_options(config or project_dir / DEFAULT_OPTIONS_FILE),
            includes=includes,
            exclude=exclude,
            generate_projects_for_modules=modules,
            resolve_transitive_dependencies=transitive,
            include_resources_directory=resources,
            project_name=name,
            classpath_merge=merge,
            classpath_artifact_types=artifact_types or None,
        )
        project = load_project(pom_path, execution_root=execution_root or project_dir)
    except (ConfigError, ValueError) as e:
        # CLI 플래그의 pydantic 검증 실패는 ValueError로 들어옴
        typer.secho(f"Error: Invalid options: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except DescriptorParseError as e:
        typer.secho(f"Error: Could not parse root descriptor: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if project is None:
        typer.secho(f"Error: No Maven project found at {pom_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    # --- 2. 취합 실행 ---
    try:
        result = generate(project, options, SummaryProjectWriter(), SummaryClasspathWriter())
    except AggregationError as e:
        typer.secho(f"{e}: {e.__cause__}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=3)

    # --- 3. 결과 출력 ---
    if result.skipped:
        typer.secho("Skipped: not the execution root (use --modules to force).", fg=typer.colors.YELLOW, err=True)
        return
    typer.secho(f"Resolved {len(result.projects)} project(s).", fg=typer.colors.GREEN)


# --- 'scan' 하위 명령어 ---
@app.command()
def scan(
    project_dir: ProjectDir = Path.cwd(),
    includes: IncludeOption = None,
    exclude: ExcludeOption = None,
):
    """
    Lists the module poms that 'run' would aggregate.
    """
    options = GeneratorOptions()
    descriptors = scan_descriptors(
        project_dir,
        includes or options.includes,
        split_excludes(exclude),
    )
    if not descriptors:
        typer.secho("Warning: No module descriptors matched.", fg=typer.colors.YELLOW, err=True)
        return
    for descriptor in descriptors:
        typer.echo(descriptor.relative_to(project_dir).as_posix())


if __name__ == "__main__":
    app()
