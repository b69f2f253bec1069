"""Main CLI interface for gradle-submit."""

import asyncio
import json
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..analysis import AnalysisClient, AnalysisConfig
from ..core.driver import RunResult, SubmissionDriver
from ..core.parsers import DEFAULT_SECTION, GradleReportParser, ModuleRef, discover_modules
from ..errors import GradleInvocationError, NoTargetsResolvedError
from ..gradle import GradleInvoker
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.performance import PerformanceMonitor

app = typer.Typer(
    name="gradle-submit",
    help="Submit the resolved dependencies of a Gradle build for analysis",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")

API_URL_ENV_VAR = "GRADLE_SUBMIT_API_URL"
API_TOKEN_ENV_VAR = "GRADLE_SUBMIT_API_TOKEN"

LOCKING_DOCS_URL = "https://docs.gradle.org/current/userguide/dependency_locking.html"


@app.command()
def submit(
    project: Optional[str] = typer.Option(
        None,
        "--project",
        "-p",
        help="Root project name (defaults to the project directory name)"
    ),
    group: Optional[str] = typer.Option(
        None,
        "--group",
        "-g",
        help="Group the projects belong to"
    ),
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-C",
        help="Directory of the Gradle build"
    ),
    section: str = typer.Option(
        DEFAULT_SECTION,
        "--section",
        help="Dependency configuration to read"
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api-url",
        envvar=API_URL_ENV_VAR,
        help="Base URL of the analysis service"
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        envvar=API_TOKEN_ENV_VAR,
        help="API token for the analysis service"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show per-module timings"
    ),
) -> None:
    """Collect dependencies for the root project and every subproject and submit them."""
    setup_logging(verbose=verbose)

    project_dir = project_dir.resolve()
    if not project_dir.is_dir():
        console.print(f"[red]Error: Not a directory: {project_dir}[/red]")
        raise typer.Exit(1)

    if not api_url:
        console.print(f"[red]Error: No analysis service URL, pass --api-url or set {API_URL_ENV_VAR}[/red]")
        raise typer.Exit(1)

    try:
        config = AnalysisConfig(base_url=api_url, token=token)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not project:
        project = project_dir.name
        logger.warning(f"No project name specified, using the root directory: {project}")

    logger.info(f"Parsing dependencies from '{section}' of {project_dir}")
    logger.warning(
        "You should consider locking your dependencies and submitting the lockfile instead. "
        f"See: {LOCKING_DOCS_URL}"
    )

    monitor = PerformanceMonitor(console)
    start_time = time.perf_counter()
    failed = False
    try:
        result = asyncio.run(_run_submission(project_dir, config, project, group, section, monitor))
    except NoTargetsResolvedError as e:
        result = e.result
        failed = True
    run_time = time.perf_counter() - start_time

    ConsoleFormatter(console).format_run_summary(result, run_time)

    if output:
        json_formatter = JSONFormatter(output)
        json_formatter.save_results(json_formatter.format_run_results(result, run_time))

    if performance:
        monitor.print_summary()

    if failed:
        console.print("[red]Error: No dependencies could be submitted for any project[/red]")
        raise typer.Exit(1)


async def _run_submission(
    project_dir: Path,
    config: AnalysisConfig,
    project: str,
    group: Optional[str],
    section: str,
    monitor: PerformanceMonitor,
) -> RunResult:
    async with AnalysisClient(config) as client:
        driver = SubmissionDriver(
            gradle=GradleInvoker(project_dir),
            client=client,
            root_project=project,
            group=group,
            parser=GradleReportParser(section),
            performance_monitor=monitor,
        )
        return await driver.run()


@app.command()
def parse(
    report: Path = typer.Argument(
        ...,
        help="Saved output of `gradle dependencies`"
    ),
    section: str = typer.Option(
        DEFAULT_SECTION,
        "--section",
        help="Dependency configuration to read"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print JSON instead of a table"
    ),
) -> None:
    """Parse a saved dependency report and show the resolved packages."""
    parser = GradleReportParser(section)
    try:
        dependencies = parser.parse(report)
    except (OSError, ValueError) as e:
        ConsoleFormatter(console).format_error(f"Could not read {report}", str(e))
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(JSONFormatter().format_dependencies(dependencies), indent=2))
    else:
        ConsoleFormatter(console).format_dependencies(dependencies, title=f"{report.name} - {section}")


@app.command()
def projects(
    project_dir: Path = typer.Option(
        Path("."),
        "--project-dir",
        "-C",
        help="Directory of the Gradle build"
    ),
) -> None:
    """List the subprojects Gradle reports."""
    setup_logging()
    try:
        modules = asyncio.run(_list_modules(project_dir.resolve()))
    except GradleInvocationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not modules:
        console.print("[yellow]No subprojects found[/yellow]")
        return

    for module in modules:
        console.print(f"  • {module}")


async def _list_modules(project_dir: Path) -> List[ModuleRef]:
    report = await GradleInvoker(project_dir).projects()
    return discover_modules(report)


@app.command()
def info() -> None:
    """Show gradle-submit information."""
    console.print(Panel.fit(
        "[bold blue]gradle-submit[/bold blue]\n"
        "Reads the resolved dependency tree of a Gradle build and its\n"
        "subprojects and submits it to a package analysis service",
        title="Information"
    ))
    console.print(f"\n[bold]Default section:[/bold] {DEFAULT_SECTION}")
    console.print(f"[bold]Ecosystem:[/bold] {GradleReportParser.ecosystem}")
    console.print(f"[bold]Environment:[/bold] {API_URL_ENV_VAR}, {API_TOKEN_ENV_VAR}")


def main() -> None:
    """Main entry point for gradle-submit CLI."""
    app()


if __name__ == "__main__":
    main()
