"""Output formatters for gradle-submit results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.driver import RunResult, SubmissionOutcome
from ..core.parsers import DependencyRecord
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for gradle-submit output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def format_run_summary(self, result: RunResult, run_time: Optional[float] = None) -> None:
        """Display the per-module outcome table and a summary panel.

        Args:
            result: Driver result
            run_time: Optional wall time of the run in seconds
        """
        self.console.print(self._create_outcomes_table(result))
        self.console.print(self._create_summary_panel(result, run_time))

    def _create_outcomes_table(self, result: RunResult) -> Table:
        table = Table(title=f"Submission results for {result.root_project}")

        table.add_column("Project", style="cyan", no_wrap=True)
        table.add_column("Module", style="blue")
        table.add_column("Status")
        table.add_column("Packages", justify="right", style="green")
        table.add_column("Detail", style="white")

        for outcome in result.outcomes:
            table.add_row(
                outcome.project,
                outcome.target,
                self._status_text(outcome),
                str(outcome.dependency_count),
                outcome.detail,
            )
        return table

    def _create_summary_panel(self, result: RunResult, run_time: Optional[float]) -> Panel:
        if result.failed:
            style = "yellow" if result.succeeded else "red"
            title = f"{len(result.failed)} of {len(result.outcomes)} targets failed"
        else:
            style = "green"
            title = "All targets processed"

        lines = [
            f"• Subprojects found: {len(result.modules)}",
            f"• Targets succeeded: {len(result.succeeded)}",
            f"• Targets failed: {len(result.failed)}",
            f"• Packages submitted: {result.total_dependencies}",
        ]
        if run_time is not None:
            lines.append(f"• Run time: {run_time:.2f}s")

        return Panel("\n".join(lines), title=title, style=style)

    @staticmethod
    def _status_text(outcome: SubmissionOutcome) -> Text:
        if outcome.success:
            return Text("ok", style="green")
        return Text("failed", style="red bold")

    def format_dependencies(self, records: Iterable[DependencyRecord], title: str = "Dependencies") -> None:
        """Display parsed dependency records, sorted by coordinate."""
        records = sorted(records, key=lambda record: record.key)

        table = Table(title=f"{title} ({len(records)})")
        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="green")
        table.add_column("Declared", style="dim")

        for record in records:
            table.add_row(
                record.name,
                record.resolved_version,
                record.declared_version if record.was_replaced else "",
            )
        self.console.print(table)

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        content = f"[bold red]Error:[/bold red] {error}"
        if details:
            content += f"\n\n[dim]{details}[/dim]"

        self.console.print(Panel(content, style="red"))


class JSONFormatter:
    """JSON formatter for gradle-submit output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_run_results(
        self,
        result: RunResult,
        run_time: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Format a run as JSON-serializable data.

        Args:
            result: Driver result
            run_time: Optional run time in seconds

        Returns:
            Formatted JSON data
        """
        data: Dict[str, Any] = {
            "run_summary": {
                "root_project": result.root_project,
                "modules": [str(module) for module in result.modules],
                "succeeded": len(result.succeeded),
                "failed": len(result.failed),
                "total_dependencies": result.total_dependencies,
                "run_time_seconds": run_time,
                "timestamp": datetime.now().isoformat(),
            },
            "outcomes": [
                {
                    "project": outcome.project,
                    "module": outcome.module.path if outcome.module else None,
                    "success": outcome.success,
                    "detail": outcome.detail,
                    "dependency_count": outcome.dependency_count,
                    "job_id": outcome.job_id,
                }
                for outcome in result.outcomes
            ],
        }
        return data

    def format_dependencies(self, records: Iterable[DependencyRecord]) -> Dict[str, Any]:
        return {
            "dependencies": [
                {
                    "name": record.name,
                    "version": record.resolved_version,
                    "declared_version": record.declared_version,
                }
                for record in sorted(records, key=lambda record: record.key)
            ]
        }

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(results, f, indent=2, ensure_ascii=False)

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
