"""Timing utilities for gradle-submit."""

import functools
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar
from rich.console import Console
from rich.table import Table

F = TypeVar('F', bound=Callable[..., Any])

BENCHMARK_ENV_VAR = "GRADLE_SUBMIT_VERBOSE_BENCHMARK"


@dataclass
class PerformanceMetrics:
    """Container for a single timed operation."""

    name: str
    execution_time: float


class PerformanceMonitor:
    """Collects wall-clock timings for named operations."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.metrics: List[PerformanceMetrics] = []
        self.console = console or Console()

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager for measuring an operation.

        Args:
            name: Name of the operation being measured

        Yields:
            None
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.metrics.append(
                PerformanceMetrics(name=name, execution_time=time.perf_counter() - start_time)
            )

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics:
            return {}

        total_time = sum(m.execution_time for m in self.metrics)
        slowest = max(self.metrics, key=lambda m: m.execution_time)

        return {
            "total_executions": len(self.metrics),
            "total_time": total_time,
            "average_time": total_time / len(self.metrics),
            "slowest": slowest.name,
            "metrics": self.metrics,
        }

    def print_summary(self) -> None:
        """Print performance summary to console."""
        summary = self.get_summary()
        if not summary:
            return

        table = Table(title="Performance Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Time", style="green")

        for metric in summary["metrics"]:
            table.add_row(metric.name, f"{metric.execution_time:.4f}s")

        table.add_row("[bold]Total[/bold]", f"{summary['total_time']:.4f}s")
        self.console.print(table)


def benchmark(func: F) -> F:
    """Simple benchmark decorator.

    Timings are only logged when the ``GRADLE_SUBMIT_VERBOSE_BENCHMARK``
    environment variable is set.
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        end_time = time.perf_counter()

        if os.environ.get(BENCHMARK_ENV_VAR):
            logger = logging.getLogger("Performance")
            logger.info(f"{func.__name__} took {end_time - start_time:.4f} seconds")
        return result
    return wrapper  # type: ignore[return-value]
