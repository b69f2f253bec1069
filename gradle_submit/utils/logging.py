"""Logging utilities for gradle-submit."""

import logging
import sys
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


class SubmitLogger:
    """Component logger rendered through rich."""

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            # Messages carry raw report lines and paths
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str) -> None:
        """Log info message."""
        self.logger.info(msg)

    def warning(self, msg: str) -> None:
        """Log warning message."""
        self.logger.warning(msg)

    def error(self, msg: str) -> None:
        """Log error message."""
        self.logger.error(msg)

    def debug(self, msg: str) -> None:
        """Log debug message."""
        self.logger.debug(msg)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for gradle-submit.

    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable verbose logging
    """
    if verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            *([logging.FileHandler(log_file)] if log_file else [])
        ]
    )

    # Component loggers do not propagate, so they need the level too
    for name in _COMPONENT_LOGGERS:
        logging.getLogger(name).setLevel(level)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


_COMPONENT_LOGGERS = (
    "CLI",
    "SubmissionDriver",
    "GradleInvoker",
    "GradleReportParser",
    "AnalysisClient",
    "JSONFormatter",
    "Performance",
)


def get_logger(name: str) -> SubmitLogger:
    """Get a gradle-submit logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    level = logging.getLogger(name).level or logging.INFO
    return SubmitLogger(name, level)
