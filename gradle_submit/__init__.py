"""gradle-submit - submit the resolved dependencies of a Gradle build for analysis."""

__version__ = "0.1.0"

from .analysis import AnalysisClient, AnalysisConfig
from .core.driver import RunResult, SubmissionDriver, SubmissionOutcome
from .core.parsers import GradleReportParser
from .gradle import GradleInvoker
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "AnalysisClient",
    "AnalysisConfig",
    "SubmissionDriver",
    "SubmissionOutcome",
    "RunResult",
    "GradleReportParser",
    "GradleInvoker",
    "ConsoleFormatter",
    "JSONFormatter",
]
