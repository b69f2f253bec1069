"""Core report parsing and submission logic for gradle-submit."""

from .driver import RunResult, SubmissionDriver, SubmissionOutcome
from .parsers import DependencyRecord, GradleReportParser, ModuleDependencySet, ModuleRef

__all__ = [
    "SubmissionDriver",
    "SubmissionOutcome",
    "RunResult",
    "GradleReportParser",
    "DependencyRecord",
    "ModuleDependencySet",
    "ModuleRef",
]
