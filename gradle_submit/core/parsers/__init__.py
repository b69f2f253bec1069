"""Parsers for Gradle's textual dependency and project reports."""

from .base import DependencyRecord, ModuleDependencySet, ModuleRef
from .gradle import GradleReportParser
from .grammar import DependencyExpressionParser, parse_dependency
from .projects import discover_modules
from .sections import DEFAULT_SECTION, extract_section, normalize_lines, split_report

__all__ = [
    "DependencyRecord",
    "ModuleDependencySet",
    "ModuleRef",
    "GradleReportParser",
    "DependencyExpressionParser",
    "parse_dependency",
    "discover_modules",
    "DEFAULT_SECTION",
    "extract_section",
    "normalize_lines",
    "split_report",
]
