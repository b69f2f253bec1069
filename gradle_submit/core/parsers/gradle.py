"""Parser for ``gradle dependencies`` reports."""

import os
from pathlib import Path
from typing import Optional

from ...utils.logging import get_logger
from ...utils.performance import benchmark
from .base import ModuleDependencySet, ModuleRef
from .grammar import parse_dependency
from .sections import DEFAULT_SECTION, extract_section, normalize_lines, split_report


class GradleReportParser:
    """Turns a dependency report into a deduplicated dependency set."""

    ecosystem = "maven"

    def __init__(self, section: str = DEFAULT_SECTION) -> None:
        """Initialize the report parser.

        Args:
            section: Configuration header whose tree is read
        """
        self.section = section
        self.logger = get_logger("GradleReportParser")

    @benchmark
    def parse_text(self, report: str, module: Optional[ModuleRef] = None) -> ModuleDependencySet:
        """Parse raw report text.

        Args:
            report: Output of ``gradle dependencies``
            module: Module the report belongs to, None for the root project

        Returns:
            Deduplicated dependencies of the configured section
        """
        result = ModuleDependencySet(module=module, section=self.section)

        section = extract_section(split_report(report), self.section)
        if not section:
            self.logger.debug(f"No '{self.section}' section in report for {module or 'root'}")
            return result

        for expression in normalize_lines(section):
            record = parse_dependency(expression)
            if record is None:
                self.logger.debug(f"Skipping unrecognised line: {expression}")
                continue
            result.add_dependency(record)

        return result

    def parse(self, file_path: Path, module: Optional[ModuleRef] = None) -> ModuleDependencySet:
        """Parse a report saved to disk.

        Args:
            file_path: Path to the report file
            module: Module the report belongs to

        Returns:
            Deduplicated dependencies
        """
        self.validate_file(file_path)
        return self.parse_text(file_path.read_text(encoding="utf-8", errors="replace"), module)

    def validate_file(self, file_path: Path) -> None:
        """Validate that the file exists and is readable.

        Raises:
            FileNotFoundError: If file doesn't exist
            PermissionError: If file is not readable
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File is not readable: {file_path}")
