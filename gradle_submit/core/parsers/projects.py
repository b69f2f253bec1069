"""Sub-project discovery from ``gradle projects`` output."""

import re
from typing import Iterable, List, Union

from .base import ModuleRef
from .sections import split_report

# +--- Project ':sub1'   or   \--- Project ':sub2' - description
_PROJECT_LINE_RE = re.compile(r"^[+\\-]{2,}\sProject\s'(:[^']*)'")


def discover_modules(report: Union[str, Iterable[str]]) -> List[ModuleRef]:
    """Enumerate the top-level sub-projects listed in a projects report.

    Args:
        report: Raw report text, or its lines

    Returns:
        Module references in the order Gradle printed them
    """
    lines = split_report(report) if isinstance(report, str) else report

    modules = []
    for line in lines:
        match = _PROJECT_LINE_RE.match(line)
        if match:
            modules.append(ModuleRef(match.group(1)))
    return modules
