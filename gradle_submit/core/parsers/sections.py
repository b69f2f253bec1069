"""Section extraction and line normalization for ``gradle dependencies`` output."""

import re
from typing import Iterable, List, Sequence

# testRuntimeClasspath is the widest configuration: runtime plus test deps
DEFAULT_SECTION = "testRuntimeClasspath"

# Lines naming another module of the same build, not an external package
SIBLING_PROJECT_MARKER = "+--- project :"

DEPENDENCY_LINE_GLYPHS = ("+", "|")

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_TREE_PREFIX_RE = re.compile(r"^[+\-\\|\s]*")


def split_report(report: str) -> List[str]:
    """Split raw report text into lines, accepting ``\\n`` and ``\\r\\n``."""
    return _LINE_SPLIT_RE.split(report)


def extract_section(lines: Sequence[str], marker: str = DEFAULT_SECTION) -> List[str]:
    """Isolate one configuration block of a dependency report.

    The block starts at the first line beginning with ``marker`` and runs up
    to and including the next blank line.

    Args:
        lines: Report lines
        marker: Header the section starts with

    Returns:
        The section lines, or an empty list when the marker is missing or the
        section is never terminated by a blank line
    """
    start = next((i for i, line in enumerate(lines) if line.startswith(marker)), None)
    if start is None:
        return []

    for end in range(start, len(lines)):
        if not lines[end].strip():
            return list(lines[start:end + 1])

    # Truncated report
    return []


def normalize_lines(section: Iterable[str]) -> List[str]:
    """Reduce section lines to bare dependency expressions.

    ``|    \\--- xmlenc:xmlenc:{strictly 0.52} -> 0.52 (c)`` becomes
    ``xmlenc:xmlenc:{strictly 0.52} -> 0.52 (c)``. Headers, terminators and
    sibling project references are dropped.

    Args:
        section: Lines returned by :func:`extract_section`

    Returns:
        Dependency expressions in report order
    """
    expressions = []
    for line in section:
        if not line:
            continue
        if line[0] not in DEPENDENCY_LINE_GLYPHS:
            continue
        if SIBLING_PROJECT_MARKER in line:
            continue

        expression = _TREE_PREFIX_RE.sub("", line, count=1)
        if expression:
            expressions.append(expression)
    return expressions
