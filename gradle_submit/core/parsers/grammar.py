"""Recursive-descent parser for Gradle dependency expressions.

Accepted language::

    expr         := group ":" artifact ":" version-expr trailer? ws?
    version-expr := "{"? ("strictly" ws?)? version "}"? (ws? "->" ws? version)?
    trailer      := ws? "(" ("*" | "c") ")"

``group``, ``artifact`` and ``version`` are non-empty runs of word
characters, dots and hyphens; a hyphen that starts an arrow ends the run.
Examples::

    commons-logging:commons-logging:1.0.3 -> 1.1.1
    org.apache.hadoop:hadoop-core:1.0.2 (*)
    xmlenc:xmlenc:{strictly 0.52} -> 0.52 (c)
"""

from typing import Optional, Tuple

from .base import DependencyRecord

STRICTLY_KEYWORD = "strictly"
ARROW = "->"
TRAILER_MARKERS = ("*", "c")


class _NoMatch(Exception):
    """Raised internally when the input leaves the grammar."""


def _is_coordinate_char(char: str) -> bool:
    return char.isalnum() or char in "_.-"


class DependencyExpressionParser:
    """Parses a single normalized dependency expression.

    Each grammar rule is a method; a rule either consumes input and returns
    its value or raises ``_NoMatch``. Optional rules restore the cursor
    before giving up.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Optional[DependencyRecord]:
        """Parse the whole expression.

        Returns:
            The record, or None if the text is not in the grammar
        """
        self.pos = 0
        try:
            return self._expression()
        except _NoMatch:
            return None

    # expr
    def _expression(self) -> DependencyRecord:
        group = self._coordinate()
        self._expect(":")
        artifact = self._coordinate()
        self._expect(":")
        declared, replacement = self._version_expression()
        self._trailer()
        self._skip_ws()
        if self.pos != len(self.text):
            raise _NoMatch
        return DependencyRecord(
            group_id=group,
            artifact_id=artifact,
            declared_version=declared,
            resolved_version=replacement or declared,
        )

    # version-expr
    def _version_expression(self) -> Tuple[str, Optional[str]]:
        braced = self._accept("{")
        self._strictly(braced)
        declared = self._coordinate()
        if braced:
            self._accept("}")
        return declared, self._replacement()

    def _strictly(self, braced: bool) -> None:
        mark = self.pos
        if not self._accept(STRICTLY_KEYWORD):
            return
        keyword_end = self.pos
        self._skip_ws()
        at_version = self.pos < len(self.text) and _is_coordinate_char(self.text[self.pos])
        # "strictly" on its own is a version; outside braces so is "strictly-1.0"
        if not at_version or (not braced and self.pos == keyword_end):
            self.pos = mark

    def _replacement(self) -> Optional[str]:
        mark = self.pos
        self._skip_ws()
        if not self._accept(ARROW):
            self.pos = mark
            return None
        self._skip_ws()
        return self._coordinate()

    # trailer
    def _trailer(self) -> None:
        mark = self.pos
        self._skip_ws()
        if not self._accept("("):
            self.pos = mark
            return
        if not any(self._accept(marker) for marker in TRAILER_MARKERS):
            raise _NoMatch
        self._expect(")")

    # terminals
    def _coordinate(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and _is_coordinate_char(self.text[self.pos]):
            if self.text.startswith(ARROW, self.pos):
                break
            self.pos += 1
        if self.pos == start:
            raise _NoMatch
        return self.text[start:self.pos]

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _accept(self, literal: str) -> bool:
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def _expect(self, literal: str) -> None:
        if not self._accept(literal):
            raise _NoMatch


def parse_dependency(expression: str) -> Optional[DependencyRecord]:
    """Parse one normalized dependency expression.

    Args:
        expression: Report line with its tree prefix already stripped

    Returns:
        The record, or None when the line is not a recognised dependency
    """
    return DependencyExpressionParser(expression).parse()
