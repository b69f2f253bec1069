"""Exceptions raised by gradle-submit."""

from typing import Any, Optional


class GradleSubmitError(Exception):
    """Base class for all gradle-submit errors."""


class GradleInvocationError(GradleSubmitError):
    """A Gradle invocation did not produce a usable report."""

    def __init__(self, message: str, args: Optional[list] = None) -> None:
        super().__init__(message)
        self.gradle_args = list(args or [])


class GradleNotFoundError(GradleInvocationError):
    """None of the invocation strategies could start Gradle."""


class BuildFailedError(GradleInvocationError):
    """Gradle ran but reported ``BUILD FAILED``."""


class AnalysisAPIError(GradleSubmitError):
    """The analysis service rejected a request or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class NoTargetsResolvedError(GradleSubmitError):
    """Every target of a run failed."""

    def __init__(self, result: Any) -> None:
        super().__init__(f"All {len(result.outcomes)} targets failed")
        self.result = result
