"""Gradle build tool invocation."""

from .invoker import DEFAULT_STRATEGIES, GradleInvoker, GradleOutput, InvocationStrategy

__all__ = [
    "DEFAULT_STRATEGIES",
    "GradleInvoker",
    "GradleOutput",
    "InvocationStrategy",
]
