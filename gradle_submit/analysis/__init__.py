"""Client for the package analysis service."""

from .client import AnalysisClient, AnalysisConfig, ProjectCreation, ProjectStatus

__all__ = [
    "AnalysisClient",
    "AnalysisConfig",
    "ProjectCreation",
    "ProjectStatus",
]
