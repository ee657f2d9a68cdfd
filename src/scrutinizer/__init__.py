"""Quality-gate orchestrator: runs code analyzers over a project directory."""

from .core.errors import (
    AnalyzerFailure,
    CommandFailure,
    CommandTimeout,
    ConfigurationError,
    ProjectEnvironmentError,
    ScrutinizerError,
)
from .core.pipeline import Scrutinizer
from .model import CodeElement, Project

__all__ = [
    "AnalyzerFailure",
    "CodeElement",
    "CommandFailure",
    "CommandTimeout",
    "ConfigurationError",
    "Project",
    "ProjectEnvironmentError",
    "Scrutinizer",
    "ScrutinizerError",
]
