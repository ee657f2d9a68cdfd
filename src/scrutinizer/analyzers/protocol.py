"""Protocol definitions for pluggable analyzers.

This module defines the contract every analyzer satisfies. An analyzer
declares its name, its configuration schema (a Pydantic model) and a
scrutinize() entry point that writes findings into the project's
CodeElement tree.
"""

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from ..model.project import Project


class AnalyzerConfig(BaseModel):
    """
    Base configuration for all analyzers.

    Each analyzer extends this with its own fields using Pydantic. Unknown
    options are rejected so that typos in .scrutinizer.yml fail loudly.
    Analyzers that should be opt-in override the default of ``enabled``.

    Example:
        class LocConfig(AnalyzerConfig):
            extensions: list[str] = Field(default_factory=lambda: [".py"])
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = True


@runtime_checkable
class AnalyzerPlugin(Protocol):
    """
    Protocol that all analyzers must implement.

    The registry checks these attributes at registration time.

    Example:
        class LocAnalyzer:
            name = "loc"
            description = "Count lines of code"
            config_class = LocConfig

            def scrutinize(self, project: Project) -> None:
                ...
    """

    name: str  # Unique key, also the config section name: "loc", "flake8"
    description: str
    config_class: type[AnalyzerConfig]

    @abstractmethod
    def scrutinize(self, project: "Project") -> None:
        """
        Analyze the project and record findings in its CodeElement tree.

        Args:
            project: Execution context (directory, configuration, result tree)
        """
        ...


@runtime_checkable
class LoggerAware(Protocol):
    """Optional capability: analyzers that accept the pipeline's logger."""

    def set_logger(self, logger: logging.Logger) -> None: ...


def default_configuration(analyzer: AnalyzerPlugin) -> AnalyzerConfig:
    """Return the analyzer's options at their declared defaults."""
    return analyzer.config_class()
