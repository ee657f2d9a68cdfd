"""Core components of scrutinizer.

This package contains the pipeline infrastructure: analyzer registry,
configuration resolution, command execution and orchestration.
"""

from .command_runner import CommandResult, CommandRunner
from .config_manager import ConfigManager, PipelineConfig, ResolvedConfig
from .errors import (
    AnalyzerFailure,
    CommandError,
    CommandFailure,
    CommandTimeout,
    ConfigurationError,
    ProjectEnvironmentError,
    ScrutinizerError,
)
from .pipeline import PipelineState, Scrutinizer
from .registry import AnalyzerRegistry

__all__ = [
    "AnalyzerFailure",
    "AnalyzerRegistry",
    "CommandError",
    "CommandFailure",
    "CommandResult",
    "CommandRunner",
    "CommandTimeout",
    "ConfigManager",
    "ConfigurationError",
    "PipelineConfig",
    "PipelineState",
    "ProjectEnvironmentError",
    "ResolvedConfig",
    "Scrutinizer",
    "ScrutinizerError",
]
