"""Built-in analyzers.

The pipeline doesn't register anything on its own; standard_analyzers()
returns fresh instances of the built-in set in their execution order.
"""

from .custom_analyzer import CustomAnalyzer
from .flake8_analyzer import Flake8Analyzer
from .loc_analyzer import LocAnalyzer
from .protocol import AnalyzerConfig, AnalyzerPlugin, LoggerAware


def standard_analyzers() -> list[AnalyzerPlugin]:
    """Return the standard analyzer set, in execution order."""
    return [
        Flake8Analyzer(),
        LocAnalyzer(),
        CustomAnalyzer(),
    ]


__all__ = [
    "AnalyzerConfig",
    "AnalyzerPlugin",
    "CustomAnalyzer",
    "Flake8Analyzer",
    "LocAnalyzer",
    "LoggerAware",
    "standard_analyzers",
]
