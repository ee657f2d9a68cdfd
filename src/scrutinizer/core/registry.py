"""Ordered analyzer registry.

Registration order is execution order: there is no priority system and no
reordering. Duplicate names are allowed; each registration is a separate
entry that runs on its own.
"""

import logging
from collections.abc import Iterable

from ..analyzers.protocol import AnalyzerPlugin, LoggerAware

logger = logging.getLogger(__name__)


class AnalyzerRegistry:
    """
    Ordered collection of analyzer instances.

    Example:
        registry = AnalyzerRegistry(logger=my_logger)
        registry.register(LocAnalyzer())
        registry.register(Flake8Analyzer())

        for analyzer in registry.get_all():
            ...
    """

    def __init__(
        self,
        analyzers: Iterable[AnalyzerPlugin] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the registry.

        Args:
            analyzers: Analyzers to register, in execution order
            logger: Logger injected into analyzers that accept one
        """
        self._analyzers: list[AnalyzerPlugin] = []
        self._logger = logger or logging.getLogger("scrutinizer")

        for analyzer in analyzers or ():
            self.register(analyzer)

    def register(self, analyzer: AnalyzerPlugin) -> AnalyzerPlugin:
        """
        Append an analyzer to the registry.

        Args:
            analyzer: Analyzer instance

        Returns:
            The registered analyzer

        Raises:
            TypeError: If the analyzer doesn't satisfy the AnalyzerPlugin contract
        """
        for attr in ("name", "config_class"):
            if not hasattr(analyzer, attr):
                raise TypeError(
                    f"Analyzer {type(analyzer).__name__} missing required attribute: {attr}"
                )
        if not callable(getattr(analyzer, "scrutinize", None)):
            raise TypeError(f"Analyzer {type(analyzer).__name__} has no scrutinize() method")

        if isinstance(analyzer, LoggerAware):
            analyzer.set_logger(self._logger)

        self._analyzers.append(analyzer)
        logger.debug(f"Registered analyzer: {analyzer.name}")

        return analyzer

    def get(self, name: str) -> AnalyzerPlugin | None:
        """
        Get the last registered analyzer with the given name.

        Args:
            name: Analyzer name

        Returns:
            Analyzer if found, None otherwise
        """
        for analyzer in reversed(self._analyzers):
            if analyzer.name == name:
                return analyzer
        return None

    def get_all(self) -> tuple[AnalyzerPlugin, ...]:
        """Return all analyzers in registration order."""
        return tuple(self._analyzers)

    def get_all_names(self) -> list[str]:
        """Return analyzer names in registration order (duplicates included)."""
        return [analyzer.name for analyzer in self._analyzers]

    def __len__(self) -> int:
        return len(self._analyzers)

    def __iter__(self):
        return iter(tuple(self._analyzers))
