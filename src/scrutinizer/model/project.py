"""Execution context passed to every analyzer during one pipeline run."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import IGNORED_DIRECTORIES
from .code_element import CodeElement

if TYPE_CHECKING:
    from ..analyzers.protocol import AnalyzerConfig
    from ..core.config_manager import ResolvedConfig

logger = logging.getLogger(__name__)


class Project:
    """
    A project under scrutiny.

    Owns the resolved configuration, the root of the CodeElement tree and
    the name of the analyzer currently running. Analyzers read their own
    options via get_analyzer_config() and write findings below ``root``.
    """

    def __init__(
        self,
        directory: Path,
        config: "ResolvedConfig",
        paths: Iterable[str] | None = None,
    ):
        self.directory = Path(directory)
        self.config = config
        self.paths: list[str] = list(paths or [])
        self.root = CodeElement("project", self.directory.name or str(self.directory))
        self.analyzer_name: str | None = None
        self.command_results: list = []  # CommandResult, before/after commands in run order
        self.analyzer_failures: list = []  # AnalyzerFailure, continue-on-error mode only
        self._selected: list[Path] | None = None

    def is_analyzer_enabled(self, name: str) -> bool:
        return self.config.is_analyzer_enabled(name)

    def set_analyzer_name(self, name: str) -> None:
        self.analyzer_name = name

    def get_analyzer_config(self, name: str | None = None) -> "AnalyzerConfig":
        """
        Get resolved options of an analyzer.

        Args:
            name: Analyzer name; defaults to the analyzer currently running

        Returns:
            Analyzer configuration (Pydantic model instance)
        """
        name = name or self.analyzer_name
        if name is None:
            raise ValueError("No analyzer is running and no analyzer name was given")
        return self.config.get_analyzer_config(name)

    def add_element(self, element: CodeElement) -> CodeElement:
        """
        Attach a top-level element to the project root.

        Returns:
            The element kept in the tree (an existing equal one wins)
        """
        self.root.add_child(element)
        return self.root.get_child(element.type, element.name)

    def iter_files(self, suffixes: Iterable[str] | None = None) -> Iterator[Path]:
        """
        Yield files under analysis, sorted, relative paths narrowed by ``paths``.

        Args:
            suffixes: Only yield files with one of these suffixes (e.g. [".py"])
        """
        wanted = {s.lower() for s in suffixes} if suffixes else None
        roots = self.selected_paths() if self.paths else [self.directory]

        seen: set[Path] = set()
        for root in roots:
            for path in self._walk(root):
                if wanted is not None and path.suffix.lower() not in wanted:
                    continue
                if path in seen:
                    continue
                seen.add(path)
                yield path

    def selected_paths(self) -> list[Path]:
        """
        Resolve ``paths`` against the project directory.

        Paths outside the directory and paths that don't exist are skipped
        with a warning, once per run.
        """
        if self._selected is None:
            self._selected = []
            base = self.directory.resolve()
            for p in self.paths:
                candidate = self.directory / p
                if not candidate.resolve().is_relative_to(base):
                    logger.warning(f"Skipping path outside the project directory: {p}")
                elif not candidate.exists():
                    logger.warning(f"Skipping missing path: {p}")
                else:
                    self._selected.append(candidate)
        return list(self._selected)

    def relative_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.directory).as_posix()
        except ValueError:
            return path.as_posix()

    @staticmethod
    def _walk(root: Path) -> Iterator[Path]:
        if root.is_file():
            yield root
            return
        if not root.is_dir():
            return

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRECTORIES)
            for filename in sorted(filenames):
                yield Path(dirpath) / filename

    def __repr__(self) -> str:
        return f"Project({str(self.directory)!r})"
