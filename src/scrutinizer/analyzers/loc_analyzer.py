"""Lines-of-code analyzer.

Counts total, code, comment and blank lines per file and in aggregate.
Comment detection is line based: a line whose first non-blank characters
start a comment for the file's language.
"""

import logging
from pathlib import Path

from pydantic import Field

from ..constants import DEFAULT_LOC_EXTENSIONS
from ..model.code_element import CodeElement
from ..model.project import Project
from .protocol import AnalyzerConfig

logger = logging.getLogger(__name__)

# Suffix -> line comment prefixes
COMMENT_PREFIXES: dict[str, tuple[str, ...]] = {
    ".py": ("#",),
    ".pyi": ("#",),
    ".sh": ("#",),
    ".yml": ("#",),
    ".yaml": ("#",),
    ".toml": ("#",),
    ".js": ("//",),
    ".ts": ("//",),
    ".php": ("//", "#"),
    ".sql": ("--",),
}


# ============================================================================
# Configuration
# ============================================================================


class LocConfig(AnalyzerConfig):
    """Lines-of-code analyzer configuration."""

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LOC_EXTENSIONS),
        description="File suffixes to count",
    )


# ============================================================================
# Analyzer Implementation
# ============================================================================


class LocAnalyzer:
    """
    Adds a ``loc`` element with project totals and one ``file`` child per
    counted file.
    """

    name = "loc"
    description = "Count total, code, comment and blank lines"
    config_class = LocConfig

    def scrutinize(self, project: Project) -> None:
        config: LocConfig = project.get_analyzer_config(self.name)

        summary = CodeElement("loc", "summary")
        totals = {"files": 0, "lines": 0, "code_lines": 0, "comment_lines": 0, "blank_lines": 0}

        for path in project.iter_files(config.extensions):
            counts = self.count_lines(path)
            if counts is None:
                continue

            relative = project.relative_path(path)
            file_element = CodeElement("file", relative, counts)
            file_element.set_location(relative)
            summary.add_child(file_element)

            totals["files"] += 1
            for key, value in counts.items():
                totals[key] += value

        for key, value in totals.items():
            summary.set_metric(key, value)

        project.add_element(summary)
        logger.debug(f"Counted {totals['lines']} lines in {totals['files']} file(s)")

    @staticmethod
    def count_lines(path: Path) -> dict[str, int] | None:
        """
        Count lines of a single file.

        Returns:
            Line counts, or None if the file can't be read as text
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable file {path}: {e}")
            return None

        prefixes = COMMENT_PREFIXES.get(path.suffix.lower(), ())
        counts = {"lines": 0, "code_lines": 0, "comment_lines": 0, "blank_lines": 0}
        for line in text.splitlines():
            counts["lines"] += 1
            stripped = line.strip()
            if not stripped:
                counts["blank_lines"] += 1
            elif prefixes and stripped.startswith(prefixes):
                counts["comment_lines"] += 1
            else:
                counts["code_lines"] += 1
        return counts
