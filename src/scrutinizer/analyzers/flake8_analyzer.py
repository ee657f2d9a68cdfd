"""Flake8 analyzer.

Runs flake8 over the project (or the selected paths) and records each
reported violation below the file it was found in. Disabled by default
because flake8 has to be installed in the project's environment.
"""

import logging
import re
import shlex

from pydantic import Field

from ..constants import DEFAULT_FLAKE8_MAX_LINE_LENGTH, DEFAULT_FLAKE8_TIMEOUT
from ..core.command_runner import CommandRunner
from ..core.errors import CommandFailure
from ..model.code_element import CodeElement
from ..model.project import Project
from .protocol import AnalyzerConfig

VIOLATION_PATTERN = re.compile(
    r"^(?P<path>.+?):(?P<line>\d+):(?P<column>\d+): (?P<code>[A-Z]+\d+) (?P<message>.*)$"
)

# flake8 exits with 1 when it reports violations
VIOLATIONS_FOUND_EXIT_CODE = 1


class Flake8Config(AnalyzerConfig):
    """Flake8 analyzer configuration."""

    enabled: bool = False
    command: str = Field(default="flake8", description="Executable used to run flake8")
    timeout: float = Field(default=DEFAULT_FLAKE8_TIMEOUT, gt=0, description="Seconds")
    max_line_length: int = Field(default=DEFAULT_FLAKE8_MAX_LINE_LENGTH, gt=0)


class Flake8Analyzer:
    """Adds a ``flake8`` element with ``file`` children holding ``violation`` elements."""

    name = "flake8"
    description = "Style and lint violations reported by flake8"
    config_class = Flake8Config

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()
        self.logger = logging.getLogger(__name__)

    def set_logger(self, logger: logging.Logger) -> None:
        self.logger = logger

    def scrutinize(self, project: Project) -> None:
        config: Flake8Config = project.get_analyzer_config(self.name)
        selected = project.selected_paths()
        if project.paths and not selected:
            self.logger.warning("None of the selected paths is in the project, skipping flake8")
            project.add_element(self.parse_output(""))
            return

        targets = " ".join(shlex.quote(project.relative_path(p)) for p in selected) or "."
        command = f"{config.command} --max-line-length={config.max_line_length} {targets}"

        try:
            result = self.runner.run(command, project.directory, config.timeout, self.logger)
            output = result.output
        except CommandFailure as e:
            if e.exit_code != VIOLATIONS_FOUND_EXIT_CODE:
                raise
            output = e.output

        project.add_element(self.parse_output(output))

    @staticmethod
    def parse_output(output: str) -> CodeElement:
        """
        Build the flake8 element from flake8's default output format.

        Lines that aren't violations (warnings, tracebacks) are ignored.
        """
        summary = CodeElement("flake8", "violations")

        for line in output.splitlines():
            match = VIOLATION_PATTERN.match(line.strip())
            if not match:
                continue

            path = match["path"].removeprefix("./")
            file_element = summary.get_child("file", path)
            if file_element is None:
                file_element = CodeElement("file", path, {"violations": 0})
                file_element.set_location(path)
                summary.add_child(file_element)

            violation = CodeElement(
                "violation",
                f"{match['code']}:{match['line']}:{match['column']}",
                {
                    "code": match["code"],
                    "line": int(match["line"]),
                    "column": int(match["column"]),
                    "message": match["message"],
                },
            )
            violation.set_location(path)
            file_element.add_child(violation)
            file_element.set_metric("violations", len(file_element.children))

        total = sum(len(child.children) for child in summary.children)
        summary.set_metric("violations", total)
        summary.set_metric("files", len(summary.children))
        return summary
