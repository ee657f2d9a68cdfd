"""Custom command analyzer.

Runs project-defined check commands (test suites, type checkers, anything
with a meaningful exit code) and records each outcome as an element:

    custom:
        commands:
            - command: "pytest -q"
              timeout: 600
            - command: "mypy src"
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import DEFAULT_COMMAND_TIMEOUT
from ..core.command_runner import CommandRunner
from ..core.errors import CommandFailure, CommandTimeout
from ..model.code_element import CodeElement
from ..model.project import Project
from .protocol import AnalyzerConfig


class CustomCommand(BaseModel):
    """One check command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    command: str = Field(min_length=1, description="Shell command, run at the project root")
    timeout: float = Field(default=DEFAULT_COMMAND_TIMEOUT, gt=0, description="Seconds")


class CustomConfig(AnalyzerConfig):
    """Custom command analyzer configuration."""

    commands: list[CustomCommand] = Field(
        default_factory=list,
        description="Commands whose exit status is recorded as a finding",
    )

    @field_validator("commands")
    @classmethod
    def _check_commands(cls, commands: list[CustomCommand]) -> list[CustomCommand]:
        # Each command is recorded under its own text
        seen = set()
        for entry in commands:
            if not entry.command.strip():
                raise ValueError("command must not be blank")
            if entry.command in seen:
                raise ValueError(f"duplicate command: {entry.command!r}")
            seen.add(entry.command)
        return commands


class CustomAnalyzer:
    """Adds a ``custom`` element with one ``command`` child per configured command."""

    name = "custom"
    description = "Run project-defined check commands"
    config_class = CustomConfig

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()
        self.logger = logging.getLogger(__name__)

    def set_logger(self, logger: logging.Logger) -> None:
        self.logger = logger

    def scrutinize(self, project: Project) -> None:
        config: CustomConfig = project.get_analyzer_config(self.name)
        if not config.commands:
            return

        element = CodeElement("custom", "commands")
        for entry in config.commands:
            self.logger.info(f'Running "{entry.command}"...')
            child = CodeElement("command", entry.command)
            try:
                result = self.runner.run(
                    entry.command, project.directory, entry.timeout, self.logger
                )
                child.set_metric("exit_code", result.exit_code)
                child.set_metric("duration", round(result.duration, 3))
                child.set_metric("passed", True)
                child.set_metric("timed_out", False)
            except CommandFailure as e:
                self.logger.error(str(e))
                child.set_metric("exit_code", e.exit_code)
                child.set_metric("passed", False)
                child.set_metric("timed_out", False)
            except CommandTimeout as e:
                self.logger.error(str(e))
                child.set_metric("exit_code", None)
                child.set_metric("passed", False)
                child.set_metric("timed_out", True)
            element.add_child(child)

        passed = sum(1 for child in element.children if child.metrics["passed"])
        element.set_metric("commands", len(element.children))
        element.set_metric("passed", passed)
        element.set_metric("failed", len(element.children) - passed)
        project.add_element(element)
