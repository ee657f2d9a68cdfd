"""The Scrutinizer: ties analyzers together and runs them over a project.

One run goes through these states:

    INIT -> CONFIG_LOADED -> BEFORE_COMMANDS_DONE -> ANALYZING
         -> AFTER_COMMANDS_DONE -> DONE

and ends in FAILED on any fatal error (missing directory, bad
configuration, analyzer failure in fail-fast mode).
"""

import logging
import time
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

from ..analyzers.protocol import AnalyzerPlugin
from ..constants import DEFAULT_COMMAND_TIMEOUT
from ..model.project import Project
from .command_runner import CommandResult, CommandRunner
from .config_manager import ConfigManager, ResolvedConfig
from .errors import (
    AnalyzerFailure,
    CommandError,
    CommandFailure,
    CommandTimeout,
    ProjectEnvironmentError,
)
from .registry import AnalyzerRegistry

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """Pipeline run states."""

    INIT = "init"
    CONFIG_LOADED = "config_loaded"
    BEFORE_COMMANDS_DONE = "before_commands_done"
    ANALYZING = "analyzing"
    AFTER_COMMANDS_DONE = "after_commands_done"
    DONE = "done"
    FAILED = "failed"


class Scrutinizer:
    """
    Runs before-commands, analyzers and after-commands over a project.

    The pipeline has no opinion about which analyzers exist: pass them in,
    or use Scrutinizer.standard() for the built-in set.

    Example:
        scrutinizer = Scrutinizer([LocAnalyzer(), Flake8Analyzer()], logger=log)
        project = scrutinizer.scrutinize("/path/to/project", paths=["src"])
        print(project.root.to_dict())
    """

    def __init__(
        self,
        analyzers: Iterable[AnalyzerPlugin] | None = None,
        logger: logging.Logger | None = None,
        *,
        fail_fast: bool = True,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT,
        runner: CommandRunner | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            analyzers: Analyzers to register, in execution order
            logger: Sink for announcements and streamed command output
            fail_fast: Abort the run when an analyzer raises. When False the
                failure is logged, recorded on the project and the next
                analyzer runs.
            command_timeout: Timeout for before/after commands, in seconds
            runner: Command runner (mainly for tests)
        """
        self.logger = logger or logging.getLogger("scrutinizer")
        self.fail_fast = fail_fast
        self.command_timeout = command_timeout
        self.runner = runner or CommandRunner(default_timeout=command_timeout)
        self.registry = AnalyzerRegistry(logger=self.logger)
        self.state = PipelineState.INIT

        for analyzer in analyzers or ():
            self.register_analyzer(analyzer)

    @classmethod
    def standard(cls, logger: logging.Logger | None = None, **kwargs) -> "Scrutinizer":
        """Create a pipeline with the standard analyzer set registered."""
        from ..analyzers import standard_analyzers

        return cls(standard_analyzers(), logger, **kwargs)

    def register_analyzer(self, analyzer: AnalyzerPlugin) -> None:
        self.registry.register(analyzer)

    def get_analyzers(self) -> tuple[AnalyzerPlugin, ...]:
        return self.registry.get_all()

    def get_configuration(self) -> ConfigManager:
        return ConfigManager(self.registry.get_all())

    def scrutinize(self, directory: Path | str, paths: Sequence[str] | None = None) -> Project:
        """
        Scrutinize a project directory.

        Args:
            directory: Project root; must exist
            paths: Optional files/directories (relative to the root) to narrow
                the analysis to

        Returns:
            Project holding the resolved configuration and the result tree

        Raises:
            ProjectEnvironmentError: If the directory doesn't exist
            ConfigurationError: If .scrutinizer.yml is invalid
            AnalyzerFailure: If an analyzer raised and fail_fast is set
        """
        self.state = PipelineState.INIT
        try:
            return self._run(Path(directory), list(paths or []))
        except BaseException:
            self.state = PipelineState.FAILED
            raise

    def _run(self, directory: Path, paths: list[str]) -> Project:
        if not directory.is_dir():
            raise ProjectEnvironmentError(f'The directory "{directory}" does not exist.')
        directory = directory.resolve()

        manager = self.get_configuration()
        config = manager.process(manager.load_project_file(directory))
        self.state = PipelineState.CONFIG_LOADED

        command_results: list[CommandResult] = []
        if config.before_commands:
            self.logger.info("Executing before commands")
            command_results.extend(self._run_commands(config.before_commands, directory))
        self.state = PipelineState.BEFORE_COMMANDS_DONE

        project = Project(directory, config, paths)
        project.command_results.extend(command_results)

        self.state = PipelineState.ANALYZING
        self._run_analyzers(project, config)

        if config.after_commands:
            self.logger.info("Executing after commands")
            project.command_results.extend(self._run_commands(config.after_commands, directory))
        self.state = PipelineState.AFTER_COMMANDS_DONE

        self.state = PipelineState.DONE
        return project

    def _run_analyzers(self, project: Project, config: ResolvedConfig) -> None:
        for analyzer in self.registry.get_all():
            if not config.is_analyzer_enabled(analyzer.name):
                logger.debug(f"Skipping disabled analyzer: {analyzer.name}")
                continue

            self.logger.info(f'Running analyzer "{analyzer.name}"...')
            project.set_analyzer_name(analyzer.name)
            try:
                analyzer.scrutinize(project)
            except Exception as e:
                failure = AnalyzerFailure(analyzer.name, e)
                if self.fail_fast:
                    raise failure from e
                self.logger.error(str(failure), exc_info=e)
                project.analyzer_failures.append(failure)

    def _run_commands(self, commands: Sequence[str], directory: Path) -> list[CommandResult]:
        """Run every command in order; a failing command doesn't stop the rest."""
        results = []
        for command in commands:
            self.logger.info(f'Running "{command}"...')
            start = time.monotonic()
            try:
                result = self.runner.run(command, directory, self.command_timeout, self.logger)
            except CommandError as e:
                self.logger.error(str(e))
                result = self._failed_result(e, time.monotonic() - start)
            results.append(result)
        return results

    @staticmethod
    def _failed_result(error: CommandError, duration: float) -> CommandResult:
        exit_code = error.exit_code if isinstance(error, CommandFailure) else None
        return CommandResult(
            command=error.command,
            exit_code=exit_code,
            output=error.output,
            duration=duration,
            timed_out=isinstance(error, CommandTimeout),
        )
