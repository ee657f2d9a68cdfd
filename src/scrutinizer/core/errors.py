"""Exceptions raised by the scrutinizer pipeline."""


class ScrutinizerError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(ScrutinizerError):
    """Project configuration is unparsable or contains unknown/invalid keys."""


class ProjectEnvironmentError(ScrutinizerError):
    """The project directory to scrutinize does not exist."""


class CommandError(ScrutinizerError):
    """An external command did not complete successfully."""

    def __init__(self, message: str, command: str, output: str = ""):
        super().__init__(message)
        self.command = command
        self.output = output


class CommandTimeout(CommandError):
    """An external command exceeded its timeout and was killed."""

    def __init__(self, command: str, timeout: float, output: str = ""):
        super().__init__(
            f'Command "{command}" timed out after {timeout:g} seconds', command, output
        )
        self.timeout = timeout


class CommandFailure(CommandError):
    """An external command exited with a non-zero code."""

    def __init__(self, command: str, exit_code: int, output: str = ""):
        super().__init__(
            f'Command "{command}" failed with exit code {exit_code}', command, output
        )
        self.exit_code = exit_code


class AnalyzerFailure(ScrutinizerError):
    """An analyzer raised while scrutinizing the project."""

    def __init__(self, analyzer_name: str, cause: BaseException):
        super().__init__(f'Analyzer "{analyzer_name}" failed: {cause}')
        self.analyzer_name = analyzer_name
        self.cause = cause
