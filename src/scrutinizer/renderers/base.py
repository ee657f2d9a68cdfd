"""Base renderer.

Renderers turn a scrutinized Project into an output format. They only read
the project: the CodeElement tree, command results and analyzer failures.
"""

from abc import ABC, abstractmethod

from ..model.project import Project
from ..utils.logger import VerbosityLevel


class BaseRenderer(ABC):
    """
    Base class for all output renderers.

    Example:
        renderer = JSONRenderer()
        renderer.render(project)
        renderer.render_summary()
    """

    def __init__(self, verbosity: VerbosityLevel = VerbosityLevel.NORMAL):
        """
        Initialize renderer.

        Args:
            verbosity: Output verbosity level
        """
        self.verbosity = verbosity
        self.all_errors: list[tuple[str, str]] = []  # (category, message)

    @abstractmethod
    def render(self, project: Project) -> None:
        """
        Render a scrutinized project.

        Args:
            project: Project returned by the pipeline
        """
        ...

    @abstractmethod
    def render_summary(self) -> None:
        """Render the summary (failed commands, failed analyzers)."""
        ...

    def collect_errors(self, project: Project) -> None:
        """
        Collect failed commands and analyzers for the summary.

        Args:
            project: Scrutinized project
        """
        for result in project.command_results:
            if result.timed_out:
                self.all_errors.append(("command", f'"{result.command}" timed out'))
            elif not result.successful:
                self.all_errors.append(
                    ("command", f'"{result.command}" exited with {result.exit_code}')
                )

        # Check commands run by the custom analyzer gate the run too
        checks = project.root.get_child("custom", "commands")
        for check in checks.children if checks else ():
            if check.metrics.get("timed_out"):
                self.all_errors.append(("custom", f'"{check.name}" timed out'))
            elif check.metrics.get("passed") is False:
                self.all_errors.append(
                    ("custom", f'"{check.name}" exited with {check.metrics.get("exit_code")}')
                )

        for failure in project.analyzer_failures:
            self.all_errors.append((failure.analyzer_name, str(failure.cause)))
