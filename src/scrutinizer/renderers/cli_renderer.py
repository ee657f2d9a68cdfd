"""CLI renderer using Rich library.

Shows the CodeElement tree as a Rich tree with each element's metrics, plus
a table of before/after commands and a summary of failures.
"""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ..constants import MAX_METRICS_INLINE
from ..model.code_element import CodeElement
from ..model.project import Project
from ..utils.logger import VerbosityLevel
from .base import BaseRenderer


class CLIRenderer(BaseRenderer):
    """
    Renders output to CLI using Rich library.

    At NORMAL verbosity only top-level elements and their direct children are
    shown; VERBOSE and DEBUG show the full tree.
    """

    # Element type -> Rich markup style
    STYLE_MAP = {
        "project": "bold blue",
        "file": "cyan",
        "violation": "yellow",
        "command": "magenta",
    }

    def __init__(
        self,
        verbosity: VerbosityLevel = VerbosityLevel.NORMAL,
        color: bool = True,
        console: Console | None = None,
    ):
        """
        Initialize CLI renderer.

        Args:
            verbosity: Output verbosity level
            color: Enable colored output
            console: Console to print to (mainly for tests)
        """
        super().__init__(verbosity)
        self.console = console or Console(color_system="auto" if color else None)

    def render(self, project: Project) -> None:
        """
        Render the project tree and command table.

        Args:
            project: Scrutinized project
        """
        self.collect_errors(project)

        if self.verbosity == VerbosityLevel.QUIET:
            return

        max_depth = None if self.verbosity >= VerbosityLevel.VERBOSE else 2
        tree = Tree(self._label(project.root))
        self._add_children(tree, project.root, depth=1, max_depth=max_depth)
        self.console.print(tree)

        if project.command_results:
            self.console.print()
            self.console.print(self._commands_table(project))

    def render_summary(self) -> None:
        """Render summary of failures."""
        if self.verbosity == VerbosityLevel.QUIET and not self.all_errors:
            return

        self.console.print()
        if not self.all_errors:
            self.console.print("[green]✓ All commands and analyzers succeeded[/green]")
            return

        self.console.print(f"[red]✗ {len(self.all_errors)} problem(s):[/red]")
        for category, message in self.all_errors:
            self.console.print(f"  [red]• {escape(f'[{category}] {message}')}[/red]")

    def _add_children(
        self, branch: Tree, element: CodeElement, depth: int, max_depth: int | None
    ) -> None:
        if max_depth is not None and depth > max_depth:
            if element.children:
                branch.add(f"[dim]... {len(element.children)} more[/dim]")
            return

        for child in element.children:
            child_branch = branch.add(self._label(child))
            self._add_children(child_branch, child, depth + 1, max_depth)

    def _label(self, element: CodeElement) -> str:
        style = self.STYLE_MAP.get(element.type, "")
        name = escape(element.name)
        label = f"[{style}]{name}[/{style}]" if style else name
        label = f"[dim]{escape(element.type)}[/dim] {label}"

        metrics = list(element.metrics.items())
        if metrics:
            shown = ", ".join(f"{key}={value}" for key, value in metrics[:MAX_METRICS_INLINE])
            if len(metrics) > MAX_METRICS_INLINE:
                shown += f", ... (+{len(metrics) - MAX_METRICS_INLINE})"
            label += f" [dim]({escape(shown)})[/dim]"
        return label

    @staticmethod
    def _commands_table(project: Project) -> Table:
        table = Table(box=box.ROUNDED, show_header=True, header_style="bold", title="Commands")
        table.add_column("Command")
        table.add_column("Exit")
        table.add_column("Time")
        table.add_column("Status")

        for result in project.command_results:
            if result.timed_out:
                status = "[red]timed out[/red]"
            elif result.successful:
                status = "[green]✓ ok[/green]"
            else:
                status = "[red]✗ failed[/red]"
            exit_code = "-" if result.exit_code is None else str(result.exit_code)
            table.add_row(escape(result.command), exit_code, f"{result.duration:.1f}s", status)

        return table
