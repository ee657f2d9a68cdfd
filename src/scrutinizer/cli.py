"""Command-line interface for scrutinizer.

Runs the standard analyzer set over a project directory and renders the
result tree. Intended as a CI quality gate: the exit code is non-zero when
the run fails or any command/analyzer reported a failure.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from .config import VERBOSITY_LEVELS, load_settings
from .constants import CONFIG_FILENAME
from .core.errors import ScrutinizerError
from .core.pipeline import Scrutinizer
from .renderers import BaseRenderer, CLIRenderer, JSONRenderer
from .utils.logger import VerbosityLevel, setup_logger

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="scrutinizer",
    help="Run code analyzers and project commands over a directory",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)


# ============================================================================
# Validation Functions
# ============================================================================


def validate_verbosity(value: str | None) -> str | None:
    """
    Validate verbosity level.

    Args:
        value: Verbosity level string

    Returns:
        Validated verbosity level

    Raises:
        typer.BadParameter: If verbosity is invalid
    """
    if value is None:
        return None
    if value.lower() not in VERBOSITY_LEVELS:
        raise typer.BadParameter(
            f"Invalid verbosity: {value}. Must be one of: {', '.join(VERBOSITY_LEVELS)}"
        )
    return value.lower()


def validate_timeout(value: float | None) -> float | None:
    """
    Validate command timeout.

    Args:
        value: Timeout in seconds

    Returns:
        Validated timeout

    Raises:
        typer.BadParameter: If timeout is not positive
    """
    if value is not None and value <= 0:
        raise typer.BadParameter(f"Timeout must be positive, got {value:g}")
    return value


def _create_renderer(output_format: str, verbosity: VerbosityLevel, color: bool) -> BaseRenderer:
    if output_format == "cli":
        return CLIRenderer(verbosity=verbosity, color=color)
    if output_format == "json":
        return JSONRenderer(verbosity=verbosity)

    error_console.print(f"[red]Error: Unknown output format: {output_format}[/red]")
    error_console.print("Available formats: cli, json")
    raise typer.Exit(1)


# ============================================================================
# CLI Commands
# ============================================================================


@app.command()
def run(
    directory: Annotated[
        Path,
        typer.Argument(help="Project directory to scrutinize"),
    ],
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="Files or directories (relative to DIRECTORY) to narrow analysis"),
    ] = None,
    verbosity: Annotated[
        str | None,
        typer.Option(
            "--verbosity",
            "-v",
            help="Output verbosity: quiet, normal, verbose, debug",
            callback=validate_verbosity,
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: cli, json"),
    ] = "cli",
    continue_on_error: Annotated[
        bool,
        typer.Option(
            "--continue-on-error",
            help="Keep running the remaining analyzers when one fails",
        ),
    ] = False,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            "-t",
            help="Timeout for before/after commands, in seconds",
            callback=validate_timeout,
        ),
    ] = None,
):
    """
    Scrutinize a project directory.

    Reads DIRECTORY/.scrutinizer.yml, runs before_commands, every enabled
    analyzer and after_commands, then prints the result tree.

    Examples:
        scrutinizer run .
        scrutinizer run . src tests --format json
        scrutinizer run /build/checkout --continue-on-error --timeout 600
    """
    settings = load_settings()
    verbosity_level = VerbosityLevel(verbosity or settings.verbosity)
    log = setup_logger(level=verbosity_level)

    renderer = _create_renderer(output_format, verbosity_level, settings.color)
    scrutinizer = Scrutinizer.standard(
        log,
        fail_fast=settings.fail_fast and not continue_on_error,
        command_timeout=settings.command_timeout if timeout is None else timeout,
    )

    try:
        project = scrutinizer.scrutinize(directory, paths or [])
    except ScrutinizerError as e:
        logger.debug("Scrutinizer run failed", exc_info=True)
        error_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    renderer.render(project)
    renderer.render_summary()

    if renderer.all_errors:
        raise typer.Exit(1)


@app.command()
def list_analyzers() -> None:
    """
    List the standard analyzers in execution order.

    Shows the analyzer name, whether it runs by default, and its description.
    """
    console.print("[bold blue]Available Analyzers[/bold blue]\n")

    for analyzer in Scrutinizer.standard().get_analyzers():
        default = "enabled" if analyzer.config_class().enabled else "disabled"
        console.print(f"  • {analyzer.name:10} [dim]({default})[/dim] - {analyzer.description}")


@app.command()
def create_config(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path"),
    ] = Path(CONFIG_FILENAME),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
):
    """
    Create a default configuration file.

    Writes every analyzer's options at their defaults.

    Example:
        scrutinizer create-config
        scrutinizer create-config --output ci/.scrutinizer.yml
    """
    if output.exists() and not force:
        console.print(f"[yellow]File already exists: {output}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    data = Scrutinizer.standard().get_configuration().default_config()

    try:
        with open(output, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    except OSError as e:
        console.print(f"[red]✗ Failed to create config: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Created configuration file: {output}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    try:
        import importlib.metadata

        version = importlib.metadata.version("scrutinizer")
        console.print(f"scrutinizer version {version}")
    except importlib.metadata.PackageNotFoundError:
        console.print("scrutinizer (version unknown)")


# ============================================================================
# Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
