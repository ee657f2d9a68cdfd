"""Constants and default values used across the application."""

# Project configuration
CONFIG_FILENAME = ".scrutinizer.yml"  # Looked up at the project root

# Command Constants
DEFAULT_COMMAND_TIMEOUT = 300.0  # Wall-clock limit for before/after commands, seconds
KILL_GRACE_PERIOD = 5.0  # Time to wait for a killed process group to be reaped
DRAIN_GRACE_PERIOD = 1.0  # Time to drain output after the command exits before killing its group

# File selection
IGNORED_DIRECTORIES = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".tox",
        ".nox",
        ".venv",
        "venv",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "node_modules",
    }
)

# LOC Analyzer
DEFAULT_LOC_EXTENSIONS = [".py"]

# Flake8 Analyzer
DEFAULT_FLAKE8_TIMEOUT = 300.0
DEFAULT_FLAKE8_MAX_LINE_LENGTH = 79

# Output Display Constants
MAX_METRICS_INLINE = 6  # Metrics shown next to a tree node before truncating
