"""Tests for the CLI.

This module tests the run command end-to-end on temporary projects and the
helper commands (list-analyzers, create-config).
"""

import json
import logging

import pytest
import typer
import yaml
from typer.testing import CliRunner

from scrutinizer.cli import app, validate_verbosity

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to the runner's captured streams."""
    yield
    log = logging.getLogger("scrutinizer")
    log.handlers.clear()
    log.setLevel(logging.NOTSET)


@pytest.fixture
def project_dir(tmp_path):
    directory = tmp_path / "acme"
    directory.mkdir()
    (directory / "app.py").write_text("# entry point\nprint('hi')\n")
    return directory


# ============================================================================
# Validation
# ============================================================================


class TestVerbosityValidation:
    """Test verbosity option validation."""

    def test_valid(self):
        assert validate_verbosity("DEBUG") == "debug"
        assert validate_verbosity(None) is None

    def test_invalid(self):
        with pytest.raises(typer.BadParameter):
            validate_verbosity("loud")


# ============================================================================
# Run Command
# ============================================================================


class TestRunCommand:
    """Test the run command."""

    def test_json_output(self, project_dir):
        """JSON output holds the loc summary of the project."""
        result = runner.invoke(
            app, ["run", str(project_dir), "--format", "json", "--verbosity", "quiet"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        loc = next(e for e in data["elements"] if e["type"] == "loc")
        assert loc["metrics"]["files"] == 1
        assert loc["metrics"]["comment_lines"] == 1

    def test_cli_output(self, project_dir):
        """The default format prints the result tree."""
        result = runner.invoke(app, ["run", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert "app.py" in result.stdout
        assert "All commands and analyzers succeeded" in result.stdout

    def test_before_commands(self, project_dir):
        """Before commands run at the project root."""
        (project_dir / ".scrutinizer.yml").write_text(
            "before_commands:\n    - touch generated.py\n"
        )

        result = runner.invoke(
            app, ["run", str(project_dir), "--format", "json", "--verbosity", "quiet"]
        )

        assert result.exit_code == 0, result.output
        assert (project_dir / "generated.py").exists()
        assert json.loads(result.stdout)["commands"][0]["command"] == "touch generated.py"

    def test_failing_command_exit_code(self, project_dir):
        """A failing command makes the run exit non-zero."""
        (project_dir / ".scrutinizer.yml").write_text("after_commands:\n    - exit 4\n")

        result = runner.invoke(app, ["run", str(project_dir), "--verbosity", "quiet"])

        assert result.exit_code == 1
        assert "exited with 4" in result.output

    def test_failing_check_command_exit_code(self, project_dir):
        """A failing custom check command fails the gate."""
        (project_dir / ".scrutinizer.yml").write_text(
            "custom:\n    commands:\n        - command: exit 3\n"
        )

        result = runner.invoke(app, ["run", str(project_dir), "--verbosity", "quiet"])

        assert result.exit_code == 1
        assert '[custom] "exit 3" exited with 3' in result.output

    def test_passing_check_command(self, project_dir):
        (project_dir / ".scrutinizer.yml").write_text(
            "custom:\n    commands:\n        - command: \"true\"\n"
        )

        result = runner.invoke(app, ["run", str(project_dir), "--verbosity", "quiet"])

        assert result.exit_code == 0, result.output

    @pytest.mark.parametrize("timeout", ["0", "-5"])
    def test_invalid_timeout(self, project_dir, timeout):
        """Timeouts must be positive."""
        result = runner.invoke(app, ["run", str(project_dir), "--timeout", timeout])

        assert result.exit_code == 2
        assert "positive" in result.output

    def test_missing_directory(self, tmp_path):
        """A missing directory is reported and exits 1."""
        result = runner.invoke(app, ["run", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "does not exist" in " ".join(result.output.split())

    def test_unknown_config_key(self, project_dir):
        """Unknown configuration keys fail the run."""
        (project_dir / ".scrutinizer.yml").write_text("lok:\n    enabled: false\n")

        result = runner.invoke(app, ["run", str(project_dir)])

        assert result.exit_code == 1
        assert "lok" in result.output

    def test_disable_analyzer(self, project_dir):
        """Disabled analyzers add nothing to the tree."""
        (project_dir / ".scrutinizer.yml").write_text("loc: false\n")

        result = runner.invoke(
            app, ["run", str(project_dir), "--format", "json", "--verbosity", "quiet"]
        )

        assert result.exit_code == 0, result.output
        types = [e["type"] for e in json.loads(result.stdout)["elements"]]
        assert types == ["project"]

    def test_invalid_verbosity(self, project_dir):
        result = runner.invoke(app, ["run", str(project_dir), "--verbosity", "loud"])

        assert result.exit_code != 0


# ============================================================================
# Helper Commands
# ============================================================================


class TestListAnalyzers:
    """Test list-analyzers command."""

    def test_lists_standard_set(self):
        result = runner.invoke(app, ["list-analyzers"])

        assert result.exit_code == 0
        assert "Available Analyzers" in result.stdout
        for name in ["flake8", "loc", "custom"]:
            assert name in result.stdout
        assert "disabled" in result.stdout


class TestCreateConfig:
    """Test create-config command."""

    def test_writes_defaults(self, tmp_path):
        """The generated file resolves to the defaults."""
        output = tmp_path / ".scrutinizer.yml"

        result = runner.invoke(app, ["create-config", "--output", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["before_commands"] == []
        assert data["loc"]["extensions"] == [".py"]
        assert data["flake8"]["enabled"] is False

    def test_refuses_to_overwrite(self, tmp_path):
        output = tmp_path / ".scrutinizer.yml"
        output.write_text("loc: false\n")

        result = runner.invoke(app, ["create-config", "--output", str(output)])

        assert result.exit_code == 1
        assert output.read_text() == "loc: false\n"

    def test_force_overwrites(self, tmp_path):
        output = tmp_path / ".scrutinizer.yml"
        output.write_text("loc: false\n")

        result = runner.invoke(app, ["create-config", "--output", str(output), "--force"])

        assert result.exit_code == 0
        assert "loc" in yaml.safe_load(output.read_text())
