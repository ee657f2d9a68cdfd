"""Test the Project execution context.

This module tests:
- The analyzer cursor and config lookup
- File selection narrowed by paths, confined to the project directory
"""

import logging

import pytest

from scrutinizer.analyzers.protocol import AnalyzerConfig
from scrutinizer.core.config_manager import ConfigManager
from scrutinizer.model.code_element import CodeElement
from scrutinizer.model.project import Project


class NoopAnalyzer:
    name = "noop"
    description = "Does nothing"
    config_class = AnalyzerConfig

    def scrutinize(self, project):
        pass


@pytest.fixture
def layout(tmp_path):
    """project/{src/app.py, setup.py} next to an outside/secret.py."""
    project_dir = tmp_path / "project"
    (project_dir / "src").mkdir(parents=True)
    (project_dir / "src" / "app.py").write_text("x = 1\n")
    (project_dir / "setup.py").write_text("x = 1\n")
    (tmp_path / "outside").mkdir()
    (tmp_path / "outside" / "secret.py").write_text("x = 1\n")
    return project_dir


def make_project(directory, paths=None) -> Project:
    config = ConfigManager([NoopAnalyzer()]).process({})
    return Project(directory, config, paths)


def relative_files(project: Project) -> list[str]:
    return [project.relative_path(path) for path in project.iter_files([".py"])]


# ============================================================================
# Test Cases
# ============================================================================


class TestProjectContext:
    """Test cursor, config and tree access."""

    def test_root_named_after_directory(self, layout):
        assert make_project(layout).root == CodeElement("project", "project")

    def test_config_follows_cursor(self, layout):
        project = make_project(layout)
        project.set_analyzer_name("noop")

        assert project.get_analyzer_config().enabled is True

    def test_config_without_cursor(self, layout):
        """Without a running analyzer a name must be given."""
        with pytest.raises(ValueError):
            make_project(layout).get_analyzer_config()

    def test_add_element_returns_kept_element(self, layout):
        project = make_project(layout)
        first = project.add_element(CodeElement("loc", "summary"))

        assert project.add_element(CodeElement("loc", "summary")) is first


class TestFileSelection:
    """Test iter_files() and selected paths."""

    def test_whole_project(self, layout):
        assert relative_files(make_project(layout)) == ["setup.py", "src/app.py"]

    def test_selected_directory(self, layout):
        assert relative_files(make_project(layout, ["src"])) == ["src/app.py"]

    def test_selected_file(self, layout):
        assert relative_files(make_project(layout, ["setup.py"])) == ["setup.py"]

    def test_overlapping_paths_deduplicated(self, layout):
        project = make_project(layout, ["src", "src/app.py"])

        assert relative_files(project) == ["src/app.py"]

    @pytest.mark.parametrize("path", ["../outside", "../outside/secret.py", "/"])
    def test_paths_outside_project_skipped(self, layout, path, caplog):
        """Paths escaping the project directory select nothing."""
        project = make_project(layout, [path])

        with caplog.at_level(logging.WARNING, logger="scrutinizer"):
            assert relative_files(project) == []

        assert "outside the project directory" in caplog.text

    def test_absolute_path_inside_project(self, layout):
        project = make_project(layout, [str(layout / "src")])

        assert relative_files(project) == ["src/app.py"]

    def test_missing_path_warned(self, layout, caplog):
        """A missing path is skipped with a warning, the others still count."""
        project = make_project(layout, ["missing", "src"])

        with caplog.at_level(logging.WARNING, logger="scrutinizer"):
            assert relative_files(project) == ["src/app.py"]

        assert "Skipping missing path: missing" in caplog.text

    def test_warnings_logged_once(self, layout, caplog):
        project = make_project(layout, ["missing"])

        with caplog.at_level(logging.WARNING, logger="scrutinizer"):
            list(project.iter_files())
            list(project.iter_files())

        assert caplog.text.count("Skipping missing path") == 1
