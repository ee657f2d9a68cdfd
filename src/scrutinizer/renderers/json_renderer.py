"""JSON renderer for CI artifacts and report tools.

Every CodeElement is emitted as its own record with shallow children
({type, name}); elements are listed depth-first starting at the project
root, so consumers rebuild the tree by following the child references.
"""

import json
import sys
from typing import Any, TextIO

from ..model.project import Project
from .base import BaseRenderer


class JSONRenderer(BaseRenderer):
    """Renders the project to JSON."""

    def __init__(self, stream: TextIO | None = None, **kwargs):
        super().__init__(**kwargs)
        self.stream = stream
        self.data: dict[str, Any] = {}

    def render(self, project: Project) -> None:
        """
        Collect project data for JSON export.

        Args:
            project: Scrutinized project
        """
        self.collect_errors(project)
        self.data = self.to_dict(project)

    def render_summary(self) -> None:
        """Output JSON to the stream (stdout by default)."""
        output = dict(self.data)
        output["summary"] = {
            "total_errors": len(self.all_errors),
            "errors": [{"category": cat, "message": msg} for cat, msg in self.all_errors],
        }

        stream = self.stream or sys.stdout
        json.dump(output, stream, indent=2, default=str)
        stream.write("\n")

    @staticmethod
    def to_dict(project: Project) -> dict[str, Any]:
        """
        Serialize a project.

        Args:
            project: Scrutinized project

        Returns:
            JSON-serializable dict
        """
        return {
            "project": str(project.directory),
            "paths": list(project.paths),
            "config": project.config.to_dict(),
            "elements": [element.to_dict() for element in project.root.walk()],
            "commands": [result.to_dict() for result in project.command_results],
            "failures": [
                {"analyzer": failure.analyzer_name, "message": str(failure.cause)}
                for failure in project.analyzer_failures
            ],
        }
