"""Result model: the CodeElement tree and the project execution context."""

from .code_element import CodeElement, Location
from .project import Project

__all__ = ["CodeElement", "Location", "Project"]
