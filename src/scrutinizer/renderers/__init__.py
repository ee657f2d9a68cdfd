"""Renderers for scrutinized projects.

This package provides renderer implementations for different output formats.
All renderers implement the BaseRenderer protocol and only read the project.
"""

from .base import BaseRenderer
from .cli_renderer import CLIRenderer
from .json_renderer import JSONRenderer

__all__ = ["BaseRenderer", "CLIRenderer", "JSONRenderer"]
