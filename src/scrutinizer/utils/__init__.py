"""Utility functions and helpers."""

from .logger import VerbosityLevel, setup_logger

__all__ = ["VerbosityLevel", "setup_logger"]
