"""Shared CLI helpers."""

from .console import CLIConsole, console, with_error_handling
from .logging import configure_logging

__all__ = ["CLIConsole", "configure_logging", "console", "with_error_handling"]
