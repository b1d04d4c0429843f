"""Screens for the Magno TUI."""

from .help import HelpScreen
from .main import MainScreen

__all__ = ["MainScreen", "HelpScreen"]
