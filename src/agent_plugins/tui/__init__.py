"""TUI: rich output and prompt_toolkit prompts for the installer."""

from .installer_ui import ConsoleUI
from .plugin_picker import pick_plugins_tui

__all__ = ["ConsoleUI", "pick_plugins_tui"]
