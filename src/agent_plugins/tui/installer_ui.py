"""Rich console presentation for the install flow."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from prompt_toolkit.shortcuts import confirm as pt_confirm
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from agent_plugins.core.console import console as default_console
from agent_plugins.core.utils import short_path
from agent_plugins.installer.detector import DEPENDENCIES, INSTALL_HINTS
from agent_plugins.installer.errors import UserCancelled

from .plugin_picker import pick_plugins_tui

if TYPE_CHECKING:
    from agent_plugins.installer.models import InstallResult, PlatformInfo, PluginDescriptor


class ConsoleUI:
    def __init__(self, home: Path, console: Console | None = None):
        self.home = home
        self.console = console or default_console

    # ── Framing ─────────────────────────────────────────────────────

    def intro(self) -> None:
        self.console.print()
        self.console.print("[bold]Coding Agent Plugins Installer[/bold]")
        self.console.print()

    def outro(self, success: bool) -> None:
        self.console.print()
        if success:
            self.console.print("[green]Installation complete![/green]")
        else:
            self.console.print("[red]Installation failed[/red]")

    def dry_run_notice(self) -> None:
        self.console.print("[yellow]Dry-run mode - no changes will be made[/yellow]")

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]error:[/red] {escape(message)}")

    # ── Detection ───────────────────────────────────────────────────

    def show_platforms(self, platforms: PlatformInfo) -> None:
        self.console.print("Detected platforms:")
        for platform in platforms.detected_platforms():
            path = platforms.status(platform).path
            where = f" ({short_path(path, self.home)})" if path else ""
            self.console.print(f"  [green]✓[/green] {platform.label}{where}")
        if not platforms.any_detected:
            self.console.print("  [yellow]⚠ No platforms detected[/yellow]")

    def show_missing_dependencies(self, missing: list[str]) -> None:
        self.console.print("[red]Missing dependencies:[/red]")
        for name in missing:
            owner = DEPENDENCIES.get(name)
            need = f" (required for {owner.label})" if owner else ""
            self.console.print(f"  [red]✗[/red] {name}{need}")
            self.console.print()
            self.console.print(f"Install {name}:", style="dim")
            for line in INSTALL_HINTS.get(name, []):
                self.console.print(f"  {line}", style="dim")

    # ── Prompts ─────────────────────────────────────────────────────

    def select_plugins(self, plugins: list[PluginDescriptor]) -> list[str]:
        return pick_plugins_tui(plugins)

    def confirm(self, message: str) -> bool:
        try:
            return pt_confirm(message)
        except (EOFError, KeyboardInterrupt) as e:
            raise UserCancelled() from e

    # ── Progress / results ──────────────────────────────────────────

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        with self.console.status(message):
            yield

    def plugin_done(self, plugin: str, success: bool) -> None:
        if success:
            self.console.print(f"  [green]{escape(plugin)} installed[/green]")
        else:
            self.console.print(f"  [red]{escape(plugin)} failed[/red]")

    def show_results(self, results: list[InstallResult]) -> None:
        self.console.print()
        if not results:
            self.console.print("no platforms targeted; nothing installed", style="dim")
            return
        table = Table(title="Installation results", title_justify="left", show_edge=False)
        table.add_column("Plugin", style="bold")
        table.add_column("Platform")
        table.add_column("Status")
        table.add_column("Error", style="dim")
        for r in results:
            status = "[green]✓ ok[/green]" if r.success else "[red]✗ failed[/red]"
            table.add_row(escape(r.plugin), r.platform.label, status, escape(r.error))
        self.console.print(table)
