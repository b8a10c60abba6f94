"""Install run: detect, check, select, confirm, install, aggregate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from .detector import check_dependencies, detect_platforms, missing_dependencies
from .errors import RegistryError, UserCancelled
from .models import (
    CLIOptions,
    InstallResult,
    InstallRun,
    Platform,
    PlatformInfo,
    PluginDescriptor,
    RunStatus,
)
from .plugin_installer import PluginInstaller, new_marketplace_sync
from .registry import load_registry, select_plugins

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from agent_plugins.core.config import Config

    from .models import Registry

logger = logging.getLogger(__name__)


class InstallerUI(Protocol):
    """Presentation layer. select_plugins/confirm may raise UserCancelled."""

    def intro(self) -> None: ...
    def outro(self, success: bool) -> None: ...
    def dry_run_notice(self) -> None: ...
    def show_platforms(self, platforms: PlatformInfo) -> None: ...
    def show_missing_dependencies(self, missing: list[str]) -> None: ...
    def info(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def select_plugins(self, plugins: list[PluginDescriptor]) -> list[str]: ...
    def confirm(self, message: str) -> bool: ...
    def progress(self, message: str) -> AbstractContextManager[object]: ...
    def plugin_done(self, plugin: str, success: bool) -> None: ...
    def show_results(self, results: list[InstallResult]) -> None: ...


def confirm_message(plugins: list[PluginDescriptor], targets: list[Platform]) -> str:
    labels = " & ".join(p.label for p in targets) or "no platforms"
    return f"Install {len(plugins)} plugin(s) for {labels}?"


def _resolve_selection(options: CLIOptions, registry: Registry, ui: InstallerUI) -> list[str]:
    if options.all:
        return [p.name for p in registry.plugins]
    if options.plugins:
        return list(options.plugins)
    return ui.select_plugins(registry.plugins)


def _abort(ui: InstallerUI, status: RunStatus, message: str) -> InstallRun:
    ui.outro(False)
    return InstallRun(status=status, message=message)


def _cancelled(ui: InstallerUI, results: list[InstallResult]) -> InstallRun:
    """Clean abort; keeps whatever results finished before the cancel."""
    ui.info("Installation cancelled")
    ui.outro(False)
    return InstallRun(status=RunStatus.CANCELLED, results=results, message="cancelled")


def run_install(config: Config, options: CLIOptions, ui: InstallerUI) -> InstallRun:
    """Run one install session. Never exits the process; see InstallRun.exit_code."""
    ui.intro()
    if options.dry_run:
        ui.dry_run_notice()

    try:
        with ui.progress("Detecting platforms..."):
            platforms = detect_platforms(config)
    except (UserCancelled, KeyboardInterrupt):
        return _cancelled(ui, [])
    ui.show_platforms(platforms)

    if not platforms.any_detected:
        msg = "No supported platforms detected. Install Claude Code or OpenCode first."
        ui.error(msg)
        return _abort(ui, RunStatus.NO_PLATFORMS, msg)

    missing = missing_dependencies(check_dependencies(platforms))
    if missing:
        ui.show_missing_dependencies(missing)
        return _abort(
            ui, RunStatus.MISSING_DEPENDENCIES, f"missing dependencies: {', '.join(missing)}"
        )

    try:
        registry = load_registry(config.registry_path)
    except RegistryError as e:
        ui.error(f"Error loading marketplace.json: {e}")
        return _abort(ui, RunStatus.REGISTRY_ERROR, str(e))

    try:
        selected = _resolve_selection(options, registry, ui)
    except (UserCancelled, KeyboardInterrupt):
        return _cancelled(ui, [])

    plugins = select_plugins(registry, selected)
    if not plugins:
        ui.warn("No plugins selected")
        return _abort(ui, RunStatus.NO_SELECTION, "no plugins selected")

    install_options = options.install_options()
    targets = install_options.targets(platforms)

    if not options.yes and not options.dry_run:
        try:
            confirmed = ui.confirm(confirm_message(plugins, targets))
        except (UserCancelled, KeyboardInterrupt):
            return _cancelled(ui, [])
        if not confirmed:
            ui.info("Installation cancelled")
            return _abort(ui, RunStatus.DECLINED, "installation declined")

    marketplace_sync = None
    if Platform.CLAUDE in targets and platforms.claude.path is not None:
        marketplace_sync = new_marketplace_sync(config, platforms.claude.path)

    ui.info("Installing plugins...")
    results: list[InstallResult] = []
    try:
        for plugin in plugins:
            with ui.progress(f"Installing {plugin.name}..."):
                installer = PluginInstaller(
                    plugin, platforms, install_options, config, marketplace_sync=marketplace_sync
                )
                plugin_results = installer.install()
            results.extend(plugin_results)
            ui.plugin_done(plugin.name, all(r.success for r in plugin_results))
        ui.show_results(results)
    except (UserCancelled, KeyboardInterrupt):
        return _cancelled(ui, results)

    success = all(r.success for r in results)
    ui.outro(success)
    return InstallRun(status=RunStatus.COMPLETED if success else RunStatus.FAILED, results=results)


def list_available(config: Config) -> list[PluginDescriptor]:
    """Plugins in the registry document. Raises RegistryError."""
    return load_registry(config.registry_path).plugins
