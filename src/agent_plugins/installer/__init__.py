"""Installer: platform detection, per-plugin install, run orchestration."""

from .detector import check_dependencies, detect_platforms, missing_dependencies
from .errors import (
    ArtifactNotFoundError,
    GitError,
    InstallerError,
    RegistryError,
    StateFileError,
    UserCancelled,
)
from .models import (
    CLIOptions,
    InstallOptions,
    InstallResult,
    InstallRun,
    Platform,
    PlatformInfo,
    PlatformStatus,
    PluginDescriptor,
    Registry,
    RunStatus,
)
from .orchestrator import list_available, run_install
from .plugin_installer import PluginInstaller
from .registry import load_registry, select_plugins

__all__ = [
    "ArtifactNotFoundError",
    "CLIOptions",
    "GitError",
    "InstallOptions",
    "InstallResult",
    "InstallRun",
    "InstallerError",
    "Platform",
    "PlatformInfo",
    "PlatformStatus",
    "PluginDescriptor",
    "PluginInstaller",
    "Registry",
    "RegistryError",
    "RunStatus",
    "StateFileError",
    "UserCancelled",
    "check_dependencies",
    "detect_platforms",
    "list_available",
    "load_registry",
    "missing_dependencies",
    "run_install",
    "select_plugins",
]
