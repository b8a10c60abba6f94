"""Installer data models: platforms, registry entries, options, results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Platform(str, Enum):
    CLAUDE = "claude"
    OPENCODE = "opencode"

    @property
    def label(self) -> str:
        return "Claude Code" if self is Platform.CLAUDE else "OpenCode"


@dataclass(frozen=True)
class PlatformStatus:
    detected: bool = False
    path: Path | None = None


@dataclass(frozen=True)
class PlatformInfo:
    """Detection result for both platforms. Produced fresh each run."""

    claude: PlatformStatus = field(default_factory=PlatformStatus)
    opencode: PlatformStatus = field(default_factory=PlatformStatus)

    def status(self, platform: Platform) -> PlatformStatus:
        return self.claude if platform is Platform.CLAUDE else self.opencode

    def detected_platforms(self) -> list[Platform]:
        return [p for p in Platform if self.status(p).detected]

    @property
    def any_detected(self) -> bool:
        return self.claude.detected or self.opencode.detected


@dataclass
class PluginDescriptor:
    """A plugin listing inside marketplace.json."""

    name: str
    description: str = ""
    source: str = ""
    category: str = ""
    version: str = ""
    author: dict[str, str] = field(default_factory=dict)


@dataclass
class Registry:
    """A parsed marketplace.json."""

    name: str
    plugins: list[PluginDescriptor] = field(default_factory=list)
    version: str = ""
    description: str = ""
    owner: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> PluginDescriptor | None:
        for p in self.plugins:
            if p.name == name:
                return p
        return None


@dataclass(frozen=True)
class InstallOptions:
    claude_only: bool = False
    opencode_only: bool = False
    dry_run: bool = False

    def targets(self, platforms: PlatformInfo) -> list[Platform]:
        """Detected platforms not excluded by the opposite *_only flag.

        Setting both flags excludes both platforms.
        """
        result: list[Platform] = []
        if platforms.claude.detected and not self.opencode_only:
            result.append(Platform.CLAUDE)
        if platforms.opencode.detected and not self.claude_only:
            result.append(Platform.OPENCODE)
        return result


@dataclass(frozen=True)
class InstallResult:
    plugin: str
    platform: Platform
    success: bool
    error: str = ""


@dataclass
class CLIOptions:
    all: bool = False
    plugins: list[str] = field(default_factory=list)
    claude_only: bool = False
    opencode_only: bool = False
    yes: bool = False
    dry_run: bool = False

    def install_options(self) -> InstallOptions:
        return InstallOptions(
            claude_only=self.claude_only,
            opencode_only=self.opencode_only,
            dry_run=self.dry_run,
        )


class RunStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    NO_PLATFORMS = "no_platforms"
    MISSING_DEPENDENCIES = "missing_dependencies"
    REGISTRY_ERROR = "registry_error"
    NO_SELECTION = "no_selection"
    DECLINED = "declined"
    CANCELLED = "cancelled"


_FAILURE_STATUSES = frozenset(
    {
        RunStatus.FAILED,
        RunStatus.NO_PLATFORMS,
        RunStatus.MISSING_DEPENDENCIES,
        RunStatus.REGISTRY_ERROR,
    }
)


@dataclass
class InstallRun:
    """Outcome of one orchestrated run. The entry point maps it to an exit code."""

    status: RunStatus
    results: list[InstallResult] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return all(r.success for r in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.status in _FAILURE_STATUSES else 0
