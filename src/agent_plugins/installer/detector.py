"""Platform detection and dependency checks."""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from .models import Platform, PlatformInfo, PlatformStatus

if TYPE_CHECKING:
    from agent_plugins.core.config import Config

logger = logging.getLogger(__name__)

# dependency -> platform that needs it
DEPENDENCIES: dict[str, Platform] = {
    "git": Platform.CLAUDE,
    "jq": Platform.CLAUDE,
}

INSTALL_HINTS: dict[str, list[str]] = {
    "git": [
        "# macOS",
        "brew install git",
        "# Linux (Debian/Ubuntu)",
        "sudo apt-get install git",
    ],
    "jq": [
        "# macOS",
        "brew install jq",
        "# Linux (Debian/Ubuntu)",
        "sudo apt-get install jq",
        "# Linux (RHEL/CentOS)",
        "sudo yum install jq",
    ],
}


def has_command(cmd: str) -> bool:
    return shutil.which(cmd) is not None


def detect_platforms(config: Config) -> PlatformInfo:
    """Probe for Claude Code and OpenCode. Never raises; absence is a result."""
    claude = PlatformStatus()
    if config.claude_dir.is_dir():
        claude = PlatformStatus(detected=True, path=config.claude_dir)

    opencode = PlatformStatus()
    if config.opencode_dir.is_dir() or has_command("opencode"):
        opencode = PlatformStatus(detected=True, path=config.opencode_dir)

    logger.debug("detected claude=%s opencode=%s", claude.detected, opencode.detected)
    return PlatformInfo(claude=claude, opencode=opencode)


def check_dependencies(platforms: PlatformInfo) -> dict[str, bool]:
    """Map dependency name -> available. Dependencies of undetected platforms count as present."""
    checks: dict[str, bool] = {}
    for name, owner in DEPENDENCIES.items():
        if not platforms.status(owner).detected:
            checks[name] = True
            continue
        checks[name] = has_command(name)
    return checks


def missing_dependencies(checks: dict[str, bool]) -> list[str]:
    return [name for name, ok in checks.items() if not ok]
