"""Configuration: env, paths, marketplace coordinates."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_MARKETPLACE_NAME = "coding-agent-plugins"
DEFAULT_MARKETPLACE_REPO = "aryasaatvik/coding-agent-plugins"


@dataclass
class Config:
    home: Path = field(default_factory=Path.home)
    root: Path = field(default_factory=Path.cwd)  # holds marketplace.json and built artifacts
    marketplace_name: str = DEFAULT_MARKETPLACE_NAME
    marketplace_repo: str = DEFAULT_MARKETPLACE_REPO
    branch: str = "main"
    git_timeout: int = 300
    verbose: bool = False

    @property
    def claude_dir(self) -> Path:
        return self.home / ".claude"

    @property
    def opencode_dir(self) -> Path:
        return self.home / ".config" / "opencode"

    @property
    def registry_path(self) -> Path:
        return self.root / ".claude-plugin" / "marketplace.json"

    @property
    def marketplace_url(self) -> str:
        return f"https://github.com/{self.marketplace_repo}.git"

    def artifact_path(self, plugin_name: str) -> Path:
        """Pre-built OpenCode bundle for *plugin_name* inside the installation root."""
        return self.root / "plugins" / plugin_name / "opencode" / f"{plugin_name}-plugin.js"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_config(root: Path | None = None, verbose: bool = False) -> Config:
    """Load config with priority: CLI args > env > .env > defaults."""
    load_dotenv()

    config = Config()
    config.verbose = verbose

    if env_root := os.getenv("AGENT_PLUGINS_ROOT"):
        config.root = Path(env_root).expanduser()
    if env_name := os.getenv("AGENT_PLUGINS_MARKETPLACE"):
        config.marketplace_name = env_name
    if env_repo := os.getenv("AGENT_PLUGINS_REPO"):
        config.marketplace_repo = env_repo
    if env_branch := os.getenv("AGENT_PLUGINS_BRANCH"):
        config.branch = env_branch
    config.git_timeout = _env_int("AGENT_PLUGINS_GIT_TIMEOUT", config.git_timeout)

    if root is not None:
        config.root = root

    return config
