"""Per-plugin installation into Claude Code and OpenCode."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from agent_plugins.core.utils import utc_timestamp

from .errors import ArtifactNotFoundError, InstallerError
from .git import MarketplaceSync, head_revision, sync_repo
from .models import InstallOptions, InstallResult, Platform, PlatformInfo, PluginDescriptor
from .state import plugin_key, upsert_installed_plugin, upsert_known_marketplace

if TYPE_CHECKING:
    from agent_plugins.core.config import Config

logger = logging.getLogger(__name__)


def claude_plugins_dir(claude_dir: Path) -> Path:
    return claude_dir / "plugins"


def marketplace_checkout_dir(config: Config, claude_dir: Path) -> Path:
    return claude_plugins_dir(claude_dir) / "marketplaces" / config.marketplace_name


def new_marketplace_sync(config: Config, claude_dir: Path) -> MarketplaceSync:
    return MarketplaceSync(
        config.marketplace_url,
        marketplace_checkout_dir(config, claude_dir),
        branch=config.branch,
        timeout=config.git_timeout,
    )


class PluginInstaller:
    """Installs one plugin on every targeted, detected platform.

    Each platform is attempted independently; a failure becomes a failed
    InstallResult and never stops the other platform.
    """

    def __init__(
        self,
        plugin: PluginDescriptor,
        platforms: PlatformInfo,
        options: InstallOptions,
        config: Config,
        marketplace_sync: MarketplaceSync | None = None,
    ):
        self.plugin = plugin
        self.platforms = platforms
        self.options = options
        self.config = config
        self.marketplace_sync = marketplace_sync

    def install(self) -> list[InstallResult]:
        results: list[InstallResult] = []
        for platform in self.options.targets(self.platforms):
            results.append(self._install_on(platform))
        return results

    def _install_on(self, platform: Platform) -> InstallResult:
        if self.options.dry_run:
            logger.debug("dry run: skipping %s for %s", self.plugin.name, platform.label)
            return InstallResult(plugin=self.plugin.name, platform=platform, success=True)
        try:
            if platform is Platform.CLAUDE:
                self._install_claude()
            else:
                self._install_opencode()
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning("%s (%s) failed: %s", self.plugin.name, platform.label, message)
            return InstallResult(
                plugin=self.plugin.name, platform=platform, success=False, error=message
            )
        return InstallResult(plugin=self.plugin.name, platform=platform, success=True)

    # ── Claude Code ─────────────────────────────────────────────────

    def _install_claude(self) -> None:
        claude_dir = self.platforms.claude.path or self.config.claude_dir
        plugins_dir = claude_plugins_dir(claude_dir)
        cache_dir = plugins_dir / "cache" / self.plugin.name

        sync = self.marketplace_sync or new_marketplace_sync(self.config, claude_dir)
        marketplace_dir = sync.ensure()

        sync_repo(
            self.config.marketplace_url,
            cache_dir,
            branch=self.config.branch,
            timeout=self.config.git_timeout,
        )

        version = self._read_plugin_version(cache_dir)
        revision = head_revision(cache_dir, timeout=self.config.git_timeout)
        timestamp = utc_timestamp()

        upsert_installed_plugin(
            plugins_dir / "installed_plugins.json",
            plugin_key(self.plugin.name, self.config.marketplace_name),
            version=version,
            install_path=cache_dir,
            revision=revision,
            timestamp=timestamp,
        )
        upsert_known_marketplace(
            plugins_dir / "known_marketplaces.json",
            self.config.marketplace_name,
            source={"source": "github", "repo": self.config.marketplace_repo},
            install_location=marketplace_dir,
            timestamp=timestamp,
        )

    def _read_plugin_version(self, cache_dir: Path) -> str:
        manifest = cache_dir / "plugins" / self.plugin.name / ".claude-plugin" / "plugin.json"
        if not manifest.is_file():
            raise InstallerError(f"plugin manifest not found: {manifest}")
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise InstallerError(f"invalid plugin manifest {manifest}: {e}") from e
        version = data.get("version", "") if isinstance(data, dict) else ""
        return version or self.plugin.version

    # ── OpenCode ────────────────────────────────────────────────────

    def _install_opencode(self) -> None:
        opencode_dir = self.platforms.opencode.path or self.config.opencode_dir
        plugin_dir = opencode_dir / "plugin"
        plugin_dir.mkdir(parents=True, exist_ok=True)

        artifact = self.config.artifact_path(self.plugin.name)
        if not artifact.is_file():
            raise ArtifactNotFoundError(f"Plugin file not found: {artifact}")

        dest = plugin_dir / f"{self.plugin.name}-plugin{artifact.suffix}"
        shutil.copyfile(artifact, dest)
        logger.debug("copied %s -> %s", artifact, dest)
