"""Shared fixtures: a fake home with both platforms and a fake git."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from agent_plugins.core.config import Config
from agent_plugins.installer.errors import GitError
from agent_plugins.installer.models import PlatformInfo, PlatformStatus

PLUGIN_NAMES = ("p1", "p2")


@pytest.fixture
def config(tmp_path):
    home = tmp_path / "home"
    (home / ".claude").mkdir(parents=True)
    (home / ".config" / "opencode").mkdir(parents=True)

    root = tmp_path / "repo"
    (root / ".claude-plugin").mkdir(parents=True)
    (root / ".claude-plugin" / "marketplace.json").write_text(
        json.dumps(
            {
                "name": "coding-agent-plugins",
                "plugins": [
                    {"name": name, "description": f"{name} plugin", "source": f"./plugins/{name}"}
                    for name in PLUGIN_NAMES
                ],
            }
        )
    )
    for name in PLUGIN_NAMES:
        bundle = root / "plugins" / name / "opencode" / f"{name}-plugin.js"
        bundle.parent.mkdir(parents=True)
        bundle.write_text(f"export const plugin = '{name}';\n")
    return Config(home=home, root=root)


@pytest.fixture
def both_platforms(config):
    return PlatformInfo(
        claude=PlatformStatus(True, config.claude_dir),
        opencode=PlatformStatus(True, config.opencode_dir),
    )


@pytest.fixture
def fake_git():
    """Patch git so clones create a checkout with plugin manifests.

    Add a directory name to ``fake_git.fail_for`` to make syncing it raise.
    """
    state = SimpleNamespace(fail_for=set(), synced=[])

    def _sync(url, dest, branch="main", timeout=300):
        state.synced.append(dest)
        if dest.name in state.fail_for:
            raise GitError(["git", "clone", url, str(dest)], "fatal: could not read from remote")
        (dest / ".git").mkdir(parents=True, exist_ok=True)
        for name in PLUGIN_NAMES:
            manifest = dest / "plugins" / name / ".claude-plugin" / "plugin.json"
            manifest.parent.mkdir(parents=True, exist_ok=True)
            manifest.write_text(json.dumps({"name": name, "version": "1.0.0"}))

    with (
        patch("agent_plugins.installer.plugin_installer.sync_repo", side_effect=_sync) as cache,
        patch("agent_plugins.installer.git.sync_repo", side_effect=_sync) as market,
        patch(
            "agent_plugins.installer.plugin_installer.head_revision", return_value="abc123"
        ) as rev,
    ):
        state.cache_sync = cache
        state.marketplace_sync = market
        state.head_revision = rev
        yield state
