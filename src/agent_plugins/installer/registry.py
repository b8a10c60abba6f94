"""Marketplace registry: parse marketplace.json, resolve plugin selections."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import RegistryError
from .models import PluginDescriptor, Registry

logger = logging.getLogger(__name__)


def _parse_plugin(entry: object) -> PluginDescriptor | None:
    if not isinstance(entry, dict):
        return None
    name = entry.get("name", "")
    if not name or not isinstance(name, str):
        return None
    author = entry.get("author", {})
    source = entry.get("source", "")
    return PluginDescriptor(
        name=name,
        description=entry.get("description", ""),
        source=source if isinstance(source, str) else json.dumps(source),
        category=entry.get("category", ""),
        version=entry.get("version", ""),
        author=author if isinstance(author, dict) else {},
    )


def load_registry(path: Path) -> Registry:
    """Parse the registry document at *path*. Raises RegistryError."""
    if not path.is_file():
        raise RegistryError(f"marketplace.json not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        raise RegistryError(f"failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise RegistryError(f"{path}: expected a JSON object")
    raw_plugins = data.get("plugins")
    if not isinstance(raw_plugins, list):
        raise RegistryError(f"{path}: missing 'plugins' list")

    plugins = []
    seen: set[str] = set()
    for entry in raw_plugins:
        plugin = _parse_plugin(entry)
        if plugin is None:
            logger.debug("skipping malformed registry entry: %r", entry)
            continue
        if plugin.name in seen:
            logger.warning("duplicate plugin %s in %s; keeping the first", plugin.name, path)
            continue
        seen.add(plugin.name)
        plugins.append(plugin)

    owner = data.get("owner", {})
    return Registry(
        name=data.get("name", ""),
        plugins=plugins,
        version=data.get("version", ""),
        description=data.get("description", ""),
        owner=owner if isinstance(owner, dict) else {},
    )


def select_plugins(registry: Registry, names: list[str]) -> list[PluginDescriptor]:
    """Registry entries named in *names*, in registry order. Unknown names are dropped."""
    wanted = set(names)
    for unknown in sorted(wanted - {p.name for p in registry.plugins}):
        logger.warning("unknown plugin: %s", unknown)
    return [p for p in registry.plugins if p.name in wanted]
