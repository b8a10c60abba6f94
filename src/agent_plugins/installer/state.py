"""Persisted Claude Code plugin state: installed_plugins.json, known_marketplaces.json."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from .errors import StateFileError

logger = logging.getLogger(__name__)

INSTALLED_SCHEMA_VERSION = 1

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _locks_guard:
        return _locks.setdefault(key, threading.Lock())


def plugin_key(plugin_name: str, marketplace_name: str) -> str:
    return f"{plugin_name}@{marketplace_name}"


def read_json_document(path: Path, default: dict[str, Any]) -> dict[str, Any]:
    """Load a JSON object from *path*, or a copy of *default* if the file is absent."""
    if not path.exists():
        return json.loads(json.dumps(default))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        raise StateFileError(f"failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise StateFileError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def write_json_document(path: Path, data: dict[str, Any]) -> None:
    """Write *data* to a sibling temp file, then replace *path* with it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2) + "\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("wrote %s", path)


def upsert_installed_plugin(
    path: Path,
    key: str,
    *,
    version: str,
    install_path: Path,
    revision: str,
    timestamp: str,
) -> dict[str, Any]:
    """Insert or refresh one installed_plugins.json entry. Returns the entry.

    ``installedAt`` is kept from an existing entry; every other field is rewritten.
    """
    with _lock_for(path):
        doc = read_json_document(
            path, {"version": INSTALLED_SCHEMA_VERSION, "plugins": {}}
        )
        plugins = doc.get("plugins")
        if not isinstance(plugins, dict):
            plugins = {}
        previous = plugins.get(key)
        installed_at = previous.get("installedAt") if isinstance(previous, dict) else None
        entry = {
            "version": version,
            "installedAt": installed_at or timestamp,
            "lastUpdated": timestamp,
            "installPath": str(install_path),
            "gitCommitSha": revision,
            "isLocal": False,
        }
        plugins[key] = entry
        doc["plugins"] = plugins
        doc.setdefault("version", INSTALLED_SCHEMA_VERSION)
        write_json_document(path, doc)
        return entry


def upsert_known_marketplace(
    path: Path,
    name: str,
    *,
    source: dict[str, str],
    install_location: Path,
    timestamp: str,
) -> dict[str, Any]:
    """Replace the known_marketplaces.json entry for *name* wholesale. Returns the entry."""
    with _lock_for(path):
        doc = read_json_document(path, {})
        entry = {
            "source": dict(source),
            "installLocation": str(install_location),
            "lastUpdated": timestamp,
        }
        doc[name] = entry
        write_json_document(path, doc)
        return entry
