"""Tests for marketplace.json parsing and plugin selection."""

import json

import pytest

from agent_plugins.installer.errors import RegistryError
from agent_plugins.installer.registry import load_registry, select_plugins


def _write(path, data):
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


MARKETPLACE = {
    "name": "coding-agent-plugins",
    "version": "1.0.0",
    "description": "Plugins for coding agents",
    "owner": {"name": "Saatvik", "email": "x@example.com"},
    "plugins": [
        {
            "name": "ni",
            "description": "Use ni for package manager commands",
            "source": "./plugins/ni",
            "category": "productivity",
            "version": "0.1.0",
            "author": {"name": "Saatvik"},
        },
        {"name": "fmt", "source": "./plugins/fmt"},
    ],
}


class TestLoadRegistry:
    def test_parses_plugins(self, tmp_path):
        reg = load_registry(_write(tmp_path / "marketplace.json", MARKETPLACE))
        assert reg.name == "coding-agent-plugins"
        assert [p.name for p in reg.plugins] == ["ni", "fmt"]
        ni = reg.get("ni")
        assert ni.category == "productivity"
        assert ni.version == "0.1.0"
        assert ni.author == {"name": "Saatvik"}
        assert reg.get("missing") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryError, match="not found"):
            load_registry(tmp_path / "marketplace.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(RegistryError):
            load_registry(_write(tmp_path / "marketplace.json", "{not json"))

    def test_plugins_must_be_list(self, tmp_path):
        with pytest.raises(RegistryError, match="plugins"):
            load_registry(_write(tmp_path / "marketplace.json", {"name": "x", "plugins": {}}))

    def test_skips_malformed_and_duplicate_entries(self, tmp_path):
        data = {"name": "x", "plugins": ["bad", {"description": "no name"}, {"name": "a"}, {"name": "a"}]}
        reg = load_registry(_write(tmp_path / "marketplace.json", data))
        assert [p.name for p in reg.plugins] == ["a"]


class TestSelectPlugins:
    def test_keeps_registry_order_and_drops_unknown(self, tmp_path):
        reg = load_registry(_write(tmp_path / "marketplace.json", MARKETPLACE))
        selected = select_plugins(reg, ["fmt", "nope", "ni"])
        assert [p.name for p in selected] == ["ni", "fmt"]

    def test_empty_selection(self, tmp_path):
        reg = load_registry(_write(tmp_path / "marketplace.json", MARKETPLACE))
        assert select_plugins(reg, []) == []
