"""
Tests for settings loading and deep merge logic.

Uses real TOML files on disk (no mocking).
"""

from powersearch.engines.builtin import DEFAULT_TARGETS
from powersearch.services.storage import JsonFileKeyValueStore
from powersearch.utils.helpers import (
    _deep_merge,
    default_settings_path,
    load_settings,
    store_from_settings,
    targets_from_settings,
)


class TestDeepMerge:
    """Test the _deep_merge function directly."""

    def test_override_replaces_flat_key(self):
        base = {"a": 1, "b": 2}
        override = {"b": 99}
        assert _deep_merge(base, override) == {"a": 1, "b": 99}

    def test_override_adds_new_key(self):
        assert _deep_merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_nested_dicts_are_merged(self):
        base = {"section": {"a": 1, "b": 2}}
        override = {"section": {"b": 99, "c": 3}}
        assert _deep_merge(base, override) == {"section": {"a": 1, "b": 99, "c": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        _deep_merge(base, {"a": {"x": 2}})
        assert base["a"]["x"] == 1


class TestLoadSettings:
    """Test load_settings with real TOML files."""

    def test_returns_defaults_when_file_missing(self, tmp_path):
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings["storage"]["key"] == "customEngines"
        assert settings["storage"]["path"].endswith("engines.json")
        assert settings["targets"]["engines"] == []

    def test_loaded_values_override_defaults(self, tmp_settings, tmp_path):
        settings = load_settings(tmp_settings)
        assert settings["storage"]["key"] == "engines"
        assert settings["storage"]["path"] == str(tmp_path / "data" / "engines.json")
        assert len(settings["targets"]["engines"]) == 2

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('[storage]\nkey = "engines"\n')
        settings = load_settings(path)
        assert settings["storage"]["key"] == "engines"
        assert settings["storage"]["path"].endswith("engines.json")

    def test_invalid_toml_returns_defaults(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("[storage\nkey = ")
        settings = load_settings(path)
        assert settings["storage"]["key"] == "customEngines"

    def test_default_path_respects_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_settings_path() == tmp_path / "powersearch" / "settings.toml"

    def test_default_storage_respects_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        settings = load_settings(tmp_path / "nonexistent.toml")
        assert settings["storage"]["path"] == str(tmp_path / "powersearch" / "engines.json")


class TestTargetsFromSettings:
    """Test building switch targets from [[targets.engines]]."""

    def test_defaults_when_unconfigured(self):
        targets = targets_from_settings({})
        assert [t.name for t in targets] == [t["name"] for t in DEFAULT_TARGETS]

    def test_configured_targets(self, tmp_settings):
        targets = targets_from_settings(load_settings(tmp_settings))
        assert [t.name for t in targets] == ["Kagi", "Bing"]
        assert targets[0].icon == "🔎"
        assert targets[1].url == "https://www.bing.com/search?q="

    def test_malformed_rows_skipped(self):
        settings = {"targets": {"engines": [
            {"name": "No url"},
            "not a table",
            {"name": "Good", "url": "https://g.test/?q={query}"},
        ]}}
        targets = targets_from_settings(settings)
        assert [t.name for t in targets] == ["Good"]


class TestStoreFromSettings:
    """Test building the persistent store from [storage]."""

    def test_uses_configured_path_and_key(self, tmp_settings, tmp_path):
        store = store_from_settings(load_settings(tmp_settings))
        assert isinstance(store.kv, JsonFileKeyValueStore)
        assert store.kv.path == tmp_path / "data" / "engines.json"
        assert store.key == "engines"

    def test_expands_user_home(self):
        store = store_from_settings({"storage": {"path": "~/engines.json"}})
        assert "~" not in str(store.kv.path)
        assert store.key == "customEngines"
