"""
Shared test fixtures for the PowerSearch test suite.

Provides registries, stores and settings files that use real file I/O
(no mocking of the filesystem).
"""

import json

import pytest
import toml

from powersearch.engines.registry import CustomEngineEntry, EngineRegistry
from powersearch.services.storage import CustomEngineStore, MemoryKeyValueStore


@pytest.fixture
def registry():
    """Registry with the built-in engines and no custom ones."""
    return EngineRegistry()


@pytest.fixture
def kagi():
    return CustomEngineEntry(
        name="Kagi",
        url="https://kagi.com/search?q={query}",
        domain="kagi.com",
        param="q",
        icon="🔎",
    )


@pytest.fixture
def wiki():
    return CustomEngineEntry(
        name="Wikipedia",
        url="https://en.wikipedia.org/w/index.php?search={query}",
        domain="wikipedia.org",
        param="search",
    )


@pytest.fixture
def memory_store():
    """Empty in-memory custom engine store."""
    return CustomEngineStore(MemoryKeyValueStore())


@pytest.fixture
def tmp_engines(tmp_path):
    """Create a real engines JSON file with test entries."""
    engines_path = tmp_path / "engines.json"
    data = {
        "customEngines": [
            {
                "name": "Kagi",
                "icon": "🔎",
                "url": "https://kagi.com/search?q={query}",
                "domain": "kagi.com",
                "param": "q",
            },
            {
                "name": "Wikipedia",
                "icon": "",
                "url": "https://en.wikipedia.org/w/index.php?search={query}",
                "domain": "wikipedia.org",
                "param": "search",
            },
        ]
    }
    engines_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return engines_path


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "storage": {"path": str(tmp_path / "data" / "engines.json"), "key": "engines"},
        "targets": {
            "engines": [
                {"name": "Kagi", "url": "https://kagi.com/search?q={query}", "icon": "🔎"},
                {"name": "Bing", "url": "https://www.bing.com/search?q="},
            ]
        },
    }
    settings_path.write_text(toml.dumps(data), encoding="utf-8")
    return settings_path
