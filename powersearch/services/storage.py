"""
Storage Service - Persist custom engines in a key-value store.

The store holds the whole custom engine list under one key and is always
written as a whole-list replace:

    {"customEngines": [{"name": ..., "icon": ..., "url": ..., "domain": ..., "param": ...}]}

Backends:
  - MemoryKeyValueStore: in-process dict (tests, embedding)
  - JsonFileKeyValueStore: single JSON file with atomic writes

Both expose async get/set so callers can swap in a truly asynchronous
backend (e.g. browser sync storage) without changing the session.
"""

import asyncio
import copy
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from loguru import logger

from powersearch.engines.registry import REQUIRED_FIELDS, CustomEngineEntry
from powersearch.errors import StorageError

DEFAULT_KEY = "customEngines"


class KeyValueStore(ABC):
    """Base class for key-value storage backends."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        ...


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are deep-copied in and out."""

    def __init__(self, initial: dict | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by one JSON object file.

    A missing file reads as empty. Writes go to a .tmp sibling that then
    replaces the file, so a crash never leaves a partial file behind.
    File I/O runs in a worker thread so the event loop is not blocked.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    async def get(self, key: str, default: Any = None) -> Any:
        data = await asyncio.to_thread(self._read)
        return data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        data = await asyncio.to_thread(self._read)
        data[key] = value
        await asyncio.to_thread(self._write, data)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Expected a JSON object in {self.path}")
        return data

    def _write(self, data: dict) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(f"Could not write {self.path}: {e}") from e


class CustomEngineStore:
    """
    Load and save the custom engine list.

    Methods:
        load(): Read entries, skipping malformed rows
        save(entries): Replace the stored list
    """

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_KEY):
        self.kv = kv
        self.key = key

    async def load(self) -> list[CustomEngineEntry]:
        """
        Load custom engines.

        Rows that are not objects, miss a required field, or reuse an
        earlier row's name or domain are skipped with a warning.

        Raises:
            StorageError: The backend could not be read
        """
        rows = await self.kv.get(self.key, [])
        if rows is None:
            return []
        if not isinstance(rows, list):
            logger.warning(f"Ignoring stored '{self.key}': expected a list, got {type(rows).__name__}")
            return []

        entries: list[CustomEngineEntry] = []
        names: set[str] = set()
        domains: set[str] = set()
        for i, row in enumerate(rows):
            if not isinstance(row, dict):
                logger.warning(f"Skipping malformed custom engine #{i}: not an object")
                continue

            entry = CustomEngineEntry.from_dict(row)
            missing = [name for name in REQUIRED_FIELDS if not getattr(entry, name)]
            if missing:
                logger.warning(f"Skipping custom engine #{i}: missing {', '.join(missing)}")
                continue
            if entry.name in names or entry.domain in domains:
                logger.warning(f"Skipping duplicate custom engine '{entry.name}' ({entry.domain})")
                continue

            names.add(entry.name)
            domains.add(entry.domain)
            entries.append(entry)

        logger.debug(f"Loaded {len(entries)} custom engines")
        return entries

    async def save(self, entries: list[CustomEngineEntry]) -> None:
        """
        Replace the stored custom engine list.

        Raises:
            StorageError: The backend could not be written
        """
        await self.kv.set(self.key, [entry.to_dict() for entry in entries])
        logger.debug(f"Saved {len(entries)} custom engines")
