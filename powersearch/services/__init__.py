# PowerSearch Services Package
"""
Services for PowerSearch.

Services handle persistence and the per-page switcher session.
"""

from .storage import (
    CustomEngineStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
)
from .switcher import SwitcherSession

__all__ = [
    "CustomEngineStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SwitcherSession",
]
