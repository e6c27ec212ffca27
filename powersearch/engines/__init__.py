"""
Engines package - Search engine definitions and the registry.

Built-in engines are fixed data; custom engines are user-defined and
persisted by the storage service.
"""

from .registry import CustomEngineEntry, EngineEntry, EngineRegistry
from .builtin import BUILTIN_ENGINES, DEFAULT_TARGETS, GENERIC_PARAMS

__all__ = [
    "BUILTIN_ENGINES",
    "CustomEngineEntry",
    "DEFAULT_TARGETS",
    "EngineEntry",
    "EngineRegistry",
    "GENERIC_PARAMS",
]
