# PowerSearch Utilities Package
"""
Shared utility functions and helpers for PowerSearch.
"""

from .helpers import load_settings, store_from_settings, targets_from_settings

__all__ = ["load_settings", "store_from_settings", "targets_from_settings"]
