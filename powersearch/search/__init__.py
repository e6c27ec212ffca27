"""
Search package - Query extraction and search URL building.
"""

from .builder import build_search_url, decode_component, encode_query
from .extractor import extract_query
from .targets import SwitchTarget

__all__ = [
    "SwitchTarget",
    "build_search_url",
    "decode_component",
    "encode_query",
    "extract_query",
]
