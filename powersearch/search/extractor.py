"""
Query Extractor - Find the search query in a page URL.

Two tiers:
  1. Registry candidates for the page's hostname (custom engines first,
     then built-ins), so registered engines pick the right parameter
  2. GENERIC_PARAMS on any hostname, tried only if tier 1 found nothing

A candidate matches when the parameter is present and its decoded,
trimmed value is non-empty. Malformed URLs and undecodable values never
raise to the caller.
"""

from typing import Iterable, Optional
from urllib.parse import SplitResult, unquote_plus, urlsplit

from loguru import logger

from powersearch.engines.builtin import GENERIC_PARAMS
from powersearch.engines.registry import EngineRegistry
from powersearch.errors import DecodeError, UrlParseError
from powersearch.search.builder import decode_component

# Schemes whose URLs cannot be parsed without a host
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def extract_query(url: str, registry: EngineRegistry) -> Optional[str]:
    """
    Extract the active search query from a page URL.

    Args:
        url: URL of the current page
        registry: Engine registry to consult for hostname-specific parameters

    Returns:
        The decoded query, or None if the URL is malformed or carries none
    """
    try:
        parts = parse_url(url)
    except UrlParseError as e:
        logger.debug(f"Cannot extract query: {e}")
        return None

    hostname = (parts.hostname or "").lower()
    params = query_params(parts.query)

    query = _first_match(params, registry.lookup_candidates(hostname))
    if query is None:
        query = _first_match(params, GENERIC_PARAMS)
    return query


def parse_url(url) -> SplitResult:
    """
    Parse a URL, rejecting what a browser would reject.

    Raises:
        UrlParseError: Not a string, no scheme, bad authority, or an
            http-like URL without a host
    """
    if not isinstance(url, str):
        raise UrlParseError(url, "URL is not a string")

    url = url.strip()
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # raises on a non-numeric port
    except ValueError as e:
        raise UrlParseError(url, str(e)) from e

    if not parts.scheme:
        raise UrlParseError(url, "missing scheme")
    if parts.scheme in _HOST_SCHEMES and not hostname:
        raise UrlParseError(url, "missing host")
    if hostname and any(c.isspace() for c in hostname):
        raise UrlParseError(url, "whitespace in host")

    return parts


def query_params(query: str) -> dict[str, str]:
    """
    Map parameter names to their first raw (still encoded) value.

    Names are decoded; values are left for decode_component so a bad
    escape only disqualifies that one parameter.
    """
    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        name, _, value = pair.partition("=")
        params.setdefault(unquote_plus(name), value)
    return params


def _first_match(params: dict[str, str], candidates: Iterable[str]) -> Optional[str]:
    for name in candidates:
        raw = params.get(name)
        if raw is None:
            continue

        try:
            value = decode_component(raw).strip()
        except DecodeError as e:
            logger.debug(f"Skipping parameter '{name}': {e}")
            continue

        if value:
            return value
    return None
