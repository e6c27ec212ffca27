"""
URL Builder - Render a query into a search engine URL template.

Templates either contain a {query} placeholder:
    https://www.bing.com/search?q={query}
or end with a parameter prefix the encoded query is appended to:
    https://www.bing.com/search?q=

Encoding matches JavaScript's encodeURIComponent, so only
A-Z a-z 0-9 - _ . ! ~ * ' ( ) pass through unescaped. decode_component()
is its inverse and is what the extractor uses to read query values.
"""

import re
from urllib.parse import quote, unquote_to_bytes

from powersearch.errors import DecodeError

PLACEHOLDER = "{query}"

_UNRESERVED = "-_.!~*'()"
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_query(query: str) -> str:
    """Percent-encode a query for use inside a URL component."""
    return quote(query, safe=_UNRESERVED)


def decode_component(value: str, plus_as_space: bool = True) -> str:
    """
    Strictly decode a percent-encoded query string value.

    Args:
        value: Raw value as it appears in the URL
        plus_as_space: Treat '+' as an encoded space (form encoding)

    Returns:
        The decoded text

    Raises:
        DecodeError: A '%' is not followed by two hex digits, or the
            value (raw or escaped) is not valid UTF-8
    """
    if plus_as_space:
        value = value.replace("+", " ")

    if _BAD_ESCAPE.search(value):
        raise DecodeError(value)

    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeError as e:
        raise DecodeError(value, "value is not valid UTF-8") from e


def build_search_url(template: str, query: str) -> str:
    """
    Build the destination URL for a query.

    Only the first {query} placeholder is replaced. Without a placeholder
    the encoded query is appended verbatim, with no separator added.

    Example:
        build_search_url("https://www.bing.com/search?q={query}", "rust tutorial")
        -> "https://www.bing.com/search?q=rust%20tutorial"
    """
    encoded = encode_query(query)
    if PLACEHOLDER in template:
        return template.replace(PLACEHOLDER, encoded, 1)
    return template + encoded
