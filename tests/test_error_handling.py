"""
Tests for error handling across the extractor, registry and session.

Verifies graceful degradation when things go wrong:
- Malformed URLs and encodings
- Rejected mutations leave state intact
"""

import asyncio

import pytest

from powersearch.engines.registry import CustomEngineEntry
from powersearch.errors import (
    DecodeError,
    NoQueryError,
    NotFoundError,
    PowerSearchError,
    StorageError,
    UrlParseError,
    ValidationError,
)
from powersearch.search.extractor import extract_query
from powersearch.services.switcher import SwitcherSession


class TestErrorTypes:
    """Test error attributes and hierarchy."""

    @pytest.mark.parametrize("error", [
        UrlParseError("x"),
        DecodeError("%zz"),
        ValidationError("name", "missing"),
        NotFoundError(3),
        StorageError("disk full"),
        NoQueryError(),
    ])
    def test_all_are_powersearch_errors(self, error):
        assert isinstance(error, PowerSearchError)

    def test_validation_error_fields(self):
        error = ValidationError("domain", "A custom engine for 'x' already exists")
        assert error.field == "domain"
        assert str(error) == "A custom engine for 'x' already exists"

    def test_not_found_message(self):
        assert "5" in str(NotFoundError(5))


class TestExtractionNeverRaises:
    """Garbage in, None out."""

    @pytest.mark.parametrize("url", [
        "://",
        "javascript:alert(1)",
        "https://www.google.com/search?q=%",
        "https://www.google.com/search?q=%E4",
        "http://user@:80/?q=%GG",
        "\x00\x01",
        b"https://www.google.com/search?q=bytes",
    ])
    def test_no_exception(self, registry, url):
        extract_query(url, registry)

    def test_bytes_url_is_rejected(self, registry):
        assert extract_query(b"https://www.google.com/search?q=x", registry) is None


class TestRejectedMutations:
    """Rejected edits change neither memory nor storage."""

    def test_invalid_add_not_saved(self, memory_store, kagi):
        session = asyncio.run(SwitcherSession.open(memory_store, "https://www.bing.com/search?q=x"))
        asyncio.run(session.add_engine(kagi))

        with pytest.raises(ValidationError):
            asyncio.run(session.add_engine(CustomEngineEntry("", "u", "d.test", "q")))

        assert session.custom_engines == [kagi]
        assert asyncio.run(memory_store.load()) == [kagi]

    def test_query_survives_rejected_edit(self, memory_store):
        session = asyncio.run(SwitcherSession.open(memory_store, "https://www.bing.com/search?q=x"))
        with pytest.raises(NotFoundError):
            asyncio.run(session.delete_engine(0))
        assert session.current_query == "x"
