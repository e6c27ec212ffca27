"""
Error types raised by the PowerSearch core.

None of these are fatal: extraction failures degrade to "no query detected"
and rejected mutations leave the registry as it was.
"""


class PowerSearchError(Exception):
    """Base class for all PowerSearch errors."""


class UrlParseError(PowerSearchError):
    """The page URL could not be parsed."""

    def __init__(self, url, reason: str = "malformed URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class DecodeError(PowerSearchError):
    """A query parameter value has malformed percent-encoding."""

    def __init__(self, value: str, reason: str = "malformed percent-encoding"):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")


class ValidationError(PowerSearchError):
    """A custom engine is missing a required field or collides with another."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class NotFoundError(PowerSearchError):
    """No custom engine exists at the given index."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"No custom engine at index {index}")


class StorageError(PowerSearchError):
    """The backing key-value store failed to read or write."""


class NoQueryError(PowerSearchError):
    """An engine switch was requested but no search query was detected."""

    def __init__(self, message: str = "No search query detected, cannot switch engines"):
        super().__init__(message)
