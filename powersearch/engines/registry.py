"""
Engine Registry - Built-in and user-defined search engine patterns.

Built-in entries map a hostname substring to an ordered list of candidate
query parameters. Custom entries add a single parameter for their domain and
take priority over built-ins, so a user can re-map e.g. google.com without
touching built-in data.

Lookup order for a hostname:
  1. Custom entries whose domain is a substring of it (insertion order)
  2. Lookup table keys that are a substring of it (built-in order, then
     keys introduced by custom entries)

The lookup table is derived: built-ins with every custom domain overlaid as
{domain: (param,)}. It is rebuilt after every mutation and built-ins are never
modified, so deleting a custom entry that shadowed a built-in restores it.

Matching is a plain substring test, so "www.google.co.uk" matches
"google.co.uk", and "notgoogle.com.evil.test" also matches "google.com".
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from loguru import logger

from powersearch.errors import NotFoundError, ValidationError

REQUIRED_FIELDS = ("name", "url", "domain", "param")


@dataclass(frozen=True)
class EngineEntry:
    """A built-in engine: hostname substring and its candidate parameters."""
    domain: str
    param_names: tuple[str, ...]

    def matches(self, hostname: str) -> bool:
        return self.domain.lower() in hostname


@dataclass(frozen=True)
class CustomEngineEntry:
    """A user-defined engine. Fields are trimmed on construction."""
    name: str
    url: str  # URL template, "{query}" placeholder or a prefix to append to
    domain: str
    param: str
    icon: Optional[str] = None

    def __post_init__(self):
        for attr in (*REQUIRED_FIELDS, "icon"):
            value = getattr(self, attr)
            if isinstance(value, str):
                object.__setattr__(self, attr, value.strip())
        if not self.icon:
            object.__setattr__(self, "icon", None)

    def matches(self, hostname: str) -> bool:
        return self.domain.lower() in hostname

    @classmethod
    def from_dict(cls, data: dict) -> "CustomEngineEntry":
        """
        Build an entry from its stored form.

        Missing fields become empty strings so validation can report them.
        """
        return cls(
            name=str(data.get("name") or ""),
            url=str(data.get("url") or ""),
            domain=str(data.get("domain") or ""),
            param=str(data.get("param") or ""),
            icon=str(data.get("icon") or ""),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["icon"] = self.icon or ""
        return data


class EngineRegistry:
    """
    Registry of search engines for one switcher session.

    Methods:
        lookup_candidates(hostname): Parameter names to try, in priority order
        add_custom(entry): Append a custom engine
        update_custom(index, entry): Replace the custom engine at index
        delete_custom(index): Remove the custom engine at index
        list(): Snapshot of custom engines in insertion order
    """

    def __init__(
        self,
        builtins: Optional[Iterable[EngineEntry]] = None,
        custom: Optional[Iterable[CustomEngineEntry]] = None,
    ):
        if builtins is None:
            from powersearch.engines.builtin import BUILTIN_ENGINES
            builtins = BUILTIN_ENGINES

        self._builtins: tuple[EngineEntry, ...] = tuple(builtins)
        self._custom: list[CustomEngineEntry] = []
        self._table: dict[str, tuple[str, ...]] = {}
        self.replace_custom(custom or [])

    @property
    def builtins(self) -> tuple[EngineEntry, ...]:
        return self._builtins

    def lookup_candidates(self, hostname: str) -> list[str]:
        """
        Collect query parameter candidates for a hostname.

        No entry is skipped because an earlier one matched; the caller scans
        the whole list for the first parameter that is present.

        Args:
            hostname: Lowercased hostname of the page

        Returns:
            Parameter names in priority order (may contain repeats)
        """
        candidates = [
            engine.param for engine in self._custom if engine.matches(hostname)
        ]
        for domain, params in self._table.items():
            if domain.lower() in hostname:
                candidates.extend(params)
        return candidates

    def lookup_table(self) -> dict[str, tuple[str, ...]]:
        """Copy of the derived domain -> parameters table."""
        return dict(self._table)

    def __len__(self) -> int:
        return len(self._custom)

    def add_custom(self, entry: CustomEngineEntry) -> None:
        """
        Append a custom engine.

        Raises:
            ValidationError: A required field is empty, or the name or
                domain is already used by another custom engine
        """
        self._validate(entry, self._custom)
        self._custom.append(entry)
        self._rebuild_index()
        logger.debug(f"Added custom engine '{entry.name}' for {entry.domain}")

    def update_custom(self, index: int, entry: CustomEngineEntry) -> None:
        """
        Replace the custom engine at index.

        The entry being replaced is excluded from the collision check, so an
        engine may keep its own name and domain.

        Raises:
            NotFoundError: index is out of range
            ValidationError: see add_custom
        """
        self._check_index(index)
        others = self._custom[:index] + self._custom[index + 1:]
        self._validate(entry, others)

        old = self._custom[index]
        self._custom[index] = entry
        self._rebuild_index()
        logger.debug(f"Updated custom engine #{index} '{old.name}' -> '{entry.name}'")

    def delete_custom(self, index: int) -> CustomEngineEntry:
        """
        Remove the custom engine at index.

        Later engines move down one index.

        Returns:
            The removed entry

        Raises:
            NotFoundError: index is out of range
        """
        self._check_index(index)
        removed = self._custom.pop(index)
        self._rebuild_index()
        logger.debug(f"Deleted custom engine '{removed.name}' for {removed.domain}")
        return removed

    def replace_custom(self, entries: Iterable[CustomEngineEntry]) -> None:
        """
        Replace the whole custom list, validating entries in order.

        Raises:
            ValidationError: An entry is invalid; the registry is unchanged
        """
        accepted: list[CustomEngineEntry] = []
        for entry in entries:
            self._validate(entry, accepted)
            accepted.append(entry)
        self._custom = accepted
        self._rebuild_index()

    def _rebuild_index(self) -> None:
        """Derive the lookup table from built-ins plus custom overlays."""
        table = {engine.domain: tuple(engine.param_names) for engine in self._builtins}
        for engine in self._custom:
            table[engine.domain] = (engine.param,)
        self._table = table

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or isinstance(index, bool):
            raise NotFoundError(index)
        if index < 0 or index >= len(self._custom):
            raise NotFoundError(index)

    @staticmethod
    def _validate(entry: CustomEngineEntry, others: list[CustomEngineEntry]) -> None:
        for name in REQUIRED_FIELDS:
            if not getattr(entry, name):
                raise ValidationError(name, f"Custom engine is missing '{name}'")

        for other in others:
            if other.name == entry.name:
                raise ValidationError(
                    "name", f"A custom engine named '{entry.name}' already exists"
                )
            if other.domain == entry.domain:
                raise ValidationError(
                    "domain", f"A custom engine for '{entry.domain}' already exists"
                )

    # Defined last: inside the class body the name shadows the builtin
    def list(self) -> list[CustomEngineEntry]:
        """Snapshot of custom engines in insertion order."""
        return list(self._custom)
