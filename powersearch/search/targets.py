"""
Switch Targets - Engines a detected query can be sent to.

Targets are the built-in destinations followed by the user's custom engines.
The first nine get digit shortcuts "1".."9"; all targets are disabled while
no query is detected.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from powersearch.engines.registry import CustomEngineEntry

DEFAULT_ICON = "🔍"
MAX_SHORTCUTS = 9


@dataclass
class SwitchTarget:
    """A single switch destination for display."""
    name: str
    url: str  # URL template
    icon: str = DEFAULT_ICON
    custom: bool = False
    shortcut: Optional[str] = None
    enabled: bool = True

    @property
    def title(self) -> str:
        if self.shortcut:
            return f"{self.name} (shortcut: {self.shortcut})"
        return self.name

    @classmethod
    def from_engine(cls, engine: CustomEngineEntry) -> "SwitchTarget":
        return cls(
            name=engine.name,
            url=engine.url,
            icon=engine.icon or DEFAULT_ICON,
            custom=True,
        )


def build_targets(
    templates: Iterable[SwitchTarget],
    custom: Iterable[CustomEngineEntry],
    has_query: bool,
) -> list[SwitchTarget]:
    """
    Lay out the ordered target list.

    Args:
        templates: Built-in or configured targets
        custom: Custom engines, appended after the templates
        has_query: Whether a query was detected (targets are enabled)

    Returns:
        Fresh SwitchTarget objects with shortcuts and enabled state assigned
    """
    targets = [
        SwitchTarget(name=t.name, url=t.url, icon=t.icon or DEFAULT_ICON, custom=t.custom)
        for t in templates
    ]
    targets.extend(SwitchTarget.from_engine(engine) for engine in custom)

    for i, target in enumerate(targets):
        target.enabled = has_query
        if i < MAX_SHORTCUTS:
            target.shortcut = str(i + 1)
    return targets


def target_for_shortcut(targets: list[SwitchTarget], key: str) -> Optional[SwitchTarget]:
    """
    Resolve a digit key to a target, counting enabled targets only.

    Returns:
        The target, or None if the key is not "1".."9" or out of range
    """
    if not isinstance(key, str) or len(key) != 1 or not "1" <= key <= "9":
        return None

    enabled = [t for t in targets if t.enabled]
    index = int(key) - 1
    if index < len(enabled):
        return enabled[index]
    return None
