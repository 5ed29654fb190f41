"""Pattern-based XSS indicator detection for single payloads.

This is educational pattern matching, not a security scanner: it reports
which well-known XSS building blocks appear in a string and expects both
false positives and false negatives.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from xsspage.core.severity import Severity

DETECTION_NOTE = (
    "This is educational pattern matching, not a real security scanner. "
    "False positives and negatives are expected."
)

_SCRIPT_WITH_CONTENT = re.compile(r"<script[\s\S]*?>[\s\S]*?</script>", re.IGNORECASE)
_SCRIPT_OPEN = re.compile(r"<script[\s\S]*?>", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on(\w+)\s*=", re.IGNORECASE)
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_DATA_HTML = re.compile(r"data:text/html", re.IGNORECASE)
_CSS_EXPRESSION = re.compile(r"expression\s*\(", re.IGNORECASE)
_CSS_IMPORT = re.compile(r"@import", re.IGNORECASE)
_STRING_TRICKS = re.compile(r"['\"]\s*\+|\\x|\\u[0-9a-f]{4}", re.IGNORECASE)
_HTML_ENTITIES = re.compile(r"&#\d+;|&#x[0-9a-f]+;", re.IGNORECASE)

_XSS_TAGS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"<{tag}[\s\S]*?>", re.IGNORECASE), f"{tag.upper()} tag")
    for tag in (
        "svg", "img", "iframe", "object", "embed", "link",
        "style", "base", "form", "input", "button", "meta",
    )
)

_CRITICAL_MARKERS = ("Script tag", "IFRAME tag", "OBJECT tag", "EMBED tag")
_HIGH_MARKERS = ("Event handler", "SVG tag", "JavaScript protocol")


@dataclass(frozen=True)
class DetectionResult:
    would_execute: bool
    patterns: tuple[str, ...] = field(default_factory=tuple)
    confidence: str = "low"
    note: str = DETECTION_NOTE

    @property
    def severity(self) -> Severity:
        return get_severity(self.patterns)

    def to_dict(self) -> dict[str, Any]:
        return {
            "wouldExecute": self.would_execute,
            "patterns": list(self.patterns),
            "disclaimer": True,
            "confidence": self.confidence,
            "note": self.note,
        }


def detect_xss(payload: object) -> DetectionResult:
    """List the XSS indicators present in *payload*.

    Empty or non-string input yields ``would_execute=False`` and no patterns.
    """
    if not payload or not isinstance(payload, str):
        return DetectionResult(would_execute=False)

    patterns: list[str] = []

    if _SCRIPT_WITH_CONTENT.search(payload):
        patterns.append("Script tag with content")
    elif _SCRIPT_OPEN.search(payload):
        patterns.append("Script tag")

    handler = _EVENT_HANDLER.search(payload)
    if handler:
        patterns.append(f"Event handler: {handler.group(1)}")

    if _JS_PROTOCOL.search(payload):
        patterns.append("JavaScript protocol")
    if _DATA_HTML.search(payload):
        patterns.append("Data URL (HTML)")

    patterns.extend(name for pattern, name in _XSS_TAGS if pattern.search(payload))

    if _CSS_EXPRESSION.search(payload):
        patterns.append("CSS expression (IE)")
    if _CSS_IMPORT.search(payload):
        patterns.append("CSS @import")
    if _STRING_TRICKS.search(payload):
        patterns.append("String manipulation/encoding")
    if _HTML_ENTITIES.search(payload):
        patterns.append("HTML entities")

    return DetectionResult(
        would_execute=bool(patterns),
        patterns=tuple(patterns),
        confidence="medium" if patterns else "low",
    )


def get_severity(patterns: tuple[str, ...] | list[str]) -> Severity:
    """Severity implied by a list of detected pattern names."""
    if not patterns:
        return Severity.LOW
    if any(marker in p for p in patterns for marker in _CRITICAL_MARKERS):
        return Severity.CRITICAL
    if any(marker in p for p in patterns for marker in _HIGH_MARKERS) or len(patterns) >= 3:
        return Severity.HIGH
    if len(patterns) >= 2:
        return Severity.MEDIUM
    return Severity.LOW
