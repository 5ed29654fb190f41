"""Shared four-level severity scale."""

from __future__ import annotations

from enum import IntEnum


class Severity(IntEnum):
    """Four-level severity scale for findings and verdicts.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    Serialized forms use the lowercase name (``"critical"``).
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, label: str) -> Severity:
        """Parse a lowercase label such as ``"high"``; raises KeyError if unknown."""
        return cls[label.upper()]
