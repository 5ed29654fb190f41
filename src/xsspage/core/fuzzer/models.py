"""Data models for the mutation engine: Mutation, MutationResult, FilterVerdict.

Kept apart from the transforms so the CLI and the HTTP adapter can import
the result types without pulling in the strategy catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Mutation:
    """One variant of a base payload.

    Attributes:
        payload: The mutated string. Uniqueness within a result is decided
            on this field alone.
        strategy: Output-level tag of the transform that produced it
            (e.g. ``"html-entity-hex"``), or ``"original"``.
        encoding: Encoding family (``html``, ``url``, ``unicode``,
            ``base64`` or ``none``).
    """

    payload: str
    strategy: str
    encoding: str

    def to_dict(self) -> dict[str, str]:
        return {
            "payload": self.payload,
            "strategy": self.strategy,
            "encoding": self.encoding,
        }


@dataclass
class MutationResult:
    """Deduplicated output of ``generate_mutations``.

    Attributes:
        mutations: Unique mutations in first-seen order, the original first.
        total: ``len(mutations)``.
        strategies: Strategy keys that were enabled in the request.
    """

    mutations: list[Mutation] = field(default_factory=list)
    total: int = 0
    strategies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mutations": [m.to_dict() for m in self.mutations],
            "total": self.total,
            "strategies": list(self.strategies),
        }


@dataclass(frozen=True)
class FilterVerdict:
    """Whether one mutation is caught by a user-supplied filter."""

    payload: str
    strategy: str
    blocked: bool
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "payload": self.payload,
            "strategy": self.strategy,
            "blocked": self.blocked,
            "reason": self.reason,
        }
