"""Assemble policy headers and one-call policy analysis."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from xsspage.core.csp.parser import parse_csp
from xsspage.core.csp.scoring import calculate_security_score


def generate_csp(options: Mapping[str, Iterable[str]]) -> str:
    """Join ``{directive: values}`` into a header string.

    Directives keep the mapping's order; entries with no values are skipped.

    Example::

        >>> generate_csp({"default-src": ["'self'"], "img-src": ["'self'", "data:"]})
        "default-src 'self'; img-src 'self' data:"
    """
    parts: list[str] = []
    for name, values in options.items():
        values = list(values or ())
        if values:
            parts.append(f"{name} {' '.join(values)}")
    return "; ".join(parts)


def analyze_csp(header: str) -> dict[str, Any]:
    """Parse *header* and score it in one call, returning plain dicts."""
    parsed = parse_csp(header)
    return {
        "parsed": parsed.to_dict(),
        "score": calculate_security_score(parsed).to_dict(),
    }
