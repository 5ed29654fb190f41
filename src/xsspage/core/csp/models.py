"""Data models for the CSP evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from xsspage.core.severity import Severity


@dataclass(frozen=True)
class CSPDirective:
    """Reference entry describing one CSP directive.

    Attributes:
        category: One of ``fetch``, ``document``, ``navigation``,
            ``reporting`` or ``other``. Only ``fetch`` directives get their
            source values checked during parsing.
        xss_impact: How much the directive matters for XSS, when rated.
        deprecated: Parsing a deprecated directive yields a warning.
    """

    name: str
    description: str
    category: str
    examples: tuple[str, ...] = ()
    common_mistakes: tuple[str, ...] = ()
    recommendation: str = ""
    browser_support: str = "all"
    xss_impact: str | None = None
    deprecated: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "examples": list(self.examples),
            "commonMistakes": list(self.common_mistakes),
            "recommendation": self.recommendation,
            "browserSupport": self.browser_support,
        }
        if self.xss_impact is not None:
            data["xssImpact"] = self.xss_impact
        if self.deprecated:
            data["deprecated"] = True
        return data


@dataclass(frozen=True)
class CSPTemplate:
    name: str
    description: str
    policy: str
    pros: tuple[str, ...]
    cons: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "policy": self.policy,
            "pros": list(self.pros),
            "cons": list(self.cons),
        }


@dataclass(frozen=True)
class BypassTechnique:
    name: str
    description: str
    example: str
    mitigation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "example": self.example,
            "mitigation": self.mitigation,
        }


@dataclass(frozen=True)
class ParsedDirective:
    """One ``;``-delimited segment of a policy.

    ``index`` is the segment's position in the raw header. When a name
    repeats, the later segment replaces the earlier one.
    """

    name: str
    values: tuple[str, ...]
    raw: str
    index: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "values": list(self.values),
            "raw": self.raw,
            "index": self.index,
        }


@dataclass
class ParsedCSP:
    """A parsed policy.

    ``errors`` and ``warnings`` are None when empty, never ``[]``; callers
    branch on their truthiness.
    """

    directives: dict[str, ParsedDirective] = field(default_factory=dict)
    raw: str = ""
    errors: list[str] | None = None
    warnings: list[str] | None = None

    def values_of(self, name: str) -> tuple[str, ...]:
        """Values of directive *name*, or an empty tuple when absent."""
        directive = self.directives.get(name)
        return directive.values if directive is not None else ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "directives": {
                name: directive.to_dict()
                for name, directive in self.directives.items()
            },
            "raw": self.raw,
            "errors": self.errors,
            "warnings": self.warnings,
        }


@dataclass(frozen=True)
class CSPVerdict:
    """Whether a payload would be blocked by a policy, and why."""

    blocked: bool
    reason: str
    severity: Severity
    directive: str | None = None
    recommendation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "blocked": self.blocked,
            "reason": self.reason,
            "severity": self.severity.label,
        }
        if self.directive is not None:
            data["directive"] = self.directive
        if self.recommendation is not None:
            data["recommendation"] = self.recommendation
        return data


@dataclass(frozen=True)
class SecurityScore:
    """A 0-100 policy score with its rating band and the itemised reasons."""

    score: int
    rating: str
    color: str
    issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "rating": self.rating,
            "color": self.color,
            "issues": list(self.issues),
        }
