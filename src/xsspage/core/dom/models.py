"""Data models for the DOM pattern scanner.

Catalog records (``SinkDefinition``, ``SourceDefinition``, ``KnownPattern``,
``SafeAlternative``) are read-only rule data. Everything else is produced
by a single ``scan_code`` call and discarded with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from xsspage.core.severity import Severity


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SinkDefinition:
    """A dangerous API that renders or executes what it is given.

    Attributes:
        name: Text searched for in code (``innerHTML``, ``document.write``).
        type: Syntax family deciding the detection regex: ``property``,
            ``method``, ``function``, ``constructor``, ``prop``,
            ``directive`` or ``binding``.
        framework: ``vanilla`` entries apply to every scan; others only when
            the scan's framework hint matches.
    """

    name: str
    type: str
    severity: Severity
    description: str
    example: str
    safe_alternative: str
    framework: str = "vanilla"
    cwe: str | None = None


@dataclass(frozen=True)
class SourceDefinition:
    """An origin of attacker-controllable data (``location.hash``, ...)."""

    name: str
    type: str
    severity: Severity
    description: str
    example: str
    validation: str


@dataclass(frozen=True)
class KnownPattern:
    """A named source/sink pairing recognised by plain substring presence."""

    name: str
    source: str
    sink: str
    example: str
    severity: Severity
    fix: str


@dataclass(frozen=True)
class SafeAlternative:
    name: str
    description: str
    when: str
    example: str = ""

    def to_dict(self) -> dict[str, str]:
        data = {"name": self.name, "description": self.description, "when": self.when}
        if self.example:
            data["example"] = self.example
        return data


# ---------------------------------------------------------------------------
# Scan output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Finding:
    """One regex match of a catalog entry against a line of scanned code.

    Sink findings carry ``safe_alternative``, ``cwe`` and ``framework``;
    source findings carry ``validation``.
    """

    type: str
    name: str
    severity: Severity
    line: int
    column: int
    snippet: str
    description: str
    safe_alternative: str | None = None
    cwe: str | None = None
    framework: str | None = None
    validation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "severity": self.severity.label,
            "line": self.line,
            "column": self.column,
            "snippet": self.snippet,
            "description": self.description,
        }
        if self.type == "sink":
            data["safeAlternative"] = self.safe_alternative
            data["cwe"] = self.cwe
            data["framework"] = self.framework
        else:
            data["validation"] = self.validation
        return data


@dataclass(frozen=True)
class Detection:
    """Where a sink or source was seen; the input to flow inference."""

    name: str
    line: int
    snippet: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "line": self.line, "snippet": self.snippet}


@dataclass(frozen=True)
class DataFlow:
    """A heuristic source-to-sink link inferred from line proximity.

    This is not taint tracking: it only records that a source and a sink
    sit within a few lines of each other and share an identifier.
    """

    source: str
    sink: str
    source_line: int
    sink_line: int
    distance: int
    confidence: str
    description: str
    severity: Severity = Severity.CRITICAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "sink": self.sink,
            "sourceLine": self.source_line,
            "sinkLine": self.sink_line,
            "distance": self.distance,
            "confidence": self.confidence,
            "description": self.description,
            "severity": self.severity.label,
        }


@dataclass(frozen=True)
class PatternMatch:
    """A ``KnownPattern`` whose source and sink both occur in the code."""

    name: str
    severity: Severity
    description: str
    example: str
    fix: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "severity": self.severity.label,
            "description": self.description,
            "example": self.example,
            "fix": self.fix,
        }


@dataclass(frozen=True)
class ScanSummary:
    total_findings: int = 0
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    sink_count: int = 0
    source_count: int = 0
    data_flow_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFindings": self.total_findings,
            "criticalCount": self.critical_count,
            "highCount": self.high_count,
            "mediumCount": self.medium_count,
            "sinkCount": self.sink_count,
            "sourceCount": self.source_count,
            "dataFlowCount": self.data_flow_count,
        }


@dataclass
class ScanResult:
    """The complete result of scanning one piece of code."""

    findings: list[Finding] = field(default_factory=list)
    detected_sinks: list[Detection] = field(default_factory=list)
    detected_sources: list[Detection] = field(default_factory=list)
    data_flows: list[DataFlow] = field(default_factory=list)
    known_patterns: list[PatternMatch] = field(default_factory=list)
    summary: ScanSummary = field(default_factory=ScanSummary)

    @property
    def max_severity(self) -> Severity | None:
        """Return the highest severity among all findings, or None if clean."""
        if not self.findings:
            return None
        return max(f.severity for f in self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "findings": [f.to_dict() for f in self.findings],
            "detectedSinks": [d.to_dict() for d in self.detected_sinks],
            "detectedSources": [d.to_dict() for d in self.detected_sources],
            "dataFlows": [f.to_dict() for f in self.data_flows],
            "knownPatterns": [p.to_dict() for p in self.known_patterns],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class RiskScore:
    """Additive risk score in [0, 100] with its level and blurb."""

    score: int
    level: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "level": self.level, "description": self.description}


@dataclass(frozen=True)
class RemediationAdvice:
    title: str
    alternatives: tuple[SafeAlternative, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "alternatives": [a.to_dict() for a in self.alternatives],
        }
