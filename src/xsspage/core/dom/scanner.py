"""Line-oriented sink/source scanner for JavaScript and template code.

Matching is regex based and deliberately shallow: there is no parser, and
the data-flow step only pairs a source and a sink that sit within a few
lines of each other and mention a common identifier.
"""

from __future__ import annotations

import logging
import re

from xsspage.core.dom.catalog import (
    DANGEROUS_SINKS,
    FRAMEWORK_INDICATORS,
    JS_KEYWORDS,
    KNOWN_PATTERNS,
    UNTRUSTED_SOURCES,
)
from xsspage.core.dom.models import (
    DataFlow,
    Detection,
    Finding,
    PatternMatch,
    RiskScore,
    ScanResult,
    ScanSummary,
    SinkDefinition,
    SourceDefinition,
)
from xsspage.core.severity import Severity

logger = logging.getLogger(__name__)

MAX_FLOW_DISTANCE = 5

_IDENTIFIER = re.compile(r"\b([a-zA-Z_$][a-zA-Z0-9_$]*)\b")

_RISK_WEIGHTS = {
    Severity.CRITICAL: 10,
    Severity.HIGH: 5,
    Severity.MEDIUM: 2,
}
_FLOW_WEIGHT = 15
_KNOWN_PATTERN_WEIGHT = 8

_RISK_LEVELS = (
    (50, "critical", "Critical: Multiple severe vulnerabilities detected"),
    (20, "high", "High: Significant security issues found"),
    (10, "medium", "Medium: Some potential vulnerabilities detected"),
    (0, "low", "Low: Few or no serious issues found"),
)


# ---------------------------------------------------------------------------
# Pattern construction
# ---------------------------------------------------------------------------


def _name_pattern(name: str) -> str:
    """Escape a catalog name for use inside a detection regex.

    A trailing ``()`` is dropped, the placeholder receivers ``element.`` and
    ``$`` are removed and ``*`` becomes an identifier wildcard, so that
    ``element.on*`` finds ``btn.onclick =`` and ``$.html()`` finds
    ``$("p").html(``.
    """
    term = name[:-2] if name.endswith("()") else name
    if term.startswith("element."):
        term = term[len("element"):]
    elif term.startswith("$."):
        term = term[1:]
    pattern = re.escape(term).replace(r"\*", r"\w+")
    # Leading dot already consumed by the receiver placeholder.
    return pattern[2:] if pattern.startswith(r"\.") else pattern


def sink_pattern(sink: SinkDefinition) -> re.Pattern[str] | None:
    """Build the detection regex for *sink* from its syntax family."""
    name = _name_pattern(sink.name)
    if sink.type == "property":
        return re.compile(rf"\.{name}\s*=")
    if sink.type == "method":
        if sink.name.startswith("$."):
            return re.compile(rf"\.{name}\s*\(")
        return re.compile(rf"{name}\s*\(")
    if sink.type == "function":
        return re.compile(rf"\b{name}\s*\(")
    if sink.type == "constructor":
        return re.compile(rf"new\s+{name}\s*\(")
    if sink.type in ("prop", "directive", "binding"):
        return re.compile(rf"{name}\s*=")
    logger.debug("No pattern rule for sink type %r (%s)", sink.type, sink.name)
    return None


def source_pattern(source: SourceDefinition) -> re.Pattern[str] | None:
    """Build the detection regex for *source* from its syntax family."""
    if source.type == "property":
        return re.compile(rf"\b{re.escape(source.name)}\b")
    if source.type == "event":
        return re.compile(r"\b(e|event)\.data\b")
    if source.type == "api":
        return re.compile(rf"\b{re.escape(source.name)}")
    logger.debug("No pattern rule for source type %r (%s)", source.type, source.name)
    return None


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def _scan_lines(
    lines: list[str],
    pattern: re.Pattern[str],
) -> list[tuple[int, int, str]]:
    """Return ``(line, column, snippet)`` for every match, all 1-based."""
    hits: list[tuple[int, int, str]] = []
    for index, line in enumerate(lines):
        for match in pattern.finditer(line):
            hits.append((index + 1, match.start() + 1, line.strip()))
    return hits


def _shared_identifier(first: str, second: str) -> str | None:
    """Return an identifier (not a keyword) present in both lines, if any."""
    names = {
        name for name in _IDENTIFIER.findall(first) if name not in JS_KEYWORDS
    }
    for name in _IDENTIFIER.findall(second):
        if name in names:
            return name
    return None


def _flow_confidence(distance: int) -> str:
    if distance == 0:
        return "high"
    if distance <= 2:
        return "medium"
    return "low"


def _infer_flows(
    sources: list[Detection],
    sinks: list[Detection],
) -> list[DataFlow]:
    """Pair sources with nearby sinks.

    A pair counts when the lines are at most ``MAX_FLOW_DISTANCE`` apart and
    either share an identifier or are the same line.
    """
    flows: list[DataFlow] = []
    for source in sources:
        for sink in sinks:
            distance = abs(source.line - sink.line)
            if distance > MAX_FLOW_DISTANCE:
                continue
            if distance != 0 and _shared_identifier(source.snippet, sink.snippet) is None:
                continue
            flows.append(DataFlow(
                source=source.name,
                sink=sink.name,
                source_line=source.line,
                sink_line=sink.line,
                distance=distance,
                confidence=_flow_confidence(distance),
                description=f"Potential data flow from {source.name} to {sink.name}",
            ))
    return flows


def _match_known_patterns(code: str) -> list[PatternMatch]:
    return [
        PatternMatch(
            name=pattern.name,
            severity=pattern.severity,
            description=f"Potential {pattern.name} vulnerability detected",
            example=pattern.example,
            fix=pattern.fix,
        )
        for pattern in KNOWN_PATTERNS
        if pattern.source in code and pattern.sink in code
    ]


def _summarize(
    findings: list[Finding],
    sinks: list[Detection],
    sources: list[Detection],
    flows: list[DataFlow],
) -> ScanSummary:
    return ScanSummary(
        total_findings=len(findings),
        critical_count=sum(1 for f in findings if f.severity == Severity.CRITICAL),
        high_count=sum(1 for f in findings if f.severity == Severity.HIGH),
        medium_count=sum(1 for f in findings if f.severity == Severity.MEDIUM),
        sink_count=len(sinks),
        source_count=len(sources),
        data_flow_count=len(flows),
    )


def scan_code(code: str, framework: str = "vanilla") -> ScanResult:
    """Scan *code* for dangerous sinks, untrusted sources and likely flows.

    Args:
        code: JavaScript, JSX or template source text.
        framework: Enables the framework-specific sinks (``react``, ``vue``,
            ``angular``, ``jquery``) on top of the vanilla ones.

    Returns:
        A ``ScanResult``; empty when *code* is empty or not a string.
    """
    if not isinstance(code, str) or not code:
        return ScanResult()

    lines = code.split("\n")
    findings: list[Finding] = []
    detected_sinks: list[Detection] = []
    detected_sources: list[Detection] = []

    for sink in DANGEROUS_SINKS:
        if sink.framework not in ("vanilla", framework):
            continue
        pattern = sink_pattern(sink)
        if pattern is None:
            continue
        for line, column, snippet in _scan_lines(lines, pattern):
            findings.append(Finding(
                type="sink",
                name=sink.name,
                severity=sink.severity,
                line=line,
                column=column,
                snippet=snippet,
                description=sink.description,
                safe_alternative=sink.safe_alternative,
                cwe=sink.cwe,
                framework=sink.framework,
            ))
            detected_sinks.append(Detection(sink.name, line, snippet))

    for source in UNTRUSTED_SOURCES:
        pattern = source_pattern(source)
        if pattern is None:
            continue
        for line, column, snippet in _scan_lines(lines, pattern):
            findings.append(Finding(
                type="source",
                name=source.name,
                severity=source.severity,
                line=line,
                column=column,
                snippet=snippet,
                description=source.description,
                validation=source.validation,
            ))
            detected_sources.append(Detection(source.name, line, snippet))

    flows = _infer_flows(detected_sources, detected_sinks)
    known = _match_known_patterns(code)
    logger.debug(
        "Scanned %d lines (%s): %d findings, %d flows, %d known patterns",
        len(lines), framework, len(findings), len(flows), len(known),
    )

    return ScanResult(
        findings=findings,
        detected_sinks=detected_sinks,
        detected_sources=detected_sources,
        data_flows=flows,
        known_patterns=known,
        summary=_summarize(findings, detected_sinks, detected_sources, flows),
    )


# ---------------------------------------------------------------------------
# Scoring and framework detection
# ---------------------------------------------------------------------------


def calculate_risk_score(result: ScanResult) -> RiskScore:
    """Additive risk score for a scan, capped at 100."""
    score = sum(_RISK_WEIGHTS.get(f.severity, 0) for f in result.findings)
    score += _FLOW_WEIGHT * len(result.data_flows)
    score += _KNOWN_PATTERN_WEIGHT * len(result.known_patterns)
    score = min(score, 100)

    for threshold, level, description in _RISK_LEVELS:
        if score >= threshold:
            break
    return RiskScore(score=score, level=level, description=description)


def detect_framework(code: str) -> str:
    """Guess the framework of *code*; the first indicator hit wins."""
    if not isinstance(code, str):
        return "vanilla"
    for framework, indicators in FRAMEWORK_INDICATORS.items():
        if any(indicator.search(code) for indicator in indicators):
            return framework
    return "vanilla"
