"""0-100 security score for a parsed policy."""

from __future__ import annotations

from xsspage.core.csp.models import ParsedCSP, SecurityScore

# (value, points, issue text); applied at most once per directive.
_VALUE_DEDUCTIONS: tuple[tuple[str, int, str], ...] = (
    ("'unsafe-inline'", 15, "uses 'unsafe-inline'"),
    ("'unsafe-eval'", 15, "uses 'unsafe-eval'"),
    ("*", 10, "uses wildcard (*)"),
    ("http:", 10, "allows HTTP"),
)

_RATINGS: tuple[tuple[int, str, str], ...] = (
    (80, "Excellent", "green"),
    (60, "Good", "blue"),
    (40, "Fair", "yellow"),
    (20, "Poor", "orange"),
    (0, "Weak", "red"),
)


def rating_for(score: int) -> tuple[str, str]:
    """Return ``(rating, color)`` for a clamped score."""
    for threshold, rating, color in _RATINGS:
        if score >= threshold:
            return rating, color
    return _RATINGS[-1][1], _RATINGS[-1][2]


def calculate_security_score(parsed: ParsedCSP) -> SecurityScore:
    """Score a policy starting from 100.

    Risky values cost points per directive, missing ``base-uri``,
    ``object-src`` and fallback directives cost points, and script nonces
    and a locked-down ``base-uri`` earn a small bonus. The result is clamped
    to ``[0, 100]``.
    """
    score = 100
    issues: list[str] = []
    directives = parsed.directives

    for name, directive in directives.items():
        for value, points, text in _VALUE_DEDUCTIONS:
            if value in directive.values:
                score -= points
                issues.append(f"{name} {text} (-{points} points)")

    if "base-uri" not in directives:
        score -= 5
        issues.append("Missing 'base-uri' directive (-5 points)")

    if "object-src" not in directives:
        score -= 3
        issues.append("Missing 'object-src' directive (-3 points)")

    if "default-src" not in directives and "script-src" not in directives:
        score -= 10
        issues.append("Missing 'default-src' or 'script-src' directive (-10 points)")

    if any(v.startswith("'nonce-") for v in parsed.values_of("script-src")):
        score += 5
        issues.append("Uses nonces for scripts (+5 points)")

    base_uri = parsed.values_of("base-uri")
    if "'none'" in base_uri or "'self'" in base_uri:
        score += 3
        issues.append("Restricts base-uri (+3 points)")

    score = max(0, min(100, score))
    rating, color = rating_for(score)
    return SecurityScore(score=score, rating=rating, color=color, issues=tuple(issues))
