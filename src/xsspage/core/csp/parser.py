"""Content-Security-Policy header parser and validator.

``parse_csp`` never raises. Problems with the policy are reported as
warnings on the returned ``ParsedCSP``; only a missing or non-string header
is an error.
"""

from __future__ import annotations

import logging

from xsspage.core.csp.directives import CSP_DIRECTIVES
from xsspage.core.csp.models import ParsedCSP, ParsedDirective

logger = logging.getLogger(__name__)

INVALID_HEADER = "Invalid CSP header"


def _source_value_warnings(name: str, values: tuple[str, ...]) -> list[str]:
    """Risky source values inside a fetch directive."""
    warnings: list[str] = []
    for value in values:
        if value == "'unsafe-inline'" and name in ("script-src", "style-src"):
            warnings.append(f"{name} contains 'unsafe-inline' - this defeats XSS protection")
        if value == "'unsafe-eval'" and name == "script-src":
            warnings.append(f"{name} contains 'unsafe-eval' - this allows eval() and is dangerous")
        if value == "*":
            warnings.append(f"{name} contains wildcard (*) - this allows any source")
        if value == "http:":
            warnings.append(f"{name} allows HTTP sources - prefer HTTPS for security")
    return warnings


def _misconfiguration_warnings(directives: dict[str, ParsedDirective]) -> list[str]:
    """Policy-wide checks that look at which directives are present."""
    warnings: list[str] = []

    if "base-uri" not in directives:
        warnings.append(
            "Missing 'base-uri' directive - vulnerable to base tag injection attacks"
        )

    if "object-src" not in directives:
        warnings.append(
            "Missing 'object-src' directive - consider setting to 'none' "
            "unless you need plugins"
        )

    sandbox = directives.get("sandbox")
    if sandbox is not None and {"allow-scripts", "allow-same-origin"} <= set(sandbox.values):
        warnings.append(
            "Sandbox with both 'allow-scripts' and 'allow-same-origin' defeats the sandbox"
        )

    default_src = directives.get("default-src")
    if default_src is not None:
        if any(value in ("*", "https:", "http:") for value in default_src.values):
            warnings.append(
                "'default-src' is very permissive - consider restricting to specific sources"
            )
    else:
        warnings.append(
            "Consider adding 'default-src' as a fallback for undefined directives"
        )

    return warnings


def parse_csp(header: object) -> ParsedCSP:
    """Split a policy header into directives and validate them.

    Segments are separated by ``;``; inside a segment the first
    whitespace-separated token is the directive name and the rest are its
    values. A repeated directive name replaces the earlier entry but keeps
    its position in ``directives``.

    Args:
        header: The raw ``Content-Security-Policy`` value.

    Returns:
        A ``ParsedCSP``. For an empty or non-string header, ``directives`` is
        empty and ``errors`` is ``["Invalid CSP header"]``.
    """
    if not header or not isinstance(header, str):
        return ParsedCSP(errors=[INVALID_HEADER])

    directives: dict[str, ParsedDirective] = {}
    warnings: list[str] = []

    segments = [s.strip() for s in header.split(";")]
    for index, segment in enumerate(s for s in segments if s):
        name, *rest = segment.split()
        values = tuple(rest)
        definition = CSP_DIRECTIVES.get(name)

        if definition is None:
            warnings.append(
                f"Unknown directive: {name} (this may be valid but not in our database)"
            )
        elif definition.deprecated:
            warnings.append(f"Deprecated directive: {name}")

        directives[name] = ParsedDirective(name=name, values=values, raw=segment, index=index)

        if definition is not None and definition.category == "fetch":
            warnings.extend(_source_value_warnings(name, values))

    warnings.extend(_misconfiguration_warnings(directives))
    logger.debug("Parsed CSP with %d directives, %d warnings", len(directives), len(warnings))

    return ParsedCSP(
        directives=directives,
        raw=header,
        errors=None,
        warnings=warnings or None,
    )
