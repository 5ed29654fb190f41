"""Decide whether a payload would be blocked by a parsed policy.

The model is intentionally coarse. A payload is classified by substring
sniffing, mapped to the one directive that governs that resource type
(falling back to ``default-src``), and judged against that directive's
values alone. Hash sources are accepted without computing any digest: a
policy carrying any ``'sha256-'``, ``'sha384-'`` or ``'sha512-'`` value is
treated as allowing the inline payload.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlsplit

from xsspage.core.csp.models import CSPVerdict, ParsedCSP, ParsedDirective
from xsspage.core.severity import Severity

logger = logging.getLogger(__name__)

# Ordered; the first group with a hit decides the type.
_TYPE_INDICATORS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("script", ("<script", "javascript:", "eval(", "onerror=", "onload=", "onclick=")),
    ("style", ("<style", "@import")),
    ("img", ("<img", "<image")),
    ("frame", ("<iframe", "<frame")),
    ("object", ("<object", "<embed", "<applet")),
    ("img", ("<svg",)),
    ("media", ("<video", "<audio")),
    ("base", ("<base",)),
    ("form", ("<form",)),
)

DIRECTIVE_FOR_TYPE: dict[str, str] = {
    "script": "script-src",
    "style": "style-src",
    "img": "img-src",
    "frame": "frame-src",
    "object": "object-src",
    "media": "media-src",
    "base": "base-uri",
    "form": "form-action",
}

_HASH_PREFIXES = ("'sha256-", "'sha384-", "'sha512-")
_SCHEME_SOURCES = ("https:", "http:", "data:", "blob:")

_NONCE_ATTR = re.compile(r"nonce=['\"]([^'\"]+)['\"]")
_SRC_ATTR = re.compile(r"src=['\"]([^'\"]+)['\"]", re.IGNORECASE)
_HREF_ATTR = re.compile(r"href=['\"]([^'\"]+)['\"]", re.IGNORECASE)

_ASSUMED_ORIGIN = "https://example.com"


def detect_payload_type(payload: str) -> str:
    """Classify *payload* as ``script``, ``style``, ``img`` and so on.

    Unrecognised payloads are treated as ``script``.
    """
    lower = payload.lower()
    for payload_type, indicators in _TYPE_INDICATORS:
        if any(indicator in lower for indicator in indicators):
            return payload_type
    return "script"


def _has_nonce(payload: str, values: tuple[str, ...]) -> bool:
    match = _NONCE_ATTR.search(payload)
    if match is None:
        return False
    nonce = match.group(1)
    return any(v.startswith("'nonce-") and nonce in v for v in values)


def _has_hash(values: tuple[str, ...]) -> bool:
    return any(v.startswith(_HASH_PREFIXES) for v in values)


def _extract_source(payload: str) -> str | None:
    match = _SRC_ATTR.search(payload) or _HREF_ATTR.search(payload)
    return match.group(1) if match else None


def _source_allowed(source: str, values: tuple[str, ...]) -> bool:
    """Best-effort check of an external URL against a source list.

    ``'self'`` is taken to mean relative URLs only, since the page origin is
    unknown; when it is present no host matching is attempted.
    """
    if "*" in values:
        return True

    for scheme in _SCHEME_SOURCES:
        if source.startswith(scheme) and scheme in values:
            return True

    if "'self'" in values:
        return not source.startswith(("http://", "https://"))

    try:
        source_host = urlsplit(urljoin(_ASSUMED_ORIGIN, source)).netloc.lower()
    except ValueError:
        logger.debug("Could not resolve source URL %r", source)
        return False

    for value in values:
        if value.startswith("'"):
            continue
        allowed = urlsplit(value)
        if not allowed.scheme:
            # Bare host such as "cdn.example.com".
            if source_host in value:
                return True
            continue
        allowed_host = allowed.netloc.lower()
        if allowed_host == source_host:
            return True
        if allowed_host.startswith("*.") and source_host.endswith(allowed_host[2:]):
            return True
    return False


def _judge(payload: str, payload_type: str, directive: ParsedDirective) -> CSPVerdict:
    name = directive.name
    values = directive.values

    if "'none'" in values:
        return CSPVerdict(
            blocked=True,
            reason=f"{name} is set to 'none' - all {payload_type} sources blocked",
            severity=Severity.LOW,
            directive=name,
        )

    if payload_type in ("script", "style"):
        inline = "src=" not in payload and "href=" not in payload
        unsafe_inline = "'unsafe-inline'" in values
        if inline and not unsafe_inline and not _has_nonce(payload, values) \
                and not _has_hash(values):
            return CSPVerdict(
                blocked=True,
                reason=f"Inline {payload_type} blocked - no 'unsafe-inline', nonce, "
                       f"or hash in {name}",
                severity=Severity.LOW,
                directive=name,
            )
        if inline and unsafe_inline:
            return CSPVerdict(
                blocked=False,
                reason=f"Inline {payload_type} allowed due to 'unsafe-inline' in {name}",
                severity=Severity.HIGH,
                directive=name,
                recommendation="Remove 'unsafe-inline' and use nonces or hashes "
                               "for better security",
            )

    if payload_type == "script" and ("eval(" in payload or "Function(" in payload):
        if "'unsafe-eval'" not in values:
            return CSPVerdict(
                blocked=True,
                reason=f"eval() blocked - no 'unsafe-eval' in {name}",
                severity=Severity.LOW,
                directive=name,
            )
        return CSPVerdict(
            blocked=False,
            reason=f"eval() allowed due to 'unsafe-eval' in {name}",
            severity=Severity.HIGH,
            directive=name,
            recommendation="Remove 'unsafe-eval' - it's a major security risk",
        )

    if "src=" in payload or "href=" in payload:
        source = _extract_source(payload)
        if source:
            if _source_allowed(source, values):
                return CSPVerdict(
                    blocked=False,
                    reason=f"External source '{source}' is whitelisted in {name}",
                    severity=Severity.MEDIUM,
                    directive=name,
                )
            return CSPVerdict(
                blocked=True,
                reason=f"External source '{source}' not whitelisted in {name}",
                severity=Severity.LOW,
                directive=name,
            )

    return CSPVerdict(
        blocked=False,
        reason=f"Payload may be allowed by current {name} policy",
        severity=Severity.MEDIUM,
        directive=name,
        recommendation="Review your CSP policy for potential bypasses",
    )


def test_payload_against_csp(payload: str, parsed: ParsedCSP) -> CSPVerdict:
    """Predict whether *payload* would run under the *parsed* policy.

    Args:
        payload: An XSS payload such as ``<script>alert(1)</script>``.
        parsed: The result of ``parse_csp``.

    Returns:
        A ``CSPVerdict``. When neither the governing directive nor
        ``default-src`` is present the payload is reported as not blocked
        with high severity.
    """
    payload = payload if isinstance(payload, str) else ""
    payload_type = detect_payload_type(payload)
    directive_name = DIRECTIVE_FOR_TYPE[payload_type]

    directive = parsed.directives.get(directive_name) or parsed.directives.get("default-src")
    if directive is None:
        return CSPVerdict(
            blocked=False,
            reason=f"No relevant CSP directive found for {payload_type} payload",
            severity=Severity.HIGH,
            recommendation=f"Add a {directive_name} directive to block this",
        )
    return _judge(payload, payload_type, directive)


# Keep pytest from collecting the public helper as a test when imported.
test_payload_against_csp.__test__ = False  # type: ignore[attr-defined]
