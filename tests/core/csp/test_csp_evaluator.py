"""Tests for payload-vs-policy verdicts and policy scoring.

Verifies:
    - Payload classification into resource types.
    - The verdict priority: 'none', inline rules, eval rules, source lists.
    - The missing-directive verdict and its recommendation.
    - Score deductions, bonuses, clamping and rating bands.
"""

from __future__ import annotations

import pytest

from xsspage.core.csp import (
    calculate_security_score,
    detect_payload_type,
    parse_csp,
    test_payload_against_csp as evaluate_payload,
)
from xsspage.core.csp.scoring import rating_for
from xsspage.core.severity import Severity

INLINE_SCRIPT = "<script>alert(1)</script>"


def _verdict(policy: str, payload: str):
    return evaluate_payload(payload, parse_csp(policy))


class TestDetectPayloadType:

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            (INLINE_SCRIPT, "script"),
            ("<img src=x onerror=alert(1)>", "script"),
            ("<img src=x>", "img"),
            ("<style>body{}</style>", "style"),
            ("<iframe src=x>", "frame"),
            ("<embed src=x>", "object"),
            ("<svg><rect/></svg>", "img"),
            ("<video src=x>", "media"),
            ("<base href=x>", "base"),
            ("<form action=x>", "form"),
            ("plain text", "script"),
        ],
    )
    def test_classification(self, payload: str, expected: str) -> None:
        assert detect_payload_type(payload) == expected


class TestVerdicts:

    def test_none_blocks_everything(self) -> None:
        verdict = _verdict("default-src 'none'", "<img src=x onerror=alert(1)>")
        assert verdict.blocked is True
        assert verdict.severity == Severity.LOW
        assert verdict.directive == "default-src"
        assert verdict.reason == "default-src is set to 'none' - all script sources blocked"

    def test_inline_blocked_without_unsafe_inline(self) -> None:
        verdict = _verdict("script-src 'self'", INLINE_SCRIPT)
        assert verdict.blocked is True
        assert verdict.reason == (
            "Inline script blocked - no 'unsafe-inline', nonce, or hash in script-src"
        )

    def test_inline_allowed_with_unsafe_inline(self) -> None:
        verdict = _verdict("script-src 'unsafe-inline'", INLINE_SCRIPT)
        assert verdict.blocked is False
        assert verdict.severity == Severity.HIGH
        assert verdict.recommendation is not None

    def test_matching_nonce_passes_inline_check(self) -> None:
        verdict = _verdict(
            "script-src 'nonce-abc123'", '<script nonce="abc123">alert(1)</script>'
        )
        assert verdict.blocked is False
        assert verdict.reason == "Payload may be allowed by current script-src policy"

    def test_wrong_nonce_is_blocked(self) -> None:
        verdict = _verdict(
            "script-src 'nonce-abc123'", '<script nonce="zzz">alert(1)</script>'
        )
        assert verdict.blocked is True

    def test_eval_blocked_without_unsafe_eval(self) -> None:
        verdict = _verdict("script-src 'sha256-abc='", "eval(name)")
        assert verdict.blocked is True
        assert verdict.reason == "eval() blocked - no 'unsafe-eval' in script-src"

    def test_eval_allowed_with_unsafe_eval(self) -> None:
        verdict = _verdict("script-src 'sha256-abc=' 'unsafe-eval'", "eval(name)")
        assert verdict.blocked is False
        assert verdict.severity == Severity.HIGH

    def test_whitelisted_host(self) -> None:
        verdict = _verdict(
            "script-src https://cdn.example.com",
            '<script src="https://cdn.example.com/x.js"></script>',
        )
        assert verdict.blocked is False
        assert verdict.severity == Severity.MEDIUM
        assert verdict.reason == (
            "External source 'https://cdn.example.com/x.js' is whitelisted in script-src"
        )

    def test_host_not_whitelisted(self) -> None:
        verdict = _verdict(
            "script-src https://cdn.example.com",
            '<script src="https://evil.test/x.js"></script>',
        )
        assert verdict.blocked is True
        assert verdict.reason == "External source 'https://evil.test/x.js' not whitelisted in script-src"

    def test_wildcard_subdomain(self) -> None:
        verdict = _verdict(
            "script-src https://*.example.com",
            '<script src="https://static.example.com/x.js"></script>',
        )
        assert verdict.blocked is False

    def test_self_allows_relative_only(self) -> None:
        assert _verdict("script-src 'self'", '<script src="/app.js"></script>').blocked is False
        assert _verdict(
            "script-src 'self'", '<script src="https://evil.test/a.js"></script>'
        ).blocked is True

    def test_scheme_source(self) -> None:
        verdict = _verdict("img-src data:", '<img src="data:image/png;base64,AAAA">')
        assert verdict.blocked is False

    def test_star_allows_any_source(self) -> None:
        verdict = _verdict("img-src *", '<img src="https://anything.test/p.png">')
        assert verdict.blocked is False

    def test_no_relevant_directive(self) -> None:
        verdict = _verdict("img-src 'self'", INLINE_SCRIPT)
        assert verdict.blocked is False
        assert verdict.severity == Severity.HIGH
        assert verdict.directive is None
        assert verdict.reason == "No relevant CSP directive found for script payload"
        assert verdict.recommendation == "Add a script-src directive to block this"

    def test_falls_back_to_default_src(self) -> None:
        verdict = _verdict("default-src 'self'", INLINE_SCRIPT)
        assert verdict.blocked is True
        assert verdict.directive == "default-src"

    def test_to_dict_omits_unset_fields(self) -> None:
        data = _verdict("script-src 'self'", INLINE_SCRIPT).to_dict()
        assert data == {
            "blocked": True,
            "reason": "Inline script blocked - no 'unsafe-inline', nonce, or hash in script-src",
            "severity": "low",
            "directive": "script-src",
        }


class TestSecurityScore:

    def test_strong_policy_is_clamped_to_100(self) -> None:
        score = calculate_security_score(
            parse_csp("default-src 'self'; object-src 'none'; base-uri 'none'")
        )
        assert score.score == 100
        assert score.rating == "Excellent"
        assert score.color == "green"
        assert "Restricts base-uri (+3 points)" in score.issues

    def test_deductions(self) -> None:
        score = calculate_security_score(
            parse_csp("script-src 'unsafe-inline' 'unsafe-eval' *")
        )
        # 100 - 15 - 15 - 10 - 5 (base-uri) - 3 (object-src)
        assert score.score == 52
        assert score.rating == "Fair"
        assert score.issues[:3] == (
            "script-src uses 'unsafe-inline' (-15 points)",
            "script-src uses 'unsafe-eval' (-15 points)",
            "script-src uses wildcard (*) (-10 points)",
        )

    def test_missing_fallback_directive(self) -> None:
        score = calculate_security_score(parse_csp("img-src 'self'"))
        assert score.score == 82
        assert "Missing 'default-src' or 'script-src' directive (-10 points)" in score.issues

    def test_nonce_bonus(self) -> None:
        score = calculate_security_score(parse_csp("script-src 'nonce-r4nd0m'"))
        # 100 - 5 - 3 + 5
        assert score.score == 97
        assert "Uses nonces for scripts (+5 points)" in score.issues

    def test_clamped_at_zero(self) -> None:
        bad = "* http: 'unsafe-inline' 'unsafe-eval'"
        policy = f"default-src {bad}; script-src {bad}; style-src {bad}"
        score = calculate_security_score(parse_csp(policy))
        assert score.score == 0
        assert score.rating == "Weak"
        assert score.color == "red"

    @pytest.mark.parametrize(
        ("value", "rating"),
        [(100, "Excellent"), (80, "Excellent"), (79, "Good"), (60, "Good"),
         (59, "Fair"), (40, "Fair"), (39, "Poor"), (20, "Poor"), (19, "Weak"), (0, "Weak")],
    )
    def test_rating_bands(self, value: int, rating: str) -> None:
        assert rating_for(value)[0] == rating
