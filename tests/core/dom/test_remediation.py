"""Tests for remediation lookups."""

from __future__ import annotations

from xsspage.core.dom import (
    FRAMEWORK_GUIDANCE,
    get_framework_guidance,
    get_remediation_advice,
    get_safe_alternatives,
    scan_code,
)


class TestSafeAlternatives:

    def test_known_sink(self) -> None:
        names = [a.name for a in get_safe_alternatives("innerHTML")]
        assert names == ["textContent", "createElement + textContent", "DOMPurify.sanitize"]

    def test_lookup_is_normalized(self) -> None:
        assert get_safe_alternatives("V_HTML") == get_safe_alternatives("v-html")
        assert get_safe_alternatives("location.href")

    def test_unknown_sink(self) -> None:
        assert get_safe_alternatives("setImmediate") == []


class TestRemediationAdvice:

    def test_for_finding(self) -> None:
        finding = scan_code("eval(x);").findings[0]
        advice = get_remediation_advice(finding)
        assert advice.title == "Safe Alternatives to eval"
        assert [a.name for a in advice.alternatives] == ["JSON.parse", "Predefined functions"]

    def test_general_fallback(self) -> None:
        advice = get_remediation_advice("setAttribute")
        assert advice.title == "General Recommendations"
        assert len(advice.alternatives) == 3

    def test_to_dict(self) -> None:
        data = get_remediation_advice("innerHTML").to_dict()
        assert data["title"] == "Safe Alternatives to innerHTML"
        assert data["alternatives"][0]["name"] == "textContent"


class TestFrameworkGuidance:

    def test_known_framework(self) -> None:
        assert get_framework_guidance("react")["name"] == "React"

    def test_unknown_falls_back_to_vanilla(self) -> None:
        assert get_framework_guidance("svelte") is FRAMEWORK_GUIDANCE["vanilla"]
