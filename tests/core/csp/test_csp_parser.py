"""Tests for CSP parsing, validation warnings, building and analysis."""

from __future__ import annotations

import pytest

from xsspage.core.csp import (
    CATEGORIES,
    CSP_DIRECTIVES,
    CSP_TEMPLATES,
    analyze_csp,
    directives_by_category,
    generate_csp,
    parse_csp,
)

SOLID_POLICY = "default-src 'self'; object-src 'none'; base-uri 'self'"


class TestParseCsp:
    """Tests for parse_csp()."""

    @pytest.mark.parametrize("header", ["", None, 123])
    def test_invalid_header(self, header) -> None:
        parsed = parse_csp(header)
        assert parsed.directives == {}
        assert parsed.errors == ["Invalid CSP header"]

    def test_directives_in_order(self) -> None:
        parsed = parse_csp("default-src 'self'; script-src 'self' https://cdn.example.com")
        assert list(parsed.directives) == ["default-src", "script-src"]
        script = parsed.directives["script-src"]
        assert script.values == ("'self'", "https://cdn.example.com")
        assert script.index == 1
        assert script.raw == "script-src 'self' https://cdn.example.com"

    def test_empty_segments_are_skipped(self) -> None:
        parsed = parse_csp("default-src 'self';; ;")
        assert list(parsed.directives) == ["default-src"]

    def test_repeated_directive_is_replaced(self) -> None:
        parsed = parse_csp("script-src a.com; script-src b.com")
        assert len(parsed.directives) == 1
        assert parsed.directives["script-src"].values == ("b.com",)
        assert parsed.directives["script-src"].index == 1

    def test_clean_policy_has_no_warnings(self) -> None:
        parsed = parse_csp(SOLID_POLICY)
        assert parsed.errors is None
        assert parsed.warnings is None
        assert parsed.raw == SOLID_POLICY

    def test_unknown_directive(self) -> None:
        parsed = parse_csp(SOLID_POLICY + "; foo-src x")
        assert parsed.warnings == [
            "Unknown directive: foo-src (this may be valid but not in our database)"
        ]
        assert "foo-src" in parsed.directives

    def test_deprecated_directive(self) -> None:
        parsed = parse_csp(SOLID_POLICY + "; report-uri /csp")
        assert parsed.warnings == ["Deprecated directive: report-uri"]

    def test_unsafe_values_in_fetch_directives(self) -> None:
        parsed = parse_csp(SOLID_POLICY + "; script-src 'unsafe-inline' 'unsafe-eval' * http:")
        assert parsed.warnings == [
            "script-src contains 'unsafe-inline' - this defeats XSS protection",
            "script-src contains 'unsafe-eval' - this allows eval() and is dangerous",
            "script-src contains wildcard (*) - this allows any source",
            "script-src allows HTTP sources - prefer HTTPS for security",
        ]

    def test_unsafe_inline_only_flagged_for_script_and_style(self) -> None:
        parsed = parse_csp(SOLID_POLICY + "; img-src 'unsafe-inline'")
        assert parsed.warnings is None

    def test_missing_directive_warnings(self) -> None:
        warnings = parse_csp("img-src 'self'").warnings
        assert warnings is not None
        assert any("Missing 'base-uri'" in w for w in warnings)
        assert any("Missing 'object-src'" in w for w in warnings)
        assert any("Consider adding 'default-src'" in w for w in warnings)

    def test_permissive_default_src(self) -> None:
        warnings = parse_csp("default-src https:; object-src 'none'; base-uri 'self'").warnings
        assert warnings == [
            "'default-src' is very permissive - consider restricting to specific sources"
        ]

    def test_sandbox_escape(self) -> None:
        parsed = parse_csp(SOLID_POLICY + "; sandbox allow-scripts allow-same-origin")
        assert parsed.warnings is not None
        assert any("defeats the sandbox" in w for w in parsed.warnings)

    def test_to_dict(self) -> None:
        data = parse_csp(SOLID_POLICY).to_dict()
        assert data["directives"]["default-src"]["values"] == ["'self'"]
        assert data["errors"] is None
        assert data["warnings"] is None


class TestGenerateCsp:

    def test_join_in_order(self) -> None:
        header = generate_csp({"default-src": ["'self'"], "img-src": ["'self'", "data:"]})
        assert header == "default-src 'self'; img-src 'self' data:"

    def test_empty_values_are_skipped(self) -> None:
        assert generate_csp({"default-src": ["'self'"], "img-src": []}) == "default-src 'self'"

    def test_nothing_to_join(self) -> None:
        assert generate_csp({}) == ""

    def test_generated_header_parses_back(self) -> None:
        options = {"default-src": ["'none'"], "script-src": ["'self'", "https://cdn.example.com"]}
        parsed = parse_csp(generate_csp(options))
        assert {n: list(d.values) for n, d in parsed.directives.items()} == options


class TestAnalyzeCsp:

    def test_keys(self) -> None:
        result = analyze_csp(SOLID_POLICY)
        assert set(result) == {"parsed", "score"}
        assert result["score"]["score"] == 100


class TestCatalog:

    def test_every_directive_has_known_category(self) -> None:
        for directive in CSP_DIRECTIVES.values():
            assert directive.category in CATEGORIES

    def test_grouping_covers_catalog(self) -> None:
        grouped = directives_by_category()
        assert sum(len(names) for names in grouped.values()) == len(CSP_DIRECTIVES)
        assert "script-src" in grouped["fetch"]

    def test_templates_parse_without_errors(self) -> None:
        for template in CSP_TEMPLATES.values():
            assert parse_csp(template.policy).errors is None
