"""Tests for the mutation engine (generate_mutations, deduplication, filters).

Verifies:
    - The original payload is always first and tagged ``original``.
    - Only enabled strategy families contribute mutations.
    - Duplicate payload strings collapse to their first occurrence.
    - Blank input yields an empty result.
    - Filter expressions fall back to substring matching when not a regex.
"""

from __future__ import annotations

import pytest

from xsspage.core.fuzzer import (
    STRATEGY_KEYS,
    Mutation,
    deduplicate_payloads,
    generate_mutations,
    test_against_filter as run_filter,
)

SCRIPT_PAYLOAD = "<script>alert(1)</script>"


def _only(*keys: str) -> dict[str, bool]:
    return {key: key in keys for key in STRATEGY_KEYS}


class TestGenerateMutations:
    """Tests for generate_mutations()."""

    def test_original_is_first(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only(*STRATEGY_KEYS))
        first = result.mutations[0]
        assert first.payload == SCRIPT_PAYLOAD
        assert first.strategy == "original"
        assert first.encoding == "none"

    def test_no_strategies_returns_only_original(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only())
        assert result.total == 1
        assert result.strategies == []

    def test_total_matches_mutation_count(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only(*STRATEGY_KEYS))
        assert result.total == len(result.mutations)

    def test_payloads_are_unique(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only(*STRATEGY_KEYS))
        payloads = [m.payload for m in result.mutations]
        assert len(payloads) == len(set(payloads))

    def test_strategies_lists_enabled_keys(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only("base64", "comments"))
        assert result.strategies == ["base64", "comments"]

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
    def test_blank_payload_returns_empty_result(self, blank: str) -> None:
        result = generate_mutations(blank, _only(*STRATEGY_KEYS))
        assert result.mutations == []
        assert result.total == 0

    def test_unknown_strategy_key_is_ignored(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, {"notAStrategy": True})
        assert result.total == 1

    def test_html_entities_family(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only("htmlEntities"))
        tags = [m.strategy for m in result.mutations]
        assert tags == [
            "original",
            "html-entity-decimal",
            "html-entity-partial-decimal",
            "html-entity-hex",
            "html-entity-partial-hex",
        ]
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["html-entity-partial-decimal"] == (
            "&#60;script&#62;alert(1)&#60;/script&#62;"
        )
        assert by_tag["html-entity-partial-hex"] == (
            "&#x3c;script&#x3e;alert(1)&#x3c;/script&#x3e;"
        )
        assert all(m.encoding == "html" for m in result.mutations[1:])

    def test_url_encoding_deduplicates_repeated_variants(self) -> None:
        result = generate_mutations("<b>", _only("urlEncoding"))
        assert [m.payload for m in result.mutations] == ["<b>", "%3Cb%3E", "%253Cb%253E"]
        assert result.mutations[2].strategy == "url-encoding-double"

    def test_case_variations_drop_identity(self) -> None:
        result = generate_mutations("abc", _only("caseVariations"))
        assert [m.payload for m in result.mutations] == ["abc", "ABC", "Abc", "aBc"]

    def test_quote_substitution(self) -> None:
        result = generate_mutations('"x"', _only("quoteSubstitution"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["quote-single"] == "'x'"
        assert by_tag["quote-backtick"] == "`x`"
        assert by_tag["quote-none"] == "x"
        assert "quote-double" not in by_tag

    def test_whitespace_needs_a_space(self) -> None:
        assert generate_mutations("ab", _only("whitespaceVariation")).total == 1
        result = generate_mutations("a b", _only("whitespaceVariation"))
        assert [m.payload for m in result.mutations[1:]] == ["a\tb", "a\nb", "a  b", "a\fb"]

    def test_null_bytes(self) -> None:
        result = generate_mutations("<b></b>", _only("nullBytes"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["null-byte-before-close"] == "<b>\x00</b>"
        assert by_tag["null-byte-after-tag"] == "<b\x00></b>"

    def test_comments_on_script_payload(self) -> None:
        result = generate_mutations(SCRIPT_PAYLOAD, _only("comments"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["comment-html-before"] == "<!-->" + SCRIPT_PAYLOAD
        assert by_tag["comment-js-after-open"] == "<script>/**/alert(1)</script>"
        assert by_tag["comment-js-line"] == "<script>//\nalert(1)</script>"

    def test_protocol_variation(self) -> None:
        payload = "<a href=javascript:alert(1)>x</a>"
        result = generate_mutations(payload, _only("protocolVariation"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["protocol-space"] == "<a href=java script:alert(1)>x</a>"
        assert by_tag["protocol-vbscript"] == "<a href=vbscript:alert(1)>x</a>"
        assert by_tag["protocol-data"] == "<a href=data:text/html,alert(1)>x</a>"
        assert "protocol-javascript-inject" in by_tag

    def test_obfuscation_adds_self_close_to_void_tag(self) -> None:
        payload = "<img src=x onerror=alert(1)>"
        result = generate_mutations(payload, _only("obfuscation"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["obfuscation-concat"] == "<img src=x onerror='al'+'ert'(1)>"
        assert by_tag["obfuscation-add-self-close"] == "<img src=x onerror=alert(1)/>"

    def test_base64(self) -> None:
        result = generate_mutations("abc", _only("base64"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["base64"] == "YWJj"
        assert by_tag["base64-data-uri"] == "data:text/html;base64,YWJj"

    def test_unicode_escapes_use_utf16_units(self) -> None:
        result = generate_mutations("<\U0001F600", _only("unicodeEscapes"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["unicode-escape"] == "\\u003c\\ud83d\\ude00"

    def test_entities_split_astral_characters(self) -> None:
        result = generate_mutations("a\U0001F600", _only("htmlEntities"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["html-entity-decimal"] == "&#97;&#55357;&#56832;"
        assert by_tag["html-entity-hex"] == "&#x61;&#xd83d;&#xde00;"

    def test_alternating_case_counts_utf16_positions(self) -> None:
        result = generate_mutations("\U0001F600ab", _only("caseVariations"))
        by_tag = {m.strategy: m.payload for m in result.mutations}
        assert by_tag["case-alternating"] == "\U0001F600aB"
        assert by_tag["case-mixed"] == "\U0001F600Ab"

    def test_unicode_escapes_skip_plain_ascii(self) -> None:
        assert generate_mutations("abc", _only("unicodeEscapes")).total == 1


class TestDeduplicatePayloads:
    """Tests for deduplicate_payloads()."""

    def test_first_occurrence_wins(self) -> None:
        mutations = [
            Mutation("a", "original", "none"),
            Mutation("b", "first", "none"),
            Mutation("a", "dup", "none"),
            Mutation("b", "second", "none"),
        ]
        unique = deduplicate_payloads(mutations)
        assert [(m.payload, m.strategy) for m in unique] == [
            ("a", "original"),
            ("b", "first"),
        ]

    def test_empty(self) -> None:
        assert deduplicate_payloads([]) == []


class TestFilterReplay:
    """Tests for test_against_filter()."""

    @pytest.fixture
    def mutations(self) -> list[Mutation]:
        return generate_mutations(SCRIPT_PAYLOAD, _only("htmlEntities")).mutations

    def test_blank_filter_returns_none(self, mutations: list[Mutation]) -> None:
        assert run_filter(mutations, "") is None
        assert run_filter(mutations, "   ") is None

    def test_regex_filter(self, mutations: list[Mutation]) -> None:
        verdicts = run_filter(mutations, "<script")
        assert verdicts is not None
        assert len(verdicts) == len(mutations)
        assert verdicts[0].blocked is True
        assert verdicts[0].reason == "Matched filter pattern"
        assert all(not v.blocked for v in verdicts[1:])
        assert verdicts[1].reason == "Bypassed filter"

    def test_regex_is_case_insensitive(self) -> None:
        verdicts = run_filter([Mutation("<SCRIPT>", "x", "none")], "script")
        assert verdicts is not None and verdicts[0].blocked

    def test_invalid_regex_falls_back_to_substring(self) -> None:
        verdicts = run_filter(
            [Mutation("alert(1", "a", "none"), Mutation("alert", "b", "none")],
            "ALERT(",
        )
        assert verdicts is not None
        assert verdicts[0].blocked is True
        assert verdicts[0].reason == "Matched filter string"
        assert verdicts[1].blocked is False
