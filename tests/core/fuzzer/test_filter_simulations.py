"""Tests for the simulated server-side filters."""

from __future__ import annotations

import pytest

from xsspage.core.fuzzer import FILTERS, apply_filter, format_strategy_name, get_filter


class TestFilterSimulations:

    def test_catalog_keys(self) -> None:
        assert set(FILTERS) == {
            "none", "basic", "moderate", "strict", "blacklist", "htmlEntities",
        }

    def test_none_is_identity(self) -> None:
        assert apply_filter("none", "<script>x</script>") == "<script>x</script>"

    def test_basic_removes_script_blocks(self) -> None:
        assert apply_filter("basic", "<script>alert(1)</script><b>") == "<b>"

    def test_basic_keeps_event_handlers(self) -> None:
        payload = "<img src=x onerror=alert(1)>"
        assert apply_filter("basic", payload) == payload

    def test_moderate_strips_event_attributes(self) -> None:
        assert apply_filter("moderate", "<img onerror=alert(1)>") == "<img alert(1)>"

    def test_strict_removes_special_characters(self) -> None:
        assert apply_filter("strict", "<a href='x'>") == "a href=x"

    def test_blacklist_removes_keywords(self) -> None:
        assert apply_filter("blacklist", "<script>alert(1)</script>") == "<>(1)</>"

    def test_entity_encoder_single_pass(self) -> None:
        assert apply_filter("htmlEntities", "<a href='x'>&") == (
            "&lt;a href=&#x27;x&#x27;&gt;&amp;"
        )

    def test_unknown_filter_falls_back_to_none(self) -> None:
        assert get_filter("nope") is FILTERS["none"]
        assert apply_filter("nope", "<b>") == "<b>"

    @pytest.mark.parametrize("key", sorted(FILTERS))
    def test_to_dict_shape(self, key: str) -> None:
        data = FILTERS[key].to_dict()
        assert data["key"] == key
        assert set(data) == {"key", "name", "description", "bypassDifficulty", "commonBypasses"}


class TestStrategyNames:

    def test_known_key(self) -> None:
        assert format_strategy_name("htmlEntities") == "HTML Entities"

    def test_unknown_key_passes_through(self) -> None:
        assert format_strategy_name("html-entity-hex") == "html-entity-hex"
