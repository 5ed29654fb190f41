"""Tests for the payload reference database and its search."""

from __future__ import annotations

import pytest

from xsspage.core.payloads import (
    PAYLOAD_CATEGORIES,
    PAYLOADS,
    category_counts,
    get_payloads_by_category,
    search_payloads,
)
from xsspage.core.severity import Severity


def _ids(records) -> list[int]:
    return [r.id for r in records]


class TestCatalog:

    def test_ids_are_sequential(self) -> None:
        assert _ids(PAYLOADS) == list(range(1, 53))

    def test_every_record_has_a_known_category(self) -> None:
        assert {p.category for p in PAYLOADS} == set(PAYLOAD_CATEGORIES)

    def test_category_counts(self) -> None:
        counts = category_counts()
        assert next(iter(counts)) == "all"
        assert counts["all"] == 52
        assert counts["event-handler"] == 6
        assert counts["polyglot"] == 2
        assert sum(v for k, v in counts.items() if k != "all") == 52

    def test_to_dict(self) -> None:
        record = next(p for p in PAYLOADS if p.id == 8)
        assert record.to_dict() == {
            "id": 8,
            "payload": "<marquee onstart=alert(1)>",
            "category": "event-handler",
            "technique": "onstart",
            "context": "html",
            "description": "Marquee onstart event",
            "severity": "medium",
            "browsers": ["chrome", "edge"],
        }
        assert record.severity is Severity.MEDIUM


class TestByCategory:

    @pytest.mark.parametrize("category", [None, "", "all"])
    def test_all(self, category) -> None:
        assert len(get_payloads_by_category(category)) == 52

    def test_single_category(self) -> None:
        assert _ids(get_payloads_by_category("dom")) == [37, 38]

    def test_unknown_category(self) -> None:
        assert get_payloads_by_category("nope") == []


class TestSearchPayloads:

    def test_no_filters_returns_everything(self) -> None:
        assert len(search_payloads()) == 52
        assert len(search_payloads("", category="", browser=None)) == 52

    def test_query_matches_technique(self) -> None:
        assert _ids(search_payloads("template-literal")) == [21, 29]

    def test_query_matches_category(self) -> None:
        assert _ids(search_payloads("waf-bypass")) == [39, 40, 41]

    def test_query_ignores_case(self) -> None:
        assert _ids(search_payloads("FROMCHARCODE")) == [41]

    def test_exact_filters_combine(self) -> None:
        assert _ids(search_payloads(severity="critical", context="url")) == [23]
        assert _ids(search_payloads(category="svg")) == [10, 11, 12]

    def test_exact_filters_do_not_substring_match(self) -> None:
        assert search_payloads(category="event") == []

    def test_browser_keeps_all_marked_records(self) -> None:
        assert _ids(search_payloads(category="event-handler", browser="safari")) == [
            4, 5, 6, 7, 9,
        ]
        assert _ids(search_payloads(category="legacy", browser="ie")) == [47, 48]
        assert _ids(search_payloads(category="legacy", browser="edge-legacy")) == [47]

    def test_no_match(self) -> None:
        assert search_payloads("definitely-not-a-payload") == []
