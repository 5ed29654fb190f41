"""Mutation engine entry points.

``generate_mutations`` applies every enabled strategy family to a base
payload, prepends the untouched original and deduplicates by payload text.
``test_against_filter`` replays a list of mutations against a user-supplied
filter expression.

Neither function raises on bad input: an empty payload yields an empty
result, a family that fails to encode contributes nothing, and a filter that
is not a valid regular expression is treated as a literal substring.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from xsspage.core.fuzzer.models import FilterVerdict, Mutation, MutationResult
from xsspage.core.fuzzer.strategies import STRATEGIES

logger = logging.getLogger(__name__)


def deduplicate_payloads(mutations: Iterable[Mutation]) -> list[Mutation]:
    """Keep the first mutation for each distinct payload string."""
    seen: set[str] = set()
    unique: list[Mutation] = []
    for mutation in mutations:
        if mutation.payload in seen:
            continue
        seen.add(mutation.payload)
        unique.append(mutation)
    return unique


def generate_mutations(
    base_payload: str,
    strategies: Mapping[str, bool],
) -> MutationResult:
    """Generate filter-bypass variants of *base_payload*.

    Args:
        base_payload: The payload to mutate. Blank input yields an empty result.
        strategies: Flags keyed by strategy identifier (``htmlEntities``,
            ``urlEncoding``, ...). Unknown keys produce no mutations.

    Returns:
        A ``MutationResult`` whose first mutation is the original payload,
        tagged ``"original"``, followed by the unique variants of every
        enabled family in catalog order.
    """
    if not base_payload or not base_payload.strip():
        return MutationResult()

    collected: list[Mutation] = [Mutation(base_payload, "original", "none")]
    for key, strategy in STRATEGIES.items():
        if not strategies.get(key):
            continue
        try:
            collected.extend(strategy.transform(base_payload))
        except (UnicodeError, ValueError):
            logger.debug("Strategy %s failed for payload; skipping", key, exc_info=True)

    unique = deduplicate_payloads(collected)
    active = [key for key, enabled in strategies.items() if enabled]
    return MutationResult(mutations=unique, total=len(unique), strategies=active)


def test_against_filter(
    mutations: Iterable[Mutation],
    filter_pattern: str,
) -> list[FilterVerdict] | None:
    """Check which mutations a filter expression would catch.

    The pattern is compiled as a case-insensitive regular expression; if it
    does not compile, a case-insensitive substring test is used instead.

    Returns:
        One verdict per mutation, or None when *filter_pattern* is blank.
    """
    if not filter_pattern or not filter_pattern.strip():
        return None

    try:
        regex: re.Pattern[str] | None = re.compile(filter_pattern, re.IGNORECASE)
    except re.error:
        logger.debug("Filter %r is not a valid regex; using substring match", filter_pattern)
        regex = None

    needle = filter_pattern.lower()
    verdicts: list[FilterVerdict] = []
    for mutation in mutations:
        if regex is not None:
            blocked = regex.search(mutation.payload) is not None
            matched = "Matched filter pattern"
        else:
            blocked = needle in mutation.payload.lower()
            matched = "Matched filter string"
        verdicts.append(FilterVerdict(
            payload=mutation.payload,
            strategy=mutation.strategy,
            blocked=blocked,
            reason=matched if blocked else "Bypassed filter",
        ))
    return verdicts


# Keep pytest from collecting the public helper as a test when imported.
test_against_filter.__test__ = False  # type: ignore[attr-defined]
