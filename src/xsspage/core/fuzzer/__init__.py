"""Payload mutation ("fuzzer") engine.

Given a base payload and a set of enabled strategy flags, produces a
deduplicated list of variants tagged by strategy and encoding family.

Submodules
----------
- ``models``: Mutation, MutationResult, FilterVerdict.
- ``strategies``: The strategy catalog and its pure transforms.
- ``engine``: ``generate_mutations`` and ``test_against_filter``.
- ``filters``: Educational simulations of naive server-side filters.

Usage::

    from xsspage.core.fuzzer import generate_mutations

    result = generate_mutations("<script>alert(1)</script>", {"htmlEntities": True})
    for mutation in result.mutations:
        print(mutation.strategy, mutation.payload)
"""

from xsspage.core.fuzzer.engine import (
    deduplicate_payloads,
    generate_mutations,
    test_against_filter,
)
from xsspage.core.fuzzer.filters import FILTERS, FilterSimulation, apply_filter, get_filter
from xsspage.core.fuzzer.models import FilterVerdict, Mutation, MutationResult
from xsspage.core.fuzzer.strategies import (
    STRATEGIES,
    STRATEGY_KEYS,
    MutationStrategy,
    format_strategy_name,
)

__all__ = [
    "FILTERS",
    "STRATEGIES",
    "STRATEGY_KEYS",
    "FilterSimulation",
    "FilterVerdict",
    "Mutation",
    "MutationResult",
    "MutationStrategy",
    "apply_filter",
    "deduplicate_payloads",
    "format_strategy_name",
    "generate_mutations",
    "get_filter",
    "test_against_filter",
]
