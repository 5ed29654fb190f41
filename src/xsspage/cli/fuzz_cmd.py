"""``xsspage fuzz <payload>``: generate filter-bypass mutations.

With ``--filter`` every mutation is replayed against a filter expression
(regex, or literal substring if it does not compile) and marked BLOCKED or
BYPASS. With ``--simulate`` each mutation is also passed through one of the
built-in naive filter simulations and the surviving text is shown.
"""

from __future__ import annotations

import click

from xsspage.config import AppConfig
from xsspage.core.fuzzer import (
    FILTERS,
    STRATEGY_KEYS,
    apply_filter,
    generate_mutations,
    test_against_filter,
)


@click.command("fuzz")
@click.argument("payload")
@click.option(
    "-s", "--strategy", "strategies",
    multiple=True,
    type=click.Choice(STRATEGY_KEYS),
    help="Strategy to enable (repeatable; default: all).",
)
@click.option("--limit", type=click.IntRange(min=1), default=None,
              help="Show at most this many mutations.")
@click.option("--filter", "filter_pattern", default=None,
              help="Filter regex (or substring) to test every mutation against.")
@click.option("--simulate", type=click.Choice(list(FILTERS)), default=None,
              help="Run every mutation through a built-in filter simulation.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def fuzz_command(
    config: AppConfig,
    payload: str,
    strategies: tuple[str, ...],
    limit: int | None,
    filter_pattern: str | None,
    simulate: str | None,
    output_format: str,
) -> None:
    """Generate mutations of PAYLOAD using the selected strategies."""
    if len(payload) > config.max_payload_length:
        raise click.ClickException(
            f"Payload too large (max {config.max_payload_length} characters)"
        )

    enabled = strategies or STRATEGY_KEYS
    result = generate_mutations(payload, {key: key in enabled for key in STRATEGY_KEYS})
    shown = result.mutations[:limit] if limit else result.mutations
    verdicts = test_against_filter(shown, filter_pattern) if filter_pattern else None
    simulated = (
        {m.payload: apply_filter(simulate, m.payload) for m in shown}
        if simulate else None
    )

    if output_format == "json":
        from xsspage.cli.output import print_json

        data = result.to_dict()
        data["mutations"] = [m.to_dict() for m in shown]
        if verdicts is not None:
            data["filterResults"] = [v.to_dict() for v in verdicts]
        if simulated is not None:
            data["simulation"] = {
                "filter": FILTERS[simulate].to_dict(),
                "outputs": [simulated[m.payload] for m in shown],
            }
        print_json(data)
    else:
        from xsspage.cli.output import print_mutations

        print_mutations(shown, result.total, verdicts, simulated)
