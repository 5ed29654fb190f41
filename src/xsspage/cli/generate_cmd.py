"""``xsspage generate``: random payloads from weighted templates."""

from __future__ import annotations

import random

import click

from xsspage.config import AppConfig
from xsspage.core.payloads import INJECTION_CONTEXTS, generate_random_payloads


@click.command("generate")
@click.option("--count", type=click.IntRange(min=1), default=None,
              help="Number of payloads (default: from config).")
@click.option("--seed", type=int, default=None, help="Seed for reproducible output.")
@click.option(
    "--context",
    type=click.Choice(INJECTION_CONTEXTS),
    default="any",
    help="Only generate payloads for this injection context.",
)
@click.option("--no-variations", is_flag=True, default=False,
              help="Disable random tag perturbations.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def generate_command(
    config: AppConfig,
    count: int | None,
    seed: int | None,
    context: str,
    no_variations: bool,
    output_format: str,
) -> None:
    """Generate random XSS payloads."""
    count = min(count or config.default_generate_count, config.max_limit)
    payloads = generate_random_payloads(
        count,
        context=context,
        apply_variations=not no_variations,
        rng=random.Random(seed),
    )

    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json({
            "context": context,
            "total": len(payloads),
            "payloads": [p.to_dict() for p in payloads],
        })
    else:
        from xsspage.cli.output import print_generated

        print_generated(payloads)
