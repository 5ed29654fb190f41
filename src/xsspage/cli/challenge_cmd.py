"""``xsspage challenge``: check a payload against an ad-hoc challenge."""

from __future__ import annotations

import sys

import click

from xsspage.core.challenges import CONTEXTS, Challenge, validate_challenge
from xsspage.core.fuzzer import FILTERS


@click.command("challenge")
@click.argument("payload")
@click.option("--filter", "filter_type", type=click.Choice(list(FILTERS)), default="none",
              help="Filter simulation applied to the payload (default: none).")
@click.option("--context", type=click.Choice(list(CONTEXTS)), default="html",
              help="Where the filtered payload is rendered (default: html).")
@click.option("-p", "--pattern", "patterns", multiple=True,
              help="Regex the payload must match (repeatable).")
@click.option("--require-all", is_flag=True, default=False,
              help="Every --pattern must match instead of any one.")
@click.option("-b", "--ban", "banned", multiple=True,
              help="Regex the payload must not match (repeatable).")
@click.option("--check-execution/--no-check-execution", default=True,
              help="Require the filtered payload to still look executable.")
@click.option("--points", type=click.IntRange(min=0), default=10,
              help="Points awarded on success.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def challenge_command(
    payload: str,
    filter_type: str,
    context: str,
    patterns: tuple[str, ...],
    require_all: bool,
    banned: tuple[str, ...],
    check_execution: bool,
    points: int,
    output_format: str,
) -> None:
    """Run PAYLOAD through a filter and context and judge the result.

    Exits 0 when the challenge is solved, 1 otherwise.
    """
    challenge = Challenge(
        filter_type=filter_type,
        context=context,
        points=points,
        patterns=patterns,
        required_all=require_all,
        banned_patterns=banned,
        check_execution=check_execution,
    )
    result = validate_challenge(challenge, payload)

    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json(result.to_dict())
    else:
        from xsspage.cli.output import print_challenge_result

        print_challenge_result(result)

    sys.exit(0 if result.success else 1)
