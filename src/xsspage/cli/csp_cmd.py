"""``xsspage csp``: Content-Security-Policy tools.

Subcommands:
    analyze    Parse a policy, list warnings and score it.
    test       Predict whether a payload is blocked by a policy.
    build      Assemble a policy from ``-d name=values`` options.
    templates  Show the reference policy templates.
"""

from __future__ import annotations

import click

from xsspage.core.csp import (
    CSP_TEMPLATES,
    calculate_security_score,
    generate_csp,
    parse_csp,
    test_payload_against_csp,
)

_FORMAT_OPTION = click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)


@click.group("csp")
def csp_group() -> None:
    """Analyze, test and build Content-Security-Policies."""


@csp_group.command("analyze")
@click.argument("policy")
@_FORMAT_OPTION
def analyze_command(policy: str, output_format: str) -> None:
    """Parse POLICY, report warnings and compute its security score."""
    parsed = parse_csp(policy)
    score = calculate_security_score(parsed)

    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json({"parsed": parsed.to_dict(), "score": score.to_dict()})
    else:
        from xsspage.cli.output import print_csp_analysis

        print_csp_analysis(parsed, score)


@csp_group.command("test")
@click.argument("policy")
@click.argument("payload")
@_FORMAT_OPTION
def test_command(policy: str, payload: str, output_format: str) -> None:
    """Predict whether PAYLOAD would execute under POLICY."""
    verdict = test_payload_against_csp(payload, parse_csp(policy))

    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json(verdict.to_dict())
    else:
        from xsspage.cli.output import print_csp_verdict

        print_csp_verdict(verdict)


def _parse_directive_option(raw: str) -> tuple[str, list[str]]:
    name, sep, values = raw.partition("=")
    name = name.strip()
    if not sep or not name:
        raise click.BadParameter(
            f"expected NAME=VALUES, got {raw!r}", param_hint="'-d' / '--directive'"
        )
    return name, values.split()


@csp_group.command("build")
@click.option(
    "-d", "--directive", "directives",
    multiple=True,
    metavar="NAME=VALUES",
    help="Directive and its space-separated values, e.g. \"script-src='self' https:\".",
)
@click.option(
    "--template",
    type=click.Choice(list(CSP_TEMPLATES)),
    default=None,
    help="Start from a reference template; -d options override its directives.",
)
def build_command(directives: tuple[str, ...], template: str | None) -> None:
    """Assemble a policy header from directives."""
    options: dict[str, list[str]] = {}
    if template is not None:
        for name, parsed in parse_csp(CSP_TEMPLATES[template].policy).directives.items():
            options[name] = list(parsed.values)

    overridden: set[str] = set()
    for raw in directives:
        name, values = _parse_directive_option(raw)
        if name not in overridden:
            options[name] = []
            overridden.add(name)
        options[name].extend(values)

    header = generate_csp(options)
    if not header:
        raise click.UsageError("No directives given; use -d NAME=VALUES or --template.")
    click.echo(header)


@csp_group.command("templates")
@_FORMAT_OPTION
def templates_command(output_format: str) -> None:
    """Show the reference policy templates."""
    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json({key: t.to_dict() for key, t in CSP_TEMPLATES.items()})
    else:
        from xsspage.cli.output import print_csp_templates

        print_csp_templates(CSP_TEMPLATES)
