"""``xsspage detect <payload>``: list XSS indicators in a payload."""

from __future__ import annotations

import click

from xsspage.core.payloads import detect_xss


@click.command("detect")
@click.argument("payload")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def detect_command(payload: str, output_format: str) -> None:
    """Report which XSS building blocks appear in PAYLOAD."""
    result = detect_xss(payload)

    if output_format == "json":
        from xsspage.cli.output import print_json

        data = result.to_dict()
        data["severity"] = result.severity.label
        print_json(data)
    else:
        from xsspage.cli.output import print_detection

        print_detection(result)
