"""``xsspage scan [file]``: scan code for DOM XSS sinks and sources.

Reads standard input when FILE is ``-`` or omitted.

Exit Codes:
    0: No finding at or above the severity threshold.
    1: One or more findings at or above the severity threshold.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

from xsspage.config import AppConfig
from xsspage.core.dom import (
    SUPPORTED_FRAMEWORKS,
    ScanResult,
    calculate_risk_score,
    detect_framework,
    scan_code,
)
from xsspage.core.severity import Severity


def _exceeds(result: ScanResult, threshold: Severity) -> bool:
    return any(f.severity >= threshold for f in result.findings)


@click.command("scan")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--framework",
    type=click.Choice(["auto", *SUPPORTED_FRAMEWORKS]),
    default=None,
    help="Framework whose sinks to include (default: from config; 'auto' detects).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--severity-threshold",
    type=click.Choice(["low", "medium", "high", "critical"]),
    default="low",
    help="Minimum severity that makes the exit code non-zero (default: low).",
)
@click.pass_obj
def scan_command(
    config: AppConfig,
    source: TextIO,
    framework: str | None,
    output_format: str,
    severity_threshold: str,
) -> None:
    """Scan SOURCE for dangerous sinks, untrusted sources and data flows.

    Exit code 0 if nothing reaches the severity threshold, 1 otherwise.
    """
    code = source.read()
    if len(code) > config.max_code_length:
        raise click.ClickException(
            f"Code too large (max {config.max_code_length} characters)"
        )

    framework = framework or config.default_framework
    if framework == "auto":
        framework = detect_framework(code)

    result = scan_code(code, framework)
    risk = calculate_risk_score(result)

    if output_format == "json":
        from xsspage.cli.output import print_json

        data = result.to_dict()
        data["framework"] = framework
        data["risk"] = risk.to_dict()
        print_json(data)
    else:
        from xsspage.cli.output import print_scan_result

        print_scan_result(result, risk, framework)

    sys.exit(1 if _exceeds(result, Severity.parse(severity_threshold)) else 0)
