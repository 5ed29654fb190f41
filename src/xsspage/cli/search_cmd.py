"""``xsspage search``: query the payload reference database."""

from __future__ import annotations

import click

from xsspage.config import AppConfig
from xsspage.core.payloads import PAYLOAD_CATEGORIES, search_payloads
from xsspage.core.severity import Severity


@click.command("search")
@click.argument("query", required=False, default="")
@click.option("--category", type=click.Choice(list(PAYLOAD_CATEGORIES)), default=None,
              help="Only payloads in this category.")
@click.option("--severity", type=click.Choice([s.label for s in Severity]), default=None,
              help="Only payloads of this severity.")
@click.option("--context", default=None,
              help="Only payloads for this injection context (html, url, ...).")
@click.option("--browser", default=None,
              help="Only payloads that work in this browser.")
@click.option("--limit", type=click.IntRange(min=1), default=None,
              help="Maximum results (default: from config).")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def search_command(
    config: AppConfig,
    query: str,
    category: str | None,
    severity: str | None,
    context: str | None,
    browser: str | None,
    limit: int | None,
    output_format: str,
) -> None:
    """Search known XSS payloads by text and filters.

    QUERY matches payload text, description, technique and category,
    ignoring case.
    """
    limit = min(limit or config.default_search_limit, config.max_limit)
    matches = search_payloads(
        query, category=category, severity=severity, context=context, browser=browser,
    )
    returned = matches[:limit]

    if output_format == "json":
        from xsspage.cli.output import print_json

        print_json({
            "query": query,
            "filters": {
                "category": category,
                "severity": severity,
                "context": context,
                "browser": browser,
            },
            "count": len(matches),
            "returned": len(returned),
            "payloads": [p.to_dict() for p in returned],
        })
    else:
        from xsspage.cli.output import print_search_results

        print_search_results(returned, len(matches))
