"""xsspage CLI: XSS teaching toolkit.

Entry point for the ``xsspage`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    fuzz      Generate filter-bypass mutations of a payload.
    scan      Scan JavaScript/template code for DOM XSS sinks and sources.
    csp       Analyze, test, build and browse Content-Security-Policies.
    generate  Generate random XSS payloads from templates.
    detect    List the XSS indicators present in a payload.
    search    Search the payload reference database.
    challenge Check a payload against a filter, context and pattern rules.
    progress  Show, reset, export or import learning progress.
    serve     Run the JSON HTTP API.

Usage::

    xsspage fuzz '<script>alert(1)</script>' -s htmlEntities -s urlEncoding
    xsspage scan app.js --framework auto
    xsspage csp analyze "default-src 'self'; script-src 'self' 'unsafe-inline'"
    xsspage csp test "script-src 'none'" '<script>alert(1)</script>'
    xsspage generate --count 5 --seed 42
    xsspage search onerror --severity high
    xsspage challenge "<svg onload=alert(1)>" --filter basic
    xsspage serve --port 8080
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from xsspage import __version__
from xsspage.cli.challenge_cmd import challenge_command
from xsspage.cli.csp_cmd import csp_group
from xsspage.cli.detect_cmd import detect_command
from xsspage.cli.fuzz_cmd import fuzz_command
from xsspage.cli.generate_cmd import generate_command
from xsspage.cli.progress_cmd import progress_group
from xsspage.cli.scan_cmd import scan_command
from xsspage.cli.search_cmd import search_command
from xsspage.cli.serve_cmd import serve_command
from xsspage.config import load_config
from xsspage.exceptions import ConfigError

_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: $XSSPAGE_CONFIG or ./xsspage.yaml).",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: int) -> None:
    """xsspage: hands-on Cross-Site Scripting toolkit.

    Mutate payloads to probe filters, scan code for DOM XSS sinks and
    sources, and evaluate Content-Security-Policies.
    """
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_config(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


# Register all subcommands
cli.add_command(fuzz_command)
cli.add_command(scan_command)
cli.add_command(csp_group)
cli.add_command(generate_command)
cli.add_command(detect_command)
cli.add_command(search_command)
cli.add_command(challenge_command)
cli.add_command(progress_group)
cli.add_command(serve_command)
