"""``xsspage serve``: run the JSON HTTP API with Flask's server."""

from __future__ import annotations

import click

from xsspage.config import AppConfig


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", type=int, default=5000, show_default=True, help="Port to listen on.")
@click.option("--debug", is_flag=True, default=False, help="Enable the Flask debugger.")
@click.pass_obj
def serve_command(config: AppConfig, host: str, port: int, debug: bool) -> None:
    """Serve /api/fuzz, /api/generate, /api/scan and /api/csp."""
    from xsspage.api import create_app

    create_app(config).run(host=host, port=port, debug=debug)
