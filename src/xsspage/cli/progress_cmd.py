"""``xsspage progress``: inspect and move learning progress."""

from __future__ import annotations

from pathlib import Path

import click

from xsspage.config import AppConfig
from xsspage.core.progress import ProgressStore
from xsspage.exceptions import ProgressError


@click.group("progress")
@click.pass_context
def progress_group(ctx: click.Context) -> None:
    """Show, reset, export or import learning progress."""
    config: AppConfig = ctx.obj
    ctx.obj = ProgressStore(config.progress_path)


@progress_group.command("show")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the whole progress document as JSON.")
@click.pass_obj
def show_command(store: ProgressStore, as_json: bool) -> None:
    """Show overall learning statistics."""
    if as_json:
        click.echo(store.export())
        return
    from xsspage.cli.output import print_progress_stats

    print_progress_stats(store.get_stats())


@progress_group.command("reset")
@click.confirmation_option(prompt="Delete all learning progress?")
@click.pass_obj
def reset_command(store: ProgressStore) -> None:
    """Delete all stored progress."""
    if store.reset():
        click.echo("Progress reset.")
    else:
        click.echo("No stored progress to reset.")


@progress_group.command("export")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Write to a file instead of stdout.")
@click.pass_obj
def export_command(store: ProgressStore, output: Path | None) -> None:
    """Export progress as JSON."""
    data = store.export()
    if output is None:
        click.echo(data)
        return
    output.write_text(data, encoding="utf-8")
    click.echo(f"Progress exported to: {output}")


@progress_group.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_command(store: ProgressStore, source: Path) -> None:
    """Replace stored progress with an exported JSON document."""
    try:
        document = store.import_document(source.read_text(encoding="utf-8"))
    except ProgressError as exc:
        raise click.ClickException(str(exc)) from exc
    points = document["stats"].get("totalPoints", 0)
    click.echo(f"Progress imported ({points} points).")
