"""dvdti CLI: DVD-Video title inspector."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from dvdti.analyze import scan_disc_result
from dvdti.export import export_json, text_report, title_detail
from dvdti.model import DiscCatalog

app = typer.Typer(name="dvdti", help="DVD-Video title inspector")
console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log decoder activity"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _scan(root: str, workers: int | None = None) -> DiscCatalog:
    """Common helper: decode the disc, exit 1 with a message on failure."""
    p = Path(root).resolve()
    with console.status("[bold]Reading IFO files…"):
        result = scan_disc_result(p, workers=workers)
    if not result.ok or result.catalog is None:
        console.print(f"[red]Error:[/red] {result.error}")
        raise typer.Exit(1)
    return result.catalog


@app.command()
def scan(
    root: str = typer.Argument(..., help="Path to disc root or VIDEO_TS directory"),
    output: str = typer.Option(None, "-o", "--output", help="Output JSON file path"),
    pretty: bool = typer.Option(True, "--pretty/--compact"),
    stdout: bool = typer.Option(False, "--stdout", help="Print JSON to stdout"),
    workers: int = typer.Option(None, "--workers", help="Decode title sets in parallel"),
):
    """Decode the disc and emit its title catalog as JSON."""
    catalog = _scan(root, workers=workers)
    json_str = export_json(catalog, path=output, pretty=pretty)
    if stdout or output is None:
        typer.echo(json_str)
    elif output:
        console.print(f"[green]Wrote:[/green] {output}")


@app.command()
def explain(
    root: str = typer.Argument(..., help="Path to disc root or VIDEO_TS directory"),
    title: int = typer.Option(None, "--title", "-t", help="Show one title (1-based)"),
):
    """Print a readable report of titles, audio and subtitle tracks."""
    catalog = _scan(root)

    if title is None:
        typer.echo(text_report(catalog))
        return

    match = next((t for t in catalog.titles if t.number == title), None)
    if match is None:
        console.print(
            f"[red]Title not found:[/red] {title} (disc has {len(catalog.titles)} title(s))"
        )
        raise typer.Exit(1)
    typer.echo("\n".join(title_detail(match)))


if __name__ == "__main__":
    app()
