from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio.core.config_loader import ConfigLoader
from folio.core.exceptions import FolioError
from folio.core.loader import DocumentLoader
from folio.core.logging import configure_logging
from folio.core.pipeline import build_site

app = typer.Typer(name="folio", help="Folio - build a static blog from Markdown posts.")

console = Console()

SITE_ROOT_OPTION = typer.Option(
    None, "--site-root", "-s", help="Site root (defaults to the current directory)."
)


def _load_config(site_root: Path | None):
    try:
        return ConfigLoader(site_root).load()
    except FolioError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _print_errors(title: str, errors) -> None:
    table = Table(title=title)
    table.add_column("Path", style="bold cyan")
    table.add_column("Problem")
    for error in errors:
        table.add_row(escape(error.path), escape(error.reason))
    console.print(table)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", envvar="FOLIO_LOG_LEVEL", help="Logging level (default INFO)."
    ),
):
    configure_logging(log_level)


@app.command()
def build(
    site_root: Path | None = SITE_ROOT_OPTION,
    dry_run: bool = typer.Option(False, "--dry-run", help="Render without writing files."),
):
    """
    Load every post, render the site and write it to the output directory.
    """
    config = _load_config(site_root)
    try:
        report = build_site(config, dry_run=dry_run)
    except FolioError as exc:
        console.print(f"[bold red]Build failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    summary = Table(title=config.site.title)
    summary.add_column("Documents", justify="right")
    summary.add_column("Categories", justify="right")
    summary.add_column("Pages", justify="right")
    summary.add_column("Errors", justify="right")
    summary.add_row(
        str(len(report.documents)),
        str(len(report.categories)),
        str(len(report.pages)),
        str(len(report.parse_errors) + len(report.render_errors)),
    )
    console.print(summary)

    if report.parse_errors:
        _print_errors("Parse errors", report.parse_errors)
    if report.render_errors:
        _print_errors("Render errors", report.render_errors)

    if not dry_run:
        console.print(f"Output written to {config.paths.abs_output_dir}")
    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def check(site_root: Path | None = SITE_ROOT_OPTION):
    """
    Parse every post and report malformed ones without rendering.
    """
    config = _load_config(site_root)
    result = DocumentLoader(config).load()

    if result.errors:
        _print_errors("Parse errors", result.errors)
        raise typer.Exit(code=1)
    console.print(f"[bold green]✔[/bold green] {len(result.documents)} documents parsed cleanly")


if __name__ == "__main__":
    app()
