"""CLI interface for autopfs-viz."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from autopfs_viz import __version__
from autopfs_viz.app import START_RESULTS, START_STATUS, run_dashboard
from autopfs_viz.core.client import ApiClient
from autopfs_viz.core.config import Config
from autopfs_viz.core.location import result_url
from autopfs_viz.logging_config import configure_logging, set_job_context
from autopfs_viz.rendering.columns import parse_filter
from autopfs_viz.transformer import parse_job
from autopfs_viz.utils.errors import APIError, ModelError
from autopfs_viz.utils.export import ExportService

app = typer.Typer(
    name="autopfs-viz",
    help="autopfs-viz: live status and results dashboard for autopfs jobs",
    add_completion=False
)
console = Console()
console_err = Console(stderr=True)


def _load_config(config_path: Optional[Path], url: Optional[str] = None) -> Config:
    config = Config.load(config_path)
    if url:
        config.api.base_url = url
    return config


def _setup_logging(config: Config, verbose: bool, tui: bool) -> None:
    # stderr belongs to the full-screen UI while it runs
    configure_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_dir=config.logging.log_dir,
        console=not tui,
    )


def _parse_filters(filters: Optional[List[str]]):
    try:
        return [parse_filter(f) for f in filters or []]
    except ValueError as e:
        console_err.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def status(
    page_url: str = typer.Argument(..., help="Status page URL, e.g. http://host:8080/status?id=JOB"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config file"),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-f", help="Row filter, e.g. System=PFS2"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Follow a running job and show its results when it is done.

    Add ``view`` to the URL query to stay on the status screen after the job
    finishes.

    Examples:
        autopfs-viz status "http://localhost:8080/status?id=abc123"
        autopfs-viz status "http://localhost:8080/status?id=abc123&view"
    """
    config = _load_config(config_path)
    _setup_logging(config, verbose, tui=True)
    parsed = _parse_filters(filters)
    try:
        run_dashboard(page_url, start=START_STATUS, config=config, filters=parsed)
    except Exception as e:  # pragma: no cover - CLI runtime
        console_err.print(f"[bold red]Failed to launch dashboard:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def html(
    page_url: Optional[str] = typer.Argument(None, help="Result page URL, e.g. http://host:8080/html?id=JOB"),
    job: Optional[str] = typer.Option(None, "--id", help="Job ID (instead of PAGE_URL)"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Server URL used with --id"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config file"),
    filters: Optional[List[str]] = typer.Option(None, "--filter", "-f", help="Row filter, e.g. Character=1234"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Show a finished job's sessions as a sortable table.

    Examples:
        autopfs-viz html "http://localhost:8080/html?id=abc123"
        autopfs-viz html --id abc123 --url http://localhost:8080
        autopfs-viz html --id abc123 --filter "Date>=2019-01-01"
    """
    if page_url and job:
        console_err.print("[bold red]Error:[/bold red] Cannot specify both PAGE_URL and --id")
        raise typer.Exit(code=1)
    if not page_url and not job:
        console_err.print("[bold red]Error:[/bold red] Must specify either PAGE_URL or --id")
        console_err.print("[dim]Usage: autopfs-viz html PAGE_URL or autopfs-viz html --id JOB_ID[/dim]")
        raise typer.Exit(code=1)

    config = _load_config(config_path, url)
    _setup_logging(config, verbose, tui=True)
    parsed = _parse_filters(filters)
    if job:
        page_url = result_url(config.api.base_url, job)

    try:
        run_dashboard(page_url, start=START_RESULTS, config=config, filters=parsed)
    except Exception as e:  # pragma: no cover - CLI runtime
        console_err.print(f"[bold red]Failed to launch dashboard:[/bold red] {e}")
        raise typer.Exit(code=1)


async def _fetch_and_export(config: Config, job_id: str, output: Path) -> int:
    client = ApiClient(config.api)
    try:
        job = parse_job(await client.fetch_job(job_id))
    finally:
        await client.close()
    return ExportService.export_sessions_to_csv(job, output)


@app.command()
def export(
    job_id: str = typer.Argument(..., help="Job ID"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Server URL"),
    output: Path = typer.Option(..., "--output", "-o", help="CSV file to write"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    """Fetch a finished job and write its sessions as CSV.

    Examples:
        autopfs-viz export abc123 --url http://localhost:8080 --output sessions.csv
    """
    config = _load_config(config_path, url)
    _setup_logging(config, verbose, tui=False)
    set_job_context(job_id)

    try:
        count = asyncio.run(_fetch_and_export(config, job_id, output))
    except (APIError, ModelError) as e:
        console_err.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)
    except OSError as e:
        console_err.print(f"[bold red]Export failed:[/bold red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold green]✓[/bold green] Exported {count} sessions to {output}")


@app.command()
def version():
    """Show autopfs-viz version."""
    console.print(f"[bold]autopfs-viz[/bold] v{__version__}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
