# center_finder/__main__.py
import asyncio
import json
import logging
from pathlib import Path
import typer
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich import box
from InquirerPy import inquirer

from center_finder.config import settings
from center_finder.models import CenterPoint, RunPhase, RunResult
from center_finder.pipeline import CenterFinder
from center_finder.reverse_geocoder import ReverseGeocoder

app = typer.Typer(help="Location Center Finder - Find the central point of a set of places")
console = Console()


def show_banner():
    """Display the application banner."""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                   📍 LOCATION CENTER FINDER                   ║
║        Geocode a list of places and find their center         ║
╚═══════════════════════════════════════════════════════════════╝
    """
    console.print(banner, style="bold blue")


def configure_logging(verbose: bool, quiet: bool = False):
    """Send log records to stderr so --json output stays parseable."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def prompt_for_addresses() -> str:
    """Ask for the address list interactively."""
    return inquirer.text(
        message="Enter locations separated by commas or new lines:",
        multiline=True,
        instruction="(Esc then Enter to finish)",
    ).execute()


def show_locations_table(result: RunResult):
    """Display the resolved locations."""
    table = Table(title="Resolved Locations", box=box.ROUNDED)
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Input", style="cyan")
    table.add_column("Resolved Address", style="green")
    table.add_column("Lat", style="magenta", justify="right")
    table.add_column("Lon", style="magenta", justify="right")

    for i, loc in enumerate(result.locations, 1):
        table.add_row(
            str(i),
            loc.input_address,
            loc.canonical_address,
            f"{loc.lat:.5f}",
            f"{loc.lon:.5f}",
        )

    console.print()
    console.print(table)


def show_result(result: RunResult):
    """Display the outcome of a run."""
    if not result.ok:
        console.print(Panel(
            f"[bold red]✗ {result.error}[/bold red]",
            title="Error",
            border_style="red",
        ))
        if result.failed_addresses:
            console.print(f"[dim]Could not geocode: {', '.join(result.failed_addresses)}[/dim]")
        return

    show_locations_table(result)

    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")
    if result.failed_addresses:
        console.print(f"[yellow]Skipped (not found): {', '.join(result.failed_addresses)}[/yellow]")

    center = result.center
    console.print()
    console.print(Panel(
        f"[bold green]{center.label}[/bold green]\n\n"
        f"Coordinates: [cyan]{center.lat:.6f}, {center.lon:.6f}[/cyan]",
        title="Center Location",
        border_style="green",
    ))


@app.command()
def find(
    addresses: Optional[list[str]] = typer.Argument(
        None,
        help="Locations (each argument may itself contain commas or new lines)"
    ),
    city: str = typer.Option(
        "",
        "--city", "-c",
        help="City context for more accurate results within a city, e.g. 'Delhi, India'"
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file", "-f",
        exists=True, dir_okay=False, readable=True,
        help="Read locations from a text file"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result (markers and center) as JSON"
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        min=0.0,
        help=f"Seconds to wait before each geocoding request (default {settings.request_delay})"
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive", "-i/-I",
        help="Prompt for locations when none are given"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Geocode the locations and find their center."""
    configure_logging(verbose, quiet=as_json)

    parts = []
    if file is not None:
        parts.append(file.read_text(encoding="utf-8"))
    if addresses:
        parts.extend(addresses)

    if not parts:
        if not interactive:
            console.print("[red]No locations given.[/red]")
            raise typer.Exit(2)
        if not as_json:
            show_banner()
        parts.append(prompt_for_addresses())

    raw_input = "\n".join(parts)

    with console.status("Finding center...") as status:

        def on_progress(phase: RunPhase, message: str):
            status.update(f"[bold cyan]{phase.value.replace('_', ' ').title()}[/bold cyan] {message}")

        finder = CenterFinder.from_settings(delay=delay, on_progress=on_progress)
        try:
            result = asyncio.run(finder.run(raw_input, city_context=city))
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted. No results were kept.[/yellow]")
            raise typer.Exit(130)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        show_result(result)

    if not result.ok:
        raise typer.Exit(1)


@app.command()
def reverse(
    lat: float = typer.Argument(..., min=-90.0, max=90.0, help="Latitude in degrees"),
    lon: float = typer.Argument(..., min=-180.0, max=180.0, help="Longitude in degrees"),
):
    """Look up the address of a single coordinate."""
    label = asyncio.run(ReverseGeocoder().label(CenterPoint(lat=lat, lon=lon)))
    console.print(label)


if __name__ == "__main__":
    app()
