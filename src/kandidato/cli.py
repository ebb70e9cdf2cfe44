"""Typer CLI — ``kandidato serve``, ``profile``, ``compare`` and ``roster`` commands."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from kandidato.config import load_settings

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="kandidato",
    help="Kandidato360 — browse and compare Philippine senatorial candidates.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO — noisy and unhelpful for users
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _settings(dry_run: bool):
    try:
        settings = load_settings()
    except Exception as exc:
        console.print(f"[red]Configuration is invalid:[/] {exc}")
        raise typer.Exit(code=1)
    if dry_run:
        settings = settings.model_copy(update={"dry_run": True})
    if settings.dry_run:
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")
    return settings


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Serve canned profiles (no API calls)."),
) -> None:
    """Run the web application."""
    import uvicorn

    from kandidato.web.app import create_app

    _setup_logging(verbose)
    settings = _settings(dry_run)
    try:
        web_app = create_app(settings)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Roster could not be loaded:[/] {exc}")
        raise typer.Exit(code=1)

    console.print(f"[bold]Serving Kandidato360 on[/] http://{host}:{port}")
    uvicorn.run(web_app, host=host, port=port, log_level="debug" if verbose else "info")


@app.command()
def profile(
    name: str = typer.Argument(..., help="Candidate name, e.g. \"Bam Aquino\"."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use a canned profile (no API calls)."),
) -> None:
    """Fetch one candidate profile and print it as JSON."""
    _setup_logging(verbose)
    settings = _settings(dry_run)
    with console.status(f"Fetching profile for {name}…"):
        data = asyncio.run(_run_profile(settings, name))
    console.print_json(json.dumps(data))


@app.command()
def compare(
    candidate_a: str = typer.Argument(..., metavar="CANDIDATE_A"),
    candidate_b: str = typer.Argument(..., metavar="CANDIDATE_B"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned profiles (no API calls)."),
) -> None:
    """Compare two candidates and print the result as JSON."""
    _setup_logging(verbose)
    if candidate_a.strip() == candidate_b.strip():
        console.print("[red]Please select two different candidates.[/]")
        raise typer.Exit(code=1)
    settings = _settings(dry_run)
    with console.status(f"Comparing {candidate_a} and {candidate_b}…"):
        data = asyncio.run(_run_compare(settings, candidate_a, candidate_b))
    console.print_json(json.dumps(data))


@app.command()
def roster(
    path: Path = typer.Option(None, "--path", help="Roster YAML (default: configured roster)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate the candidate roster and list its entries."""
    from kandidato.roster import load_roster

    _setup_logging(verbose)
    path = path or _settings(False).roster_path
    try:
        entries = load_roster(path)
    except Exception as exc:
        console.print(f"[red]Roster validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    table = Table(title=f"{len(entries)} candidates — {path}")
    table.add_column("id")
    table.add_column("name")
    table.add_column("party")
    for entry in entries:
        table.add_row(entry.id, entry.name, entry.party)
    console.print(table)


async def _run_profile(settings, name: str) -> dict:
    from kandidato.agents.profile.agent import ProfileAgent
    from kandidato.errors import KandidatoError
    from kandidato.shared.completion_client import CompletionOptions
    from kandidato.web.app import build_client

    client = build_client(settings)
    try:
        agent = ProfileAgent(client, CompletionOptions(model=settings.model))
        return (await agent.get_profile(name)).to_wire()
    except KandidatoError as exc:
        console.print(f"[red]{exc.public_message}[/] ({exc})")
        raise typer.Exit(code=1)
    finally:
        await client.aclose()


async def _run_compare(settings, candidate_a: str, candidate_b: str) -> dict:
    from kandidato.agents.comparison.agent import ComparisonAgent
    from kandidato.errors import KandidatoError
    from kandidato.shared.completion_client import CompletionOptions
    from kandidato.web.app import build_client

    client = build_client(settings)
    try:
        agent = ComparisonAgent(client, CompletionOptions(model=settings.model))
        return (await agent.compare(candidate_a, candidate_b)).to_wire()
    except KandidatoError as exc:
        console.print(f"[red]{exc.public_message}[/] ({exc})")
        raise typer.Exit(code=1)
    finally:
        await client.aclose()
