"""
Ginvitational command line: manage the roster and print foursomes.

Uses the running API when --api-url (or API_URL) is given, otherwise the
players database at DATABASE_URL.
"""

from pathlib import Path
from typing import NoReturn, Optional

import typer

from app.core.config import get_settings
from app.core.logging import configure_logging
from foursome_generator import EventController, FoursomeError, HttpRecordStore
from foursome_generator.grouping import seeded_rngs
from foursome_generator.importer import read_players_file
from foursome_generator.store import RecordStore
from foursome_generator.tee_sheet import format_player_line, format_tee_sheet

app = typer.Typer(help="Ginvitational roster and foursome generator.")
players_app = typer.Typer(help="List, add and remove players.")
app.add_typer(players_app, name="players")


def _store(options: dict) -> RecordStore:
    settings = get_settings()
    api_url = options.get("api_url") or settings.api_url
    if api_url:
        return HttpRecordStore(api_url, api_prefix=settings.api_prefix, timeout=settings.store_timeout_seconds)

    from app.db import init_db, make_engine
    from app.store import SqlRecordStore

    engine = make_engine(options.get("database_url") or settings.database_url)
    init_db(engine)
    return SqlRecordStore(engine)


def _controller(ctx: typer.Context, seed: Optional[int] = None) -> EventController:
    store = _store(ctx.obj or {})
    if seed is None:
        controller = EventController(store)
    else:
        rng, code_rng = seeded_rngs(seed)
        controller = EventController(store, rng=rng, code_rng=code_rng)
    controller.roster.load()
    return controller


def _fail(exc: Exception) -> NoReturn:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main_options(
    ctx: typer.Context,
    api_url: Optional[str] = typer.Option(None, help="Base URL of a running Ginvitational API"),
    database_url: Optional[str] = typer.Option(None, help="Database URL when not using the API"),
):
    configure_logging(get_settings().log_level)
    ctx.obj = {"api_url": api_url, "database_url": database_url}


@players_app.command("list")
def list_players(ctx: typer.Context):
    """Print the roster in signup order."""
    try:
        controller = _controller(ctx)
    except FoursomeError as exc:
        _fail(exc)
    if not controller.players:
        typer.echo("No players yet.")
        return
    for player in controller.players:
        typer.echo(f"{player.id:>4} {format_player_line(player).strip()}")
    typer.echo(f"{len(controller.players)} players")


@players_app.command("add")
def add_player(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Player name"),
    handicap: str = typer.Option("", help="Whole-number handicap; leave blank for none"),
    charity: str = typer.Option("", help="Charity the player is playing for"),
):
    try:
        controller = _controller(ctx)
        player = controller.roster.add_player(name, handicap, charity)
    except FoursomeError as exc:
        _fail(exc)
    label = player.name if player else name.strip()
    typer.echo(f"Added {label}. Roster now has {len(controller.players)} players.")


@players_app.command("remove")
def remove_player(
    ctx: typer.Context,
    player_id: int = typer.Argument(..., help="Id shown by `players list`"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    def confirm(player) -> bool:
        return yes or typer.confirm(f"Delete {player.name}?")

    try:
        controller = _controller(ctx)
        removed = controller.roster.delete_player(player_id, confirm=confirm)
    except FoursomeError as exc:
        _fail(exc)
    if not removed:
        typer.echo("Cancelled.")
        return
    typer.echo(f"Removed player {player_id}. Roster now has {len(controller.players)} players.")


@players_app.command("import")
def import_players(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel (.xlsx, .xls) roster file")):
    """Add every row of a spreadsheet (name or first_name/last_name, handicap, charity)."""
    try:
        rows = read_players_file(path)
        controller = _controller(ctx)
        before = len(controller.players)
        controller.roster.import_players(rows)
    except FoursomeError as exc:
        _fail(exc)
    typer.echo(f"Imported {len(controller.players) - before} players from {path.name}.")


@players_app.command("wipe")
def wipe_players(ctx: typer.Context, yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt")):
    """Delete ALL players."""

    def confirm(count: int) -> bool:
        return yes or typer.confirm(f"This will delete ALL {count} players. Continue?")

    try:
        controller = _controller(ctx)
        deleted = controller.roster.wipe(confirm=confirm)
    except FoursomeError as exc:
        _fail(exc)
    typer.echo(f"Deleted {deleted} players.")


@app.command()
def foursomes(
    ctx: typer.Context,
    seed: Optional[int] = typer.Option(None, help="Seed for a reproducible draw"),
    start: Optional[str] = typer.Option(None, help="First tee time, HH:MM"),
    interval: Optional[int] = typer.Option(None, help="Minutes between tee times"),
):
    """Draw random foursomes from the roster and print a tee sheet."""
    settings = get_settings()
    try:
        controller = _controller(ctx, seed)
        controller.generate_groups()
        sheet = format_tee_sheet(
            controller.groups,
            start=start or settings.tee_start,
            interval_minutes=settings.tee_interval_minutes if interval is None else interval,
        )
    except (FoursomeError, ValueError) as exc:
        _fail(exc)
    typer.echo(sheet)


def main():
    app()


if __name__ == "__main__":
    main()
