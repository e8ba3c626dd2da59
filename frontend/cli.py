"""Terminal client for browsing and editing favorites.

Usage:
    favorites list [--all] [--page-size N]
    favorites add --title ... --type MOVIE ...
    favorites edit ID [--title ...]
    favorites delete ID [--yes]
"""

from __future__ import annotations

import asyncio
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from backend.db.models import FavoriteType
from backend.errors import ValidationError
from backend.schemas.favorites import FavoriteRead
from frontend.api_client import ApiError, FavoritesApiClient
from frontend.view import FavoritesView

load_dotenv()

console = Console()

_FIELD_OPTIONS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("type", "type"),
    ("director", "director"),
    ("budget", "budget"),
    ("location", "location"),
    ("duration", "duration"),
    ("year_time", "yearTime"),
    ("description", "description"),
)


def _build_table(entries: list[FavoriteRead]) -> Table:
    table = Table(title="Favorites", show_lines=False)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Type")
    table.add_column("Director")
    table.add_column("Budget")
    table.add_column("Location")
    table.add_column("Duration")
    table.add_column("Year/Time")

    for entry in entries:
        table.add_row(
            str(entry.id),
            entry.title,
            entry.type.value,
            entry.director,
            entry.budget,
            entry.location,
            entry.duration,
            entry.year_time,
        )
    return table


def _collect_fields(values: dict[str, Any]) -> dict[str, Any]:
    """Map CLI option values onto wire keys, dropping options not given."""

    data: dict[str, Any] = {}
    for option_name, wire_key in _FIELD_OPTIONS:
        value = values.get(option_name)
        if value is not None:
            data[wire_key] = value
    return data


def _print_issues(exc: ValidationError) -> None:
    console.print(f"[red]✗ {exc.message}[/red]")
    for issue in exc.issues:
        console.print(f"  • [yellow]{issue.field}[/yellow]: {issue.message}")


def _field_options(*, required: bool):
    """Attach the favorite field options shared by ``add`` and ``edit``."""

    def decorator(func):
        type_choice = click.Choice([member.value for member in FavoriteType])
        options = [
            click.option("--title", required=required),
            click.option("--type", "type", type=type_choice, required=required),
            click.option("--director", required=required),
            click.option("--budget", required=required),
            click.option("--location", required=required),
            click.option("--duration", required=required),
            click.option("--year-time", "year_time", required=required),
            click.option("--description", default=None),
        ]
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


@click.group()
@click.option(
    "--api-url",
    envvar="API_BASE_URL",
    default=None,
    help="Base URL of the favorites API (defaults to http://localhost:4000).",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str | None) -> None:
    """Manage favorite movies and TV shows."""
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url


@cli.command("list")
@click.option("--page-size", type=int, default=None, help="Rows requested per page.")
@click.option("--all", "load_all", is_flag=True, help="Load every page without prompting.")
@click.pass_context
def list_command(ctx: click.Context, page_size: int | None, load_all: bool) -> None:
    """Show favorites, loading further pages on demand."""
    asyncio.run(_list_async(ctx.obj["api_url"], page_size, load_all))


async def _list_async(api_url: str | None, page_size: int | None, load_all: bool) -> None:
    async with FavoritesApiClient(api_url) as client:
        view = FavoritesView(client, page_size=page_size)
        await view.mount()

        while True:
            if view.error:
                console.print(f"[red]✗ {view.error}[/red]")
                return

            if not view.has_more:
                break

            if not load_all:
                console.print(_build_table(view.entries))
                if not click.confirm("Load more?", default=True):
                    return

            # Scrolling to the last row always falls inside the load threshold.
            await view.on_scroll(len(view.entries) - 1)

        if not view.entries:
            console.print("[dim]No favorites yet.[/dim]")
            return

        console.print(_build_table(view.entries))
        console.print(f"[dim]{len(view.entries)} favorites loaded[/dim]")


@cli.command("add")
@_field_options(required=True)
@click.pass_context
def add_command(ctx: click.Context, **values: Any) -> None:
    """Create a favorite."""
    asyncio.run(_add_async(ctx.obj["api_url"], _collect_fields(values)))


async def _add_async(api_url: str | None, data: dict[str, Any]) -> None:
    async with FavoritesApiClient(api_url) as client:
        view = FavoritesView(client)
        try:
            created = await view.save(data)
        except ValidationError as exc:
            _print_issues(exc)
            raise SystemExit(1) from exc

        if created is None:
            console.print(f"[red]✗ {view.error}[/red]")
            raise SystemExit(1)

        console.print(f"[green]✓ Created favorite {created.id}: {created.title}[/green]")


@cli.command("edit")
@click.argument("favorite_id", type=int)
@_field_options(required=False)
@click.pass_context
def edit_command(ctx: click.Context, favorite_id: int, **values: Any) -> None:
    """Update the given fields of a favorite."""
    data = _collect_fields(values)
    if not data:
        raise click.UsageError("Provide at least one field to change.")
    asyncio.run(_edit_async(ctx.obj["api_url"], favorite_id, data))


async def _edit_async(api_url: str | None, favorite_id: int, data: dict[str, Any]) -> None:
    async with FavoritesApiClient(api_url) as client:
        try:
            existing = await client.get_favorite(favorite_id)
        except ApiError as exc:
            console.print(f"[red]✗ {exc.message or 'Failed to load'}[/red]")
            raise SystemExit(1) from exc

        view = FavoritesView(client)
        view.replace([existing])
        try:
            updated = await view.save(data, editing=existing)
        except ValidationError as exc:
            _print_issues(exc)
            raise SystemExit(1) from exc

        if updated is None:
            console.print(f"[red]✗ {view.error}[/red]")
            raise SystemExit(1)

        console.print(_build_table(view.entries))
        console.print(f"[green]✓ Updated favorite {updated.id}[/green]")


@cli.command("delete")
@click.argument("favorite_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_command(ctx: click.Context, favorite_id: int, yes: bool) -> None:
    """Delete a favorite."""
    if not yes and not click.confirm(f"Delete favorite {favorite_id}?", default=False):
        console.print("[dim]Cancelled.[/dim]")
        return
    asyncio.run(_delete_async(ctx.obj["api_url"], favorite_id))


async def _delete_async(api_url: str | None, favorite_id: int) -> None:
    async with FavoritesApiClient(api_url) as client:
        view = FavoritesView(client)
        if not await view.delete(favorite_id):
            console.print(f"[red]✗ {view.error}[/red]")
            raise SystemExit(1)
        console.print(f"[green]✓ Deleted favorite {favorite_id}[/green]")


if __name__ == "__main__":
    cli()
