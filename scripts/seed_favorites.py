"""
Reset the favorites table to a small set of sample rows.

Usage:
    python scripts/seed_favorites.py
"""

import asyncio

import click

from backend.db.connection import (
    create_tables,
    dispose_engine,
    get_engine,
    get_session,
)
from backend.db.repositories import FavoriteRepository
from backend.services.validation import validate_favorite_payload

SEED_FAVORITES = [
    {
        "title": "Inception",
        "type": "MOVIE",
        "director": "Christopher Nolan",
        "budget": "$160M",
        "location": "Los Angeles, Paris",
        "duration": "148 min",
        "yearTime": "2010",
        "description": "Mind-bending heist within dreams",
    },
    {
        "title": "Breaking Bad",
        "type": "TV_SHOW",
        "director": "Vince Gilligan",
        "budget": "$3M per episode",
        "location": "Albuquerque",
        "duration": "49 min per episode",
        "yearTime": "2008-2013",
        "description": "Chemistry teacher becomes meth kingpin",
    },
]


@click.command()
def seed_favorites():
    """Delete every favorite and insert the sample rows."""
    asyncio.run(_seed_favorites_async())


async def _seed_favorites_async():
    engine = get_engine()
    await create_tables(engine)

    async with get_session(engine) as session:
        repository = FavoriteRepository(session)

        removed = await repository.delete_all()
        click.echo(f"🗑  Removed {removed} existing favorites")

        for payload in SEED_FAVORITES:
            validated = validate_favorite_payload(payload, "create")
            favorite = await repository.insert(validated.model_dump())
            click.echo(f"✅ Inserted {favorite.id}: {favorite.title}")

        await session.commit()

    await dispose_engine()
    click.echo(f"\n✅ Seeded {len(SEED_FAVORITES)} favorites")


if __name__ == "__main__":
    seed_favorites()
