"""
Check that the configured database is reachable and the favorites table exists.

Usage:
    python scripts/check_database.py
"""

import asyncio
import sys

import click
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from backend.db.connection import (
    dispose_engine,
    get_database_type,
    get_engine,
    get_session,
)
from backend.db.models import Favorite


@click.command()
def check_database():
    """Report the database type, table presence and row count."""
    ok = asyncio.run(_check_database_async())
    sys.exit(0 if ok else 1)


async def _check_database_async() -> bool:
    engine = get_engine()
    click.echo(f"Database type: {get_database_type()}")

    try:
        async with engine.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )

        if Favorite.__tablename__ not in tables:
            click.echo("❌ favorites table is missing (run scripts/init_db.py)")
            return False

        async with get_session(engine) as session:
            total = await session.scalar(select(func.count()).select_from(Favorite))
    except SQLAlchemyError as e:
        click.echo(f"❌ Database check failed: {e}")
        return False
    finally:
        await dispose_engine()

    click.echo(f"✅ favorites table present with {total} rows")
    return True


if __name__ == "__main__":
    check_database()
