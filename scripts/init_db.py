#!/usr/bin/env python
"""Initialize database tables."""
import asyncio

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from backend.db.connection import create_engine, create_tables
from backend.main import validate_environment


async def init_db() -> None:
    engine = create_engine()
    await create_tables(engine)
    await engine.dispose()
    print("✓ Database tables created successfully")


if __name__ == "__main__":
    # Same startup diagnostics as the API server.
    validate_environment()
    asyncio.run(init_db())
