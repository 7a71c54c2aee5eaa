"""
Initialize the database: create all tables and seed start-up data.
Run with: python -m scripts.init_db [--demo]
"""

import argparse
import asyncio

from passport.config import get_settings
from passport.repositories import SqlStore
from passport.seed import seed_store


async def init(demo: bool):
    settings = get_settings()
    if not settings.database_url:
        raise SystemExit("DATABASE_URL is not set; the in-memory store needs no initialisation.")

    store = SqlStore(settings.database_url, echo=settings.database_echo)
    print("Creating database tables...")
    await store.create_all()
    async with store.repository() as repo:
        await seed_store(repo, demo=demo or settings.seed_demo_data)
    print("Tables created and seed data loaded.")
    await store.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--demo", action="store_true", help="also create the demo clinician and patient")
    asyncio.run(init(parser.parse_args().demo))
