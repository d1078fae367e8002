#!/usr/bin/env python3
import argparse
import asyncio

from ladder.database import create_database
from ladder.logic.seed import DEFAULT_LADDERS, seed_default_ladders
from ladder.sql.ladders import get_all_ladders


async def async_main() -> None:
    parser = argparse.ArgumentParser(
        description="Create the default ladders (numbers 1-3). Existing ladders are left as-is."
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Database to seed. Defaults to PG_DSN from the environment config.",
    )
    args = parser.parse_args()

    database = create_database(args.database_url)
    await database.connect()
    try:
        await seed_default_ladders(database)
        ladders = await get_all_ladders(database)
    finally:
        await database.disconnect()

    print(f"Default ladder numbers: {[ladder.number for ladder in DEFAULT_LADDERS]}")
    print(f"Ladders in database: {[(ladder.number, ladder.name) for ladder in ladders]}")


if __name__ == "__main__":
    asyncio.run(async_main())
