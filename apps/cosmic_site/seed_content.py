import asyncio

from cosmic_cms.seed import seed_content
from cosmic_core.config import cosmic_settings
from cosmic_core.logging import setup_logging
from cosmic_db import Database


async def main() -> None:
    database = Database(cosmic_settings.DATABASE_URL, echo=False)
    database.connect()
    await database.create_all()

    try:
        async with database.session() as session:
            created = await seed_content(session)
    finally:
        await database.close()

    if not created:
        print("Every table already has content, nothing seeded.")
    for table, count in created.items():
        print(f"Created {count} rows in '{table}'.")


if __name__ == "__main__":
    setup_logging(level="WARNING")
    print(f"Seeding content into {cosmic_settings.DATABASE_URL}")
    asyncio.run(main())
