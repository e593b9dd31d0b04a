"""Create the vehicles table in the configured database.

Reads DATABASE_URL (or .env) the same way the API does:

    python -m scripts.create_tables
"""

import asyncio

from src.vehicle_service.infrastructure.database.connection import DatabaseManager
from src.vehicle_service.presentation.api.config import get_settings


async def create_tables() -> None:
    settings = get_settings()
    database = DatabaseManager(settings.database_url, echo=settings.db_echo)

    await database.connect()
    try:
        await database.create_tables()
        print(f"Tables created in {database.engine.url.render_as_string(hide_password=True)}")
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(create_tables())
