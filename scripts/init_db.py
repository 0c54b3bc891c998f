"""Apply database/schema.sql (tables and realtime triggers).

    python3 scripts/init_db.py
"""

import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import load_settings
from database.connection import DatabasePool
from database.db_manager import DatabaseManager


async def init_db() -> None:
    pool = DatabasePool()
    await pool.initialize(load_settings().require_database(), min_size=1, max_size=1)
    try:
        await DatabaseManager(pool.pool).initialize_schema()
        print("Schema applied")
    finally:
        await pool.close()


if __name__ == "__main__":
    asyncio.run(init_db())
