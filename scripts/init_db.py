# scripts/init_db.py
import asyncio

from app.core.config import settings
from app.db import create_db_and_tables
from app.models.base import Base


async def main():
    print(f"🔧 Creating tables on {settings.database_url.split('@')[-1]}")
    await create_db_and_tables()
    print(f"✅ Tables ready: {', '.join(sorted(Base.metadata.tables))}")

if __name__ == "__main__":
    asyncio.run(main())
