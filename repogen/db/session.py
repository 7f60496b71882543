from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from repogen.core.config import settings
from typing import AsyncGenerator, Optional

DATABASE_URL = settings.databaseUrl

engine = create_async_engine(DATABASE_URL, echo=False) # Set echo=True for SQL logging

def createEngine(databaseUrl: Optional[str] = None) -> AsyncEngine:
    if not databaseUrl or databaseUrl == DATABASE_URL:
        return engine
    return create_async_engine(databaseUrl, echo=False)

async def getConnection() -> AsyncGenerator[AsyncConnection, None]:
    async with engine.connect() as conn:
        yield conn
