"""PostgreSQL readiness check"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from ....core.interfaces import IHealthChecker


class PostgresHealthChecker(IHealthChecker):
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
