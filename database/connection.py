import asyncpg
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class DatabasePool:
    """Manages the asyncpg connection pool lifecycle."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None
        self._dsn: Optional[str] = None

    async def initialize(
        self,
        dsn: str,
        *,
        min_size: int = 2,
        max_size: int = 10,
    ) -> None:
        """Create the connection pool. Call once at app startup."""
        if self._pool is not None:
            return
        self._dsn = dsn
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
        )
        logger.info("Database pool ready (min=%d, max=%d)", min_size, max_size)

    async def close(self) -> None:
        """Close all connections. Call at app shutdown."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        """Get the pool, raising if not initialized."""
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await initialize() first."
            )
        return self._pool

    async def connect_listener(self) -> asyncpg.Connection:
        """Open a dedicated connection for LISTEN; pooled connections get recycled."""
        if self._dsn is None:
            raise RuntimeError("Database pool not initialized. Call await initialize() first.")
        return await asyncpg.connect(dsn=self._dsn)

    async def health_check(self) -> bool:
        """Test connectivity with SELECT 1."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)
            return False
