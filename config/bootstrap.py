"""Single-flight, process-lifetime resolution of the backend client."""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from config.settings import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientBootstrap(Generic[T]):
    """Resolve a value once and hand the same instance to every caller.

    Concurrent callers during the first resolution all await the same task.
    A failed resolution is not cached, so the next call tries again.
    """

    def __init__(self, resolve: Callable[[], Awaitable[T]]):
        self._resolve = resolve
        self._value: Optional[T] = None
        self._pending: Optional[asyncio.Future] = None

    @property
    def resolved(self) -> bool:
        return self._value is not None

    async def get(self) -> T:
        if self._value is not None:
            return self._value
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._run())
        pending = self._pending
        try:
            # shield: one caller being cancelled must not cancel the others
            return await asyncio.shield(pending)
        finally:
            if pending.done() and self._pending is pending and self._value is None:
                self._pending = None

    async def _run(self) -> T:
        try:
            value = await self._resolve()
        except ConfigurationError:
            logger.error("Backend configuration is missing or incomplete")
            raise
        if value is None:
            raise ConfigurationError("Backend configuration resolved to nothing")
        self._value = value
        return value

    def reset(self) -> None:
        """Forget the cached value (tests, shutdown)."""
        self._value = None
        self._pending = None
