"""Row-change subscriptions over Postgres LISTEN/NOTIFY.

Triggers installed by `database/schema.sql` publish a small JSON notice on
`realtime_<table>` for every insert, update and delete. The notice carries
only scoping columns, so subscribers are told *that* something changed and
must re-fetch what they display.
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, List, Optional, Set, Union

import asyncpg

from config.bootstrap import ClientBootstrap

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], Union[None, Awaitable[None]]]

CHANNEL_PREFIX = "realtime_"
FILTER_COLUMNS = {"id", "tournament_id", "player_id"}


class ChangeEvent(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


ALL_EVENTS: FrozenSet[ChangeEvent] = frozenset(ChangeEvent)


class RealtimeSubscription:
    """Handle returned by `RealtimeBridge.subscribe`."""

    def __init__(
        self,
        table: str,
        callback: ChangeCallback,
        column: Optional[str],
        value: Optional[str],
        events: FrozenSet[ChangeEvent],
    ):
        self.table = table
        self.callback = callback
        self.column = column
        self.value = value
        self.events = events
        self.active = True

    def matches(self, notice: dict) -> bool:
        if notice.get("event") not in {e.value for e in self.events}:
            return False
        if self.column is None:
            return True
        return notice.get(self.column) == self.value

    def __repr__(self) -> str:
        scope = f"{self.column}={self.value}" if self.column else "*"
        return f"<RealtimeSubscription {self.table} {scope} active={self.active}>"


class RealtimeBridge:
    """Fans database change notices out to in-process callbacks.

    One LISTEN per table is held while at least one subscription exists on
    that table. Subscriptions are independent of each other.
    """

    def __init__(self, connect: Callable[[], Awaitable[asyncpg.Connection]]):
        self._connection = ClientBootstrap(connect)
        self._subscriptions: Dict[str, List[RealtimeSubscription]] = {}
        self._listening: Dict[str, asyncio.Future] = {}  # table -> LISTEN setup
        self._tasks: Set[asyncio.Task] = set()

    async def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        *,
        column: Optional[str] = None,
        value: Optional[str] = None,
        events: FrozenSet[ChangeEvent] = ALL_EVENTS,
    ) -> RealtimeSubscription:
        """Call `callback` whenever a matching row of `table` changes."""
        if column is not None and column not in FILTER_COLUMNS:
            raise ValueError(f"Cannot filter on {column!r}; use one of {sorted(FILTER_COLUMNS)}")
        handle = RealtimeSubscription(table, callback, column, value, frozenset(events))

        conn = await self._connection.get()
        started = False
        while True:
            setup = self._listening.get(table)
            if setup is None:
                setup = self._listening[table] = asyncio.ensure_future(
                    conn.add_listener(CHANNEL_PREFIX + table, self._on_notify)
                )
                started = True
            try:
                await asyncio.shield(setup)
            except Exception:
                if self._listening.get(table) is setup:
                    del self._listening[table]
                raise
            # The last subscriber may have left while we waited.
            if self._listening.get(table) is setup:
                break

        if started:
            logger.info("Listening for changes on %s", table)
        self._subscriptions.setdefault(table, []).append(handle)
        return handle

    async def unsubscribe(self, handle: RealtimeSubscription) -> None:
        """Release a subscription. Safe to call more than once."""
        if not handle.active:
            return
        handle.active = False

        subs = self._subscriptions.get(handle.table)
        if subs is None or handle not in subs:
            return
        subs.remove(handle)
        if subs:
            return

        del self._subscriptions[handle.table]
        self._listening.pop(handle.table, None)
        if self._connection.resolved:
            conn = await self._connection.get()
            try:
                await conn.remove_listener(CHANNEL_PREFIX + handle.table, self._on_notify)
            except (asyncpg.InterfaceError, asyncpg.PostgresError):
                logger.warning("Could not stop listening on %s", handle.table, exc_info=True)
            else:
                logger.info("Stopped listening for changes on %s", handle.table)

    def _on_notify(self, conn, pid: int, channel: str, payload: str) -> None:
        try:
            notice = json.loads(payload)
        except ValueError:
            logger.warning("Ignoring malformed change notice on %s: %r", channel, payload)
            return

        table = notice.get("table") or channel[len(CHANNEL_PREFIX):]
        for handle in list(self._subscriptions.get(table, ())):
            if handle.active and handle.matches(notice):
                self._dispatch(handle)

    def _dispatch(self, handle: RealtimeSubscription) -> None:
        try:
            result = handle.callback()
        except Exception:
            logger.exception("Change callback for %r failed", handle)
            return
        if asyncio.iscoroutine(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Change callback failed", exc_info=task.exception())

    @property
    def active_tables(self) -> List[str]:
        return sorted(self._subscriptions)

    async def close(self) -> None:
        for subs in list(self._subscriptions.values()):
            for handle in list(subs):
                await self.unsubscribe(handle)
        for task in list(self._tasks):
            task.cancel()
        if self._connection.resolved:
            conn = await self._connection.get()
            await conn.close()
            self._connection.reset()
        self._listening.clear()
