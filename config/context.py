"""The application context: every long-lived collaborator, built once and injected."""

import logging
from dataclasses import dataclass
from typing import Optional

from config.settings import Settings
from database.connection import DatabasePool
from database.db_manager import DatabaseManager
from achievements.publisher import AchievementPublisher
from achievements.service import AchievementService
from notifications.fanout import NotificationFanout
from notifications.push import PushGateway, PushTransport, WebPushTransport
from realtime.bridge import RealtimeBridge
from storage.object_store import LocalObjectStore, ObjectStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    db: DatabaseManager
    push: PushGateway
    fanout: NotificationFanout
    achievements: AchievementService
    storage: ObjectStore
    realtime: Optional[RealtimeBridge] = None
    pool: Optional[DatabasePool] = None

    @classmethod
    def assemble(
        cls,
        settings: Settings,
        db: DatabaseManager,
        *,
        transport: Optional[PushTransport] = None,
        storage: Optional[ObjectStore] = None,
        realtime: Optional[RealtimeBridge] = None,
        pool: Optional[DatabasePool] = None,
    ) -> "AppContext":
        """Wire services together around an existing DatabaseManager."""
        if transport is None and settings.push_configured:
            transport = WebPushTransport(settings.vapid_private_key, settings.vapid_subject)
        push = PushGateway(db.push_subscriptions, transport)
        fanout = NotificationFanout(db.players, db.notifications, push)
        achievements = AchievementService(db, AchievementPublisher(db.posts), fanout)
        return cls(
            settings=settings,
            db=db,
            push=push,
            fanout=fanout,
            achievements=achievements,
            storage=storage or LocalObjectStore(settings.upload_dir, settings.upload_base_url),
            realtime=realtime,
            pool=pool,
        )

    async def close(self) -> None:
        if self.realtime is not None:
            await self.realtime.close()
        if self.pool is not None:
            await self.pool.close()


async def create_context(settings: Settings) -> AppContext:
    """Connect to the database and build the context.

    Raises ConfigurationError when DATABASE_URL is missing.
    """
    dsn = settings.require_database()
    pool = DatabasePool()
    await pool.initialize(dsn)
    db = DatabaseManager(pool.pool)
    if not settings.push_configured:
        logger.info("VAPID keys not set; push delivery disabled")
    return AppContext.assemble(
        settings, db, realtime=RealtimeBridge(pool.connect_listener), pool=pool
    )
