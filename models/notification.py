from datetime import datetime
from enum import Enum
from typing import Dict, NamedTuple, Optional

from .base import BaseGolfModel


class NotificationType(str, Enum):
    """Closed set of notification tags."""
    CHAT = "chat"
    BID = "bid"
    SCORE = "score"
    POST = "post"
    ACHIEVEMENT = "achievement"
    EAGLE = "eagle"
    BIRDIE = "birdie"
    HOLE_IN_ONE = "hole-in-one"
    GROUP = "group"
    TEE_TIME = "tee-time"


class NotificationStyle(NamedTuple):
    icon: str
    color: str


NOTIFICATION_STYLES: Dict[NotificationType, NotificationStyle] = {
    NotificationType.CHAT: NotificationStyle("message-circle", "blue"),
    NotificationType.BID: NotificationStyle("gavel", "orange"),
    NotificationType.SCORE: NotificationStyle("trophy", "green"),
    NotificationType.POST: NotificationStyle("image", "purple"),
    NotificationType.ACHIEVEMENT: NotificationStyle("sparkles", "emerald"),
    NotificationType.EAGLE: NotificationStyle("trophy", "amber"),
    NotificationType.BIRDIE: NotificationStyle("trophy", "green"),
    NotificationType.HOLE_IN_ONE: NotificationStyle("target", "red"),
    NotificationType.GROUP: NotificationStyle("users", "slate"),
    NotificationType.TEE_TIME: NotificationStyle("clock", "slate"),
}


class Notification(BaseGolfModel):
    """In-app notification addressed to one player.

    Only `read` changes after creation; clearing deletes the record.
    """
    id: Optional[str] = None
    player_id: str
    tournament_id: str
    type: NotificationType
    title: str
    message: str
    read: bool = False
    timestamp: Optional[datetime] = None

    @property
    def style(self) -> NotificationStyle:
        return NOTIFICATION_STYLES[self.type]
