from .base import BaseGolfModel
from .course import Course
from .hole import Hole
from .hole_score import HoleScore
from .outcomes import BatchResult, ItemOutcome
from .notification import NOTIFICATION_STYLES, Notification, NotificationStyle, NotificationType
from .player import Player
from .push_subscription import PushSubscription
from .round import Round
from .social import SYSTEM_AUTHOR, MediaType, Message, Post
from .tournament import ScoringType, Tournament

__all__ = [
    "BaseGolfModel",
    "BatchResult",
    "Course",
    "Hole",
    "HoleScore",
    "ItemOutcome",
    "MediaType",
    "Message",
    "NOTIFICATION_STYLES",
    "Notification",
    "NotificationStyle",
    "NotificationType",
    "Player",
    "Post",
    "PushSubscription",
    "Round",
    "SYSTEM_AUTHOR",
    "ScoringType",
    "Tournament",
]
