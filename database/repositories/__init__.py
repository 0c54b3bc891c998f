from .course_repo import CourseRepositoryDB
from .message_repo import MessageRepositoryDB
from .notification_repo import NotificationRepositoryDB
from .player_repo import PlayerRepositoryDB
from .post_repo import PostRepositoryDB
from .push_subscription_repo import PushSubscriptionRepositoryDB
from .round_repo import RoundRepositoryDB
from .tournament_repo import TournamentRepositoryDB

__all__ = [
    "CourseRepositoryDB",
    "MessageRepositoryDB",
    "NotificationRepositoryDB",
    "PlayerRepositoryDB",
    "PostRepositoryDB",
    "PushSubscriptionRepositoryDB",
    "RoundRepositoryDB",
    "TournamentRepositoryDB",
]
