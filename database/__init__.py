from database.connection import DatabasePool
from database.db_manager import DatabaseManager
from database.repositories import (
    CourseRepositoryDB,
    MessageRepositoryDB,
    NotificationRepositoryDB,
    PlayerRepositoryDB,
    PostRepositoryDB,
    PushSubscriptionRepositoryDB,
    RoundRepositoryDB,
    TournamentRepositoryDB,
)
from database.exceptions import (
    DatabaseError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    RoundLockedError,
)

__all__ = [
    "DatabasePool",
    "DatabaseManager",
    "CourseRepositoryDB",
    "MessageRepositoryDB",
    "NotificationRepositoryDB",
    "PlayerRepositoryDB",
    "PostRepositoryDB",
    "PushSubscriptionRepositoryDB",
    "RoundRepositoryDB",
    "TournamentRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
    "RoundLockedError",
]
