import logging
from typing import Optional

from models import SYSTEM_AUTHOR, Post
from database.repositories import PostRepositoryDB
from achievements.detector import Achievement

logger = logging.getLogger(__name__)


class AchievementPublisher:
    """Turns an achievement into a system post on the tournament feed."""

    def __init__(self, posts: PostRepositoryDB):
        self._posts = posts

    async def publish(
        self, achievement: Achievement, player_name: str, tournament_id: str
    ) -> Optional[Post]:
        """Write one feed post. Returns None if the write failed (already logged)."""
        post = Post(
            tournament_id=tournament_id,
            player_id=None,
            player_name=SYSTEM_AUTHOR,
            content=achievement.caption(player_name),
            source_key=achievement.source_key,
        )
        try:
            return await self._posts.create_post(post)
        except Exception:
            logger.exception(
                "Could not post %s for %s on hole %d",
                achievement.kind.value, player_name, achievement.hole_number,
            )
            return None

    async def already_published(self, achievement: Achievement, tournament_id: str) -> bool:
        """Keyed on round, hole and kind, so the same birdie on day two still posts."""
        key = achievement.source_key
        if key is None:
            return False
        return await self._posts.exists_with_source_key(tournament_id, key)
