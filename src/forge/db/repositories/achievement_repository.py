"""Repository for persisted achievement unlocks."""

from datetime import datetime, timezone
from typing import Dict, Optional

from ...models import UnlockedAchievement
from .base import UserScopedRepository


class UnlockedAchievementRepository(UserScopedRepository[UnlockedAchievement]):
    """One row per (user, achievement), written the first time it qualifies."""

    table = "unlocked_achievements"
    model = UnlockedAchievement

    def unlocked_at(self, user_id: str) -> Dict[str, datetime]:
        """Map of achievement id to when it was first unlocked."""
        return {row.achievement_id: row.unlocked_at for row in self.list(user_id)}

    def unlock(
        self,
        user_id: str,
        achievement_id: str,
        at: Optional[datetime] = None,
    ) -> bool:
        """
        Record an unlock unless one already exists.

        Returns:
            True if this call created the record
        """
        at = at or datetime.now(timezone.utc)
        return self.backend.insert_ignore(
            self.table,
            {
                "user_id": user_id,
                "achievement_id": achievement_id,
                "unlocked_at": at.isoformat(),
            },
            conflict_columns=["user_id", "achievement_id"],
        )
