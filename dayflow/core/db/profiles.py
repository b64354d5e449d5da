"""
Profiles Repository - Per-user settings
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional

from dayflow.core.errors import StorageError
from dayflow.core.logger import get_logger
from dayflow.core.models import Profile
from dayflow.core.sqls import queries

from .base import BaseRepository, utc_now

logger = get_logger(__name__)

UPDATABLE_COLUMNS = (
    "email",
    "name",
    "timezone",
    "theme",
    "ai_enabled",
    "notifications_enabled",
    "daily_briefing_time",
    "updated_at",
)


class ProfilesRepository(BaseRepository):
    """Repository for user profiles (one row per user, id = user id)"""

    def __init__(self, db_path: Path):
        super().__init__(db_path)

    def get(self, user_id: str) -> Optional[Profile]:
        try:
            with self._get_conn() as conn:
                row = conn.execute(queries.SELECT_PROFILE, (user_id,)).fetchone()
            return Profile.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get profile {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load settings") from e

    def upsert(
        self, user_id: str, changes: Dict[str, Any], email: Optional[str] = None
    ) -> Profile:
        """Apply a settings patch, creating the profile with defaults first if needed"""
        now = utc_now()
        try:
            with self._get_conn() as conn:
                row = conn.execute(queries.SELECT_PROFILE, (user_id,)).fetchone()
                if row is None:
                    defaults = Profile(id=user_id, email=email)
                    conn.execute(
                        queries.INSERT_PROFILE,
                        (
                            defaults.id,
                            defaults.email,
                            defaults.name,
                            defaults.timezone,
                            defaults.theme,
                            int(defaults.ai_enabled),
                            int(defaults.notifications_enabled),
                            defaults.daily_briefing_time,
                            now,
                            now,
                        ),
                    )
                    logger.info(f"Created profile for user: {user_id}")

                values = dict(changes)
                values["updated_at"] = now
                assignments, params = self._assignments(values, UPDATABLE_COLUMNS)
                conn.execute(
                    queries.UPDATE_PROFILE.format(assignments=assignments),
                    params + [user_id],
                )
                conn.commit()

                row = conn.execute(queries.SELECT_PROFILE, (user_id,)).fetchone()
            return Profile.from_row(row)
        except sqlite3.Error as e:
            logger.error(f"Failed to save profile {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to save settings") from e
