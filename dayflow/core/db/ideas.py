"""
Ideas Repository - Owner-scoped idea storage
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dayflow.core.errors import StorageError
from dayflow.core.logger import get_logger
from dayflow.core.models import Idea, IdeaColor
from dayflow.core.sqls import queries

from .base import BaseRepository, like_pattern, new_id, utc_now

logger = get_logger(__name__)

UPDATABLE_COLUMNS = ("title", "content", "color", "tags", "updated_at")


class IdeasRepository(BaseRepository):
    """Repository for ideas"""

    def __init__(self, db_path: Path):
        super().__init__(db_path)

    def insert(self, user_id: str, data: Dict[str, Any]) -> Idea:
        now = utc_now()
        idea = Idea(
            id=new_id(),
            user_id=user_id,
            title=data["title"],
            content=data.get("content") or "",
            color=data.get("color", IdeaColor.DEFAULT.value),
            tags=list(data.get("tags") or []),
            created_at=now,
            updated_at=now,
        )
        try:
            with self._get_conn() as conn:
                conn.execute(
                    queries.INSERT_IDEA,
                    (
                        idea.id,
                        idea.user_id,
                        idea.title,
                        idea.content,
                        idea.color,
                        json.dumps(idea.tags),
                        idea.created_at,
                        idea.updated_at,
                    ),
                )
                conn.commit()
            logger.debug(f"Inserted idea: {idea.id}")
            return idea
        except sqlite3.Error as e:
            logger.error(f"Failed to insert idea for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to create idea") from e

    def get(self, user_id: str, idea_id: str) -> Optional[Idea]:
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    queries.SELECT_IDEA_BY_ID, (idea_id, user_id)
                ).fetchone()
            return Idea.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get idea {idea_id}: {e}", exc_info=True)
            raise StorageError("Failed to load idea") from e

    def list(
        self,
        user_id: str,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Idea], int]:
        """List ideas newest first; `search` matches title or content"""
        where = ["user_id = ?"]
        params: List[Any] = [user_id]

        if search:
            pattern = like_pattern(search)
            where.append(queries.IDEA_SEARCH_FILTER)
            params.extend([pattern, pattern])

        if tag:
            where.append(queries.TAG_FILTER.format(table="ideas"))
            params.append(tag)

        clause = " AND ".join(where)
        try:
            with self._get_conn() as conn:
                total = conn.execute(
                    queries.COUNT_IDEAS_WHERE.format(where=clause), params
                ).fetchone()["total"]
                rows = conn.execute(
                    queries.SELECT_IDEAS_WHERE.format(where=clause) + queries.NEWEST_FIRST,
                    params + [limit, offset],
                ).fetchall()
            return [Idea.from_row(row) for row in rows], int(total)
        except sqlite3.Error as e:
            logger.error(f"Failed to list ideas for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load ideas") from e

    def update(
        self, user_id: str, idea_id: str, changes: Dict[str, Any]
    ) -> Optional[Idea]:
        values = dict(changes)
        values["updated_at"] = utc_now()
        assignments, params = self._assignments(values, UPDATABLE_COLUMNS)
        try:
            with self._get_conn() as conn:
                cursor = conn.execute(
                    queries.UPDATE_IDEA.format(assignments=assignments),
                    params + [idea_id, user_id],
                )
                conn.commit()
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(
                    queries.SELECT_IDEA_BY_ID, (idea_id, user_id)
                ).fetchone()
            return Idea.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to update idea {idea_id}: {e}", exc_info=True)
            raise StorageError("Failed to update idea") from e

    def delete(self, user_id: str, idea_id: str) -> bool:
        try:
            with self._get_conn() as conn:
                cursor = conn.execute(queries.DELETE_IDEA, (idea_id, user_id))
                conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Failed to delete idea {idea_id}: {e}", exc_info=True)
            raise StorageError("Failed to delete idea") from e

    def list_all(self, user_id: str) -> List[Idea]:
        try:
            with self._get_conn() as conn:
                rows = conn.execute(queries.SELECT_ALL_IDEAS, (user_id,)).fetchall()
            return [Idea.from_row(row) for row in rows]
        except sqlite3.Error as e:
            logger.error(f"Failed to export ideas for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load ideas") from e
