"""
Links Repository - Owner-scoped storage for saved links and their page metadata
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dayflow.core.errors import StorageError
from dayflow.core.logger import get_logger
from dayflow.core.models import Link, LinkStatus
from dayflow.core.sqls import queries

from .base import BaseRepository, like_pattern, new_id, utc_now

logger = get_logger(__name__)

UPDATABLE_COLUMNS = ("status", "title", "description", "tags", "updated_at")


class LinksRepository(BaseRepository):
    """Repository for saved links"""

    def __init__(self, db_path: Path):
        super().__init__(db_path)

    def insert(
        self,
        user_id: str,
        data: Dict[str, Any],
        metadata: Optional[Dict[str, Optional[str]]] = None,
    ) -> Link:
        """Insert a link; `metadata` carries title/description/image/favicon"""
        meta = metadata or {}
        now = utc_now()
        link = Link(
            id=new_id(),
            user_id=user_id,
            url=data["url"],
            title=meta.get("title"),
            description=meta.get("description"),
            image=meta.get("image"),
            favicon=meta.get("favicon"),
            status=data.get("status", LinkStatus.UNREAD.value),
            tags=list(data.get("tags") or []),
            created_at=now,
            updated_at=now,
        )
        try:
            with self._get_conn() as conn:
                conn.execute(
                    queries.INSERT_LINK,
                    (
                        link.id,
                        link.user_id,
                        link.url,
                        link.title,
                        link.description,
                        link.image,
                        link.favicon,
                        link.status,
                        json.dumps(link.tags),
                        link.created_at,
                        link.updated_at,
                    ),
                )
                conn.commit()
            logger.debug(f"Inserted link: {link.id}")
            return link
        except sqlite3.Error as e:
            logger.error(f"Failed to insert link for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to save link") from e

    def get(self, user_id: str, link_id: str) -> Optional[Link]:
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    queries.SELECT_LINK_BY_ID, (link_id, user_id)
                ).fetchone()
            return Link.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get link {link_id}: {e}", exc_info=True)
            raise StorageError("Failed to load link") from e

    def list(
        self,
        user_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Link], int]:
        """List links newest first; `search` matches title, description or url"""
        where = ["user_id = ?"]
        params: List[Any] = [user_id]

        if status:
            where.append("status = ?")
            params.append(status)

        if search:
            pattern = like_pattern(search)
            where.append(queries.LINK_SEARCH_FILTER)
            params.extend([pattern, pattern, pattern])

        if tag:
            where.append(queries.TAG_FILTER.format(table="links"))
            params.append(tag)

        clause = " AND ".join(where)
        try:
            with self._get_conn() as conn:
                total = conn.execute(
                    queries.COUNT_LINKS_WHERE.format(where=clause), params
                ).fetchone()["total"]
                rows = conn.execute(
                    queries.SELECT_LINKS_WHERE.format(where=clause) + queries.NEWEST_FIRST,
                    params + [limit, offset],
                ).fetchall()
            return [Link.from_row(row) for row in rows], int(total)
        except sqlite3.Error as e:
            logger.error(f"Failed to list links for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load links") from e

    def update(
        self, user_id: str, link_id: str, changes: Dict[str, Any]
    ) -> Optional[Link]:
        values = dict(changes)
        values["updated_at"] = utc_now()
        assignments, params = self._assignments(values, UPDATABLE_COLUMNS)
        try:
            with self._get_conn() as conn:
                cursor = conn.execute(
                    queries.UPDATE_LINK.format(assignments=assignments),
                    params + [link_id, user_id],
                )
                conn.commit()
                if cursor.rowcount == 0:
                    return None
                row = conn.execute(
                    queries.SELECT_LINK_BY_ID, (link_id, user_id)
                ).fetchone()
            return Link.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to update link {link_id}: {e}", exc_info=True)
            raise StorageError("Failed to update link") from e

    def delete(self, user_id: str, link_id: str) -> bool:
        try:
            with self._get_conn() as conn:
                cursor = conn.execute(queries.DELETE_LINK, (link_id, user_id))
                conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Failed to delete link {link_id}: {e}", exc_info=True)
            raise StorageError("Failed to delete link") from e

    def list_all(self, user_id: str) -> List[Link]:
        try:
            with self._get_conn() as conn:
                rows = conn.execute(queries.SELECT_ALL_LINKS, (user_id,)).fetchall()
            return [Link.from_row(row) for row in rows]
        except sqlite3.Error as e:
            logger.error(f"Failed to export links for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load links") from e
