"""
Base repository shared by the entity repositories
"""

import json
import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from dayflow.core.sqls import queries


def utc_now() -> str:
    """Current UTC time as an ISO 8601 string"""
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return uuid.uuid4().hex


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with wildcards in the term escaped"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BaseRepository:
    """Owns connection handling; subclasses hold the per-entity SQL"""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    @contextmanager
    def _get_conn(self):
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute(queries.PRAGMA_FOREIGN_KEYS_ON)
        try:
            yield conn
        finally:
            conn.close()

    @staticmethod
    def _assignments(
        changes: Dict[str, Any], allowed: Iterable[str]
    ) -> Tuple[str, List[Any]]:
        """Build a `col = ?, ...` clause for the whitelisted columns in `changes`"""
        columns = [column for column in allowed if column in changes]
        params: List[Any] = []
        for column in columns:
            value = changes[column]
            if column == "tags":
                value = json.dumps(value or [])
            elif isinstance(value, bool):
                value = int(value)
            params.append(value)
        return ", ".join(f"{column} = ?" for column in columns), params
