"""
SQLite storage
DatabaseManager creates the schema and exposes one repository per entity
"""

import sqlite3
from pathlib import Path
from typing import Optional

from dayflow.core.errors import StorageError
from dayflow.core.logger import get_logger
from dayflow.core.sqls import schema

from .ideas import IdeasRepository
from .links import LinksRepository
from .profiles import ProfilesRepository
from .tasks import TasksRepository

logger = get_logger(__name__)


class DatabaseManager:
    """Database manager"""

    def __init__(self, db_path: Optional[str] = None):
        # If no path is provided, use the unified data directory
        if db_path is None:
            from dayflow.core.paths import get_db_path

            db_path = str(get_db_path())

        self.db_path = Path(db_path)
        self._init_database()

        self.tasks = TasksRepository(self.db_path)
        self.ideas = IdeasRepository(self.db_path)
        self.links = LinksRepository(self.db_path)
        self.profiles = ProfilesRepository(self.db_path)

    def _init_database(self):
        """Initialize database"""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(str(self.db_path))
            try:
                for table_sql in schema.ALL_TABLES:
                    conn.execute(table_sql)
                for index_sql in schema.ALL_INDEXES:
                    conn.execute(index_sql)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Database initialization failed: {e}", exc_info=True)
            raise StorageError("Failed to initialize database") from e
        logger.info(f"Database initialization completed: {self.db_path}")


# Global database manager instance
db_manager: Optional[DatabaseManager] = None


def get_db() -> DatabaseManager:
    """Get database manager instance

    The path comes from database.path in the configuration, falling back to
    dayflow.db in the data directory.
    """
    global db_manager
    if db_manager is None:
        db_manager = DatabaseManager()
        logger.info(f"✓ Database manager initialized, path: {db_manager.db_path}")
    return db_manager


__all__ = [
    "DatabaseManager",
    "get_db",
    "TasksRepository",
    "IdeasRepository",
    "LinksRepository",
    "ProfilesRepository",
]
