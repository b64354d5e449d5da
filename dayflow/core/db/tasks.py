"""
Tasks Repository - Owner-scoped task storage with one level of subtasks
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dayflow.core.errors import InvalidParentError, StorageError
from dayflow.core.logger import get_logger
from dayflow.core.models import COMPLETE_STATUSES, Priority, Task, TaskStatus, is_task_complete
from dayflow.core.sqls import queries

from .base import BaseRepository, new_id, utc_now

logger = get_logger(__name__)

UPDATABLE_COLUMNS = (
    "title",
    "description",
    "due_date",
    "due_time",
    "priority",
    "status",
    "tags",
    "recurring",
    "position",
    "completed_at",
    "updated_at",
)


class TasksRepository(BaseRepository):
    """Repository for tasks and their subtasks"""

    def __init__(self, db_path: Path):
        super().__init__(db_path)

    def insert(self, user_id: str, data: Dict[str, Any]) -> Task:
        """Insert a task from validated create data.

        A `parent_id` must name a top-level task of the same owner.
        """
        parent_id = data.get("parent_id")
        now = utc_now()
        task = Task(
            id=new_id(),
            user_id=user_id,
            title=data["title"],
            description=data.get("description"),
            due_date=data.get("due_date"),
            due_time=data.get("due_time"),
            priority=data.get("priority", Priority.MEDIUM.value),
            status=data.get("status", TaskStatus.TODO.value),
            tags=list(data.get("tags") or []),
            recurring=data.get("recurring"),
            parent_id=parent_id,
            position=int(data.get("position", 0)),
            created_at=now,
            updated_at=now,
        )
        if task.completed:
            task.completed_at = now

        try:
            with self._get_conn() as conn:
                if parent_id:
                    parent = conn.execute(
                        queries.SELECT_TASK_BY_ID, (parent_id, user_id)
                    ).fetchone()
                    if parent is None:
                        raise InvalidParentError("Parent task not found")
                    if parent["parent_id"]:
                        raise InvalidParentError("Subtasks cannot have subtasks")

                conn.execute(
                    queries.INSERT_TASK,
                    (
                        task.id,
                        task.user_id,
                        task.title,
                        task.description,
                        task.due_date,
                        task.due_time,
                        task.priority,
                        task.status,
                        json.dumps(task.tags),
                        task.recurring,
                        task.parent_id,
                        task.position,
                        task.completed_at,
                        task.created_at,
                        task.updated_at,
                    ),
                )
                conn.commit()
                logger.debug(f"Inserted task: {task.id}")
                return task
        except sqlite3.Error as e:
            logger.error(f"Failed to insert task for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to create task") from e

    def get(self, user_id: str, task_id: str) -> Optional[Task]:
        """Get a single task by id"""
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    queries.SELECT_TASK_BY_ID, (task_id, user_id)
                ).fetchone()
            return Task.from_row(row) if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get task {task_id}: {e}", exc_info=True)
            raise StorageError("Failed to load task") from e

    def get_with_subtasks(self, user_id: str, task_id: str) -> Optional[Dict[str, Any]]:
        """Get a task as a dict with its subtasks embedded under `subtasks`"""
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    queries.SELECT_TASK_BY_ID, (task_id, user_id)
                ).fetchone()
                if row is None:
                    return None
                subtask_rows = conn.execute(
                    queries.SELECT_SUBTASKS, (task_id, user_id)
                ).fetchall()

            result = Task.from_row(row).to_dict()
            result["subtasks"] = [Task.from_row(r).to_dict() for r in subtask_rows]
            return result
        except sqlite3.Error as e:
            logger.error(f"Failed to get task {task_id}: {e}", exc_info=True)
            raise StorageError("Failed to load task") from e

    def list(
        self,
        user_id: str,
        date: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Task], int]:
        """List top-level tasks, ordered by position then newest first

        @returns (page of tasks, total matching count)
        """
        where = ["user_id = ?", "parent_id IS NULL"]
        params: List[Any] = [user_id]

        if date:
            where.append("due_date = ?")
            params.append(date)

        if completed is not None:
            placeholders = ", ".join("?" for _ in COMPLETE_STATUSES)
            operator = "IN" if completed else "NOT IN"
            where.append(f"status {operator} ({placeholders})")
            params.extend(sorted(COMPLETE_STATUSES))

        if priority:
            where.append("priority = ?")
            params.append(priority)

        clause = " AND ".join(where)
        try:
            with self._get_conn() as conn:
                total = conn.execute(
                    queries.COUNT_TASKS_WHERE.format(where=clause), params
                ).fetchone()["total"]
                rows = conn.execute(
                    queries.SELECT_TASKS_WHERE.format(where=clause) + queries.TASKS_ORDER,
                    params + [limit, offset],
                ).fetchall()
            return [Task.from_row(row) for row in rows], int(total)
        except sqlite3.Error as e:
            logger.error(f"Failed to list tasks for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load tasks") from e

    def update(
        self, user_id: str, task_id: str, changes: Dict[str, Any]
    ) -> Optional[Task]:
        """Apply validated update data, returning the updated task or None if missing.

        `completed_at` is stamped when the status enters done/cancelled and
        cleared when it leaves them.
        """
        try:
            with self._get_conn() as conn:
                row = conn.execute(
                    queries.SELECT_TASK_BY_ID, (task_id, user_id)
                ).fetchone()
                if row is None:
                    return None

                now = utc_now()
                values = dict(changes)
                values["updated_at"] = now
                if "status" in values:
                    was_complete = is_task_complete(row["status"])
                    now_complete = is_task_complete(values["status"])
                    if now_complete and not was_complete:
                        values["completed_at"] = now
                    elif not now_complete:
                        values["completed_at"] = None

                assignments, params = self._assignments(values, UPDATABLE_COLUMNS)
                conn.execute(
                    queries.UPDATE_TASK.format(assignments=assignments),
                    params + [task_id, user_id],
                )
                conn.commit()

                updated = conn.execute(
                    queries.SELECT_TASK_BY_ID, (task_id, user_id)
                ).fetchone()
            return Task.from_row(updated) if updated else None
        except sqlite3.Error as e:
            logger.error(f"Failed to update task {task_id}: {e}", exc_info=True)
            raise StorageError("Failed to update task") from e

    def delete(self, user_id: str, task_id: str) -> bool:
        """Delete a task and its subtasks in one transaction"""
        try:
            with self._get_conn() as conn:
                conn.execute(queries.DELETE_SUBTASKS, (task_id, user_id))
                cursor = conn.execute(queries.DELETE_TASK, (task_id, user_id))
                conn.commit()
                deleted = cursor.rowcount > 0
            if deleted:
                logger.debug(f"Deleted task: {task_id}")
            return deleted
        except sqlite3.Error as e:
            logger.error(f"Failed to delete task {task_id}: {e}", exc_info=True)
            raise StorageError("Failed to delete task") from e

    def list_all(self, user_id: str) -> List[Task]:
        """All tasks of a user, subtasks included (used by export)"""
        try:
            with self._get_conn() as conn:
                rows = conn.execute(queries.SELECT_ALL_TASKS, (user_id,)).fetchall()
            return [Task.from_row(row) for row in rows]
        except sqlite3.Error as e:
            logger.error(f"Failed to export tasks for {user_id}: {e}", exc_info=True)
            raise StorageError("Failed to load tasks") from e
