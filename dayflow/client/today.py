"""
Today board: the day's tasks with a locally reorderable open list
"""

from datetime import date as dt_date
from typing import Any, Dict, List, Optional

from dayflow.core.logger import get_logger
from dayflow.core.task_order import (
    Reorder,
    ServerSetChanged,
    TaskOrder,
    completed_tasks,
    group_tasks_by_date,
    pending_tasks,
)

from .api import DayflowClient

logger = get_logger(__name__)


class TodayBoard:
    """Keeps fetched tasks for one day and the user's order of the open ones.

    Every change to the fetched set is reconciled into the local order;
    reordering is local until save_positions() writes it back.
    """

    def __init__(self, client: DayflowClient, day: Optional[str] = None):
        self.client = client
        self.day = day or dt_date.today().isoformat()
        self._tasks: List[Dict[str, Any]] = []
        self._order = TaskOrder()

    @property
    def order(self) -> List[str]:
        return self._order.order

    def refresh(self) -> List[Dict[str, Any]]:
        """Fetch the day's tasks and merge them into the local order"""
        self._tasks = list(self.client.iter_tasks(date=self.day))
        self._reconcile()
        return self.pending()

    def pending(self) -> List[Dict[str, Any]]:
        """Open tasks in local order"""
        return self._order.visible()

    def completed(self) -> List[Dict[str, Any]]:
        return completed_tasks(self._tasks, self.day)

    def reorder(self, active_id: str, over_id: str) -> List[str]:
        """Drop `active_id` onto `over_id`; stale ids are ignored"""
        return self._order.apply(Reorder(active_id=active_id, over_id=over_id))

    def create(self, title: str, **fields: Any) -> Dict[str, Any]:
        payload = {"title": title, "due_date": self.day}
        payload.update(fields)
        task = self.client.create_task(payload)
        self._tasks.append(task)
        self._reconcile()
        return task

    def toggle(self, task_id: str) -> Dict[str, Any]:
        task = self._find(task_id)
        updated = self.client.toggle_task(task)
        self._replace(updated)
        return updated

    def set_status(self, task_id: str, status: str) -> Dict[str, Any]:
        updated = self.client.update_task_status(task_id, status)
        self._replace(updated)
        return updated

    def delete(self, task_id: str) -> None:
        self.client.delete_task(task_id)
        self._tasks = [t for t in self._tasks if t["id"] != task_id]
        self._reconcile()

    def save_positions(self) -> int:
        """Persist the local order as task positions, returning how many changed"""
        changed = 0
        for index, task_id in enumerate(self._order.order):
            task = self._find(task_id)
            if task.get("position") == index:
                continue
            self._replace(self.client.update_task(task_id, {"position": index}), reconcile=False)
            changed += 1
        if changed:
            self._reconcile()
        logger.debug(f"Saved positions for {changed} tasks on {self.day}")
        return changed

    def _find(self, task_id: str) -> Dict[str, Any]:
        for task in self._tasks:
            if task["id"] == task_id:
                return task
        raise KeyError(task_id)

    def _replace(self, updated: Dict[str, Any], reconcile: bool = True) -> None:
        self._tasks = [updated if t["id"] == updated["id"] else t for t in self._tasks]
        if reconcile:
            self._reconcile()

    def _reconcile(self) -> None:
        self._order.apply(ServerSetChanged(tasks=pending_tasks(self._tasks, self.day)))


def plan_open_tasks(
    client: DayflowClient, today: Optional[dt_date] = None
) -> Dict[str, List[Dict[str, Any]]]:
    """Open top-level tasks grouped into overdue/today/tomorrow/future/someday"""
    tasks = list(client.iter_tasks(completed=False))
    return group_tasks_by_date(tasks, today or dt_date.today())
