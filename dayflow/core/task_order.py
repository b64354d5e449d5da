"""
Local ordering of a day's open tasks

The server returns tasks in a coarse order; the user's manual drag order is kept
as a list of task ids that is merged with every fresh fetch. Both inputs go through
TaskOrder.apply() so a refetch and a drag never interleave.
"""

import threading
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union

from dayflow.core.models import is_task_complete

TaskRecord = Mapping[str, Any]


def merge_order(previous: Sequence[str], pending_ids: Sequence[str]) -> List[str]:
    """Keep surviving ids in their previous order, then append new ids in server order"""
    pending = set(pending_ids)
    known = set(previous)
    survivors = [task_id for task_id in previous if task_id in pending]
    arrivals: List[str] = []
    for task_id in pending_ids:
        if task_id not in known and task_id not in arrivals:
            arrivals.append(task_id)
    return survivors + arrivals


def move_item(order: Sequence[str], active_id: str, over_id: str) -> List[str]:
    """Move `active_id` to the index currently held by `over_id`.

    Unknown ids or a drop onto itself leave the order unchanged.
    """
    items = list(order)
    if active_id == over_id or active_id not in items or over_id not in items:
        return items
    old_index = items.index(active_id)
    new_index = items.index(over_id)
    items.insert(new_index, items.pop(old_index))
    return items


def task_status(task: TaskRecord) -> str:
    """Status of a fetched task, falling back to the `completed` flag"""
    status = task.get("status")
    if status:
        return status
    return "done" if task.get("completed") else "todo"


def day_tasks(tasks: Iterable[TaskRecord], day: str) -> List[TaskRecord]:
    """Top-level tasks due on `day`"""
    return [t for t in tasks if t.get("due_date") == day and not t.get("parent_id")]


def pending_tasks(tasks: Iterable[TaskRecord], day: str) -> List[TaskRecord]:
    """Open top-level tasks due on `day`, in server order"""
    return [t for t in day_tasks(tasks, day) if not is_task_complete(task_status(t))]


def completed_tasks(tasks: Iterable[TaskRecord], day: str) -> List[TaskRecord]:
    return [t for t in day_tasks(tasks, day) if is_task_complete(task_status(t))]


DATE_GROUPS = ("overdue", "today", "tomorrow", "future", "someday")


def group_tasks_by_date(
    tasks: Iterable[TaskRecord], today: date
) -> Dict[str, List[TaskRecord]]:
    """Bucket tasks for the planner relative to `today`.

    Tasks without a due date are "someday". Input order is kept within a group.
    """
    groups: Dict[str, List[TaskRecord]] = {name: [] for name in DATE_GROUPS}
    tomorrow = today + timedelta(days=1)
    for task in tasks:
        due = task.get("due_date")
        if not due:
            groups["someday"].append(task)
            continue
        due_date = date.fromisoformat(due)
        if due_date == today:
            groups["today"].append(task)
        elif due_date == tomorrow:
            groups["tomorrow"].append(task)
        elif due_date < today:
            groups["overdue"].append(task)
        else:
            groups["future"].append(task)
    return groups


@dataclass(frozen=True)
class ServerSetChanged:
    """A fetch completed; `tasks` is the pending set in server order"""

    tasks: Sequence[TaskRecord]


@dataclass(frozen=True)
class Reorder:
    """A drag ended with `active_id` dropped onto `over_id`"""

    active_id: str
    over_id: str


OrderEvent = Union[ServerSetChanged, Reorder]


class TaskOrder:
    """Owns the local id order and the latest fetched records"""

    def __init__(self):
        self._order: List[str] = []
        self._records: Dict[str, TaskRecord] = {}
        self._lock = threading.Lock()

    @property
    def order(self) -> List[str]:
        with self._lock:
            return list(self._order)

    def apply(self, event: OrderEvent) -> List[str]:
        """Apply one event and return the resulting order"""
        with self._lock:
            if isinstance(event, ServerSetChanged):
                self._records = {t["id"]: t for t in event.tasks}
                self._order = merge_order(self._order, [t["id"] for t in event.tasks])
            elif isinstance(event, Reorder):
                self._order = move_item(self._order, event.active_id, event.over_id)
            else:
                raise TypeError(f"Unknown order event: {event!r}")
            return list(self._order)

    def visible(self) -> List[TaskRecord]:
        """The local order resolved to the latest fetched records"""
        with self._lock:
            return [self._records[i] for i in self._order if i in self._records]
