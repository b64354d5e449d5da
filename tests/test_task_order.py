import threading
from datetime import date

import pytest

from dayflow.core.task_order import (
    Reorder,
    ServerSetChanged,
    TaskOrder,
    completed_tasks,
    group_tasks_by_date,
    merge_order,
    move_item,
    pending_tasks,
)

DAY = "2024-03-01"


def _task(task_id, status="todo", due_date=DAY, parent_id=None):
    return {"id": task_id, "status": status, "due_date": due_date, "parent_id": parent_id}


def test_merge_keeps_survivors_and_appends_arrivals():
    assert merge_order(["a", "b", "c"], ["b", "c", "d"]) == ["b", "c", "d"]
    assert merge_order(["c", "a"], ["a", "b", "c"]) == ["c", "a", "b"]
    assert merge_order([], ["x", "y"]) == ["x", "y"]
    assert merge_order(["x"], []) == []


def test_move_item():
    assert move_item(["a", "b", "c", "d"], "c", "b") == ["a", "c", "b", "d"]
    assert move_item(["a", "b", "c"], "a", "c") == ["b", "c", "a"]


@pytest.mark.parametrize("active,over", [("a", "a"), ("zz", "a"), ("a", "zz")])
def test_move_item_noop(active, over):
    assert move_item(["a", "b"], active, over) == ["a", "b"]


def test_pending_and_completed_split():
    tasks = [
        _task("a"),
        _task("b", status="done"),
        _task("c", status="cancelled"),
        _task("d", status="in_progress"),
        _task("e", due_date="2024-03-02"),
        _task("f", parent_id="a"),
        {"id": "g", "completed": True, "due_date": DAY},
    ]
    assert [t["id"] for t in pending_tasks(tasks, DAY)] == ["a", "d"]
    assert [t["id"] for t in completed_tasks(tasks, DAY)] == ["b", "c", "g"]


def test_order_follows_refetch_and_reorder():
    order = TaskOrder()
    order.apply(ServerSetChanged(tasks=[_task("a"), _task("b"), _task("c")]))

    order.apply(ServerSetChanged(tasks=[_task("b"), _task("c"), _task("d")]))
    assert order.order == ["b", "c", "d"]

    assert order.apply(Reorder(active_id="c", over_id="b")) == ["c", "b", "d"]
    assert [t["id"] for t in order.visible()] == ["c", "b", "d"]


def test_reorder_with_stale_id_is_noop():
    order = TaskOrder()
    order.apply(ServerSetChanged(tasks=[_task("a"), _task("b")]))
    assert order.apply(Reorder(active_id="gone", over_id="a")) == ["a", "b"]


def test_visible_uses_latest_records():
    order = TaskOrder()
    order.apply(ServerSetChanged(tasks=[_task("a")]))
    renamed = dict(_task("a"), title="renamed")
    order.apply(ServerSetChanged(tasks=[renamed]))
    assert order.visible() == [renamed]


def test_unknown_event_rejected():
    with pytest.raises(TypeError):
        TaskOrder().apply("reorder")


def test_concurrent_events_keep_every_id_once():
    order = TaskOrder()
    tasks = [_task(str(i)) for i in range(20)]
    order.apply(ServerSetChanged(tasks=tasks))

    def drag():
        for i in range(200):
            order.apply(Reorder(active_id=str(i % 20), over_id=str((i * 7) % 20)))

    def refetch():
        for _ in range(200):
            order.apply(ServerSetChanged(tasks=tasks))

    threads = [threading.Thread(target=drag), threading.Thread(target=refetch)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(order.order, key=int) == [str(i) for i in range(20)]


def test_group_tasks_by_date():
    tasks = [
        _task("late", due_date="2024-02-28"),
        _task("now", due_date=DAY),
        _task("next", due_date="2024-03-02"),
        _task("later", due_date="2024-04-15"),
        _task("whenever", due_date=None),
        _task("now2", due_date=DAY),
    ]
    groups = group_tasks_by_date(tasks, date(2024, 3, 1))

    assert {name: [t["id"] for t in items] for name, items in groups.items()} == {
        "overdue": ["late"],
        "today": ["now", "now2"],
        "tomorrow": ["next"],
        "future": ["later"],
        "someday": ["whenever"],
    }


def test_group_tasks_by_date_empty_groups_present():
    groups = group_tasks_by_date([], date(2024, 3, 1))
    assert list(groups) == ["overdue", "today", "tomorrow", "future", "someday"]
    assert all(items == [] for items in groups.values())
