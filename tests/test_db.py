import pytest

from dayflow.core.errors import InvalidParentError


def _create(db, user="alice", **fields):
    data = {"title": "Task", "priority": "medium", "tags": []}
    data.update(fields)
    return db.tasks.insert(user, data)


# ==================== tasks ====================


def test_insert_and_get(db):
    task = _create(db, title="Write report", due_date="2024-03-01", tags=["work"])

    loaded = db.tasks.get("alice", task.id)
    assert loaded.title == "Write report"
    assert loaded.tags == ["work"]
    assert loaded.status == "todo"
    assert not loaded.completed
    assert loaded.completed_at is None


def test_tasks_are_owner_scoped(db):
    task = _create(db)
    assert db.tasks.get("bob", task.id) is None
    assert db.tasks.update("bob", task.id, {"title": "x"}) is None
    assert db.tasks.delete("bob", task.id) is False
    assert db.tasks.get("alice", task.id) is not None


def test_completed_at_follows_status(db):
    task = _create(db)

    done = db.tasks.update("alice", task.id, {"status": "done"})
    assert done.completed
    assert done.completed_at is not None

    cancelled = db.tasks.update("alice", task.id, {"status": "cancelled"})
    assert cancelled.completed_at == done.completed_at

    reopened = db.tasks.update("alice", task.id, {"status": "in_progress"})
    assert not reopened.completed
    assert reopened.completed_at is None


def test_subtasks_embedded_and_cascade_deleted(db):
    parent = _create(db, title="Parent")
    child = _create(db, title="Child", parent_id=parent.id)

    loaded = db.tasks.get_with_subtasks("alice", parent.id)
    assert [s["id"] for s in loaded["subtasks"]] == [child.id]

    assert db.tasks.delete("alice", parent.id)
    assert db.tasks.get("alice", child.id) is None


def test_subtask_parent_must_be_top_level_and_owned(db):
    parent = _create(db)
    child = _create(db, parent_id=parent.id)

    with pytest.raises(InvalidParentError):
        _create(db, parent_id=child.id)
    with pytest.raises(InvalidParentError):
        _create(db, parent_id="missing")
    with pytest.raises(InvalidParentError):
        _create(db, user="bob", parent_id=parent.id)


def test_list_filters_and_excludes_subtasks(db):
    a = _create(db, title="a", due_date="2024-03-01", priority="high")
    b = _create(db, title="b", due_date="2024-03-01", status="done")
    _create(db, title="c", due_date="2024-03-02")
    _create(db, title="child", due_date="2024-03-01", parent_id=a.id)

    tasks, total = db.tasks.list("alice", date="2024-03-01")
    assert total == 2
    assert {t.id for t in tasks} == {a.id, b.id}

    open_tasks, _ = db.tasks.list("alice", completed=False)
    assert b.id not in {t.id for t in open_tasks}

    done_tasks, _ = db.tasks.list("alice", completed=True)
    assert [t.id for t in done_tasks] == [b.id]

    high, _ = db.tasks.list("alice", priority="high")
    assert [t.id for t in high] == [a.id]


def test_list_orders_by_position_then_newest(db):
    first = _create(db, title="first", position=1)
    second = _create(db, title="second", position=0)
    third = _create(db, title="third", position=0)

    tasks, _ = db.tasks.list("alice")
    assert [t.id for t in tasks] == [third.id, second.id, first.id]


def test_list_paginates_with_total(db):
    for i in range(5):
        _create(db, title=f"t{i}")
    page, total = db.tasks.list("alice", limit=2, offset=4)
    assert total == 5
    assert len(page) == 1


# ==================== ideas & links ====================


def test_ideas_search_and_tag(db):
    db.ideas.insert("alice", {"title": "Garden plan", "content": "tomatoes", "tags": ["home"]})
    db.ideas.insert("alice", {"title": "100% done", "content": "", "tags": ["work"]})
    db.ideas.insert("bob", {"title": "Garden of bob", "content": "", "tags": ["home"]})

    found, total = db.ideas.list("alice", search="garden")
    assert total == 1
    assert found[0].title == "Garden plan"

    found, _ = db.ideas.list("alice", search="tomato")
    assert [i.title for i in found] == ["Garden plan"]

    # LIKE wildcards in the term are literal
    found, _ = db.ideas.list("alice", search="%")
    assert [i.title for i in found] == ["100% done"]

    found, _ = db.ideas.list("alice", tag="work")
    assert [i.title for i in found] == ["100% done"]


def test_idea_update_and_delete(db):
    idea = db.ideas.insert("alice", {"title": "Idea", "content": "", "tags": []})
    updated = db.ideas.update("alice", idea.id, {"color": "blue", "tags": ["x"]})
    assert updated.color == "blue"
    assert updated.tags == ["x"]
    assert db.ideas.delete("alice", idea.id)
    assert db.ideas.get("alice", idea.id) is None


def test_links_store_metadata_and_filter(db):
    link = db.links.insert(
        "alice",
        {"url": "https://example.com/a", "tags": ["read"]},
        {"title": "Example", "description": None, "image": None, "favicon": None},
    )
    db.links.insert("alice", {"url": "https://other.org/b", "status": "read", "tags": []})

    assert link.title == "Example"
    assert link.status == "unread"

    found, _ = db.links.list("alice", search="example")
    assert [l.id for l in found] == [link.id]

    found, _ = db.links.list("alice", status="read")
    assert [l.url for l in found] == ["https://other.org/b"]

    found, _ = db.links.list("alice", tag="read")
    assert [l.id for l in found] == [link.id]


# ==================== profiles ====================


def test_profile_upsert_creates_with_defaults(db):
    assert db.profiles.get("alice") is None

    profile = db.profiles.upsert("alice", {"theme": "dark"}, email="alice@example.com")
    assert profile.theme == "dark"
    assert profile.timezone == "Europe/Berlin"
    assert profile.email == "alice@example.com"

    profile = db.profiles.upsert("alice", {"ai_enabled": True})
    assert profile.ai_enabled is True
    assert profile.theme == "dark"
