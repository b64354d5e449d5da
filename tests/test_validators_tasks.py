from dayflow.core.errors import ErrorKind
from dayflow.validators import validate_create_task, validate_update_task


def test_create_task_valid_payload():
    result = validate_create_task(
        {
            "title": "Buy groceries",
            "priority": "high",
            "due_date": "2024-12-31",
            "due_time": "09:00",
            "tags": ["home", "important"],
            "recurring": None,
        }
    )
    assert result.ok
    assert result.error is None
    assert result.data == {
        "title": "Buy groceries",
        "priority": "high",
        "due_date": "2024-12-31",
        "due_time": "09:00",
        "tags": ["home", "important"],
    }


def test_create_task_defaults_for_omitted_fields():
    result = validate_create_task({"title": "Test"})
    assert result.data == {"title": "Test", "priority": "medium", "tags": []}
    assert "due_date" not in result.data
    assert "due_time" not in result.data


def test_create_task_requires_title():
    for body in ({}, {"title": ""}, {"title": "   "}, {"title": "<>"}, {"title": 42}):
        result = validate_create_task(body)
        assert result.data is None
        assert result.error.kind == ErrorKind.FIELD_REQUIRED
        assert result.error.field == "title"


def test_create_task_title_too_long():
    result = validate_create_task({"title": "a" * 501})
    assert result.error.kind == ErrorKind.FIELD_TOO_LONG
    assert validate_create_task({"title": "a" * 500}).ok


def test_create_task_sanitizes_title():
    result = validate_create_task({"title": "  <Test>  "})
    assert result.data["title"] == "Test"


def test_create_task_rejects_invalid_priority():
    result = validate_create_task({"title": "Test", "priority": "critical"})
    assert result.error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert result.error.field == "priority"


def test_create_task_rejects_bad_date_and_time():
    assert validate_create_task({"title": "T", "due_date": "31.12.2024"}).error.kind == ErrorKind.INVALID_FORMAT
    assert validate_create_task({"title": "T", "due_time": "9:00am"}).error.kind == ErrorKind.INVALID_FORMAT
    assert validate_create_task({"title": "T", "due_time": "09:00:30"}).ok


def test_create_task_recurring_values():
    for value in ("daily", "weekly", "custom"):
        assert validate_create_task({"title": "T", "recurring": value}).data["recurring"] == value
    result = validate_create_task({"title": "T", "recurring": "monthly"})
    assert result.error.kind == ErrorKind.INVALID_ENUM_VALUE


def test_create_task_truncates_tags():
    tags = [f"tag{i}" for i in range(25)]
    result = validate_create_task({"title": "Test", "tags": tags})
    assert result.ok
    assert result.data["tags"] == tags[:20]


def test_create_task_tags_drop_non_strings():
    result = validate_create_task({"title": "T", "tags": ["a", 1, None, " <b> "]})
    assert result.data["tags"] == ["a", "b"]


def test_create_task_description_limits():
    assert validate_create_task({"title": "T", "description": "x" * 5000}).ok
    result = validate_create_task({"title": "T", "description": "x" * 5001})
    assert result.error.kind == ErrorKind.FIELD_TOO_LONG
    assert "description" not in validate_create_task({"title": "T", "description": "  "}).data


def test_create_task_rejects_non_object_body():
    for body in (None, "string", 42, ["title"]):
        result = validate_create_task(body)
        assert result.error.kind == ErrorKind.INVALID_BODY
        assert result.data is None


def test_create_task_output_revalidates_unchanged():
    first = validate_create_task(
        {"title": " <Plan> trip ", "tags": ["x"], "due_date": "2025-05-01", "parent_id": "p1"}
    )
    second = validate_create_task(first.data)
    assert second.ok
    assert second.data == first.data


def test_update_task_completed_maps_to_status():
    assert validate_update_task({"completed": True}).data == {"status": "done"}
    assert validate_update_task({"completed": False}).data == {"status": "todo"}


def test_update_task_status_wins_over_completed():
    result = validate_update_task({"completed": True, "status": "in_progress"})
    assert result.data == {"status": "in_progress"}


def test_update_task_rejects_non_boolean_completed():
    result = validate_update_task({"completed": "true"})
    assert result.error.kind == ErrorKind.INVALID_FORMAT
    assert result.error.field == "completed"


def test_update_task_partial_fields():
    assert validate_update_task({"priority": "low"}).data == {"priority": "low"}
    assert validate_update_task({"due_date": "2025-01-01"}).data == {"due_date": "2025-01-01"}
    assert validate_update_task({"due_date": None}).data == {"due_date": None}
    assert validate_update_task({"position": 3}).data == {"position": 3}


def test_update_task_rejects_invalid_values():
    assert validate_update_task({"priority": "urgent"}).error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert validate_update_task({"due_date": "not-a-date"}).error.kind == ErrorKind.INVALID_FORMAT
    assert validate_update_task({"status": "finished"}).error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert validate_update_task({"title": ""}).error.kind == ErrorKind.FIELD_REQUIRED
    assert validate_update_task({"position": True}).error.kind == ErrorKind.INVALID_FORMAT


def test_update_task_empty_object_is_allowed():
    result = validate_update_task({})
    assert result.ok
    assert result.data == {}


def test_update_task_ignores_unknown_fields():
    result = validate_update_task({"id": "abc", "user_id": "eve", "title": "New"})
    assert result.data == {"title": "New"}


def test_update_task_rejects_non_object_body():
    assert validate_update_task(None).error.kind == ErrorKind.INVALID_BODY
