import pytest

from dayflow.core.errors import ErrorKind
from dayflow.models.fields import is_valid_url, sanitize_input
from dayflow.validators import (
    validate_create_idea,
    validate_create_link,
    validate_create_task,
    validate_update_idea,
    validate_update_link,
    validate_update_settings,
    validate_update_task,
)


def test_sanitize_input_removes_angle_brackets_and_trims():
    assert sanitize_input("  <script>alert(1)</script>  ") == "scriptalert(1)/script"
    assert sanitize_input("a < b > c") == "a  b  c"
    assert sanitize_input("plain text") == "plain text"


def test_is_valid_url():
    assert is_valid_url("https://example.com")
    assert is_valid_url("http://example.com/path?q=1")
    for url in ("ftp://example.com", "javascript:alert(1)", "not-a-url", "", "https://", "http://exa mple.com"):
        assert not is_valid_url(url)


def test_create_idea_valid():
    result = validate_create_idea(
        {"title": "App idea", "content": "Habit tracker", "color": "blue", "tags": ["side"]}
    )
    assert result.data == {
        "title": "App idea",
        "content": "Habit tracker",
        "color": "blue",
        "tags": ["side"],
    }


def test_create_idea_defaults():
    result = validate_create_idea({"title": "Test"})
    assert result.data == {"title": "Test", "content": "", "color": "default", "tags": []}


def test_create_idea_requires_title():
    assert validate_create_idea({}).error.kind == ErrorKind.FIELD_REQUIRED
    assert validate_create_idea({"title": ""}).error.kind == ErrorKind.FIELD_REQUIRED


def test_create_idea_colors():
    for color in ("default", "red", "yellow", "green", "blue", "purple"):
        assert validate_create_idea({"title": "T", "color": color}).ok
    result = validate_create_idea({"title": "T", "color": "orange"})
    assert result.error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert result.error.field == "color"


def test_create_idea_content_too_long():
    assert validate_create_idea({"title": "T", "content": "c" * 10000}).ok
    result = validate_create_idea({"title": "T", "content": "c" * 10001})
    assert result.error.kind == ErrorKind.FIELD_TOO_LONG


def test_create_idea_sanitizes_and_limits_tags():
    result = validate_create_idea({"title": "<Idea>", "tags": [f"t{i}" for i in range(30)]})
    assert result.data["title"] == "Idea"
    assert len(result.data["tags"]) == 20


def test_create_idea_rejects_non_object_body():
    assert validate_create_idea(None).error.kind == ErrorKind.INVALID_BODY
    assert validate_create_idea(42).error.kind == ErrorKind.INVALID_BODY


def test_update_idea():
    assert validate_update_idea({"color": "red"}).data == {"color": "red"}
    assert validate_update_idea({"title": "New Title"}).data == {"title": "New Title"}
    assert validate_update_idea({"title": ""}).error.kind == ErrorKind.FIELD_REQUIRED
    assert validate_update_idea({}).data == {}


def test_create_link_valid_urls():
    assert validate_create_link({"url": "https://example.com"}).data == {
        "url": "https://example.com",
        "tags": [],
    }
    assert validate_create_link({"url": " http://example.com/path "}).data["url"] == "http://example.com/path"


def test_create_link_requires_url():
    assert validate_create_link({}).error.kind == ErrorKind.FIELD_REQUIRED
    assert validate_create_link({"url": ""}).error.kind == ErrorKind.FIELD_REQUIRED


def test_create_link_rejects_other_schemes():
    for url in ("ftp://example.com", "javascript:alert(1)", "not-a-url"):
        result = validate_create_link({"url": url})
        assert result.data is None
        assert result.error.kind == ErrorKind.INVALID_URL


def test_create_link_rejects_long_url():
    url = "https://example.com/" + "a" * 2048
    assert validate_create_link({"url": url}).error.kind == ErrorKind.FIELD_TOO_LONG


def test_create_link_tags():
    result = validate_create_link({"url": "https://example.com", "tags": ["tech", "news"]})
    assert result.data["tags"] == ["tech", "news"]


def test_update_link():
    for status in ("unread", "read", "later"):
        assert validate_update_link({"status": status}).data == {"status": status}
    assert validate_update_link({"status": "archived"}).error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert validate_update_link({"title": "  <b>Read</b> me "}).data == {"title": "bRead/b me"}
    assert validate_update_link({"description": ""}).data == {"description": None}
    result = validate_update_link({"description": "d" * 2001})
    assert result.error.kind == ErrorKind.FIELD_TOO_LONG


def test_update_link_rejects_non_object_body():
    assert validate_update_link("read").error.kind == ErrorKind.INVALID_BODY


def test_update_settings_valid_patch():
    result = validate_update_settings(
        {
            "name": "Alice",
            "timezone": "Europe/Vienna",
            "theme": "dark",
            "ai_enabled": True,
            "notifications_enabled": False,
            "daily_briefing_time": "07:30",
        }
    )
    assert result.data == {
        "name": "Alice",
        "timezone": "Europe/Vienna",
        "theme": "dark",
        "ai_enabled": True,
        "notifications_enabled": False,
        "daily_briefing_time": "07:30",
    }


def test_update_settings_accepts_dark_mode_alias():
    assert validate_update_settings({"dark_mode": "light"}).data == {"theme": "light"}


def test_update_settings_strict_booleans():
    assert validate_update_settings({"ai_enabled": True}).ok
    assert validate_update_settings({"notifications_enabled": False}).ok
    for value in ("true", 1, None, {}):
        result = validate_update_settings({"ai_enabled": value})
        assert result.error.kind == ErrorKind.INVALID_FORMAT
        assert result.error.field == "ai_enabled"


def test_update_settings_rejects_invalid_values():
    assert validate_update_settings({"theme": "blue"}).error.kind == ErrorKind.INVALID_ENUM_VALUE
    assert validate_update_settings({"daily_briefing_time": "7:30"}).error.kind == ErrorKind.INVALID_FORMAT
    assert validate_update_settings({"daily_briefing_time": "07:30:00"}).error.kind == ErrorKind.INVALID_FORMAT
    assert validate_update_settings({"name": "n" * 101}).error.kind == ErrorKind.FIELD_TOO_LONG
    assert validate_update_settings({"timezone": ""}).error.kind == ErrorKind.FIELD_REQUIRED


def test_update_settings_requires_a_known_field():
    assert validate_update_settings({}).error.kind == ErrorKind.INVALID_BODY
    assert validate_update_settings({"email": "x@example.com"}).error.kind == ErrorKind.INVALID_BODY
    assert validate_update_settings([]).error.kind == ErrorKind.INVALID_BODY


@pytest.mark.parametrize(
    "validator,payload",
    [
        (validate_create_task, {"title": " <Plan> trip ", "description": None, "tags": ["x", 1]}),
        (validate_update_task, {"completed": True, "description": None, "due_date": ""}),
        (validate_update_task, {"title": "Renamed", "tags": None, "position": 3}),
        (validate_create_idea, {"title": "Idea", "content": None, "color": ""}),
        (validate_update_idea, {"content": None, "tags": ["<a>"]}),
        (validate_update_idea, {"title": " Better ", "content": ""}),
        (validate_create_link, {"url": " https://example.com/x ", "tags": ["<ref>"]}),
        (validate_update_link, {"title": "", "description": None, "status": "later"}),
        (validate_update_settings, {"dark_mode": "dark", "name": "", "ai_enabled": False}),
    ],
)
def test_output_revalidates_unchanged(validator, payload):
    first = validator(payload)
    assert first.ok, first.error
    second = validator(first.data)
    assert second.ok
    assert second.data == first.data
