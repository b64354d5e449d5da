"""
Request models for entity writes
"""

from typing import Any, List, Optional

from pydantic import AliasChoices, Field, field_validator

from dayflow.core.models import (
    IdeaColor,
    LinkStatus,
    Priority,
    RecurringType,
    TaskStatus,
    Theme,
)

from . import fields
from .base import BaseModel

TITLE_MAX = 500
TASK_DESCRIPTION_MAX = 5000
IDEA_CONTENT_MAX = 10000
LINK_TITLE_MAX = 500
LINK_DESCRIPTION_MAX = 2000
URL_MAX = 2048
PROFILE_NAME_MAX = 100
TIMEZONE_MAX = 64

PRIORITIES = [p.value for p in Priority]
TASK_STATUSES = [s.value for s in TaskStatus]
RECURRING_TYPES = [r.value for r in RecurringType]
IDEA_COLORS = [c.value for c in IdeaColor]
LINK_STATUSES = [s.value for s in LinkStatus]
THEMES = [t.value for t in Theme]


def _recurring(value: Any) -> Optional[str]:
    if value is None:
        return None
    return fields.enum_value(value, "recurring", RECURRING_TYPES)


# ============================================================================
# Task Request Models
# ============================================================================


class CreateTaskInput(BaseModel):
    """Payload for creating a task.

    @property title - Required, 1-500 characters after sanitizing.
    @property priority - high | medium | low, defaults to medium.
    @property recurring - daily | weekly | custom | null.
    @property parent_id - Optional parent task (one level of subtasks).
    """

    title: str
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: str = Priority.MEDIUM.value
    tags: List[str] = Field(default_factory=list)
    recurring: Optional[str] = None
    parent_id: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return fields.required_text(value, "title", TITLE_MAX)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, value: Any) -> Optional[str]:
        return fields.optional_text(value, "description", TASK_DESCRIPTION_MAX)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date(cls, value: Any) -> Optional[str]:
        return fields.date_string(value, "due_date")

    @field_validator("due_time", mode="before")
    @classmethod
    def check_due_time(cls, value: Any) -> Optional[str]:
        return fields.time_string(value, "due_time")

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> str:
        if value is None or value == "":
            return Priority.MEDIUM.value
        return fields.enum_value(value, "priority", PRIORITIES)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)

    @field_validator("recurring", mode="before")
    @classmethod
    def check_recurring(cls, value: Any) -> Optional[str]:
        return _recurring(value)

    @field_validator("parent_id", mode="before")
    @classmethod
    def check_parent_id(cls, value: Any) -> Optional[str]:
        return fields.optional_id(value, "parent_id")


class UpdateTaskInput(BaseModel):
    """Partial task update. Only fields present in the payload are applied."""

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    completed: Optional[bool] = None
    tags: Optional[List[str]] = None
    recurring: Optional[str] = None
    position: Optional[int] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return fields.required_text(value, "title", TITLE_MAX)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, value: Any) -> Optional[str]:
        return fields.optional_text(value, "description", TASK_DESCRIPTION_MAX)

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date(cls, value: Any) -> Optional[str]:
        return fields.date_string(value, "due_date")

    @field_validator("due_time", mode="before")
    @classmethod
    def check_due_time(cls, value: Any) -> Optional[str]:
        return fields.time_string(value, "due_time")

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> str:
        return fields.enum_value(value, "priority", PRIORITIES)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> str:
        return fields.enum_value(value, "status", TASK_STATUSES)

    @field_validator("completed", mode="before")
    @classmethod
    def check_completed(cls, value: Any) -> bool:
        return fields.strict_bool(value, "completed")

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)

    @field_validator("recurring", mode="before")
    @classmethod
    def check_recurring(cls, value: Any) -> Optional[str]:
        return _recurring(value)

    @field_validator("position", mode="before")
    @classmethod
    def check_position(cls, value: Any) -> int:
        return fields.strict_int(value, "position")


# ============================================================================
# Idea Request Models
# ============================================================================


class CreateIdeaInput(BaseModel):
    """Payload for creating an idea."""

    title: str
    content: str = ""
    color: str = IdeaColor.DEFAULT.value
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return fields.required_text(value, "title", TITLE_MAX)

    @field_validator("content", mode="before")
    @classmethod
    def check_content(cls, value: Any) -> str:
        return fields.optional_text(value, "content", IDEA_CONTENT_MAX, empty="")

    @field_validator("color", mode="before")
    @classmethod
    def check_color(cls, value: Any) -> str:
        if value is None or value == "":
            return IdeaColor.DEFAULT.value
        return fields.enum_value(value, "color", IDEA_COLORS)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)


class UpdateIdeaInput(BaseModel):
    """Partial idea update."""

    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        return fields.required_text(value, "title", TITLE_MAX)

    @field_validator("content", mode="before")
    @classmethod
    def check_content(cls, value: Any) -> str:
        return fields.optional_text(value, "content", IDEA_CONTENT_MAX, empty="")

    @field_validator("color", mode="before")
    @classmethod
    def check_color(cls, value: Any) -> str:
        return fields.enum_value(value, "color", IDEA_COLORS)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)


# ============================================================================
# Link Request Models
# ============================================================================


class CreateLinkInput(BaseModel):
    """Payload for saving a link. Title, description and images come from the page."""

    url: str
    tags: List[str] = Field(default_factory=list)

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, value: Any) -> str:
        return fields.url_string(value, "url", URL_MAX)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)


class UpdateLinkInput(BaseModel):
    """Partial link update."""

    status: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> str:
        return fields.enum_value(value, "status", LINK_STATUSES)

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> Optional[str]:
        return fields.optional_text(value, "title", LINK_TITLE_MAX)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, value: Any) -> Optional[str]:
        return fields.optional_text(value, "description", LINK_DESCRIPTION_MAX)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> List[str]:
        return fields.clean_tags(value)


# ============================================================================
# Settings Request Models
# ============================================================================


class UpdateSettingsInput(BaseModel):
    """Partial profile/settings update.

    @property theme - light | dark | system (also accepted as dark_mode).
    @property daily_briefing_time - HH:MM.
    """

    name: Optional[str] = None
    timezone: Optional[str] = None
    theme: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("theme", "dark_mode")
    )
    ai_enabled: Optional[bool] = None
    notifications_enabled: Optional[bool] = None
    daily_briefing_time: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> Optional[str]:
        return fields.optional_text(value, "name", PROFILE_NAME_MAX)

    @field_validator("timezone", mode="before")
    @classmethod
    def check_timezone(cls, value: Any) -> str:
        return fields.required_text(value, "timezone", TIMEZONE_MAX)

    @field_validator("theme", mode="before")
    @classmethod
    def check_theme(cls, value: Any) -> str:
        return fields.enum_value(value, "theme", THEMES)

    @field_validator("ai_enabled", mode="before")
    @classmethod
    def check_ai_enabled(cls, value: Any) -> bool:
        return fields.strict_bool(value, "ai_enabled")

    @field_validator("notifications_enabled", mode="before")
    @classmethod
    def check_notifications_enabled(cls, value: Any) -> bool:
        return fields.strict_bool(value, "notifications_enabled")

    @field_validator("daily_briefing_time", mode="before")
    @classmethod
    def check_daily_briefing_time(cls, value: Any) -> str:
        return fields.clock_string(value, "daily_briefing_time")
