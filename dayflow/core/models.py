"""
Data model definitions
Contains core data models: Task, Idea, Link, Profile
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Priority(str, Enum):
    """Task priority enumeration"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """Task status enumeration"""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    DONE = "done"
    CANCELLED = "cancelled"


class RecurringType(str, Enum):
    """Task recurrence enumeration"""

    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class IdeaColor(str, Enum):
    """Idea card color palette"""

    DEFAULT = "default"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"


class LinkStatus(str, Enum):
    """Link read status enumeration"""

    UNREAD = "unread"
    READ = "read"
    LATER = "later"


class Theme(str, Enum):
    """Theme preference enumeration"""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


COMPLETE_STATUSES = frozenset({TaskStatus.DONE.value, TaskStatus.CANCELLED.value})


def is_task_complete(status: Optional[str]) -> bool:
    """A task counts as completed when its status is done or cancelled"""
    return status in COMPLETE_STATUSES


def _load_tags(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, list):
        return raw
    return json.loads(raw)


@dataclass
class Task:
    """Task data model

    `completed` is derived from `status` and never stored.
    """

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = None
    due_time: Optional[str] = None
    priority: str = Priority.MEDIUM.value
    status: str = TaskStatus.TODO.value
    tags: List[str] = field(default_factory=list)
    recurring: Optional[str] = None
    parent_id: Optional[str] = None
    position: int = 0
    completed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def completed(self) -> bool:
        return is_task_complete(self.status)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "priority": self.priority,
            "status": self.status,
            "tags": list(self.tags),
            "completed": self.completed,
            "completed_at": self.completed_at,
            "recurring": self.recurring,
            "parent_id": self.parent_id,
            "position": self.position,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Task":
        """Create instance from a database row"""
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            due_date=row["due_date"],
            due_time=row["due_time"],
            priority=row["priority"],
            status=row["status"],
            tags=_load_tags(row["tags"]),
            recurring=row["recurring"],
            parent_id=row["parent_id"],
            position=int(row["position"] or 0),
            completed_at=row["completed_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class Idea:
    """Idea data model"""

    id: str
    user_id: str
    title: str
    content: str = ""
    color: str = IdeaColor.DEFAULT.value
    tags: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "color": self.color,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Idea":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            content=row["content"] or "",
            color=row["color"],
            tags=_load_tags(row["tags"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class Link:
    """Link data model"""

    id: str
    user_id: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    favicon: Optional[str] = None
    status: str = LinkStatus.UNREAD.value
    tags: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "favicon": self.favicon,
            "status": self.status,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Link":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            url=row["url"],
            title=row["title"],
            description=row["description"],
            image=row["image"],
            favicon=row["favicon"],
            status=row["status"],
            tags=_load_tags(row["tags"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


@dataclass
class Profile:
    """Per-user settings"""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    timezone: str = "Europe/Berlin"
    theme: str = Theme.SYSTEM.value
    ai_enabled: bool = False
    notifications_enabled: bool = True
    daily_briefing_time: str = "08:00"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "timezone": self.timezone,
            "theme": self.theme,
            "ai_enabled": self.ai_enabled,
            "notifications_enabled": self.notifications_enabled,
            "daily_briefing_time": self.daily_briefing_time,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Profile":
        return cls(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            timezone=row["timezone"],
            theme=row["theme"],
            ai_enabled=bool(row["ai_enabled"]),
            notifications_enabled=bool(row["notifications_enabled"]),
            daily_briefing_time=row["daily_briefing_time"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
