"""
Request models for entity writes
"""

from .base import BaseModel
from .requests import (
    CreateIdeaInput,
    CreateLinkInput,
    CreateTaskInput,
    UpdateIdeaInput,
    UpdateLinkInput,
    UpdateSettingsInput,
    UpdateTaskInput,
)

__all__ = [
    # Base
    "BaseModel",
    # Tasks
    "CreateTaskInput",
    "UpdateTaskInput",
    # Ideas
    "CreateIdeaInput",
    "UpdateIdeaInput",
    # Links
    "CreateLinkInput",
    "UpdateLinkInput",
    # Settings
    "UpdateSettingsInput",
]
