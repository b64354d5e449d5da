"""
Input validators

Every validator takes a decoded JSON payload and returns a ValidationResult;
none of them raise for malformed input.
"""

from .common import ValidationError, ValidationResult
from .ideas_links import (
    validate_create_idea,
    validate_create_link,
    validate_update_idea,
    validate_update_link,
)
from .settings import validate_update_settings
from .tasks import validate_create_task, validate_update_task

__all__ = [
    "ValidationError",
    "ValidationResult",
    "validate_create_task",
    "validate_update_task",
    "validate_create_idea",
    "validate_update_idea",
    "validate_create_link",
    "validate_update_link",
    "validate_update_settings",
]
