"""
Idea and link payload validators
"""

from typing import Any

from dayflow.models.requests import (
    CreateIdeaInput,
    CreateLinkInput,
    UpdateIdeaInput,
    UpdateLinkInput,
)

from .common import ValidationResult, run_model


def validate_create_idea(body: Any) -> ValidationResult:
    return run_model(CreateIdeaInput, body, partial=False)


def validate_update_idea(body: Any) -> ValidationResult:
    return run_model(UpdateIdeaInput, body, partial=True)


def validate_create_link(body: Any) -> ValidationResult:
    """URL must be an absolute http(s) URL of at most 2048 characters"""
    return run_model(CreateLinkInput, body, partial=False)


def validate_update_link(body: Any) -> ValidationResult:
    return run_model(UpdateLinkInput, body, partial=True)
