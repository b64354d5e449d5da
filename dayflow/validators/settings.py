"""
Settings (profile) patch validator
"""

from typing import Any

from dayflow.core.errors import ErrorKind
from dayflow.models.requests import UpdateSettingsInput

from .common import ValidationResult, run_model


def validate_update_settings(body: Any) -> ValidationResult:
    """Validate a settings patch; a patch with no known field is rejected"""
    result = run_model(UpdateSettingsInput, body, partial=True)
    if result.ok and not result.data:
        return ValidationResult.failure(ErrorKind.INVALID_BODY, "No fields to update")
    return result
