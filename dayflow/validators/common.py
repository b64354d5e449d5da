"""
Validation result types and the pydantic runner behind every validator
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

import pydantic

from dayflow.core.errors import ErrorKind
from dayflow.models.base import BaseModel


@dataclass(frozen=True)
class ValidationError:
    """A single field-level (or body-level) validation failure"""

    kind: ErrorKind
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "field": self.field}


@dataclass(frozen=True)
class ValidationResult:
    """Tagged result: exactly one of `data` and `error` is set"""

    data: Optional[Dict[str, Any]] = None
    error: Optional[ValidationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(data=data)

    @classmethod
    def failure(
        cls, kind: ErrorKind, message: str, field: Optional[str] = None
    ) -> "ValidationResult":
        return cls(error=ValidationError(kind=kind, message=message, field=field))


def invalid_body() -> ValidationResult:
    return ValidationResult.failure(ErrorKind.INVALID_BODY, "Invalid request body")


def _to_validation_error(exc: pydantic.ValidationError) -> ValidationError:
    """Map the first pydantic error onto the error taxonomy"""
    first = exc.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    error_type = first.get("type", "")

    try:
        kind = ErrorKind(error_type)
        message = first.get("msg", "")
    except ValueError:
        if error_type == "missing":
            kind = ErrorKind.FIELD_REQUIRED
            message = f"{field} is required"
        else:
            kind = ErrorKind.INVALID_FORMAT
            message = f"Invalid {field}"

    return ValidationError(kind=kind, message=message, field=field)


def run_model(
    model: Type[BaseModel], body: Any, partial: bool
) -> ValidationResult:
    """Validate an untrusted payload against a request model.

    Create models dump every field that has a value (defaults included, nulls
    dropped). Partial models dump only the fields present in the payload, keeping
    explicit nulls so callers can tell "cleared" from "not provided".
    """
    if not isinstance(body, Mapping):
        return invalid_body()

    try:
        parsed = model.model_validate(dict(body))
    except pydantic.ValidationError as exc:
        return ValidationResult(error=_to_validation_error(exc))

    if partial:
        data = parsed.model_dump(exclude_unset=True)
    else:
        data = parsed.model_dump(exclude_none=True)
    return ValidationResult.success(data)
