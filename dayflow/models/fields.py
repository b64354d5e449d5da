"""
Field-level helpers shared by the request models

Every helper either returns the normalized value or raises a
PydanticCustomError whose type is an ErrorKind value, so the validator
runner can map pydantic errors back onto the error taxonomy.
"""

import re
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from pydantic_core import PydanticCustomError

from dayflow.core.errors import ErrorKind

MAX_TAGS = 20

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}(:[0-9]{2})?")
CLOCK_PATTERN = re.compile(r"[0-9]{2}:[0-9]{2}")


def fail(kind: ErrorKind, field: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(kind.value, message, {"field": field})


def sanitize_input(value: str) -> str:
    """Strip angle brackets and surrounding whitespace (minimal HTML-injection guard)"""
    return value.replace("<", "").replace(">", "").strip()


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host"""
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        # Accessing .port validates the port component
        parts.port
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def clean_tags(value: Any) -> List[str]:
    """Drop non-string entries, sanitize the rest, keep at most MAX_TAGS"""
    if not isinstance(value, list):
        return []
    return [sanitize_input(tag) for tag in value if isinstance(tag, str)][:MAX_TAGS]


def required_text(value: Any, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise fail(ErrorKind.FIELD_REQUIRED, field, f"{field} is required")
    text = sanitize_input(value)
    if not text:
        raise fail(ErrorKind.FIELD_REQUIRED, field, f"{field} must not be empty")
    if len(text) > max_length:
        raise fail(
            ErrorKind.FIELD_TOO_LONG,
            field,
            f"{field} must be at most {max_length} characters",
        )
    return text


def optional_text(
    value: Any, field: str, max_length: int, empty: Optional[str] = None
) -> Optional[str]:
    """Sanitized text, or `empty` when the value is null or blank"""
    if value is None:
        return empty
    if not isinstance(value, str):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"{field} must be a string")
    text = sanitize_input(value)
    if not text:
        return empty
    if len(text) > max_length:
        raise fail(
            ErrorKind.FIELD_TOO_LONG,
            field,
            f"{field} must be at most {max_length} characters",
        )
    return text


def enum_value(value: Any, field: str, choices: Iterable[str]) -> str:
    allowed = list(choices)
    if not isinstance(value, str) or value not in allowed:
        raise fail(
            ErrorKind.INVALID_ENUM_VALUE,
            field,
            f"Invalid {field} (expected one of: {', '.join(allowed)})",
        )
    return value


def date_string(value: Any, field: str) -> Optional[str]:
    """YYYY-MM-DD or None"""
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"Invalid {field} (expected YYYY-MM-DD)")
    return value


def time_string(value: Any, field: str) -> Optional[str]:
    """HH:MM or HH:MM:SS, or None"""
    if value is None or value == "":
        return None
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"Invalid {field} (expected HH:MM)")
    return value


def clock_string(value: Any, field: str) -> str:
    """Strict HH:MM"""
    if not isinstance(value, str) or not CLOCK_PATTERN.fullmatch(value):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"Invalid {field} (expected HH:MM)")
    return value


def strict_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"{field} must be a boolean")
    return value


def strict_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"{field} must be an integer")
    return value


def optional_id(value: Any, field: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise fail(ErrorKind.INVALID_FORMAT, field, f"{field} must be a string")
    return value.strip()


def url_string(value: Any, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise fail(ErrorKind.FIELD_REQUIRED, field, f"{field} is required")
    url = value.strip()
    if not is_valid_url(url):
        raise fail(
            ErrorKind.INVALID_URL,
            field,
            "Invalid URL (must start with http:// or https://)",
        )
    if len(url) > max_length:
        raise fail(
            ErrorKind.FIELD_TOO_LONG,
            field,
            f"URL is too long (max. {max_length} characters)",
        )
    return url
