"""
Error taxonomy shared by validators, the rate limiter and the HTTP layer
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error kinds surfaced to API callers"""

    INVALID_BODY = "InvalidBody"
    FIELD_REQUIRED = "FieldRequired"
    FIELD_TOO_LONG = "FieldTooLong"
    INVALID_FORMAT = "InvalidFormat"
    INVALID_ENUM_VALUE = "InvalidEnumValue"
    INVALID_URL = "InvalidUrl"
    RATE_LIMITED = "RateLimited"
    UNAUTHENTICATED = "Unauthenticated"
    NOT_FOUND = "NotFound"
    STORAGE_ERROR = "StorageError"


class StorageError(Exception):
    """Raised by repositories when the underlying store fails"""


class InvalidParentError(ValueError):
    """Raised when a subtask names a parent that is missing or itself a subtask"""
