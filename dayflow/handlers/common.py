"""
Shared helpers for API handlers: response envelope, body parsing,
authentication and pagination
"""

import json
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dayflow.core.auth import Identity, bearer_token
from dayflow.core.errors import ErrorKind, StorageError
from dayflow.core.logger import get_logger
from dayflow.validators import ValidationError

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class ApiException(Exception):
    """Raised inside handlers to short-circuit with an error envelope"""

    def __init__(
        self,
        status_code: int,
        kind: ErrorKind,
        message: str,
        field: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.kind = kind
        self.message = message
        self.field = field
        self.headers = headers


def success_response(
    data: Any, status_code: int = 200, **extra: Any
) -> JSONResponse:
    content: Dict[str, Any] = {"success": True, "data": data}
    content.update(extra)
    content["timestamp"] = datetime.now().isoformat()
    return JSONResponse(content=content, status_code=status_code)


def error_response(
    status_code: int,
    kind: ErrorKind,
    message: str,
    field: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {
        "success": False,
        "message": message,
        "error": {"kind": kind.value, "message": message, "field": field},
        "timestamp": datetime.now().isoformat(),
    }
    return JSONResponse(content=content, status_code=status_code, headers=headers)


def validation_failed(error: ValidationError) -> ApiException:
    """InvalidBody maps to 400, every field-level failure to 422"""
    status_code = 400 if error.kind == ErrorKind.INVALID_BODY else 422
    return ApiException(status_code, error.kind, error.message, field=error.field)


def not_found(entity: str) -> ApiException:
    return ApiException(404, ErrorKind.NOT_FOUND, f"{entity} not found")


async def read_json(request: Request) -> Any:
    """Decode the request body, raising a 400 InvalidBody on malformed JSON"""
    raw = await request.body()
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ApiException(400, ErrorKind.INVALID_BODY, "Invalid JSON body")


async def require_user(request: Request) -> Identity:
    """Resolve the caller from the bearer token or raise a 401"""
    token = bearer_token(request.headers.get("authorization"))
    identity = None
    if token:
        identity = await request.app.state.identity_provider.resolve(token)
    if identity is None:
        raise ApiException(401, ErrorKind.UNAUTHENTICATED, "Not authenticated")
    return identity


def _int_param(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def pagination(params: Mapping[str, str]) -> Tuple[int, int, int]:
    """(page, page_size, offset) from `page` and `pageSize`; pageSize is capped at 100"""
    page = max(1, _int_param(params.get("page"), 1))
    page_size = min(max(1, _int_param(params.get("pageSize"), DEFAULT_PAGE_SIZE)), MAX_PAGE_SIZE)
    return page, page_size, (page - 1) * page_size


def page_response(
    items: Any, count: int, page: int, page_size: int, offset: int
) -> JSONResponse:
    return success_response(
        items,
        count=count,
        page=page,
        pageSize=page_size,
        hasMore=count > offset + page_size,
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Render ApiException and StorageError with the standard envelope"""

    @app.exception_handler(ApiException)
    async def handle_api_exception(request: Request, exc: ApiException) -> JSONResponse:
        return error_response(
            exc.status_code, exc.kind, exc.message, field=exc.field, headers=exc.headers
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc
        )
        return error_response(500, ErrorKind.STORAGE_ERROR, str(exc))
