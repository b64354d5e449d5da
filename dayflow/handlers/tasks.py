"""
Task API handlers
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from dayflow.core.errors import ErrorKind, InvalidParentError
from dayflow.core.logger import get_logger
from dayflow.core.rate_limit import client_key
from dayflow.validators import validate_create_task, validate_update_task

from . import api_handler
from .common import (
    ApiException,
    not_found,
    page_response,
    pagination,
    read_json,
    require_user,
    success_response,
    validation_failed,
)

logger = get_logger(__name__)


@api_handler(method="GET", path="/tasks", tags=["tasks"])
async def list_tasks(request: Request) -> JSONResponse:
    """List top-level tasks

    Query parameters: date (YYYY-MM-DD), completed (true/false), priority,
    page, pageSize (max 100).
    """
    user = await require_user(request)
    params = request.query_params
    page, page_size, offset = pagination(params)

    completed = params.get("completed")
    tasks, count = request.app.state.db.tasks.list(
        user.id,
        date=params.get("date") or None,
        completed=None if completed is None else completed == "true",
        priority=params.get("priority") or None,
        limit=page_size,
        offset=offset,
    )
    return page_response([t.to_dict() for t in tasks], count, page, page_size, offset)


@api_handler(method="POST", path="/tasks", tags=["tasks"], status_code=201)
async def create_task(request: Request) -> JSONResponse:
    """Create a task (rate limited per client address)"""
    limiter = request.app.state.rate_limiter
    limit = limiter.check(client_key(request.headers.get("x-forwarded-for")))
    if not limit.allowed:
        logger.warning("Task creation rate limited")
        raise ApiException(
            429,
            ErrorKind.RATE_LIMITED,
            "Too many requests, please wait a minute",
            headers={
                "Retry-After": str(limit.retry_after),
                "X-RateLimit-Remaining": "0",
            },
        )

    user = await require_user(request)
    result = validate_create_task(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    try:
        task = request.app.state.db.tasks.insert(user.id, result.data)
    except InvalidParentError as e:
        raise ApiException(
            422, ErrorKind.INVALID_FORMAT, str(e), field="parent_id"
        ) from e

    response = success_response(task.to_dict(), status_code=201)
    response.headers["X-RateLimit-Remaining"] = str(limit.remaining)
    return response


@api_handler(method="GET", path="/tasks/{task_id}", tags=["tasks"])
async def get_task(task_id: str, request: Request) -> JSONResponse:
    """Get a task with its subtasks"""
    user = await require_user(request)
    task = request.app.state.db.tasks.get_with_subtasks(user.id, task_id)
    if task is None:
        raise not_found("Task")
    return success_response(task)


@api_handler(method="PATCH", path="/tasks/{task_id}", tags=["tasks"])
async def update_task(task_id: str, request: Request) -> JSONResponse:
    """Partially update a task"""
    user = await require_user(request)
    result = validate_update_task(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    task = request.app.state.db.tasks.update(user.id, task_id, result.data)
    if task is None:
        raise not_found("Task")
    return success_response(task.to_dict())


@api_handler(method="DELETE", path="/tasks/{task_id}", tags=["tasks"])
async def delete_task(task_id: str, request: Request) -> JSONResponse:
    """Delete a task together with its subtasks"""
    user = await require_user(request)
    if not request.app.state.db.tasks.delete(user.id, task_id):
        raise not_found("Task")
    return success_response({"id": task_id, "deleted": True})
