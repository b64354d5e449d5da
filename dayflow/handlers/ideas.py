"""
Idea API handlers
"""

from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse

from dayflow.core.logger import get_logger
from dayflow.core.models import Priority
from dayflow.validators import validate_create_idea, validate_update_idea

from . import api_handler
from .common import (
    not_found,
    page_response,
    pagination,
    read_json,
    require_user,
    success_response,
    validation_failed,
)

logger = get_logger(__name__)


@api_handler(method="GET", path="/ideas", tags=["ideas"])
async def list_ideas(request: Request) -> JSONResponse:
    """List ideas, newest first

    Query parameters: search (title/content), tag, page, pageSize.
    """
    user = await require_user(request)
    params = request.query_params
    page, page_size, offset = pagination(params)

    ideas, count = request.app.state.db.ideas.list(
        user.id,
        search=params.get("search") or None,
        tag=params.get("tag") or None,
        limit=page_size,
        offset=offset,
    )
    return page_response([i.to_dict() for i in ideas], count, page, page_size, offset)


@api_handler(method="POST", path="/ideas", tags=["ideas"], status_code=201)
async def create_idea(request: Request) -> JSONResponse:
    user = await require_user(request)
    result = validate_create_idea(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    idea = request.app.state.db.ideas.insert(user.id, result.data)
    return success_response(idea.to_dict(), status_code=201)


@api_handler(method="GET", path="/ideas/{idea_id}", tags=["ideas"])
async def get_idea(idea_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    idea = request.app.state.db.ideas.get(user.id, idea_id)
    if idea is None:
        raise not_found("Idea")
    return success_response(idea.to_dict())


@api_handler(method="PATCH", path="/ideas/{idea_id}", tags=["ideas"])
async def update_idea(idea_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    result = validate_update_idea(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    idea = request.app.state.db.ideas.update(user.id, idea_id, result.data)
    if idea is None:
        raise not_found("Idea")
    return success_response(idea.to_dict())


@api_handler(method="DELETE", path="/ideas/{idea_id}", tags=["ideas"])
async def delete_idea(idea_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    if not request.app.state.db.ideas.delete(user.id, idea_id):
        raise not_found("Idea")
    return success_response({"id": idea_id, "deleted": True})


@api_handler(
    method="POST", path="/ideas/{idea_id}/convert", tags=["ideas"], status_code=201
)
async def convert_idea(idea_id: str, request: Request) -> JSONResponse:
    """Turn an idea into a medium-priority task due today (UTC)

    The idea itself is kept.
    """
    user = await require_user(request)
    db = request.app.state.db

    idea = db.ideas.get(user.id, idea_id)
    if idea is None:
        raise not_found("Idea")

    task = db.tasks.insert(
        user.id,
        {
            "title": idea.title,
            "description": idea.content or None,
            "priority": Priority.MEDIUM.value,
            "tags": idea.tags,
            "due_date": datetime.now(timezone.utc).date().isoformat(),
        },
    )
    logger.info(f"Converted idea {idea_id} into task {task.id}")
    return success_response(task.to_dict(), status_code=201)
