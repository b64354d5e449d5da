"""
Link API handlers
Saving a link fetches its page metadata before the row is written
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from dayflow.core.logger import get_logger
from dayflow.validators import validate_create_link, validate_update_link

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


@api_handler(method="GET", path="/links", tags=["links"])
async def list_links(request: Request) -> JSONResponse:
    """List links, newest first

    Query parameters: status (unread/read/later), search, tag, page, pageSize.
    """
    user = await require_user(request)
    params = request.query_params
    page, page_size, offset = pagination(params)

    links, count = request.app.state.db.links.list(
        user.id,
        status=params.get("status") or None,
        search=params.get("search") or None,
        tag=params.get("tag") or None,
        limit=page_size,
        offset=offset,
    )
    return page_response([link.to_dict() for link in links], count, page, page_size, offset)


@api_handler(method="POST", path="/links", tags=["links"], status_code=201)
async def create_link(request: Request) -> JSONResponse:
    """Save a link; title, description, image and favicon come from the page"""
    user = await require_user(request)
    result = validate_create_link(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    metadata = await request.app.state.metadata_fetcher.fetch(result.data["url"])
    if metadata.is_empty:
        logger.debug(f"No metadata found for {result.data['url']}")

    link = request.app.state.db.links.insert(user.id, result.data, metadata.to_dict())
    return success_response(link.to_dict(), status_code=201)


@api_handler(method="GET", path="/links/{link_id}", tags=["links"])
async def get_link(link_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    link = request.app.state.db.links.get(user.id, link_id)
    if link is None:
        raise not_found("Link")
    return success_response(link.to_dict())


@api_handler(method="PATCH", path="/links/{link_id}", tags=["links"])
async def update_link(link_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    result = validate_update_link(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    link = request.app.state.db.links.update(user.id, link_id, result.data)
    if link is None:
        raise not_found("Link")
    return success_response(link.to_dict())


@api_handler(method="DELETE", path="/links/{link_id}", tags=["links"])
async def delete_link(link_id: str, request: Request) -> JSONResponse:
    user = await require_user(request)
    if not request.app.state.db.links.delete(user.id, link_id):
        raise not_found("Link")
    return success_response({"id": link_id, "deleted": True})
