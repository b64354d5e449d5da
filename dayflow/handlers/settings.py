"""
Settings API handlers
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from dayflow.core.models import Profile
from dayflow.validators import validate_update_settings

from . import api_handler
from .common import read_json, require_user, success_response, validation_failed


@api_handler(method="GET", path="/settings", tags=["settings"])
async def get_settings(request: Request) -> JSONResponse:
    """Get the caller's settings, or the defaults when no profile exists yet"""
    user = await require_user(request)
    profile = request.app.state.db.profiles.get(user.id)
    if profile is None:
        profile = Profile(id=user.id, email=user.email, name=user.name)
    return success_response(profile.to_dict())


@api_handler(method="PATCH", path="/settings", tags=["settings"])
async def update_settings(request: Request) -> JSONResponse:
    """Apply a settings patch, creating the profile on first write"""
    user = await require_user(request)
    result = validate_update_settings(await read_json(request))
    if not result.ok:
        raise validation_failed(result.error)

    profile = request.app.state.db.profiles.upsert(user.id, result.data, email=user.email)
    return success_response(profile.to_dict())
