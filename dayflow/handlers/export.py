"""
Data export handler
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import Response

from dayflow.core.db import DatabaseManager

from . import api_handler
from .common import require_user


def build_export(db: DatabaseManager, user_id: str) -> Dict[str, Any]:
    """All tasks, ideas and links of a user, oldest first"""
    return {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "user_id": user_id,
        "tasks": [t.to_dict() for t in db.tasks.list_all(user_id)],
        "ideas": [i.to_dict() for i in db.ideas.list_all(user_id)],
        "links": [link.to_dict() for link in db.links.list_all(user_id)],
    }


def export_filename() -> str:
    return f"dayflow-export-{datetime.now(timezone.utc).date().isoformat()}.json"


@api_handler(method="GET", path="/export", tags=["export"])
async def export_data(request: Request) -> Response:
    """Download everything the caller owns as a JSON attachment"""
    user = await require_user(request)
    data = build_export(request.app.state.db, user.id)
    return Response(
        content=json.dumps(data, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
