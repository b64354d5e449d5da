"""
HTTP client for the DayFlow API
"""

from typing import Any, Dict, Iterator, List, Optional

import httpx

from dayflow.core.models import is_task_complete

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str, kind: Optional[str] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.kind = kind


class DayflowClient:
    """Thin synchronous client; every call returns the envelope's `data`"""

    def __init__(
        self,
        base_url: str,
        token: str,
        http_client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = http_client or httpx.Client(timeout=timeout)
        self._owns_session = http_client is None

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "DayflowClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded envelope"""
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            headers={"Authorization": f"Bearer {self.token}"},
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.is_success:
            error = payload.get("error") if isinstance(payload, dict) else None
            message = (
                payload.get("message") if isinstance(payload, dict) else None
            ) or response.reason_phrase
            raise ApiError(
                response.status_code,
                message,
                kind=error.get("kind") if isinstance(error, dict) else None,
            )
        return payload

    def _data(self, method: str, path: str, **kwargs: Any) -> Any:
        return self._request(method, path, **kwargs).get("data")

    # ---------- tasks ----------
    def list_tasks(
        self,
        date: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        page: int = 1,
        page_size: int = 50,
    ) -> Dict[str, Any]:
        """One page of top-level tasks: data, count, page, pageSize, hasMore"""
        params: Dict[str, Any] = {"page": page, "pageSize": page_size}
        if date:
            params["date"] = date
        if completed is not None:
            params["completed"] = "true" if completed else "false"
        if priority:
            params["priority"] = priority
        return self._request("GET", "/api/tasks", params=params)

    def iter_tasks(self, **filters: Any) -> Iterator[Dict[str, Any]]:
        """All matching top-level tasks across pages"""
        page = 1
        while True:
            result = self.list_tasks(page=page, page_size=100, **filters)
            yield from result.get("data", [])
            if not result.get("hasMore"):
                return
            page += 1

    def get_task(self, task_id: str) -> Dict[str, Any]:
        return self._data("GET", f"/api/tasks/{task_id}")

    def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("POST", "/api/tasks", json=fields)

    def update_task(self, task_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("PATCH", f"/api/tasks/{task_id}", json=fields)

    def delete_task(self, task_id: str) -> None:
        self._data("DELETE", f"/api/tasks/{task_id}")

    def toggle_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        """Flip a task between done and todo"""
        done = is_task_complete(task.get("status"))
        return self.update_task(task["id"], {"status": "todo" if done else "done"})

    def update_task_status(self, task_id: str, status: str) -> Dict[str, Any]:
        return self.update_task(task_id, {"status": status})

    def move_task_to_date(self, task_id: str, date: str) -> Dict[str, Any]:
        return self.update_task(task_id, {"due_date": date})

    # ---------- ideas ----------
    def list_ideas(
        self, search: Optional[str] = None, tag: Optional[str] = None, page: int = 1
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"page": page}
        if search:
            params["search"] = search
        if tag:
            params["tag"] = tag
        return self._data("GET", "/api/ideas", params=params)

    def create_idea(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("POST", "/api/ideas", json=fields)

    def update_idea(self, idea_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("PATCH", f"/api/ideas/{idea_id}", json=fields)

    def delete_idea(self, idea_id: str) -> None:
        self._data("DELETE", f"/api/ideas/{idea_id}")

    def convert_idea(self, idea_id: str) -> Dict[str, Any]:
        """Create a task due today from an idea"""
        return self._data("POST", f"/api/ideas/{idea_id}/convert")

    # ---------- links ----------
    def list_links(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
        page: int = 1,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"page": page}
        if status:
            params["status"] = status
        if search:
            params["search"] = search
        if tag:
            params["tag"] = tag
        return self._data("GET", "/api/links", params=params)

    def create_link(self, url: str, tags: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._data("POST", "/api/links", json={"url": url, "tags": tags or []})

    def update_link(self, link_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("PATCH", f"/api/links/{link_id}", json=fields)

    def delete_link(self, link_id: str) -> None:
        self._data("DELETE", f"/api/links/{link_id}")

    # ---------- settings ----------
    def get_settings(self) -> Dict[str, Any]:
        return self._data("GET", "/api/settings")

    def update_settings(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._data("PATCH", "/api/settings", json=fields)
