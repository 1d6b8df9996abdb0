# frontend/todo_ui/client.py
import os
from typing import List, Optional

import requests
from pydantic import TypeAdapter

from todo_api.core.errors import NotFound, StorageUnavailable, TodoError, ValidationError
from todo_api.schemas.todos import DeleteResult, TodoOut

API = os.getenv("API_URL", "http://localhost:8000/api/v1")


class TodoApiClient:
    """
    Thin wrapper over the todo HTTP routes.

    ``http`` is anything with requests-style get/post/patch/delete methods;
    a ``requests.Session`` by default, FastAPI's TestClient in tests.
    """

    def __init__(self, base_url: str = API, http=None, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs):
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            r = getattr(self.http, method)(f"{self.base_url}{path}", **kwargs)
        except requests.RequestException as e:
            raise StorageUnavailable(f"API unreachable: {e}") from e

        if r.status_code < 400:
            try:
                return r.json()
            except ValueError as e:
                raise StorageUnavailable(f"unreadable response from API: {e}") from e

        detail = _detail(r)
        if r.status_code == 404:
            raise NotFound(detail)
        if r.status_code in (400, 422):
            raise ValidationError(detail)
        if r.status_code >= 500:
            raise StorageUnavailable(detail)
        raise TodoError(f"{r.status_code}: {detail}")

    def create_todo(self, title: str) -> TodoOut:
        return _parse(TodoOut, self._request("post", "/todos", json={"title": title}))

    def get_todos(self, completed: Optional[bool] = None) -> List[TodoOut]:
        params = {} if completed is None else {"completed": str(completed).lower()}
        return _parse(List[TodoOut], self._request("get", "/todos", params=params))

    def update_todo(self, todo_id: int, title: Optional[str] = None, completed: Optional[bool] = None) -> TodoOut:
        body = {}
        if title is not None:
            body["title"] = title
        if completed is not None:
            body["completed"] = completed
        return _parse(TodoOut, self._request("patch", f"/todos/{todo_id}", json=body))

    def delete_todo(self, todo_id: int) -> DeleteResult:
        return _parse(DeleteResult, self._request("delete", f"/todos/{todo_id}"))

    def health(self) -> dict:
        return self._request("get", "/health")


def _parse(shape, data):
    # a 2xx body that is not what the route returns (proxy pages and the like)
    try:
        return TypeAdapter(shape).validate_python(data)
    except ValueError as e:
        raise StorageUnavailable(f"unexpected response from API: {e}") from e


def _detail(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or str(r.status_code)
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)
