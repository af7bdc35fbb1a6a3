"""Small synchronous client for the TaskTrack HTTP API.

Authentication state is never stored on the client: ``register`` and ``login``
return an :class:`ApiSession`, and every task call takes that session
explicitly.

Example::

    with httpx.Client(base_url="http://localhost:8000") as http:
        api = TaskTrackClient(http)
        session = api.login("ada@example.com", "Secret123")
        page = api.list_tasks(session, priority="high", sortBy="dueDate")
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx


@dataclass(frozen=True)
class ApiSession:
    token: str
    user: Dict[str, Any]

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[List[dict]] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")


class TaskTrackClient:
    def __init__(self, http: httpx.Client):
        self.http = http

    def _send(self, method: str, url: str, session: Optional[ApiSession] = None, **kwargs) -> dict:
        if session is not None:
            kwargs["headers"] = {**kwargs.get("headers", {}), **session.headers}
        response = self.http.request(method, url, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        if response.is_error:
            raise ApiError(response.status_code, body.get("message", response.reason_phrase), body.get("errors"))
        return body

    def _session(self, body: dict) -> ApiSession:
        return ApiSession(token=body["token"], user=body["user"])

    def register(self, name: str, email: str, password: str) -> ApiSession:
        return self._session(self._send("POST", "/auth/register", json={"name": name, "email": email, "password": password}))

    def login(self, email: str, password: str) -> ApiSession:
        return self._session(self._send("POST", "/auth/login", json={"email": email, "password": password}))

    def list_tasks(self, session: ApiSession, **params) -> dict:
        """Return ``{"data": [...], "meta": {...}}``; ``params`` are q, status, priority, page, limit, sortBy."""
        params = {k: v for k, v in params.items() if v is not None}
        body = self._send("GET", "/tasks", session, params=params)
        return {"data": body["data"], "meta": body["meta"]}

    def get_task(self, session: ApiSession, task_id: str) -> dict:
        return self._send("GET", f"/tasks/{task_id}", session)["data"]

    def create_task(self, session: ApiSession, **fields) -> dict:
        return self._send("POST", "/tasks", session, json=fields)["data"]

    def update_task(self, session: ApiSession, task_id: str, **fields) -> dict:
        return self._send("PUT", f"/tasks/{task_id}", session, json=fields)["data"]

    def delete_task(self, session: ApiSession, task_id: str) -> dict:
        return self._send("DELETE", f"/tasks/{task_id}", session)["data"]
