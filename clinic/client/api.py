"""
Thin ``requests`` wrapper around the clinic HTTP API.

The session is injectable, so a caller can mount its own transport
adapter (the test suite serves requests from Django's test client).
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: Optional[float] = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.setdefault("Content-Type", "application/json")
        self.timeout = timeout
        if token:
            self.set_token(token)

    def set_token(self, token: str) -> None:
        self.session.headers["Authorization"] = f"Token {token}"

    def clear_token(self) -> None:
        self.session.headers.pop("Authorization", None)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None,
                raise_for_status: bool = True) -> requests.Response:
        """Send one request; non-2xx answers raise ``requests.HTTPError`` unless told otherwise."""
        response = self.session.request(method.upper(), self.url(path), json=json, params=params,
                                        timeout=self.timeout)
        logger.debug("%s %s -> %s", method.upper(), path, response.status_code)
        if raise_for_status:
            response.raise_for_status()
        return response

    def get_json(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params).json()

    def login(self, username: str, password: str, tenant: Optional[str] = None) -> dict:
        """Log in and keep the returned token on the session."""
        payload = {"username": username, "password": password}
        if tenant:
            payload["tenant"] = tenant
        data = self.request("POST", "/api/auth/login", json=payload).json()
        self.set_token(data["token"])
        return data
