# -*- coding: utf-8 -*-
"""
transport

Thin HTTP wrapper unpacking the API response envelope.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """Raised when the API answers with a failed envelope or an error status."""

    def __init__(self, status_code: int, message: str, error: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error


class ApiTransport:
    """Send requests through ``httpx`` and return decoded envelopes."""

    def __init__(
        self,
        http: httpx.Client,
        *,
        prefix: str = "/api",
        token: str | None = None,
    ) -> None:
        self.http = http
        self.prefix = prefix.rstrip("/")
        self.token = token

    def url(self, path: str) -> str:
        return f"{self.prefix}/{path.lstrip('/')}".rstrip("/")

    def headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Return the raw response, raising :class:`ApiError` on failure."""
        response = self.http.request(method, self.url(path), headers=self.headers(), **kwargs)
        if response.status_code >= 400:
            message, error = response.reason_phrase, None
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("detail") or message
                error = body.get("error")
            raise ApiError(response.status_code, str(message), error)
        return response

    def request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Return the decoded envelope of a successful call."""
        body = self.send(method, path, **kwargs).json()
        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(200, message or f"Request to {path} failed")
        return body


__all__ = ["ApiError", "ApiTransport"]


# The End
