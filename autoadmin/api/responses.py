# -*- coding: utf-8 -*-
"""
responses

Uniform response envelope shared by every endpoint.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..conf import AutoAdminSettings, current_settings
from ..core.exceptions import HTTPError

_UNSET: Any = object()


def envelope(
    *,
    success: bool = True,
    data: Any = _UNSET,
    message: str | None = None,
    error: str | None = None,
    pagination: Any = None,
) -> dict[str, Any]:
    """Return the ``{success, data?, message?, error?, pagination?}`` mapping."""
    body: dict[str, Any] = {"success": success}
    if data is not _UNSET:
        body["data"] = data
    if message:
        body["message"] = message
    if error:
        body["error"] = error
    if pagination is not None:
        body["pagination"] = pagination
    return body


def success_response(
    data: Any = _UNSET,
    *,
    message: str | None = None,
    pagination: Any = None,
    status_code: int = 200,
) -> JSONResponse:
    """Wrap ``data`` into a successful envelope."""
    return JSONResponse(
        jsonable_encoder(envelope(data=data, message=message, pagination=pagination)),
        status_code=status_code,
    )


def error_response(
    exc: HTTPError,
    settings: AutoAdminSettings | None = None,
) -> JSONResponse:
    """Render a domain error; the detail is hidden in production."""
    settings = settings or current_settings()
    error = None if settings.is_production else (exc.error or None)
    return JSONResponse(
        envelope(success=False, message=exc.detail or None, error=error),
        status_code=exc.status_code,
    )


__all__ = ["envelope", "error_response", "success_response"]


# The End
