# -*- coding: utf-8 -*-
"""
auth

Bearer token verification for API routes.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..conf import AutoAdminSettings, current_settings
from .exceptions import AuthenticationError, PermissionDeniedError

_bearer = HTTPBearer(auto_error=False)


class TokenService:
    """Sign and verify access tokens with expiration."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        """Initialize service with signing ``secret`` and ``algorithm``."""
        self._secret = secret
        self._algorithm = algorithm

    def sign(self, subject: str, ttl: int = 3600, **claims: Any) -> str:
        """Return a signed token for ``subject`` valid for ``ttl`` seconds."""
        payload = {
            **claims,
            "sub": subject,
            "exp": datetime.now(timezone.utc) + timedelta(seconds=int(ttl)),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims of ``token`` if valid and not expired."""
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise PermissionDeniedError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise PermissionDeniedError("Invalid token") from exc


class BearerAuthService:
    """FastAPI dependency admitting requests with a valid bearer token.

    The gate is open while ``auth_enabled`` is false.
    """

    def __init__(self, settings: AutoAdminSettings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> AutoAdminSettings:
        return self._settings or current_settings()

    async def __call__(
        self,
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    ) -> Dict[str, Any] | None:
        settings = self.settings
        if not settings.auth_enabled:
            return None
        if credentials is None or not credentials.credentials:
            raise AuthenticationError("Authentication required")
        tokens = TokenService(settings.jwt_secret_key or "", settings.jwt_algorithm)
        return tokens.verify(credentials.credentials)


__all__ = ["BearerAuthService", "TokenService"]

# The End
