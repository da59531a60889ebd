# -*- coding: utf-8 -*-
"""
Test bearer token signing and the API authentication gate.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from autoadmin.application import ApplicationFactory
from autoadmin.conf import AutoAdminSettings
from autoadmin.core.auth import TokenService
from autoadmin.core.exceptions import PermissionDeniedError


class TestTokenService:
    def test_sign_and_verify(self) -> None:
        tokens = TokenService("secret")
        claims = tokens.verify(tokens.sign("admin", role="editor"))
        assert claims["sub"] == "admin"
        assert claims["role"] == "editor"

    def test_expired_token(self) -> None:
        tokens = TokenService("secret")
        token = tokens.sign("admin", ttl=-10)
        with pytest.raises(PermissionDeniedError) as info:
            tokens.verify(token)
        assert str(info.value) == "Token has expired"

    def test_foreign_signature(self) -> None:
        token = TokenService("other-secret").sign("admin")
        with pytest.raises(PermissionDeniedError, match="Invalid token"):
            TokenService("secret").verify(token)


class TestAuthenticatedApi:
    app: FastAPI
    client: TestClient
    tokens: TokenService

    @classmethod
    def setup_class(cls) -> None:
        settings = AutoAdminSettings(
            database_url="sqlite://:memory:",
            auth_enabled=True,
            jwt_secret_key="test-secret",
        )
        cls.app = ApplicationFactory(settings=settings).build()
        cls.client = TestClient(cls.app)
        cls.client.__enter__()
        cls.tokens = TokenService("test-secret")

    @classmethod
    def teardown_class(cls) -> None:
        cls.client.__exit__(None, None, None)

    def test_missing_token(self) -> None:
        resp = self.client.get("/api/banks")
        assert resp.status_code == 401
        assert resp.json() == {
            "success": False,
            "message": "Authentication required",
        }

    def test_invalid_token(self) -> None:
        resp = self.client.get(
            "/api/schemas/models", headers={"Authorization": "Bearer not-a-token"}
        )
        assert resp.status_code == 403
        assert resp.json()["message"] == "Invalid token"

    def test_valid_token(self) -> None:
        headers = {"Authorization": f"Bearer {self.tokens.sign('admin')}"}
        resp = self.client.get("/api/banks", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        resp = self.client.get("/api/stats", headers=headers)
        assert resp.status_code == 200


# The End
