# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the authentication middleware.

Tests the middleware in isolation from the database.
"""

from datetime import timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from zentik.api.middleware.auth import AuthMiddleware, get_current_user
from zentik.domains.auth.jwt import JWTManager
from zentik.infrastructure.database.models.user import UserRole


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


@pytest.fixture
def client(jwt_manager: JWTManager) -> TestClient:
    """Create a client for an app that echoes the authenticated user."""
    app = FastAPI()
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/v1/test")
    async def test_endpoint(request: Request) -> dict:
        user = get_current_user(request)
        return {
            "user_id": user.id if user else None,
            "is_admin": user.is_admin if user else None,
        }

    return TestClient(app)


class TestAuthMiddleware:
    """Tests for AuthMiddleware."""

    def test_public_path_bypasses_auth(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200

    def test_valid_token_sets_user(self, client: TestClient, jwt_manager: JWTManager) -> None:
        user_id = str(uuid4())
        token = jwt_manager.create_access_token(user_id, role=UserRole.ADMIN)

        response = client.get("/api/v1/test", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user_id": user_id, "is_admin": True}

    def test_no_token_sets_user_none(self, client: TestClient) -> None:
        response = client.get("/api/v1/test")

        assert response.status_code == 200
        assert response.json()["user_id"] is None

    def test_invalid_token_sets_user_none(self, client: TestClient) -> None:
        response = client.get("/api/v1/test", headers={"Authorization": "Bearer invalid"})

        assert response.status_code == 200
        assert response.json()["user_id"] is None

    def test_expired_token_sets_user_none(self, client: TestClient, jwt_manager: JWTManager) -> None:
        token = jwt_manager.create_access_token("u1", expires_delta=timedelta(minutes=-1))

        response = client.get("/api/v1/test", headers={"Authorization": f"Bearer {token}"})

        assert response.json()["user_id"] is None

    def test_non_bearer_scheme_is_ignored(self, client: TestClient, jwt_manager: JWTManager) -> None:
        token = jwt_manager.create_access_token("u1")

        response = client.get("/api/v1/test", headers={"Authorization": f"Basic {token}"})

        assert response.json()["user_id"] is None
