"""Shared fixtures: a fresh schema per test, seeded users, roles and API keys."""

import unittest
from datetime import UTC, datetime

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from larder.core.database import SessionLocal, engine
from larder.core.security import hash_password
from larder.main import app
from larder.models import (
    ROLE_ADMIN,
    ROLE_USER,
    ApiKeyStatus,
    Base,
    TokenType,
    UserToken,
)
from larder.repositories import api_keys as api_key_store
from larder.repositories import roles as role_store
from larder.repositories import users as user_store

API_KEY = "general_api_key_test"
INACTIVE_API_KEY = "inactive_api_key_test"

ADMIN_EMAIL = "user_role_admin_test@example.com"
ADMIN_PASSWORD = "user_role_admin_test"
USER_EMAIL = "user_role_user_test@example.com"
USER_PASSWORD = "user_role_user_test"


class DatabaseTestCase(unittest.TestCase):
    """Creates every table before each test and drops them afterwards."""

    def setUp(self) -> None:
        Base.metadata.create_all(engine)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(engine)

    def create_user(self, name: str, email: str, password: str, role: str) -> str:
        role_row = role_store.upsert_role(self.db, role)
        user = user_store.create_user(
            self.db,
            name=name,
            email=email,
            password_hash=hash_password(password),
            role_ids=[role_row.id],
        )
        self.db.commit()
        return user.id

    def create_api_key(
        self, user_id: str, key: str, status: ApiKeyStatus = ApiKeyStatus.ACTIVE
    ) -> None:
        api_key_store.upsert_api_key(
            self.db, user_id=user_id, name=key, slug=key.replace("_", "-"), key=key, status=status
        )
        self.db.commit()

    def live_token_count(self, user_id: str, token_type: TokenType | None = None) -> int:
        stmt = select(func.count(UserToken.id)).where(
            UserToken.user_id == user_id,
            UserToken.expired_at > datetime.now(UTC),
        )
        if token_type is not None:
            stmt = stmt.where(UserToken.type == token_type)
        return self.db.execute(stmt).scalar_one()


class ApiTestCase(DatabaseTestCase):
    """Database fixture plus an admin, a regular user, API keys and a test client."""

    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.create_user("User Role Admin Test", ADMIN_EMAIL, ADMIN_PASSWORD, ROLE_ADMIN)
        self.user_id = self.create_user("User Role User Test", USER_EMAIL, USER_PASSWORD, ROLE_USER)
        self.create_api_key(self.admin_id, API_KEY)
        self.create_api_key(self.admin_id, INACTIVE_API_KEY, ApiKeyStatus.INACTIVE)
        self.client = TestClient(app)

    def headers(self, token: str | None = None, api_key: str | None = API_KEY) -> dict[str, str]:
        headers: dict[str, str] = {}
        if api_key is not None:
            headers["x-api-key"] = api_key
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def sign_in(self, email: str, password: str):
        return self.client.post(
            "/api/v1/auth/sign-in",
            json={"email": email, "password": password},
            headers=self.headers(),
        )

    def sign_in_tokens(self, email: str, password: str) -> tuple[str, str]:
        """Sign in and return (access_token, refresh_token)."""
        response = self.sign_in(email, password)
        self.assertEqual(response.status_code, 200, response.text)
        data = response.json()["data"]
        return data["access_token"]["token"], data["refresh_token"]["token"]
