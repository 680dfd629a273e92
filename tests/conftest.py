import itertools
from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient

from internstud.core.auth import create_access_token
from internstud.core.config import Settings
from internstud.db.mongodb import get_mongo_db
from internstud.main import app
from internstud.services.ai_client import AIClient, get_ai_client
from internstud.services.email_service import ContactMailer, get_mailer
from internstud.services.mongo_service import UserService


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    return mongomock.MongoClient()["internstud_test"]


@pytest.fixture
def ai_client():
    """Real AIClient whose model call is replaced; tests set complete.return_value."""
    client = AIClient(Settings(ai_api_key="test-key"))
    client.complete = MagicMock(return_value="{}")
    return client


@pytest.fixture
def mailer():
    return MagicMock(spec=ContactMailer)


@pytest.fixture
def client(db, ai_client, mailer):
    app.dependency_overrides[get_mongo_db] = lambda: db
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert an account and return its id. Extra fields are set on the document."""
    counter = itertools.count(1)

    def _make(user_type="student", **fields):
        users = UserService(db)
        user_id = users.create({
            "email": f"{user_type}{next(counter)}@example.com",
            "password_hash": "not-used",
            "user_type": user_type
        })
        if fields:
            users.update_profile(user_id, fields)
        return user_id

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        token = create_access_token({"sub": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
