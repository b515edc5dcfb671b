"""
Shared fixtures: in-memory database, stubbed AI gateway and an API client.
"""
import json
import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from mooddiary.main import app
from mooddiary.core.config import settings
from mooddiary.db.session import get_db, init_db
from mooddiary.api.dependencies import get_gateway_client


class GatewayStub:
    """Records gateway calls and answers with a canned response."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.reply_with_analysis({"emojis": ["😊", "🌱"], "sentiment": "You seem hopeful."})

    def reply_with_analysis(self, analysis: dict):
        self.reply_with_content(json.dumps(analysis))

    def reply_with_content(self, content):
        self.status_code = 200
        self.body = {"choices": [{"message": {"role": "assistant", "content": content}}]}

    def reply_with_status(self, status_code: int, body=None):
        self.status_code = status_code
        self.body = body or {"error": {"message": "upstream says no"}}

    def fail_with(self, error: Exception):
        self.error = error

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def gateway(monkeypatch):
    """Stubbed AI gateway wired into the app."""
    stub = GatewayStub()
    monkeypatch.setattr(settings, "AI_GATEWAY_API_KEY", "test-key")

    async def override_gateway_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(stub.handler)) as client:
            yield client

    app.dependency_overrides[get_gateway_client] = override_gateway_client
    yield stub
    app.dependency_overrides.pop(get_gateway_client, None)


@pytest.fixture
def db_sessionmaker():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_sessionmaker, gateway):
    def override_get_db():
        db = db_sessionmaker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


def _auth_headers(client: TestClient, email: str, password: str = "testpassword123") -> dict:
    client.post("/api/auth/signup", json={"email": email, "password": password})
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return _auth_headers(client, "writer@example.com")


@pytest.fixture
def other_auth_headers(client):
    return _auth_headers(client, "someone.else@example.com")
