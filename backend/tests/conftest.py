import json
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from handnotes.api.auth import hash_pw
from handnotes.db import engine
from handnotes.main import app
from handnotes.models.note import utcnow
from handnotes.models.user import User
from handnotes.services.extraction import ExtractionClient, get_extraction_client

STANDUP = {
    "title": "Standup",
    "date": "",
    "attendees": [],
    "summary": "Quick sync.",
    "notes": ["Discussed blockers"],
    "tasks": [{"text": "Fix bug", "assignee": "Sam"}],
}

IMAGE = "data:image/png;base64,AAAA"
PASSWORD = "hunter22"


def tool_call(arguments, name="extract_meeting_data", call_id="call_1"):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def completion(tool_calls=None, content=None):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "finish_reason": "tool_calls" if tool_calls else "stop",
                "message": {"role": "assistant", "content": content, "tool_calls": tool_calls},
            }
        ],
    }


class FakeGateway:
    """Stands in for the AI gateway at the HTTP transport level."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.body = completion([tool_call(STANDUP)])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_extractor(gateway: FakeGateway, api_key: str = "test-key") -> ExtractionClient:
    return ExtractionClient(
        api_key=api_key,
        base_url="https://gateway.test/v1",
        model="test-model",
        http_client=httpx.Client(transport=httpx.MockTransport(gateway.handler)),
    )


def make_user(email: str, password: str = PASSWORD, confirmed: bool = True) -> User:
    with Session(engine) as db:
        user = User(
            email=email,
            hashed_password=hash_pw(password),
            confirmed_at=utcnow() if confirmed else None,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user


@pytest.fixture(autouse=True)
def db():
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def extractor(gateway):
    extractor = make_extractor(gateway)
    app.dependency_overrides[get_extraction_client] = lambda: extractor
    yield extractor
    app.dependency_overrides.pop(get_extraction_client, None)


@pytest.fixture
def client(extractor):
    return TestClient(app)


@pytest.fixture
def login(client):
    def _login(email: str = "sam@example.com") -> dict:
        make_user(email)
        response = client.post("/api/auth/token", data={"username": email, "password": PASSWORD})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
