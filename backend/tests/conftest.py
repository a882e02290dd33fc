"""Shared fixtures: an app wired to a mock Flutterwave transport."""

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app


class FakeUpstream:
    """Records every outbound request and answers with ``responder``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"status": "success", "data": []})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        FLW_SECRET_KEY="FLWSECK_TEST-abc",
        FLW_SECRET_HASH="test-secret-hash",
        WEBHOOK_URL="https://relay.example.com/webhook",
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(settings, upstream):
    app = create_app(settings, transport=httpx.MockTransport(upstream))
    with TestClient(app) as c:
        yield c
