# tests/api_tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from typing import Generator

from api_server.main import app
from secure_random.config import ENTROPY_BACKEND_ENV, SERVER_API_KEY_ENV, TIMEOUT_SEC_ENV

TEST_API_KEY = "test_api_key_for_secure_random!"
RANDOM_INTEGER_URL = "/api/v1/random/integer"


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment read by the app's lifespan at startup."""
    monkeypatch.setenv(SERVER_API_KEY_ENV, TEST_API_KEY)
    monkeypatch.setenv(ENTROPY_BACKEND_ENV, "secrets")
    monkeypatch.setenv(TIMEOUT_SEC_ENV, "2.0")
    return monkeypatch


@pytest.fixture
def api_client(api_env) -> Generator[TestClient, None, None]:
    """
    Authenticated client. Entering the TestClient context runs the lifespan,
    so app.state.entropy_source can be swapped by tests after this fixture.
    """
    headers = {
        "X-API-Key": TEST_API_KEY,
        "accept": "application/json",
    }
    with TestClient(app, headers=headers) as client:
        yield client


@pytest.fixture
def anonymous_client(api_env) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client
