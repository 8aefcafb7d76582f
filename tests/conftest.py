# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest
import respx

from simfin_api.infrastructure.external_apis.simfin.client import SimFinClient
from simfin_api.infrastructure.external_apis.simfin.settings import SimFinSettings
from simfin_api.infrastructure.logging.logger import clear_request_context

TEST_TOKEN = "test-token"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio (not trio)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer SIMFIN_* variables and correlation ids out of unit tests."""
    for name in ("SIMFIN_API_KEY", "SIMFIN_BASE_URL", "SIMFIN_TIMEOUT_S", "SIMFIN_USER_AGENT"):
        monkeypatch.delenv(name, raising=False)
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def settings() -> SimFinSettings:
    return SimFinSettings(api_key=TEST_TOKEN)


@pytest.fixture
def simfin(settings: SimFinSettings) -> SimFinClient:
    return SimFinClient(settings=settings)


@pytest.fixture
def simfin_http() -> Iterator[respx.MockRouter]:
    """Mock every httpx transport; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router
