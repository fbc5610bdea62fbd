"""Fixtures for module tests using a WireMock testcontainer as the backend."""

from collections.abc import AsyncGenerator, Generator

import pytest
from testcontainers.core import testcontainers_config
from wiremock.constants import Config
from wiremock.testing.testcontainer import WireMockContainer

from backend_harness.client.config import ClientConfig
from backend_harness.client.http import HttpAppClient

APP_ID = "test-alice"


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def wiremock_server() -> Generator[WireMockContainer, None, None]:
    """Start WireMock container standing in for the backend gateway."""
    with WireMockContainer(secure=False) as wm:
        Config.base_url = wm.get_url("__admin")
        yield wm
        print(wm.get_logs())


@pytest.fixture(scope="session")
def backend_url(wiremock_server: WireMockContainer) -> str:
    """Gateway URL reachable from the test process."""
    host = wiremock_server.get_container_host_ip()
    port = wiremock_server.get_exposed_port(8080)
    return f"http://{host}:{port}"


@pytest.fixture
async def alice(backend_url: str) -> AsyncGenerator[HttpAppClient, None]:
    """Client calling the app as alice."""
    config = ClientConfig(api_base_url=backend_url, app_id=APP_ID, agent="alice")
    async with HttpAppClient.from_config(config) as client:
        yield client
