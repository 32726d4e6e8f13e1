from collections.abc import Generator

import httpx
import pytest

from fake_server import BASE_URL, FakeRaptorServer
from raptor.client import RaptorClient
from raptor.config.settings import Settings
from raptor.transport.http_transport import HttpTransport


@pytest.fixture()
def server() -> FakeRaptorServer:
    return FakeRaptorServer()


@pytest.fixture()
def client(server: FakeRaptorServer) -> Generator[RaptorClient, None, None]:
    settings = Settings(
        _env_file=None,
        api_key="rk_test",
        poll_interval_seconds=0.001,
        max_poll_attempts=20,
        poll_timeout_seconds=30,
    )
    http_client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(server))
    transport = HttpTransport(
        api_key=settings.api_key,
        base_url=BASE_URL,
        timeout_seconds=settings.timeout_seconds,
        client=http_client,
    )
    with RaptorClient(settings, transport=transport) as raptor:
        yield raptor
