import pytest
from fastapi.testclient import TestClient

from factories import FakeCodeforces
from portfolio.app import create_app
from portfolio.services.codeforces import create_client, get_http_client


@pytest.fixture
def fake_cf():
    return FakeCodeforces()


@pytest.fixture
def app(fake_cf):
    application = create_app(feeds_enabled=False)

    async def _client_override():
        async with create_client(fake_cf.transport()) as client:
            yield client

    application.dependency_overrides[get_http_client] = _client_override
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
