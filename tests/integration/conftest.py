"""Shared fixtures for integration tests.

Clients talk to freshly built applications through ``httpx.ASGITransport``.
The transport does not run the lifespan, so the client fixtures enter it
themselves to load the data source.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api_skeleton.api.main import create_admin_app, create_app, lifespan
from api_skeleton.core.config import DataSourceConfig, Settings

PETS_PATH = Path(__file__).parents[2] / "data" / "pets.json"
AUTH = ("admin", "admin")
BASE_URL = "http://test"

type ClientFactory = Callable[[FastAPI], Awaitable[AsyncClient]]


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the bundled data file."""
    return Settings(data_source_config=DataSourceConfig(pets_path=PETS_PATH))


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def admin_app(settings: Settings) -> FastAPI:
    return create_admin_app(settings)


@pytest.fixture
async def client_factory() -> AsyncGenerator[ClientFactory]:
    """Factory creating authenticated clients with the lifespan entered.

    Server errors are returned as 500 responses instead of being re-raised.
    """
    contexts = []
    clients: list[AsyncClient] = []

    async def _create_client(application: FastAPI) -> AsyncClient:
        context = lifespan(application)
        await context.__aenter__()
        contexts.append(context)

        transport = ASGITransport(app=application, raise_app_exceptions=False)
        client = AsyncClient(transport=transport, base_url=BASE_URL, auth=AUTH)
        clients.append(client)
        return client

    yield _create_client

    for client in clients:
        await client.aclose()
    for context in reversed(contexts):
        await context.__aexit__(None, None, None)


@pytest.fixture
async def client(app: FastAPI, client_factory: ClientFactory) -> AsyncClient:
    """Authenticated client of the API application."""
    return await client_factory(app)


@pytest.fixture
async def admin_client(admin_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Authenticated client of the admin application."""
    transport = ASGITransport(app=admin_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url=BASE_URL, auth=AUTH) as ac:
        yield ac
