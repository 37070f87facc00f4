"""
Root conftest for the pytest test suite.

Every test runs against a fresh in-memory SQLite database, created and torn
down by the autouse `initialize_test_db` fixture in the test's own event loop.
The FastAPI app is driven through an `httpx.AsyncClient` on an ASGI transport,
so requests are served in that same loop and the app's production lifespan
(which would connect to the configured database) never runs.

Key Fixtures:
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `client`: A non-authenticated async client for the app.
- `test_user` / `other_user`: Registered users, each with a default report setting.
- `auth_headers` / `other_auth_headers`: Bearer headers for those users.
- `auth_client`: An async client already authenticated as `test_user`.
"""

from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from tortoise import Tortoise

from finreport.core.config import MODEL_MODULES, get_settings
from finreport.features.auth import service as auth_service
from finreport.features.auth.models import User
from finreport.features.auth.security import create_access_token, get_password_hash
from finreport.main import app as actual_app

TEST_PASSWORD = "password123"


async def add_user(username: str) -> User:
    return await auth_service.create_user(
        {"username": username, "email": f"{username}@example.com"},
        get_password_hash(TEST_PASSWORD),
    )


def bearer_headers(user: User) -> dict:
    token = create_access_token(user.username, get_settings())
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    transport = httpx.ASGITransport(app=actual_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def test_user() -> User:
    return await add_user("reportsuser")


@pytest_asyncio.fixture(scope="function")
async def other_user() -> User:
    return await add_user("otheruser")


@pytest.fixture(scope="function")
def auth_headers(test_user: User) -> dict:
    return bearer_headers(test_user)


@pytest.fixture(scope="function")
def other_auth_headers(other_user: User) -> dict:
    return bearer_headers(other_user)


@pytest_asyncio.fixture(scope="function")
async def auth_client(
    client: httpx.AsyncClient, auth_headers: dict
) -> AsyncGenerator[httpx.AsyncClient, Any]:
    client.headers.update(auth_headers)
    yield client
