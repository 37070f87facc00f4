import httpx
import pytest
from fastapi import FastAPI, HTTPException
from tortoise.exceptions import DoesNotExist

from finreport.core.errors import exception_handlers


def build_app() -> FastAPI:
    app = FastAPI(exception_handlers=exception_handlers())

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database went away")

    @app.get("/missing")
    async def missing():
        raise DoesNotExist("Report has no such record")

    @app.get("/forbidden")
    async def forbidden():
        raise HTTPException(status_code=403, detail="nope")

    return app


@pytest.fixture
def error_app() -> FastAPI:
    return build_app()


@pytest.mark.asyncio
async def test_unexpected_error_becomes_json_500(error_app: FastAPI, caplog):
    transport = httpx.ASGITransport(app=error_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}
    assert "database went away" in caplog.text


@pytest.mark.asyncio
async def test_does_not_exist_becomes_404(error_app: FastAPI):
    transport = httpx.ASGITransport(app=error_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_http_exceptions_pass_through(error_app: FastAPI):
    transport = httpx.ASGITransport(app=error_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/forbidden")

    assert response.status_code == 403
    assert response.json() == {"detail": "nope"}
