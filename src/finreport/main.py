import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise

from .core.config import get_settings, tortoise_config
from .core.errors import exception_handlers
from .core.logging_config import configure_logging
from .features.auth.router import router as auth_router
from .features.transactions.router import router as transactions_router
from .features.reports.router import router as reports_router

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("finreport.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects Tortoise ORM on startup and closes its connections on shutdown.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=tortoise_config(settings))
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="finreport API",
    description="Personal-finance transactions and reports.",
    version="0.1.0",
    exception_handlers=exception_handlers(),
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the finreport API!"}


app.include_router(auth_router, prefix="/api/v1")
app.include_router(transactions_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
