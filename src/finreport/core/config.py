"""Application settings.

Everything configurable is read from the environment once, into a frozen
``Settings`` object, and handed explicitly to the parts that need it: the ORM
config, token signing and the report defaults. FastAPI routes receive it
through ``Depends(get_settings)`` so tests can override it.
"""
import os
from dataclasses import dataclass
from functools import lru_cache

MODEL_MODULES = [
    "finreport.features.auth.models",
    "finreport.features.transactions.models",
    "finreport.features.reports.models",
]


@dataclass(frozen=True)
class Settings:
    database_url: str
    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    report_lookback_days: int
    default_page_size: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite://./finreport.sqlite3"),
        secret_key=os.getenv("SECRET_KEY", "your-secret-key-for-jwt-!ChangeMe!"),
        algorithm="HS256",
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")),
        report_lookback_days=max(1, int(os.getenv("REPORT_LOOKBACK_DAYS", "30"))),
        default_page_size=max(1, int(os.getenv("DEFAULT_PAGE_SIZE", "20"))),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def tortoise_config(settings: Settings, *, with_aerich: bool = True) -> dict:
    """Build the Tortoise ORM config dict for the given settings."""
    models = list(MODEL_MODULES)
    if with_aerich:
        models.append("aerich.models")  # For Aerich migrations
    return {
        "connections": {"default": settings.database_url},
        "apps": {
            "models": {
                "models": models,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


# Referenced by [tool.aerich] in pyproject.toml
TORTOISE_ORM = tortoise_config(get_settings())
