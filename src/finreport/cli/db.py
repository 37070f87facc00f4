from tortoise import Tortoise

from ..core.config import get_settings, tortoise_config


class DBConnection:
    """Async context manager that opens the configured database for a CLI command."""

    def __init__(self, config: dict = None):
        self.config = config or tortoise_config(get_settings())

    async def __aenter__(self):
        await Tortoise.init(config=self.config)
        await Tortoise.generate_schemas(safe=True)  # Generate schema if it doesn't exist
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()
