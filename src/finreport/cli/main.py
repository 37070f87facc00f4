import asyncio
import logging
import typer

from ..core.config import get_settings
from ..core.logging_config import configure_logging
from ..features.auth import service as auth_service
from ..features.auth.security import get_password_hash
from ..features.auth.models import User as AuthUser
from .commands.reports import reports_app
from .db import DBConnection

logger = logging.getLogger(__name__)

app = typer.Typer(name="finreport", help="CLI for managing finreport users and reports.")
app.add_typer(reports_app)


@app.callback()
def main():
    configure_logging(get_settings().log_level)


# User management commands
user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)


@user_app.command("create")
def create_user_command(
    username: str = typer.Option(..., prompt=True, help="Username for the new user."),
    email: str = typer.Option(..., prompt=True, help="Email for the new user."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new user.")
):
    """Creates a new user with monthly reports enabled."""
    asyncio.run(_create_user(username, email, password))


async def _create_user(username: str, email: str, password: str):
    async with DBConnection():
        typer.echo(f"Attempting to create user: {username} ({email})...")
        if await AuthUser.filter(username=username).exists():
            typer.secho(f"Error: User with username '{username}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if await AuthUser.filter(email=email).exists():
            typer.secho(f"Error: User with email '{email}' already exists.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        user = await auth_service.create_user(
            {"username": username, "email": email}, get_password_hash(password)
        )
        typer.secho(f"User '{user.username}' created successfully with ID: {user.public_id}", fg=typer.colors.GREEN)


@user_app.command("disable-user")
def disable_user_account_command(
    username: str = typer.Argument(..., help="The username of the user to disable.")
):
    """Disables an existing user's account."""
    asyncio.run(_set_user_active(username, False))


@user_app.command("enable-user")
def enable_user_account_command(
    username: str = typer.Argument(..., help="The username of the user to enable.")
):
    """Enables an existing user's account."""
    asyncio.run(_set_user_active(username, True))


async def _set_user_active(username: str, active: bool):
    state = "active" if active else "inactive"
    async with DBConnection():
        user = await AuthUser.get_or_none(username=username)
        if not user:
            typer.secho(f"Error: User with username '{username}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if user.is_active == active:
            typer.secho(f"User '{username}' is already {state}.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)

        user.is_active = active
        await user.save()
        logger.info(f"User {username} marked {state}")
        typer.secho(f"User account '{username}' is now {state}.", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
