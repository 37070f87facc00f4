"""User lookup and creation."""
from typing import Optional

from tortoise.transactions import in_transaction

from ...common.clock import utc_now
from ..reports.models import ReportSetting
from ..reports.service import calculate_next_report_date
from . import models


async def get_user_by_username(username: str) -> Optional[models.User]:
    return await models.User.get_or_none(username=username)


async def get_user_by_email(email: str) -> Optional[models.User]:
    return await models.User.get_or_none(email=email)


async def create_user(user_in: dict, hashed_password_val: str) -> models.User:
    """Creates a user together with their default report setting.

    New accounts start with monthly reports enabled, the first one due at the
    start of next month.

    Args:
        user_in: The user fields (username, email), without the password.
        hashed_password_val: The bcrypt hash of the user's password.

    Returns:
        The newly created User object.
    """
    async with in_transaction() as conn:
        new_user = await models.User.create(
            **user_in, hashed_password=hashed_password_val, using_db=conn
        )
        await ReportSetting.create(
            user=new_user,
            is_enabled=True,
            next_report_date=calculate_next_report_date(now=utc_now()),
            using_db=conn,
        )
    return new_user
