import logging
from typing import List, Optional

from ..auth.models import User as AuthUser
from .models import Transaction, TransactionType
from .schemas import TransactionCreate

logger = logging.getLogger(__name__)


async def create_transaction(data: TransactionCreate, current_user: AuthUser) -> Transaction:
    transaction = await Transaction.create(user=current_user, **data.model_dump())
    logger.debug(f"Created transaction {transaction.public_id} for {current_user.username}")
    return transaction


async def list_transactions(
    current_user: AuthUser, page: int, size: int, type_: Optional[TransactionType] = None
) -> List[Transaction]:
    offset = (page - 1) * size
    query = Transaction.filter(user_id=current_user.id).order_by("-date", "-id")
    if type_ is not None:
        query = query.filter(type=type_)
    return await query.offset(offset).limit(size)
