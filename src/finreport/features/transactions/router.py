from fastapi import APIRouter, Depends, Query, status
from typing import Annotated, List, Optional

from ..auth.models import User as AuthUser
from ..auth.security import get_current_active_user
from .models import TransactionType
from .schemas import TransactionCreate, TransactionPublic
from . import service as transaction_service

router = APIRouter(
    prefix="/transactions",
    tags=["Transactions"],
)


@router.post("", response_model=TransactionPublic, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction_in: TransactionCreate,
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
):
    transaction = await transaction_service.create_transaction(transaction_in, current_user)
    return TransactionPublic.model_validate(transaction)


@router.get("", response_model=List[TransactionPublic])
async def list_transactions(
    current_user: Annotated[AuthUser, Depends(get_current_active_user)],
    page: int = Query(1, ge=1), size: int = Query(20, ge=1, le=100),
    type_: Optional[TransactionType] = Query(None, alias="type"),
):
    transactions = await transaction_service.list_transactions(current_user, page, size, type_)
    return [TransactionPublic.model_validate(t) for t in transactions]
