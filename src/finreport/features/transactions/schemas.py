from pydantic import Field, field_validator
from typing import Optional
import datetime

from ...common.clock import as_utc
from ...common.schemas import CamelModel
from .models import TransactionType


class TransactionCreate(CamelModel):
    type: TransactionType
    amount: float = Field(..., gt=0, description="Positive amount; the type gives the direction")
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    date: datetime.datetime = Field(..., description="When the transaction happened (ISO-8601)")

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("category must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def date_in_utc(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)


class TransactionPublic(CamelModel):
    public_id: str
    type: TransactionType
    amount: float
    category: str
    description: Optional[str] = None
    date: datetime.datetime
    created_at: datetime.datetime
