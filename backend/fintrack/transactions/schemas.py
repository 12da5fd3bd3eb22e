import datetime as dt
import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from fintrack.recurring.models import TransactionType


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(gt=0, lt=1_000_000)
    description: str = Field(min_length=2, max_length=100)
    category_id: str = Field(min_length=1, max_length=64)
    notes: str | None = None
    date: date

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Description must be at least 2 characters")
        return value


class TransactionUpdate(BaseModel):
    type: TransactionType | None = None
    amount: float | None = Field(None, gt=0, lt=1_000_000)
    description: str | None = Field(None, min_length=2, max_length=100)
    category_id: str | None = Field(None, min_length=1, max_length=64)
    notes: str | None = None
    date: dt.date | None = None

    @field_validator("description")
    @classmethod
    def strip_description(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Description must be at least 2 characters")
        return value


class TransactionResponse(BaseModel):
    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category_id: str | None
    date: date
    recurring_id: uuid.UUID | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TransactionListItem(BaseModel):
    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category_id: str | None
    date: date
    recurring_id: uuid.UUID | None

    model_config = {"from_attributes": True}


class TransactionFilter(BaseModel):
    search: str | None = None
    type: TransactionType | None = None
    category_id: str | None = None
    recurring_id: uuid.UUID | None = None
    date_from: date | None = None
    date_to: date | None = None


class TransactionTotals(BaseModel):
    income: float
    expense: float
    balance: float
    count: int
