from datetime import datetime

from pydantic import BaseModel, Field

from fintrack.recurring.models import TransactionType

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: str | None = Field(None, pattern=HEX_COLOR)
    type: TransactionType = TransactionType.EXPENSE


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    color: str | None = Field(None, pattern=HEX_COLOR)
    type: TransactionType | None = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    color: str | None
    type: TransactionType
    is_system: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
