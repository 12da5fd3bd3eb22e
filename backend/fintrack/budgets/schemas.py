import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fintrack.budgets.models import PeriodType


class BudgetCreate(BaseModel):
    category_id: str = Field(min_length=1, max_length=64)
    amount: float = Field(gt=0)
    period: PeriodType = PeriodType.MONTHLY


class BudgetUpdate(BaseModel):
    category_id: str | None = Field(None, min_length=1, max_length=64)
    amount: float | None = Field(None, gt=0)
    period: PeriodType | None = None


class BudgetResponse(BaseModel):
    id: uuid.UUID
    category_id: str
    amount: float
    period: PeriodType
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BudgetProgress(BaseModel):
    budget_id: uuid.UUID
    category_id: str
    budgeted_amount: float
    spent: float
    remaining: float
    percentage: float
    is_over_budget: bool
    is_near_limit: bool
