import enum
import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from fintrack.goals.models import GoalCategory


class GoalStatus(str, enum.Enum):
    ACTIVE = "active"
    URGENT = "urgent"
    OVERDUE = "overdue"
    COMPLETED = "completed"


class GoalCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    target_amount: float = Field(gt=0, lt=10_000_000)
    current_amount: float = Field(0.0, ge=0)
    target_date: date
    category: GoalCategory = GoalCategory.SAVINGS
    description: Optional[str] = None
    is_active: bool = True

    @model_validator(mode="after")
    def check_amounts(self) -> "GoalCreate":
        if self.current_amount > self.target_amount:
            raise ValueError("Current amount cannot exceed target amount")
        return self


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    target_amount: Optional[float] = Field(None, gt=0, lt=10_000_000)
    current_amount: Optional[float] = Field(None, ge=0)
    target_date: Optional[date] = None
    category: Optional[GoalCategory] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class GoalContribution(BaseModel):
    amount: float = Field(gt=0, lt=10_000_000)
    # Also book the contribution as a Savings expense in the ledger.
    record_transaction: bool = True


class GoalProgress(BaseModel):
    id: uuid.UUID
    name: str
    category: GoalCategory
    target_amount: float
    current_amount: float
    target_date: date
    is_active: bool
    progress: float
    remaining: float
    days_remaining: int
    daily_savings_needed: float
    status: GoalStatus
