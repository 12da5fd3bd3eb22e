import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from fintrack.recurring.models import Frequency, TransactionType


class RecurrenceDefinition(BaseModel):
    """Schedule and template of a repeating transaction, as seen by the engine."""

    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category_id: Optional[str] = None
    # Kept as a plain string: the engine treats unknown values as never due.
    frequency: str
    start_date: date
    end_date: Optional[date] = None
    day_of_week: Optional[int] = None
    day_of_month: Optional[int] = None
    is_active: bool = True
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class GeneratedTransaction(BaseModel):
    recurring_id: uuid.UUID
    date: date
    type: TransactionType
    amount: float
    description: str
    category_id: Optional[str] = None
    notes: str = ""

    model_config = {"from_attributes": True}


class CreationOutcome(BaseModel):
    recurring_id: uuid.UUID
    date: date
    transaction_id: Optional[uuid.UUID] = None
    error: Optional[str] = None

    @computed_field
    @property
    def ok(self) -> bool:
        return self.error is None


class GenerationReport(BaseModel):
    run_date: date
    outcomes: list[CreationOutcome] = []

    @computed_field
    @property
    def generated(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)


class RecurringTransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(gt=0, lt=1_000_000)
    description: str = Field(min_length=2, max_length=100)
    category_id: str = Field(min_length=1, max_length=64)
    frequency: Frequency
    start_date: date
    end_date: Optional[date] = None
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    is_active: bool = True
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_schedule(self) -> "RecurringTransactionCreate":
        self.description = self.description.strip()
        if len(self.description) < 2:
            raise ValueError("Description must be at least 2 characters")
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        if self.frequency == Frequency.WEEKLY and self.day_of_week is None:
            raise ValueError("day_of_week is required for weekly recurrences")
        if self.frequency == Frequency.MONTHLY and self.day_of_month is None:
            raise ValueError("day_of_month is required for monthly recurrences")
        return self


class RecurringTransactionUpdate(BaseModel):
    """Partial update; the merged definition is re-checked as a whole."""

    type: Optional[TransactionType] = None
    amount: Optional[float] = Field(None, gt=0, lt=1_000_000)
    description: Optional[str] = Field(None, min_length=2, max_length=100)
    category_id: Optional[str] = Field(None, min_length=1, max_length=64)
    frequency: Optional[Frequency] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class RecurringTransactionResponse(BaseModel):
    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category_id: Optional[str]
    frequency: Frequency
    start_date: date
    end_date: Optional[date]
    day_of_week: Optional[int]
    day_of_month: Optional[int]
    is_active: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RecurringTransactionListItem(BaseModel):
    id: uuid.UUID
    type: TransactionType
    amount: float
    description: str
    category_id: Optional[str]
    frequency: Frequency
    start_date: date
    end_date: Optional[date]
    day_of_week: Optional[int]
    day_of_month: Optional[int]
    is_active: bool
    notes: Optional[str]
    next_occurrence: Optional[date] = None

    model_config = {"from_attributes": True}
