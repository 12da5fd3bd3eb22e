import enum
import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base, TimestampMixin


class TransactionType(str, enum.Enum):
    EXPENSE = "expense"
    INCOME = "income"


class Frequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class RecurringTransaction(TimestampMixin, Base):
    __tablename__ = "recurring_transactions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    type: Mapped[TransactionType] = mapped_column(Enum(TransactionType), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    # Weak reference: categories may be removed without touching definitions.
    category_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    frequency: Mapped[Frequency] = mapped_column(Enum(Frequency), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    day_of_week: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0=Sun..6=Sat
    day_of_month: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-31
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
