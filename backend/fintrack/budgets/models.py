from __future__ import annotations

import enum
import uuid

from sqlalchemy import Enum, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base, TimestampMixin


class PeriodType(enum.StrEnum):
    MONTHLY = "monthly"


class Budget(TimestampMixin, Base):
    __tablename__ = "budgets"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # One budget per category.
    category_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    period: Mapped[PeriodType] = mapped_column(
        Enum(PeriodType), default=PeriodType.MONTHLY, nullable=False
    )
