import enum
import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Enum, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base, TimestampMixin


class GoalCategory(str, enum.Enum):
    SAVINGS = "savings"
    VACATION = "vacation"
    HOUSE = "house"
    CAR = "car"
    EDUCATION = "education"
    RETIREMENT = "retirement"
    DEBT = "debt"
    INVESTMENT = "investment"
    OTHER = "other"


class Goal(TimestampMixin, Base):
    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_amount: Mapped[float] = mapped_column(Float, nullable=False)
    current_amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    target_date: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[GoalCategory] = mapped_column(
        Enum(GoalCategory), default=GoalCategory.SAVINGS, nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
