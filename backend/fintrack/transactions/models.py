import uuid
from datetime import date

from sqlalchemy import Date, Enum, Float, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base, TimestampMixin
from fintrack.recurring.models import TransactionType


class Transaction(TimestampMixin, Base):
    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    type: Mapped[TransactionType] = mapped_column(Enum(TransactionType), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # No foreign key: deleting a recurring definition keeps what it generated.
    recurring_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("recurring_id", "date", name="uq_transaction_recurring_date"),
    )
