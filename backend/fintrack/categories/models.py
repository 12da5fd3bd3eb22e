import uuid

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from fintrack.database import Base, TimestampMixin
from fintrack.recurring.models import TransactionType


def _new_category_id() -> str:
    return str(uuid.uuid4())


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    # String ids so the built-in set keeps its short numeric ids ("1".."13").
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_category_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    type: Mapped[TransactionType] = mapped_column(Enum(TransactionType), nullable=False)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
