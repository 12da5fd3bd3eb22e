from __future__ import annotations

import uuid
from datetime import date

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.core.pagination import PaginationParams, build_pagination_meta
from fintrack.recurring.engine import next_occurrence
from fintrack.recurring.generator import run_generation
from fintrack.recurring.models import RecurringTransaction
from fintrack.recurring.schemas import (
    GenerationReport,
    RecurringTransactionCreate,
    RecurringTransactionListItem,
    RecurringTransactionUpdate,
)
from fintrack.recurring.store import SqlRecurringStore


async def create_recurring(
    db: AsyncSession, data: RecurringTransactionCreate
) -> RecurringTransaction:
    recurring = RecurringTransaction(**data.model_dump())
    db.add(recurring)
    await db.commit()
    await db.refresh(recurring)
    return recurring


async def list_recurring(
    db: AsyncSession, pagination: PaginationParams, today: date
) -> tuple[list[RecurringTransactionListItem], dict]:
    total = (await db.execute(select(func.count(RecurringTransaction.id)))).scalar() or 0

    query = (
        select(RecurringTransaction)
        .order_by(RecurringTransaction.start_date, RecurringTransaction.description)
        .offset(pagination.offset)
        .limit(pagination.page_size)
    )
    result = await db.execute(query)

    items = []
    for recurring in result.scalars().all():
        item = RecurringTransactionListItem.model_validate(recurring)
        if recurring.is_active:
            item.next_occurrence = next_occurrence(recurring, today)
        items.append(item)

    return items, build_pagination_meta(total, pagination)


async def get_recurring(db: AsyncSession, recurring_id: uuid.UUID) -> RecurringTransaction:
    result = await db.execute(
        select(RecurringTransaction).where(RecurringTransaction.id == recurring_id)
    )
    recurring = result.scalar_one_or_none()
    if recurring is None:
        raise NotFoundError("RecurringTransaction", str(recurring_id))
    return recurring


async def update_recurring(
    db: AsyncSession, recurring_id: uuid.UUID, data: RecurringTransactionUpdate
) -> RecurringTransaction:
    recurring = await get_recurring(db, recurring_id)
    fields = RecurringTransactionCreate.model_fields.keys()
    merged = {key: getattr(recurring, key) for key in fields}
    merged.update(data.model_dump(exclude_unset=True))

    try:
        checked = RecurringTransactionCreate.model_validate(merged)
    except PydanticValidationError as exc:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("Recurring transaction is invalid.", details=details)

    for key, value in checked.model_dump().items():
        setattr(recurring, key, value)
    await db.commit()
    await db.refresh(recurring)
    return recurring


async def toggle_recurring(db: AsyncSession, recurring_id: uuid.UUID) -> RecurringTransaction:
    recurring = await get_recurring(db, recurring_id)
    recurring.is_active = not recurring.is_active
    await db.commit()
    await db.refresh(recurring)
    return recurring


async def delete_recurring(db: AsyncSession, recurring_id: uuid.UUID) -> None:
    # Transactions generated earlier keep their recurring_id and stay in the ledger.
    recurring = await get_recurring(db, recurring_id)
    await db.delete(recurring)
    await db.commit()


async def generate_recurring_transactions(db: AsyncSession, today: date) -> GenerationReport:
    return await run_generation(SqlRecurringStore(db), today)
