from __future__ import annotations

import uuid
from datetime import date

from dateutil.relativedelta import relativedelta
from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import ConflictError, NotFoundError, ValidationError
from fintrack.core.pagination import PaginationParams, build_pagination_meta
from fintrack.recurring.models import TransactionType
from fintrack.transactions.models import Transaction
from fintrack.transactions.schemas import (
    TransactionCreate,
    TransactionFilter,
    TransactionTotals,
    TransactionUpdate,
)


def check_transaction_date(value: date, today: date) -> None:
    """Manual entries must fall within one year either side of ``today``."""
    earliest = today - relativedelta(years=1)
    latest = today + relativedelta(years=1)
    if not earliest <= value <= latest:
        raise ValidationError(
            "Transaction date must be within one year of today.",
            details=[{"field": "date", "message": f"Expected {earliest} to {latest}"}],
        )


def _apply_filters(query, filters: TransactionFilter):
    if filters.search:
        term = f"%{filters.search}%"
        query = query.where(
            or_(
                Transaction.description.ilike(term),
                Transaction.notes.ilike(term),
            )
        )
    if filters.type is not None:
        query = query.where(Transaction.type == filters.type)
    if filters.category_id is not None:
        query = query.where(Transaction.category_id == filters.category_id)
    if filters.recurring_id is not None:
        query = query.where(Transaction.recurring_id == filters.recurring_id)
    if filters.date_from is not None:
        query = query.where(Transaction.date >= filters.date_from)
    if filters.date_to is not None:
        query = query.where(Transaction.date <= filters.date_to)
    return query


async def create_transaction(
    db: AsyncSession, data: TransactionCreate, today: date
) -> Transaction:
    check_transaction_date(data.date, today)
    transaction = Transaction(**data.model_dump())
    db.add(transaction)
    await db.commit()
    await db.refresh(transaction)
    return transaction


async def list_transactions(
    db: AsyncSession, filters: TransactionFilter, pagination: PaginationParams
) -> tuple[list[Transaction], dict]:
    query = _apply_filters(select(Transaction), filters)

    count_q = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_q)).scalar() or 0

    query = (
        query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .offset(pagination.offset)
        .limit(pagination.page_size)
    )
    result = await db.execute(query)
    entries = list(result.scalars().all())

    return entries, build_pagination_meta(total, pagination)


async def get_totals(db: AsyncSession, filters: TransactionFilter) -> TransactionTotals:
    base = _apply_filters(select(Transaction), filters).subquery()
    totals_q = select(
        func.coalesce(func.sum(case((base.c.type == TransactionType.INCOME, base.c.amount), else_=0)), 0),
        func.coalesce(func.sum(case((base.c.type == TransactionType.EXPENSE, base.c.amount), else_=0)), 0),
        func.count(base.c.id),
    )
    income, expense, count = (await db.execute(totals_q)).one()
    return TransactionTotals(
        income=float(income),
        expense=float(expense),
        balance=float(income) - float(expense),
        count=count,
    )


async def get_transaction(db: AsyncSession, transaction_id: uuid.UUID) -> Transaction:
    result = await db.execute(select(Transaction).where(Transaction.id == transaction_id))
    transaction = result.scalar_one_or_none()
    if transaction is None:
        raise NotFoundError("Transaction", str(transaction_id))
    return transaction


async def update_transaction(
    db: AsyncSession, transaction_id: uuid.UUID, data: TransactionUpdate, today: date
) -> Transaction:
    transaction = await get_transaction(db, transaction_id)
    update_data = data.model_dump(exclude_unset=True)
    # Explicit nulls on required columns are ignored.
    update_data = {
        k: v for k, v in update_data.items() if v is not None or k == "notes"
    }
    if "date" in update_data:
        check_transaction_date(update_data["date"], today)
    for key, value in update_data.items():
        setattr(transaction, key, value)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(
            "The recurring definition already has a transaction on that date."
        )
    await db.refresh(transaction)
    return transaction


async def delete_transaction(db: AsyncSession, transaction_id: uuid.UUID) -> None:
    transaction = await get_transaction(db, transaction_id)
    await db.delete(transaction)
    await db.commit()
