from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.budgets.models import Budget
from fintrack.budgets.progress import budget_progress, month_bounds
from fintrack.budgets.schemas import BudgetCreate, BudgetProgress, BudgetUpdate
from fintrack.core.exceptions import ConflictError, NotFoundError
from fintrack.recurring.models import TransactionType
from fintrack.transactions.models import Transaction


async def create_budget(db: AsyncSession, data: BudgetCreate) -> Budget:
    q = select(Budget).where(Budget.category_id == data.category_id)
    existing = (await db.execute(q)).scalar_one_or_none()
    if existing:
        raise ConflictError("A budget already exists for this category.")

    budget = Budget(**data.model_dump())
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    return budget


async def list_budgets(db: AsyncSession) -> list[Budget]:
    result = await db.execute(select(Budget).order_by(Budget.category_id))
    return list(result.scalars().all())


async def get_budget(db: AsyncSession, budget_id: uuid.UUID) -> Budget:
    result = await db.execute(select(Budget).where(Budget.id == budget_id))
    budget = result.scalar_one_or_none()
    if budget is None:
        raise NotFoundError("Budget", str(budget_id))
    return budget


async def update_budget(db: AsyncSession, budget_id: uuid.UUID, data: BudgetUpdate) -> Budget:
    budget = await get_budget(db, budget_id)
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    new_category = update_data.get("category_id")
    if new_category is not None and new_category != budget.category_id:
        q = select(Budget).where(Budget.category_id == new_category)
        if (await db.execute(q)).scalar_one_or_none():
            raise ConflictError("A budget already exists for this category.")

    for key, value in update_data.items():
        setattr(budget, key, value)
    await db.commit()
    await db.refresh(budget)
    return budget


async def delete_budget(db: AsyncSession, budget_id: uuid.UUID) -> None:
    budget = await get_budget(db, budget_id)
    await db.delete(budget)
    await db.commit()


async def get_budget_progress(
    db: AsyncSession, today: date, alert_threshold: float
) -> list[BudgetProgress]:
    budgets = await list_budgets(db)
    if not budgets:
        return []

    first, last = month_bounds(today)
    result = await db.execute(
        select(Transaction).where(
            Transaction.type == TransactionType.EXPENSE,
            Transaction.date.between(first, last),
            Transaction.category_id.in_([b.category_id for b in budgets]),
        )
    )
    transactions = list(result.scalars().all())
    return [budget_progress(b, transactions, today, alert_threshold) for b in budgets]
