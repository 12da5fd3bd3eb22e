from __future__ import annotations

import logging
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categories.models import Category
from fintrack.core.exceptions import NotFoundError, ValidationError
from fintrack.goals.models import Goal
from fintrack.goals.schemas import GoalContribution, GoalCreate, GoalUpdate
from fintrack.recurring.models import TransactionType
from fintrack.transactions.models import Transaction

logger = logging.getLogger(__name__)

SAVINGS_CATEGORY_NAME = "Savings"
SAVINGS_CATEGORY_FALLBACK_ID = "13"


async def create_goal(db: AsyncSession, data: GoalCreate) -> Goal:
    goal = Goal(**data.model_dump())
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal


async def list_goals(db: AsyncSession) -> list[Goal]:
    result = await db.execute(select(Goal).order_by(Goal.target_date))
    return list(result.scalars().all())


async def get_goal(db: AsyncSession, goal_id: uuid.UUID) -> Goal:
    result = await db.execute(select(Goal).where(Goal.id == goal_id))
    goal = result.scalar_one_or_none()
    if goal is None:
        raise NotFoundError("Goal", str(goal_id))
    return goal


async def update_goal(db: AsyncSession, goal_id: uuid.UUID, data: GoalUpdate) -> Goal:
    goal = await get_goal(db, goal_id)
    update_data = data.model_dump(exclude_unset=True)
    update_data = {
        k: v for k, v in update_data.items() if v is not None or k == "description"
    }

    target = update_data.get("target_amount", goal.target_amount)
    current = update_data.get("current_amount", goal.current_amount)
    if current > target:
        raise ValidationError(
            "Current amount cannot exceed target amount",
            details=[{"field": "current_amount", "message": f"Must be at most {target}"}],
        )

    for key, value in update_data.items():
        setattr(goal, key, value)
    await db.commit()
    await db.refresh(goal)
    return goal


async def _savings_category_id(db: AsyncSession) -> str:
    result = await db.execute(select(Category.id).where(Category.name == SAVINGS_CATEGORY_NAME))
    return result.scalar_one_or_none() or SAVINGS_CATEGORY_FALLBACK_ID


async def contribute_to_goal(
    db: AsyncSession, goal_id: uuid.UUID, data: GoalContribution, today: date
) -> Goal:
    """Add ``data.amount`` to the goal; contributions may overshoot the target."""
    goal = await get_goal(db, goal_id)
    goal.current_amount += data.amount

    if data.record_transaction:
        db.add(Transaction(
            type=TransactionType.EXPENSE,
            amount=data.amount,
            description=f"Contribution to {goal.name}",
            category_id=await _savings_category_id(db),
            date=today,
            notes=f"Goal: {goal.name}",
        ))

    await db.commit()
    await db.refresh(goal)
    logger.info("Recorded contribution of %.2f to goal %s", data.amount, goal.id)
    return goal


async def delete_goal(db: AsyncSession, goal_id: uuid.UUID) -> None:
    goal = await get_goal(db, goal_id)
    await db.delete(goal)
    await db.commit()
