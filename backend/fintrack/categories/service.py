from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categories.models import Category
from fintrack.categories.schemas import CategoryCreate, CategoryUpdate
from fintrack.core.exceptions import ConflictError, NotFoundError
from fintrack.recurring.models import TransactionType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Built-in categories
# ---------------------------------------------------------------------------

DEFAULT_CATEGORIES = [
    {"id": "1", "name": "Food & Dining", "color": "#ef4444", "type": TransactionType.EXPENSE},
    {"id": "2", "name": "Transportation", "color": "#f97316", "type": TransactionType.EXPENSE},
    {"id": "3", "name": "Entertainment", "color": "#eab308", "type": TransactionType.EXPENSE},
    {"id": "4", "name": "Shopping", "color": "#22c55e", "type": TransactionType.EXPENSE},
    {"id": "5", "name": "Healthcare", "color": "#06b6d4", "type": TransactionType.EXPENSE},
    {"id": "6", "name": "Utilities", "color": "#3b82f6", "type": TransactionType.EXPENSE},
    {"id": "7", "name": "Housing", "color": "#8b5cf6", "type": TransactionType.EXPENSE},
    {"id": "8", "name": "Education", "color": "#ec4899", "type": TransactionType.EXPENSE},
    {"id": "9", "name": "Salary", "color": "#10b981", "type": TransactionType.INCOME},
    {"id": "10", "name": "Business", "color": "#059669", "type": TransactionType.INCOME},
    {"id": "11", "name": "Investment", "color": "#0d9488", "type": TransactionType.INCOME},
    {"id": "12", "name": "Other Income", "color": "#0891b2", "type": TransactionType.INCOME},
    {"id": "13", "name": "Savings", "color": "#10b981", "type": TransactionType.EXPENSE},
]


async def seed_default_categories(db: AsyncSession) -> list[Category]:
    """Create the built-in categories when no category exists yet."""
    existing = (await db.execute(select(func.count(Category.id)))).scalar() or 0
    if existing:
        return []

    created = [Category(**cat_data, is_system=True) for cat_data in DEFAULT_CATEGORIES]
    db.add_all(created)
    await db.commit()
    for category in created:
        await db.refresh(category)
    logger.info("Seeded %d default categories", len(created))
    return created


# ---------------------------------------------------------------------------
# Category CRUD
# ---------------------------------------------------------------------------


async def list_categories(
    db: AsyncSession, category_type: TransactionType | None = None
) -> list[Category]:
    query = select(Category)
    if category_type is not None:
        query = query.where(Category.type == category_type)
    result = await db.execute(query.order_by(Category.name))
    return list(result.scalars().all())


async def get_category(db: AsyncSession, category_id: str) -> Category:
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


async def _ensure_unique_name(db: AsyncSession, name: str, exclude_id: str | None = None) -> None:
    query = select(Category).where(Category.name == name)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none() is not None:
        raise ConflictError(f"A category named '{name}' already exists.")


async def create_category(db: AsyncSession, data: CategoryCreate) -> Category:
    await _ensure_unique_name(db, data.name)
    category = Category(**data.model_dump(), is_system=False)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def update_category(
    db: AsyncSession, category_id: str, data: CategoryUpdate
) -> Category:
    category = await get_category(db, category_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("name") is not None:
        await _ensure_unique_name(db, update_data["name"], exclude_id=category_id)
    for key, value in update_data.items():
        if value is not None:
            setattr(category, key, value)
    await db.commit()
    await db.refresh(category)
    return category


async def delete_category(db: AsyncSession, category_id: str) -> None:
    # Transactions, definitions and budgets keep the dangling category_id.
    category = await get_category(db, category_id)
    await db.delete(category)
    await db.commit()
