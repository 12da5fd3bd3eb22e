from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.categories import service
from fintrack.categories.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from fintrack.dependencies import get_db
from fintrack.recurring.models import TransactionType

router = APIRouter()


@router.get("")
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
    type: TransactionType | None = Query(None),
) -> dict:
    categories = await service.list_categories(db, type)
    return {"data": [CategoryResponse.model_validate(c) for c in categories]}


@router.post("", status_code=201)
async def create_category(
    data: CategoryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    category = await service.create_category(db, data)
    return {"data": CategoryResponse.model_validate(category)}


@router.get("/{category_id}")
async def get_category(
    category_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    category = await service.get_category(db, category_id)
    return {"data": CategoryResponse.model_validate(category)}


@router.put("/{category_id}")
@router.patch("/{category_id}")
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    category = await service.update_category(db, category_id, data)
    return {"data": CategoryResponse.model_validate(category)}


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.delete_category(db, category_id)
    return {"data": {"message": "Category deleted"}}
