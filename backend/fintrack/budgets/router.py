from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.budgets import service
from fintrack.budgets.schemas import BudgetCreate, BudgetResponse, BudgetUpdate
from fintrack.config import Settings
from fintrack.dependencies import get_db, get_settings, get_today

router = APIRouter()


@router.get("")
async def list_budgets(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    budgets = await service.list_budgets(db)
    return {"data": [BudgetResponse.model_validate(b) for b in budgets]}


@router.get("/progress")
async def budget_progress(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
    on: date | None = Query(None),
) -> dict:
    results = await service.get_budget_progress(db, on or today, settings.budget_alert_threshold)
    return {"data": [r.model_dump() for r in results]}


@router.post("", status_code=201)
async def create_budget(
    data: BudgetCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    budget = await service.create_budget(db, data)
    return {"data": BudgetResponse.model_validate(budget)}


@router.put("/{budget_id}")
@router.patch("/{budget_id}")
async def update_budget(
    budget_id: uuid.UUID,
    data: BudgetUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    budget = await service.update_budget(db, budget_id, data)
    return {"data": BudgetResponse.model_validate(budget)}


@router.delete("/{budget_id}")
async def delete_budget(
    budget_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.delete_budget(db, budget_id)
    return {"data": {"message": "Budget deleted"}}
