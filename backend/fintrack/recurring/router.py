from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.pagination import PaginationParams, get_pagination
from fintrack.dependencies import get_db, get_today
from fintrack.recurring import service
from fintrack.recurring.engine import next_occurrence
from fintrack.recurring.schemas import (
    RecurringTransactionCreate,
    RecurringTransactionResponse,
    RecurringTransactionUpdate,
)

router = APIRouter()


def _to_response(recurring, today: date) -> dict:
    data = RecurringTransactionResponse.model_validate(recurring).model_dump()
    data["next_occurrence"] = next_occurrence(recurring, today) if recurring.is_active else None
    return data


@router.get("")
async def list_recurring(
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    items, meta = await service.list_recurring(db, pagination, today)
    return {"data": [i.model_dump() for i in items], "meta": meta}


@router.post("", status_code=201)
async def create_recurring(
    data: RecurringTransactionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    recurring = await service.create_recurring(db, data)
    return {"data": _to_response(recurring, today)}


@router.post("/generate")
async def generate(
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
    on: date | None = Query(None, description="Run date, defaults to today"),
) -> dict:
    report = await service.generate_recurring_transactions(db, on or today)
    return {"data": report.model_dump()}


@router.get("/{recurring_id}")
async def get_recurring(
    recurring_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    recurring = await service.get_recurring(db, recurring_id)
    return {"data": _to_response(recurring, today)}


@router.put("/{recurring_id}")
@router.patch("/{recurring_id}")
async def update_recurring(
    recurring_id: uuid.UUID,
    data: RecurringTransactionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    recurring = await service.update_recurring(db, recurring_id, data)
    return {"data": _to_response(recurring, today)}


@router.post("/{recurring_id}/toggle")
async def toggle_recurring(
    recurring_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    recurring = await service.toggle_recurring(db, recurring_id)
    return {"data": _to_response(recurring, today)}


@router.delete("/{recurring_id}")
async def delete_recurring(
    recurring_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.delete_recurring(db, recurring_id)
    return {"data": {"message": "Recurring transaction deleted"}}
