import uuid
from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.pagination import PaginationParams, get_pagination
from fintrack.dependencies import get_db, get_today
from fintrack.recurring.models import TransactionType
from fintrack.transactions import service
from fintrack.transactions.schemas import (
    TransactionCreate,
    TransactionFilter,
    TransactionListItem,
    TransactionResponse,
    TransactionUpdate,
)

router = APIRouter()


def _filters(
    search: str | None = Query(None),
    type: TransactionType | None = Query(None),
    category_id: str | None = Query(None),
    recurring_id: uuid.UUID | None = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
) -> TransactionFilter:
    return TransactionFilter(
        search=search, type=type, category_id=category_id,
        recurring_id=recurring_id, date_from=date_from, date_to=date_to,
    )


@router.get("")
async def list_transactions(
    db: Annotated[AsyncSession, Depends(get_db)],
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
    filters: Annotated[TransactionFilter, Depends(_filters)],
) -> dict:
    entries, meta = await service.list_transactions(db, filters, pagination)
    return {"data": [TransactionListItem.model_validate(e) for e in entries], "meta": meta}


@router.get("/summary")
async def transaction_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    filters: Annotated[TransactionFilter, Depends(_filters)],
) -> dict:
    totals = await service.get_totals(db, filters)
    return {"data": totals.model_dump()}


@router.post("", status_code=201)
async def create_transaction(
    data: TransactionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    transaction = await service.create_transaction(db, data, today)
    return {"data": TransactionResponse.model_validate(transaction)}


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    transaction = await service.get_transaction(db, transaction_id)
    return {"data": TransactionResponse.model_validate(transaction)}


@router.put("/{transaction_id}")
@router.patch("/{transaction_id}")
async def update_transaction(
    transaction_id: uuid.UUID,
    data: TransactionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    transaction = await service.update_transaction(db, transaction_id, data, today)
    return {"data": TransactionResponse.model_validate(transaction)}


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.delete_transaction(db, transaction_id)
    return {"data": {"message": "Transaction deleted"}}
