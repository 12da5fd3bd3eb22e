from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.exceptions import PersistenceError
from fintrack.recurring.models import RecurringTransaction
from fintrack.recurring.schemas import GeneratedTransaction, RecurrenceDefinition
from fintrack.transactions.models import Transaction

logger = logging.getLogger(__name__)


class RecurringStore(Protocol):
    """Data store the generation driver reads from and writes to."""

    # False when creates must not overlap (e.g. one shared DB session).
    concurrent_writes: bool

    async def list_definitions(self) -> Sequence[RecurrenceDefinition]: ...

    async def list_generated(self, on: date) -> Sequence[GeneratedTransaction]: ...

    async def create_transaction(self, item: GeneratedTransaction) -> Transaction: ...


class SqlRecurringStore:
    """RecurringStore backed by a single SQLAlchemy AsyncSession."""

    concurrent_writes = False

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_definitions(self) -> list[RecurrenceDefinition]:
        result = await self._db.execute(
            select(RecurringTransaction).where(
                RecurringTransaction.is_active == True,  # noqa: E712
            )
        )
        return [RecurrenceDefinition.model_validate(r) for r in result.scalars().all()]

    async def list_generated(self, on: date) -> list[GeneratedTransaction]:
        result = await self._db.execute(
            select(Transaction).where(
                Transaction.recurring_id.is_not(None),
                Transaction.date == on,
            )
        )
        return [GeneratedTransaction.model_validate(t) for t in result.scalars().all()]

    async def create_transaction(self, item: GeneratedTransaction) -> Transaction:
        tx = Transaction(**item.model_dump())
        self._db.add(tx)
        try:
            await self._db.commit()
        except SQLAlchemyError as exc:
            await self._db.rollback()
            raise PersistenceError(
                f"Could not save transaction for recurring {item.recurring_id} on {item.date}: {exc}"
            ) from exc
        await self._db.refresh(tx)
        logger.debug("Created transaction %s from recurring %s", tx.id, item.recurring_id)
        return tx
