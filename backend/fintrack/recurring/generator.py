from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Iterable

from fintrack.recurring.engine import is_due
from fintrack.recurring.schemas import (
    CreationOutcome,
    GeneratedTransaction,
    GenerationReport,
)
from fintrack.recurring.store import RecurringStore

logger = logging.getLogger(__name__)

AUTO_SUFFIX = " (Auto)"


def _occurrence_key(recurring_id, on) -> tuple[str, str]:
    on_str = on if isinstance(on, str) else on.isoformat()
    return str(recurring_id), on_str


def build_transaction(definition, on: date) -> GeneratedTransaction:
    return GeneratedTransaction(
        recurring_id=definition.id,
        date=on,
        type=definition.type,
        amount=definition.amount,
        description=f"{definition.description}{AUTO_SUFFIX}",
        category_id=definition.category_id,
        notes=definition.notes or "",
    )


def generate_due(
    today: date,
    definitions: Iterable,
    existing: Iterable,
) -> list[GeneratedTransaction]:
    """Return the transactions to create for ``today``.

    ``existing`` only needs ``recurring_id`` and ``date`` attributes; any entry
    matching a definition on ``today`` suppresses that definition.
    """
    seen = {_occurrence_key(t.recurring_id, t.date) for t in existing if t.recurring_id is not None}
    pending: list[GeneratedTransaction] = []

    for definition in definitions:
        if not definition.is_active:
            continue
        if definition.end_date is not None and today > definition.end_date:
            continue
        if definition.start_date > today:
            continue
        if not is_due(definition, today):
            continue

        key = _occurrence_key(definition.id, today)
        if key in seen:
            continue
        seen.add(key)
        pending.append(build_transaction(definition, today))

    return pending


async def _create_one(store: RecurringStore, item: GeneratedTransaction) -> CreationOutcome:
    try:
        tx = await store.create_transaction(item)
    except Exception as exc:
        logger.exception(
            "Error generating transaction for recurring %s on %s", item.recurring_id, item.date
        )
        return CreationOutcome(recurring_id=item.recurring_id, date=item.date, error=str(exc))
    return CreationOutcome(
        recurring_id=item.recurring_id,
        date=item.date,
        transaction_id=getattr(tx, "id", None),
    )


async def persist_generated(
    store: RecurringStore,
    pending: list[GeneratedTransaction],
    run_date: date,
) -> GenerationReport:
    """Create each pending transaction independently and report every outcome."""
    if getattr(store, "concurrent_writes", True):
        outcomes = list(await asyncio.gather(*(_create_one(store, item) for item in pending)))
    else:
        outcomes = [await _create_one(store, item) for item in pending]
    return GenerationReport(run_date=run_date, outcomes=outcomes)


async def run_generation(store: RecurringStore, today: date) -> GenerationReport:
    definitions = await store.list_definitions()
    existing = await store.list_generated(today)
    pending = generate_due(today, definitions, existing)
    report = await persist_generated(store, pending, today)

    if report.generated > 0:
        logger.info("Generated %d recurring transactions for %s", report.generated, today)
    if report.failed > 0:
        logger.warning("Failed to generate %d recurring transactions for %s", report.failed, today)
    return report
