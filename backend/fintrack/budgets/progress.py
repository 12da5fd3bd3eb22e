from __future__ import annotations

from datetime import date
from typing import Iterable

from dateutil.relativedelta import relativedelta

from fintrack.budgets.schemas import BudgetProgress
from fintrack.recurring.models import TransactionType

DEFAULT_ALERT_THRESHOLD = 80.0


def month_bounds(on: date) -> tuple[date, date]:
    first = on.replace(day=1)
    return first, first + relativedelta(day=31)


def budget_progress(
    budget,
    transactions: Iterable,
    today: date,
    alert_threshold: float = DEFAULT_ALERT_THRESHOLD,
) -> BudgetProgress:
    """Spending against ``budget`` for the calendar month containing ``today``."""
    first, last = month_bounds(today)
    spent = sum(
        t.amount
        for t in transactions
        if t.type == TransactionType.EXPENSE
        and t.category_id == budget.category_id
        and first <= t.date <= last
    )

    percentage = (spent / budget.amount) * 100 if budget.amount > 0 else 0.0
    return BudgetProgress(
        budget_id=budget.id,
        category_id=budget.category_id,
        budgeted_amount=budget.amount,
        spent=spent,
        remaining=max(0.0, budget.amount - spent),
        percentage=min(100.0, percentage),
        is_over_budget=spent > budget.amount,
        is_near_limit=alert_threshold <= percentage < 100,
    )
