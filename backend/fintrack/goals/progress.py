from __future__ import annotations

from datetime import date

from fintrack.goals.schemas import GoalProgress, GoalStatus

DEFAULT_URGENT_DAYS = 30


def goal_status(progress: float, days_remaining: int, urgent_days: int) -> GoalStatus:
    if progress >= 100:
        return GoalStatus.COMPLETED
    if days_remaining < 0:
        return GoalStatus.OVERDUE
    if days_remaining <= urgent_days:
        return GoalStatus.URGENT
    return GoalStatus.ACTIVE


def goal_progress(goal, today: date, urgent_days: int = DEFAULT_URGENT_DAYS) -> GoalProgress:
    progress = (goal.current_amount / goal.target_amount) * 100 if goal.target_amount > 0 else 0.0
    remaining = max(0.0, goal.target_amount - goal.current_amount)
    days_remaining = (goal.target_date - today).days
    daily_needed = remaining / days_remaining if days_remaining > 0 else 0.0

    return GoalProgress(
        id=goal.id,
        name=goal.name,
        category=goal.category,
        target_amount=goal.target_amount,
        current_amount=goal.current_amount,
        target_date=goal.target_date,
        is_active=goal.is_active,
        progress=min(progress, 100.0),
        remaining=remaining,
        days_remaining=days_remaining,
        daily_savings_needed=daily_needed,
        status=goal_status(progress, days_remaining, urgent_days),
    )
