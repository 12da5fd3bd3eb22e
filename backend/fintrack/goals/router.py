from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import Settings
from fintrack.dependencies import get_db, get_settings, get_today
from fintrack.goals import service
from fintrack.goals.progress import goal_progress
from fintrack.goals.schemas import GoalContribution, GoalCreate, GoalUpdate

router = APIRouter()


@router.get("")
async def list_goals(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    goals = await service.list_goals(db)
    return {
        "data": [goal_progress(g, today, settings.goal_urgent_days).model_dump() for g in goals]
    }


@router.post("", status_code=201)
async def create_goal(
    data: GoalCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    goal = await service.create_goal(db, data)
    return {"data": goal_progress(goal, today, settings.goal_urgent_days).model_dump()}


@router.put("/{goal_id}")
@router.patch("/{goal_id}")
async def update_goal(
    goal_id: uuid.UUID,
    data: GoalUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    goal = await service.update_goal(db, goal_id, data)
    return {"data": goal_progress(goal, today, settings.goal_urgent_days).model_dump()}


@router.post("/{goal_id}/contribute")
async def contribute_to_goal(
    goal_id: uuid.UUID,
    data: GoalContribution,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
) -> dict:
    goal = await service.contribute_to_goal(db, goal_id, data, today)
    return {"data": goal_progress(goal, today, settings.goal_urgent_days).model_dump()}


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    await service.delete_goal(db, goal_id)
    return {"data": {"message": "Goal deleted"}}
