from datetime import date

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.config import Settings


async def get_db(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_today() -> date:
    """Reference date for request handlers; overridden in tests."""
    return date.today()
