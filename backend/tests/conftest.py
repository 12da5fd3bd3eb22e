import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from fintrack.config import Settings
from fintrack.database import build_engine, build_session_factory, create_tables
from fintrack.dependencies import get_today
from fintrack.main import create_app
from fintrack.recurring.schemas import RecurrenceDefinition

MEMORY_URL = "sqlite+aiosqlite:///:memory:"
API_TODAY = date(2024, 2, 29)


@pytest.fixture
def make_definition():
    """Factory for RecurrenceDefinition with sensible defaults."""

    def _make(**overrides) -> RecurrenceDefinition:
        data = {
            "id": uuid.uuid4(),
            "type": "expense",
            "amount": 50.0,
            "description": "Gym membership",
            "category_id": "7",
            "frequency": "daily",
            "start_date": date(2024, 1, 1),
            "end_date": None,
            "day_of_week": None,
            "day_of_month": None,
            "is_active": True,
            "notes": None,
        }
        data.update(overrides)
        return RecurrenceDefinition(**data)

    return _make


@pytest.fixture
async def session():
    engine = build_engine(MEMORY_URL, poolclass=StaticPool)
    await create_tables(engine)
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def client():
    settings = Settings(database_url=MEMORY_URL, scheduler_enabled=False)
    app = create_app(settings, engine=build_engine(MEMORY_URL, poolclass=StaticPool))
    app.dependency_overrides[get_today] = lambda: API_TODAY
    with TestClient(app) as test_client:
        yield test_client
