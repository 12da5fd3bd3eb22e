import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fintrack.config import Settings
from fintrack.core.exceptions import register_exception_handlers
from fintrack.database import build_engine, build_session_factory, create_tables

# Import all models so Base.metadata knows about them
import fintrack.recurring.models  # noqa: F401
import fintrack.transactions.models  # noqa: F401
import fintrack.budgets.models  # noqa: F401
import fintrack.goals.models  # noqa: F401
import fintrack.categories.models  # noqa: F401


@asynccontextmanager
async def lifespan(application: FastAPI):
    settings = application.state.settings

    if settings.is_sqlite and ":memory:" not in settings.database_url:
        db_path = settings.database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = application.state.engine or build_engine(settings.database_url)

    # Auto-create tables for SQLite in development
    if settings.is_sqlite:
        await create_tables(engine)

    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)

    if settings.seed_default_categories:
        from fintrack.categories.service import seed_default_categories

        async with application.state.session_factory() as db:
            await seed_default_categories(db)

    if settings.scheduler_enabled:
        from fintrack.core.scheduler import setup_scheduler

        setup_scheduler(application.state.session_factory, settings)

    yield

    if settings.scheduler_enabled:
        from fintrack.core.scheduler import shutdown_scheduler

        shutdown_scheduler()
    await engine.dispose()


def create_app(settings: Settings | None = None, engine=None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    fastapi_app = FastAPI(
        title="FinTrack",
        description="Personal finance tracking: ledger, recurring transactions, budgets, goals",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.settings = settings
    fastapi_app.state.engine = engine

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from fintrack.budgets.router import router as budgets_router
    from fintrack.categories.router import router as categories_router
    from fintrack.goals.router import router as goals_router
    from fintrack.recurring.router import router as recurring_router
    from fintrack.transactions.router import router as transactions_router

    fastapi_app.include_router(transactions_router, prefix="/api/transactions", tags=["transactions"])
    fastapi_app.include_router(categories_router, prefix="/api/categories", tags=["categories"])
    fastapi_app.include_router(recurring_router, prefix="/api/recurring", tags=["recurring"])
    fastapi_app.include_router(budgets_router, prefix="/api/budgets", tags=["budgets"])
    fastapi_app.include_router(goals_router, prefix="/api/goals", tags=["goals"])

    @fastapi_app.get("/api/system/health")
    async def health():
        return {"data": {"status": "healthy"}}

    register_exception_handlers(fastapi_app)

    return fastapi_app


app = create_app()
