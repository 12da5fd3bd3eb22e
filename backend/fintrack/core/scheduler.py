import logging
from datetime import date, datetime
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()
_session_factory: Any = None

RECURRING_JOB_ID = "generate_recurring_transactions"


async def _generate_recurring_transactions() -> None:
    """Job: create today's due recurring transactions."""
    try:
        async with _session_factory() as db:
            from fintrack.recurring.service import generate_recurring_transactions

            report = await generate_recurring_transactions(db, date.today())
            logger.info(
                "Recurring run for %s: %d generated, %d failed",
                report.run_date, report.generated, report.failed,
            )
    except Exception:
        logger.exception("Error generating recurring transactions")


def setup_scheduler(session_factory: Any, settings: Any) -> None:
    """Register the periodic jobs and start the scheduler."""
    global _session_factory
    _session_factory = session_factory

    # First run at startup, then every interval while the process is up.
    # Missed days are not back-filled.
    job_kwargs = {}
    if settings.recurring_run_on_startup:
        job_kwargs["next_run_time"] = datetime.now()

    scheduler.add_job(
        _generate_recurring_transactions,
        IntervalTrigger(hours=settings.recurring_interval_hours),
        id=RECURRING_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1,
        **job_kwargs,
    )

    scheduler.start()
    logger.info("Background scheduler started with %d jobs", len(scheduler.get_jobs()))


def shutdown_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")
