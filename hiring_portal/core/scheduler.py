"""
Application Scheduler - APScheduler Integration

Owns the AsyncIOScheduler that runs deferred work (chat auto-replies) on the
application's event loop. A fresh scheduler is created per application
lifespan because an AsyncIOScheduler is bound to the loop it starts on.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED, EVENT_JOB_MISSED
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)


def scheduler_listener(event):
    """
    Listener for scheduler events (executed jobs, errors, misses).

    Args:
        event: APScheduler event object
    """
    if getattr(event, "exception", None):
        logger.error(f"❌ Job '{event.job_id}' failed with exception: {event.exception}")
    elif event.code == EVENT_JOB_MISSED:
        logger.warning(f"⚠️  Job '{event.job_id}' missed its run time")
    else:
        logger.debug(f"✅ Job '{event.job_id}' executed successfully")


def create_scheduler() -> AsyncIOScheduler:
    """Build a scheduler with the listener attached (not started)."""
    scheduler = AsyncIOScheduler(
        timezone="UTC",
        job_defaults={
            "coalesce": False,  # One-off jobs are independent; never merge them
            "max_instances": 1,
            "misfire_grace_time": 60,
        },
    )
    scheduler.add_listener(scheduler_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED)
    return scheduler


def schedule_once(
    scheduler: AsyncIOScheduler,
    func: Callable,
    delay_seconds: float,
    args: Optional[list] = None,
    name: str = None,
) -> Any:
    """
    Run `func` once after `delay_seconds`.

    Each call gets its own job id, so rapid successive calls produce
    independent runs.
    """
    run_date = datetime.now(timezone.utc) + timedelta(seconds=max(0.0, delay_seconds))
    return scheduler.add_job(
        func,
        DateTrigger(run_date=run_date),
        args=args or [],
        id=uuid4().hex,
        name=name or getattr(func, "__name__", "deferred"),
    )


def start_scheduler(scheduler: AsyncIOScheduler):
    """
    Start the scheduler.

    Must be called from inside the running event loop (application lifespan).
    """
    if not scheduler.running:
        scheduler.start()
        logger.info("🚀 Scheduler started successfully")
    else:
        logger.warning("⚠️  Scheduler already running")


def stop_scheduler(scheduler: AsyncIOScheduler):
    """
    Stop the scheduler without waiting on pending one-off jobs.

    Called during application shutdown (in lifespan).
    """
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("🛑 Scheduler stopped")
    else:
        logger.warning("⚠️  Scheduler not running")


def get_scheduler_status(scheduler: AsyncIOScheduler) -> dict:
    """
    Get scheduler status and pending job information.

    Returns:
        Dict with scheduler status and pending jobs
    """
    jobs = scheduler.get_jobs()

    jobs_info = []
    for job in jobs:
        next_run = getattr(job, "next_run_time", None)
        jobs_info.append({
            "id": job.id,
            "name": job.name,
            "next_run_time": next_run.isoformat() if next_run else None,
        })

    return {
        "running": scheduler.running,
        "total_jobs": len(jobs),
        "jobs": jobs_info,
    }
