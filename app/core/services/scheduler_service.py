"""
Scheduler Service - APScheduler integration for the subscription billing job.

The HTTP cron route is the primary trigger. When
SUBSCRIPTION_SCHEDULER_ENABLED=true the same job also runs in-process once a
day at SUBSCRIPTION_CRON_HOUR:SUBSCRIPTION_CRON_MINUTE (UTC).
"""
import logging
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.jobstores.memory import MemoryJobStore

from app.core.config import (
    RECEIVE_WALLET_ENVS,
    get_cron_config,
    get_scheduler_time,
    scheduler_enabled,
)
from app.core.services.subscription_billing import run_subscription_cron
from app.payments import get_transfer_executor, get_wallet_assets_provider

logger = logging.getLogger(__name__)

BILLING_JOB_ID = "subscription_billing"

_scheduler: Optional[AsyncIOScheduler] = None


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the singleton scheduler."""
    global _scheduler

    if _scheduler is None:
        _scheduler = AsyncIOScheduler(
            jobstores={"default": MemoryJobStore()},
            job_defaults={"coalesce": True, "max_instances": 1},
            timezone="UTC",
        )
        logger.info("APScheduler initialized")

    return _scheduler


def start_scheduler():
    """Start scheduler and register the billing job. Must run inside the event loop."""
    if not scheduler_enabled():
        logger.info("Subscription scheduler disabled (SUBSCRIPTION_SCHEDULER_ENABLED=false)")
        return
    scheduler = get_scheduler()
    _add_billing_job(scheduler)
    if not scheduler.running:
        scheduler.start()
        logger.info("APScheduler started")


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("APScheduler shutdown")
    _scheduler = None


def get_scheduler_jobs() -> List[dict]:
    """List all active scheduler jobs."""
    scheduler = get_scheduler()
    return [
        {
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger),
        }
        for job in scheduler.get_jobs()
    ]


def build_billing_trigger() -> CronTrigger:
    hour, minute = get_scheduler_time()
    return CronTrigger(hour=hour, minute=minute, timezone="UTC")


def _add_billing_job(scheduler: AsyncIOScheduler):
    scheduler.add_job(
        func=run_scheduled_billing,
        trigger=build_billing_trigger(),
        id=BILLING_JOB_ID,
        name="Subscription billing",
        replace_existing=True,
    )
    logger.info(f"Scheduled job: {BILLING_JOB_ID} ({build_billing_trigger()})")


async def run_scheduled_billing() -> Optional[dict]:
    """Execute the billing job (called by APScheduler)."""
    config = get_cron_config()
    if not config.receive_wallet:
        logger.error(f"[Scheduler] Billing skipped: {RECEIVE_WALLET_ENVS[0]} env var not set")
        return None

    logger.info("[Scheduler] Running subscription billing")
    try:
        summary = await run_subscription_cron(
            wallet_assets=get_wallet_assets_provider(),
            transfer_executor=get_transfer_executor(),
            receive_wallet=config.receive_wallet,
        )
    except Exception as e:
        logger.exception(f"[Scheduler] Subscription billing failed: {e}")
        return None
    return summary.to_dict()
