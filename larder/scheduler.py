"""Scheduled re-evaluation of the expiry reminder."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import LarderConfig
    from .kitchen import Kitchen

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Re-checks expiring items when the day rolls over.

    Uses APScheduler for cron-based scheduling.
    """

    def __init__(self, kitchen: Kitchen, schedule: str = "0 0 * * *") -> None:
        """
        Args:
            kitchen: Session whose inventory is checked.
            schedule: 5-field cron expression for the check.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install 'larder[scheduler]'"
            )

        self._kitchen = kitchen
        self._schedule = schedule
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._running = False

    @classmethod
    def from_config(cls, kitchen: Kitchen, config: LarderConfig) -> ReminderScheduler:
        """Create a scheduler using ``reminders.schedule`` from config."""
        return cls(kitchen, schedule=config.reminders.schedule)

    def setup_jobs(self) -> None:
        trigger = self._parse_cron(self._schedule)
        self._scheduler.add_job(
            self._job_refresh_reminders,
            trigger=trigger,
            id="refresh_reminders",
            name="Expiry reminder check",
            replace_existing=True,
        )
        logger.info("Registered reminder check: %s", self._schedule)

    def start(self) -> None:
        """Start the scheduler. Must be called from a running event loop."""
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Reminder scheduler started")

    def stop(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Reminder scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def _parse_cron(self, expr: str):
        parts = expr.split()
        if len(parts) == 5:
            return self._CronTrigger(
                minute=parts[0],
                hour=parts[1],
                day=parts[2],
                month=parts[3],
                day_of_week=parts[4],
            )
        raise ValueError(f"Invalid cron expression: {expr}")

    async def _job_refresh_reminders(self) -> None:
        alert = self._kitchen.alert()
        if alert is None:
            logger.info("Reminder check: nothing new expiring")
        else:
            logger.info("Reminder check: %s", alert.message)
