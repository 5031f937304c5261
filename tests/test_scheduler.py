"""Tests for ReminderScheduler."""

import logging

import pytest

from larder.config import load_config
from larder.dates import offset_date
from larder.kitchen import Kitchen
from larder.models import NewItem

pytest.importorskip("apscheduler")

from larder.scheduler import ReminderScheduler  # noqa: E402


@pytest.fixture
def kitchen(stub_gateway):
    return Kitchen(stub_gateway(), items=[NewItem("Yogurt", "500g", offset_date(1))])


def test_scheduler_initial_state(kitchen):
    scheduler = ReminderScheduler(kitchen)
    assert scheduler.running is False


def test_scheduler_setup_jobs(kitchen):
    """The reminder check job is registered."""
    scheduler = ReminderScheduler(kitchen, schedule="0 7 * * *")
    scheduler.setup_jobs()

    job_ids = {j["id"] for j in scheduler.get_jobs()}
    assert job_ids == {"refresh_reminders"}


def test_scheduler_from_config(kitchen):
    """The cron schedule comes from reminders.schedule."""
    config = load_config()
    config.reminders.schedule = "15 6 * * *"
    scheduler = ReminderScheduler.from_config(kitchen, config)
    scheduler.setup_jobs()

    job = scheduler._scheduler.get_job("refresh_reminders")
    fields = {f.name: str(f) for f in job.trigger.fields}
    assert fields["hour"] == "6"
    assert fields["minute"] == "15"


def test_scheduler_invalid_cron(kitchen):
    scheduler = ReminderScheduler(kitchen, schedule="every day")
    with pytest.raises(ValueError, match="Invalid cron expression"):
        scheduler.setup_jobs()


@pytest.mark.asyncio
async def test_refresh_job_logs_alert(kitchen, caplog):
    scheduler = ReminderScheduler(kitchen)
    with caplog.at_level(logging.INFO, logger="larder.scheduler"):
        await scheduler._job_refresh_reminders()
        kitchen.dismiss_alert()
        await scheduler._job_refresh_reminders()

    messages = [r.getMessage() for r in caplog.records]
    assert "Reminder check: Heads up! These items are expiring soon: Yogurt" in messages
    assert "Reminder check: nothing new expiring" in messages


@pytest.mark.asyncio
async def test_start_and_stop(kitchen):
    scheduler = ReminderScheduler(kitchen)
    scheduler.start()
    assert scheduler.running is True
    scheduler.stop()
    assert scheduler.running is False
