"""APScheduler-based interval scheduling for sync passes."""

from __future__ import annotations

import logging

from apscheduler.events import EVENT_JOB_ERROR
from apscheduler.schedulers.blocking import BlockingScheduler

from scripts.carta_connector.config import ConnectorConfig
from scripts.carta_connector.connector import CartaConnector
from scripts.carta_connector.output import write_result
from scripts.carta_connector.sync import run_sync

logger = logging.getLogger("connector.scheduler")

SYNC_JOB_ID = "carta_sync"


def sync_job(connector: CartaConnector, output: str) -> None:
    """One sync pass; failures surface through the job error listener."""
    result = run_sync(connector)
    write_result(result, output)
    logger.info("Scheduled sync complete: %s", result.counts())


def _on_job_error(event) -> None:
    logger.error(
        "Job %s raised an exception: %s",
        event.job_id,
        event.exception,
    )


def build_scheduler(config: ConnectorConfig, connector: CartaConnector) -> BlockingScheduler:
    scheduler = BlockingScheduler()
    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    scheduler.add_job(
        sync_job,
        "interval",
        minutes=config.scheduler.sync_interval_min,
        args=[connector, config.output],
        id=SYNC_JOB_ID,
        max_instances=1,
        misfire_grace_time=config.scheduler.misfire_grace_time,
    )
    return scheduler


def start_scheduler(config: ConnectorConfig, connector: CartaConnector) -> None:
    """Start the blocking scheduler; runs until interrupted."""
    scheduler = build_scheduler(config, connector)
    logger.info(
        "Starting scheduler with jobs: %s",
        [j.id for j in scheduler.get_jobs()],
    )
    scheduler.start()
