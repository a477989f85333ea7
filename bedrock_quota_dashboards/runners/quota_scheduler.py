"""Recurring quota limit refresh runner."""

from threading import Event, Thread
from typing import Optional, Sequence

from bedrock_quota_dashboards.constants import DEFAULT_REFRESH_INTERVAL_MINUTES
from bedrock_quota_dashboards.core.fetcher import FetchTarget, QuotaLimitFetcher
from bedrock_quota_dashboards.log import get_logger

logger = get_logger(__name__)


def quota_scheduler(
    fetcher: QuotaLimitFetcher,
    targets: Sequence[FetchTarget],
    interval_minutes: float = DEFAULT_REFRESH_INTERVAL_MINUTES,
    stop: Optional[Event] = None,
) -> bool:
    """Refresh quota limits now and then every interval until stopped."""
    if not targets:
        logger.warning("No quota targets configured, skipping")
        return False

    if interval_minutes <= 0:
        logger.warning("Refresh interval must be > 0, skipping")
        return False

    stop = stop or Event()
    period = interval_minutes * 60

    logger.info(
        "Quota scheduler started for %d models with period set to %d seconds",
        len(targets),
        period,
    )

    while True:
        logger.info("Quota scheduler sync started")
        try:
            report = fetcher.refresh(targets)
            if report.failures:
                logger.warning(
                    "Quota scheduler sync finished with %d failures",
                    len(report.failures),
                )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Quota refresh error: %s", e)
        logger.info("Quota scheduler sync finished")
        if stop.wait(period):
            break

    logger.info("Quota scheduler stopped")
    return True


def start_quota_scheduler(
    fetcher: QuotaLimitFetcher,
    targets: Sequence[FetchTarget],
    interval_minutes: float = DEFAULT_REFRESH_INTERVAL_MINUTES,
    stop: Optional[Event] = None,
) -> Thread:
    """Start the quota scheduler in a separate thread."""
    logger.info("Starting quota scheduler")
    thread = Thread(
        target=quota_scheduler,
        daemon=True,
        args=(fetcher, targets, interval_minutes, stop),
    )
    thread.start()
    return thread
