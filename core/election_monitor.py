# core/election_monitor.py

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from datetime import date, datetime, timezone
from threading import Lock
from typing import Callable, Optional

from core.config import settings
from core.election_clock import (
    LOADING_MESSAGE,
    TIME_CALCULATION_ERROR,
    compute_status,
    fallback_election_record,
    to_utc_instant,
)
from core.errors import ElectionRecordError
from core.logging_config import logger
from models.election import ElectionRecord, MonitorSnapshot
from services.backend_client import load_current_election

TICK_JOB_ID = "election_countdown_tick"
REFRESH_JOB_ID = "election_record_refresh"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ElectionMonitor:
    """
    Keeps a live countdown for the current election.

    Two interval jobs run on an APScheduler background scheduler:
      • tick    — recompute the status from the held record (every second)
      • refresh — reload the record through `loader` (every 30 seconds)

    A failed refresh keeps the record already held. Only when nothing has
    loaded yet is `fallback` (if given) used to build a default record for
    the current day.

    Use as a context manager, or pair start() with stop() in a finally
    block, so the jobs never outlive their owner.
    """

    def __init__(
        self,
        loader: Callable[[], ElectionRecord],
        fallback: Optional[Callable[[date], ElectionRecord]] = None,
        clock: Callable[[], datetime] = utc_now,
        tick_seconds: int = settings.COUNTDOWN_TICK_SECONDS,
        refresh_seconds: int = settings.ELECTION_REFRESH_SECONDS,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self._loader = loader
        self._fallback = fallback
        self._clock = clock
        self._tick_seconds = tick_seconds
        self._refresh_seconds = refresh_seconds
        self._scheduler = scheduler or BackgroundScheduler(timezone="UTC")

        self._lock = Lock()
        self._record: Optional[ElectionRecord] = None
        self._snapshot = MonitorSnapshot(display=LOADING_MESSAGE)

    # -------------------------------------------------
    # State
    # -------------------------------------------------
    @property
    def snapshot(self) -> MonitorSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def running(self) -> bool:
        return self._scheduler.running

    # -------------------------------------------------
    # Jobs
    # -------------------------------------------------
    def refresh(self):
        """Reload the record; on failure keep the previous one."""
        try:
            record = self._loader()
        except Exception as e:
            with self._lock:
                has_record = self._record is not None

            if has_record or self._fallback is None:
                logger.error(f"Election refresh failed, keeping previous record: {e}")
                return

            logger.error(f"Election load failed, using default window: {e}")
            record = self._fallback(to_utc_instant(self._clock()).date())

        with self._lock:
            self._record = record
        self.tick()

    def tick(self):
        with self._lock:
            record = self._record
            previous = self._snapshot

        if record is None:
            snapshot = MonitorSnapshot(display=LOADING_MESSAGE)
        else:
            now = self._clock()
            try:
                result = compute_status(record, now)
                snapshot = MonitorSnapshot(
                    status=result.status,
                    remaining=result.remaining,
                    display=result.display,
                    election=record,
                    updated_at=now,
                )
            except ElectionRecordError as e:
                logger.error(f"Error calculating time remaining: {e}")
                snapshot = MonitorSnapshot(
                    status=previous.status,
                    display=TIME_CALCULATION_ERROR,
                    election=record,
                    updated_at=now,
                )

        with self._lock:
            self._snapshot = snapshot

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------
    def start(self):
        if self.running:
            return

        try:
            self.refresh()

            self._scheduler.add_job(
                self.tick,
                trigger=IntervalTrigger(seconds=self._tick_seconds),
                id=TICK_JOB_ID,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            self._scheduler.add_job(
                self.refresh,
                trigger=IntervalTrigger(seconds=self._refresh_seconds),
                id=REFRESH_JOB_ID,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            self._scheduler.start()
        except Exception:
            self.stop()
            raise

        logger.info(
            f"Election monitor started (tick {self._tick_seconds}s, refresh {self._refresh_seconds}s)"
        )

    def stop(self):
        for job_id in (TICK_JOB_ID, REFRESH_JOB_ID):
            if self._scheduler.get_job(job_id):
                self._scheduler.remove_job(job_id)

        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Election monitor stopped")

    def __enter__(self) -> "ElectionMonitor":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False


def build_election_monitor(**kwargs) -> ElectionMonitor:
    """Monitor reading the backend directly, with today's default window as first-load fallback."""
    kwargs.setdefault("loader", load_current_election)
    kwargs.setdefault("fallback", fallback_election_record)
    return ElectionMonitor(**kwargs)
