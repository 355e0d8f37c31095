import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Optional
from api_scheduler.config import get_timezone
from api_scheduler.errors import ConfigValidationError
from api_scheduler.log_store import LogStore
from api_scheduler.models import JobConfig, JobPhase
from api_scheduler.utils import calculate_start, parse_start_time, resolve_interval

logger = logging.getLogger("Job")


class CancelToken:
    """One-shot cancellation signal, set by the registry and read by the job."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block up to ``timeout`` seconds; True if cancellation was signalled."""
        return self._event.wait(timeout)


class Job:
    """
    A single scheduled-and-repeating HTTP caller.

    Runs in its own thread: waits for the configured time of day, then calls
    ``dispatch`` every interval until cancelled or until a dispatch reports
    success. ``on_finish`` is invoked when the job ends on its own so the
    registry can free the identifier.
    """

    def __init__(
        self,
        job_id: str,
        config: JobConfig,
        log: LogStore,
        dispatch: Callable[[str, JobConfig], bool],
        on_finish: Callable[["Job"], None],
        tzinfo=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.id = job_id
        self.config = config.model_copy()
        self.cancel_token = CancelToken()
        self.phase = JobPhase.PENDING
        self.log = log
        self.dispatch = dispatch
        self.on_finish = on_finish
        self.tzinfo = tzinfo or get_timezone()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.thread = threading.Thread(target=self.run, name=f"job-{job_id}", daemon=True)

    def start(self):
        self.thread.start()

    def cancel(self):
        self.cancel_token.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the job thread to exit; True if it has."""
        if self.thread.ident is None:
            # Not launched yet; it will observe the cancel token on entry.
            return True
        self.thread.join(timeout)
        return not self.thread.is_alive()

    def run(self):
        try:
            self._run()
        except Exception as e:
            logger.exception(f"[{self.id}] Job crashed")
            self.log.add(f"[{self.id}] Scheduler failed unexpectedly: {e}", logging.ERROR)
            self._finish()
        finally:
            self.phase = JobPhase.TERMINATED

    def _run(self):
        cfg = self.config
        self.log.add(f"[{self.id}] Received a scheduler start request.")
        self.log.add(
            f"[{self.id}] Settings: start time {cfg.start_time}, "
            f"repeat {cfg.repeat_value}{cfg.repeat_unit}, URL {cfg.api_url}"
        )

        try:
            start_time = parse_start_time(cfg.start_time)
        except ConfigValidationError as e:
            self.log.add(f"[{self.id}] Start time parse error: {e}", logging.WARNING)
            self._finish()
            return

        _, wait = calculate_start(start_time, self.clock(), self.tzinfo)
        self.phase = JobPhase.WAITING
        self.log.add(f"[{self.id}] Waiting for the schedule to start... time remaining: {wait}")
        if self.cancel_token.wait(wait.total_seconds()):
            self.log.add(f"[{self.id}] Scheduler was stopped before it started.")
            return

        try:
            interval = resolve_interval(cfg.repeat_value, cfg.repeat_unit)
        except ConfigValidationError as e:
            self.log.add(
                f"[{self.id}] Invalid repeat setting ({e}). Stopping the scheduler.",
                logging.WARNING,
            )
            self._finish()
            return

        self.phase = JobPhase.RUNNING
        self.log.add(f"[{self.id}] Scheduler is running.")
        self._tick_loop(interval.total_seconds())

    def _tick_loop(self, interval: float):
        deadline = time.monotonic() + interval
        while True:
            if self.cancel_token.wait(max(deadline - time.monotonic(), 0)):
                self.log.add(f"[{self.id}] Scheduler stopped.")
                return
            if self.dispatch(self.id, self.config):
                self._finish()
                return
            deadline += interval
            now = time.monotonic()
            if deadline < now:
                # Missed ticks collapse into one immediate tick; phase is kept.
                deadline += ((now - deadline) // interval) * interval

    def _finish(self):
        self.phase = JobPhase.TERMINATED
        self.on_finish(self)
