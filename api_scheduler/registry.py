import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional
from api_scheduler.config import get_timezone
from api_scheduler.dispatch import HttpDispatcher
from api_scheduler.errors import DuplicateStartError, UnknownStopError
from api_scheduler.job import Job
from api_scheduler.log_store import LogStore
from api_scheduler.models import JobConfig

logger = logging.getLogger("Registry")


class Registry:
    """
    Owns the set of active jobs, keyed by identifier.

    Built once at process start and handed to every control-plane caller.
    A single lock guards the map; it is held only while the map changes,
    never while a job waits or dispatches.
    """

    def __init__(
        self,
        log: LogStore,
        dispatch: Optional[Callable[[str, JobConfig], bool]] = None,
        tzinfo=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.log = log
        self.dispatch = dispatch or HttpDispatcher(log)
        self.tzinfo = tzinfo or get_timezone()
        self.clock = clock
        self._jobs: Dict[str, Job] = {}
        self._lock = threading.Lock()

    def start(self, job_id: str, config: JobConfig) -> bool:
        """Create and launch a job; False if ``job_id`` is already running."""
        try:
            with self._lock:
                job = self._insert(job_id, config)
        except DuplicateStartError as e:
            self.log.add(str(e))
            return False
        job.start()
        return True

    def stop(self, job_id: str) -> bool:
        """Cancel and remove a job; False if ``job_id`` is not running."""
        try:
            with self._lock:
                self._remove(job_id)
        except UnknownStopError as e:
            self.log.add(str(e))
            return False
        self.log.add(f"[{job_id}] Scheduler stopped.")
        return True

    def release(self, job: Job):
        """Self-removal of a job that ended on its own."""
        with self._lock:
            if self._jobs.get(job.id) is not job:
                return
            self._remove(job.id)
        self.log.add(f"[{job.id}] Scheduler stopped.")

    def _insert(self, job_id: str, config: JobConfig) -> Job:
        if job_id in self._jobs:
            raise DuplicateStartError(job_id)
        job = Job(
            job_id,
            config,
            self.log,
            self.dispatch,
            on_finish=self.release,
            tzinfo=self.tzinfo,
            clock=self.clock,
        )
        self._jobs[job_id] = job
        return job

    def _remove(self, job_id: str):
        job = self._jobs.pop(job_id, None)
        if job is None:
            raise UnknownStopError(job_id)
        job.cancel()

    def get(self, job_id: str) -> Optional[Job]:
        with self._lock:
            return self._jobs.get(job_id)

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._jobs)

    def __contains__(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._jobs

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def shutdown(self, timeout: Optional[float] = None):
        """Cancel every job and wait for their threads to exit."""
        with self._lock:
            jobs = list(self._jobs.values())
            self._jobs.clear()
        for job in jobs:
            job.cancel()
        for job in jobs:
            if not job.join(timeout):
                logger.warning(f"Job {job.id} did not exit within {timeout}s")
        if jobs:
            logger.info(f"Shut down {len(jobs)} scheduler(s)")
