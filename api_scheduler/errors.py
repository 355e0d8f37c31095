"""
Error taxonomy for the scheduler.

None of these escape to callers of the registry or crash a job thread; they are
raised at the point of failure and turned into diagnostic log entries by the
component that owns the recovery policy.
"""


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class ConfigValidationError(SchedulerError):
    """Unparseable start time, unknown repeat unit or non-positive repeat value."""


class PayloadDecodeError(SchedulerError):
    """Payload blob is not a JSON object of string to string."""


class TransportError(SchedulerError):
    """The HTTP request could not be completed (timeout, connection, bad URL)."""


class DuplicateStartError(SchedulerError):
    def __init__(self, job_id: str):
        super().__init__(f"[{job_id}] Scheduler is already running. Ignoring the new request.")
        self.job_id = job_id


class UnknownStopError(SchedulerError):
    def __init__(self, job_id: str):
        super().__init__(f"[{job_id}] Unknown scheduler ID.")
        self.job_id = job_id
