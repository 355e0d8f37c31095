"""
Time-of-day HTTP schedulers.

- registry: starts and stops jobs by identifier
- job: per-job wait/tick state machine
- dispatch: the HTTP request a job makes on every tick
- log_store: capped diagnostic log
- api: FastAPI control plane
"""
from api_scheduler.log_store import LogStore
from api_scheduler.models import JobConfig, JobPhase
from api_scheduler.registry import Registry

__all__ = ["JobConfig", "JobPhase", "LogStore", "Registry"]
