import logging
import threading
from collections import deque
from typing import List
from api_scheduler.config import LOG_CAPACITY
from api_scheduler.models import LogEntry

logger = logging.getLogger("Scheduler")


class LogStore:
    """
    In-memory diagnostic log shown to operators.

    Keeps the most recent ``capacity`` entries in insertion order. Every entry
    is also emitted on the "Scheduler" logger.
    """

    def __init__(self, capacity: int = LOG_CAPACITY):
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def add(self, message: str, level: int = logging.INFO) -> LogEntry:
        entry = LogEntry.now(message)
        with self._lock:
            self._entries.append(entry)
        logger.log(level, message)
        return entry

    def entries(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
