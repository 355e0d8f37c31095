import logging
import os
import pytz
from dateutil import tz

logger = logging.getLogger("Config")

# Configuration
SCHEDULER_TIMEZONE = os.getenv("SCHEDULER_TIMEZONE", "")
DISPATCH_TIMEOUT = float(os.getenv("DISPATCH_TIMEOUT", "10"))  # seconds
LOG_CAPACITY = int(os.getenv("LOG_CAPACITY", "100"))
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_timezone(name: str = SCHEDULER_TIMEZONE):
    """
    Resolve the zone start times are interpreted in.

    An empty name means the host's local zone. Unknown zone names fall back to
    the local zone as well, with a warning.
    """
    if not name:
        return tz.tzlocal()
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown SCHEDULER_TIMEZONE '{name}', using local time zone")
        return tz.tzlocal()
