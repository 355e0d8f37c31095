"""
Standalone API Scheduler Service

This service builds the process-wide job registry and serves the control plane:
1. POST /start and POST /stop to manage schedulers by ID
2. GET /logs for the most recent diagnostic lines
3. /fake-server, an echo endpoint to point test schedulers at
"""
import logging
import sys
import uvicorn
from api_scheduler.api import create_app
from api_scheduler.config import API_HOST, API_PORT, LOG_LEVEL
from api_scheduler.log_store import LogStore
from api_scheduler.registry import Registry

SHUTDOWN_TIMEOUT = 15  # seconds, longer than one dispatch timeout

# Setup logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("ApiService")


def main():
    """Entry point for the API scheduler service."""
    logger.info("Initializing API scheduler service...")
    log_store = LogStore()
    registry = Registry(log_store)
    app = create_app(registry, log_store)

    logger.info(f"Web server running at http://{API_HOST}:{API_PORT}")
    try:
        uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())
    except KeyboardInterrupt:
        logger.info("API scheduler service stopped by user")
    except Exception as e:
        logger.error(f"API scheduler service crashed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        registry.shutdown(timeout=SHUTDOWN_TIMEOUT)


if __name__ == "__main__":
    main()
