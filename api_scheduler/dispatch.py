import logging
from typing import Dict, Optional
import httpx
from api_scheduler.config import DISPATCH_TIMEOUT
from api_scheduler.errors import PayloadDecodeError, TransportError
from api_scheduler.log_store import LogStore
from api_scheduler.models import JobConfig
from api_scheduler.utils import decode_payload

logger = logging.getLogger("Dispatch")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HttpDispatcher:
    """
    Issues the single HTTP attempt a job makes on every tick.

    A fresh ``httpx.Client`` is opened per call with a fixed timeout. Tests
    pass an ``httpx.MockTransport`` as ``transport`` to stand in for the target.
    """

    def __init__(
        self,
        log: LogStore,
        timeout: float = DISPATCH_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.log = log
        self.timeout = timeout
        self.transport = transport

    def __call__(self, job_id: str, config: JobConfig) -> bool:
        """
        Send one request for ``config``.

        Returns:
            True when the target answered 200 OK and the job should stop.
        """
        self.log.add(
            f"[{job_id}] API call started: URL {config.api_url}, method {config.http_method}"
        )
        params = self._load_payload(job_id, config.payload)
        try:
            response = self._send(config, params)
        except TransportError as e:
            self.log.add(f"[{job_id}] API call error: {e}", logging.WARNING)
            return False

        self.log.add(
            f"[{job_id}] API call succeeded - HTTP status code: {response.status_code}"
        )
        self.log.add(f"[{job_id}] Response body: {response.text}")

        if response.status_code == httpx.codes.OK:
            self.log.add(
                f"[{job_id}] Response success (200 OK) - the scheduler will stop automatically."
            )
            return True
        return False

    def _load_payload(self, job_id: str, blob: str) -> Dict[str, str]:
        try:
            return decode_payload(blob)
        except PayloadDecodeError as e:
            if blob:
                logger.debug(f"[{job_id}] Ignoring payload: {e}")
            return {}

    def _send(self, config: JobConfig, params: Dict[str, str]) -> httpx.Response:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                if config.http_method.upper() == "POST":
                    response = client.post(
                        config.api_url,
                        data=params,
                        headers={"Content-Type": FORM_CONTENT_TYPE},
                    )
                else:
                    url = httpx.URL(config.api_url).copy_merge_params(params)
                    response = client.get(url)
                return response
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
