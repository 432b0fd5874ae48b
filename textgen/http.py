import logging
from typing import Optional

import requests

from .base import Transport
from .response import interpret_response
from .types import Outcome, PreparedRequest

logger = logging.getLogger(__name__)


class HttpTransport(Transport):
    """
    HTTPS transport for OpenAI-style chat completions.

    One POST per call, no retries. Any non-2xx status fails fast. Transport
    failures (timeout, TLS, DNS, HTTP status) are returned as error outcomes
    carrying the HTTP client's own description.
    """

    def __init__(self, timeout_s: float = 10, session: Optional[requests.Session] = None):
        """
        Initialize HTTP transport.

        Args:
            timeout_s: Connection timeout in seconds
            session:   Optional requests session; module-level requests is used otherwise
        """
        self.timeout_s = timeout_s
        self.session = session

    def send(self, request: PreparedRequest) -> Outcome:
        """
        POST the payload and interpret the response.

        Flow:
          1. POST payload with headers and timeout
          2. raise_for_status on non-2xx
          3. Hand the body to the response interpreter
        """
        client = self.session if self.session is not None else requests

        try:
            resp = client.post(
                request.endpoint,
                data=request.payload.encode("utf-8"),
                headers=request.header_dict(),
                timeout=self.timeout_s,
            )
            logger.debug(f"AI generate text: raw response: {resp.text}")
            resp.raise_for_status()

        except requests.Timeout as e:
            logger.error(
                f"Request to {request.endpoint} timed out after {self.timeout_s}s",
                extra={"endpoint": request.endpoint, "timeout_s": self.timeout_s},
            )
            return Outcome.error(str(e))

        except requests.RequestException as e:
            status_code = getattr(getattr(e, "response", None), "status_code", None)
            logger.error(
                f"Request to {request.endpoint} failed: {e}",
                extra={"endpoint": request.endpoint, "status_code": status_code},
            )
            return Outcome.error(str(e))

        return interpret_response(resp.text)
