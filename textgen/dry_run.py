import logging

from .base import Transport
from .types import Outcome, PreparedRequest

logger = logging.getLogger(__name__)


class DryRunTransport(Transport):
    """
    Returns the would-be POST instead of sending it.

    Output is the endpoint, each header on its own line, then the payload.
    Used for inspection and tests; never touches the network.
    """

    def send(self, request: PreparedRequest) -> Outcome:
        logger.debug(f"Dry run, not sending request to {request.endpoint}")
        return Outcome.request(request.serialize())
