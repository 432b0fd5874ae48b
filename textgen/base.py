from abc import ABC, abstractmethod
from .types import Outcome, PreparedRequest


class Transport(ABC):
    """
    Abstract request transport.
    The engine hands every prepared request to exactly one transport.
    """

    @abstractmethod
    def send(self, request: PreparedRequest) -> Outcome:
        """Deliver the request and return the invocation outcome."""
        raise NotImplementedError
