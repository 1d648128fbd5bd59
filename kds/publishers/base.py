"""
Event Publisher Abstract Base Class

Services publish domain events through this interface after the store
commit succeeds. Implementations must be fire-and-forget: ``publish`` never
blocks on delivery and never raises into the request.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, List


class EventPublisher(ABC):
    """Abstract base class for realtime event publishers"""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    def publish(self, event: str, payload: Any) -> None:
        """Deliver ``payload`` under ``event`` to every current subscriber."""
        pass

    def close(self) -> None:
        """Release background resources on shutdown."""
        pass


class CompositePublisher(EventPublisher):
    """Publishes each event to several publishers in order"""

    def __init__(self, publishers: Iterable[EventPublisher]):
        self.publishers: List[EventPublisher] = list(publishers)

    @property
    def provider_name(self) -> str:
        return "+".join(p.provider_name for p in self.publishers)

    def publish(self, event: str, payload: Any) -> None:
        for publisher in self.publishers:
            publisher.publish(event, payload)

    def close(self) -> None:
        for publisher in self.publishers:
            publisher.close()
