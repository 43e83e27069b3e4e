"""
Transport contract and an in-memory request queue.

Delivery (batching, HTTP, retries) happens elsewhere; encoders only hand
requests to a `RequestSink`.
"""

import logging
from typing import TYPE_CHECKING, Any, Protocol, Union

from countly_bulk.models.event import Event
from countly_bulk.models.user import UserConfig

if TYPE_CHECKING:
    from countly_bulk.user import BulkUser

logger = logging.getLogger(__name__)


class RequestSink(Protocol):
    def add_request(self, query: dict[str, Any]) -> None: ...

    def add_bulk_request(self, queries: list[dict[str, Any]]) -> None: ...

    def add_event(self, device_id: str, event: Any) -> None: ...


class MemoryQueue:
    """Request sink that keeps everything in memory.

    Events recorded through `add_event` are buffered per device until
    `flush_events()` packs each device's events into one request.
    """

    def __init__(self) -> None:
        self._requests: list[dict[str, Any]] = []
        self._events: dict[str, list[Any]] = {}
        self.bulk_count = 0

    @property
    def requests(self) -> list[dict[str, Any]]:
        return list(self._requests)

    def add_request(self, query: dict[str, Any]) -> None:
        logger.debug("queued request for %s: %s", query.get("device_id"), sorted(query))
        self._requests.append(query)

    def add_bulk_request(self, queries: list[dict[str, Any]]) -> None:
        logger.debug("queued bulk of %d requests", len(queries))
        self._requests.extend(queries)
        self.bulk_count += 1

    def add_event(self, device_id: str, event: Any) -> None:
        if isinstance(event, Event):
            event = event.to_fragment()
        self._events.setdefault(device_id, []).append(event)
        logger.debug("buffered event for %s", device_id)

    def pending_events(self, device_id: str) -> list[Any]:
        return list(self._events.get(device_id, []))

    def flush_events(self) -> int:
        """Turn buffered events into one request per device. Returns the request count."""
        flushed = 0
        for device_id, events in self._events.items():
            self._requests.append({"device_id": device_id, "events": events})
            flushed += 1
        self._events = {}
        if flushed:
            logger.debug("flushed events for %d devices", flushed)
        return flushed

    def add_user(self, device_id: Union[str, UserConfig, None] = None, **conf: Any) -> "BulkUser":
        """Create a user encoder bound to this queue, from keywords or a UserConfig."""
        from countly_bulk.user import BulkUser
        if isinstance(device_id, UserConfig):
            return BulkUser.from_config(self, device_id)
        return BulkUser(self, device_id, **conf)

    def clear(self) -> None:
        self._requests = []
        self._events = {}
        self.bulk_count = 0
