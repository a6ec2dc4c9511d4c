"""In-process implementation of EventPublisher.

Subscribers run synchronously in the publishing thread.  A subscriber
that raises makes ``publish`` raise; callers decide whether that matters.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import asdict, is_dataclass

import structlog

from polycommerce.domain.repository.event_publisher import EventPublisher

logger = structlog.get_logger(__name__)

Subscriber = Callable[[object], None]


class InProcessEventPublisher(EventPublisher):

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Subscriber]] = defaultdict(list)

    def subscribe(self, event_type: type, subscriber: Subscriber) -> None:
        self._subscribers[event_type].append(subscriber)

    def publish(self, event: object) -> None:
        payload = asdict(event) if is_dataclass(event) else {"payload": repr(event)}
        logger.info("Event published", event_type=type(event).__name__, **payload)
        for subscriber in self._subscribers[type(event)]:
            subscriber(event)
