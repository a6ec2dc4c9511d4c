"""Abstract port for publishing domain events."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: object) -> None:
        """Deliver *event* to every interested subscriber."""
