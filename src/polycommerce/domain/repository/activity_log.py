"""Abstract port for the host platform's customer activity log."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ActivityLog(ABC):

    @abstractmethod
    def insert_activity(
        self,
        system_keyword: str,
        comment: str,
        entity_name: str | None = None,
        entity_id: int | None = None,
    ) -> None:
        """Append an entry to the activity log."""
