"""JSON-file-backed implementation of ActivityLog."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from polycommerce.domain.repository.activity_log import ActivityLog
from polycommerce.domain.service.inventory_adjuster import utc_now
from polycommerce.infrastructure.persistence.json_table import JsonTable


class JsonActivityLog(ActivityLog):

    def __init__(self, file_path: Path, clock: Callable[[], datetime] = utc_now) -> None:
        self._table = JsonTable(file_path)
        self._clock = clock

    def insert_activity(
        self,
        system_keyword: str,
        comment: str,
        entity_name: str | None = None,
        entity_id: int | None = None,
    ) -> None:
        self._table.insert(
            {
                "system_keyword": system_keyword,
                "comment": comment,
                "entity_name": entity_name,
                "entity_id": entity_id,
                "created_on": self._clock().isoformat(),
            }
        )
