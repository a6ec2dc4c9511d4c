"""Side channel for best-effort steps.

Some effects of an import (customer attributes, order notes, the activity
log, event publication) are nice to have but must never undo an order that
has already been written.  Their failures are collected here and logged
instead of being raised.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from polycommerce.application.dto import SideEffectFailure

logger = structlog.get_logger(__name__)


class BestEffort:

    def __init__(self) -> None:
        self._failures: list[SideEffectFailure] = []

    @property
    def failures(self) -> list[SideEffectFailure]:
        return list(self._failures)

    @contextmanager
    def attempt(self, step: str, **context: object) -> Iterator[None]:
        """Run the body of the ``with`` block, recording any exception."""
        try:
            yield
        except Exception as exc:
            failure = SideEffectFailure(step=step, error=f"{type(exc).__name__}: {exc}")
            self._failures.append(failure)
            logger.warning(
                "Best-effort step failed",
                step=step,
                error=failure.error,
                exc_info=True,
                **context,
            )
