"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from polycommerce.domain.service.order_number_formatter import DEFAULT_MASK

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    order_number_mask: str
    log_level: str
    environment: str
    host: str
    port: int

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")


def _log_level_for(environment: str) -> str:
    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }
    return os.getenv("LOG_LEVEL", level_map.get(environment, "INFO")).upper()


def load_settings() -> Settings:
    environment = (os.getenv("ENVIRONMENT") or "development").strip().lower()
    data_dir = Path(os.getenv("POLYCOMMERCE_DATA_DIR") or _DEFAULT_DATA_DIR).expanduser()
    mask = (os.getenv("POLYCOMMERCE_ORDER_NUMBER_MASK") or DEFAULT_MASK).strip()

    raw_port = os.getenv("POLYCOMMERCE_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError as exc:
        raise ValueError(f"POLYCOMMERCE_PORT must be an integer, got {raw_port!r}") from exc

    return Settings(
        data_dir=data_dir,
        order_number_mask=mask or DEFAULT_MASK,
        log_level=_log_level_for(environment),
        environment=environment,
        host=os.getenv("POLYCOMMERCE_HOST", "127.0.0.1"),
        port=port,
    )
