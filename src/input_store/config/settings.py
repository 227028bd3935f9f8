from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_DB_PATH = "data/db.json"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    default_data_path: Path | None
    log_level: int


def _safe_level(value: str | None, default: str) -> int:
    name = (value or default).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.getLevelName(default)


def _resolve_path(value: str) -> Path:
    return Path(value).expanduser()


def _optional_path(value: str | None) -> Path | None:
    if value is None or not value.strip():
        return None
    return _resolve_path(value.strip())


def load_settings() -> Settings:
    load_dotenv()

    db_path = _resolve_path(os.getenv("INPUT_STORE_DB_PATH", DEFAULT_DB_PATH))
    default_data_path = _optional_path(os.getenv("INPUT_STORE_DEFAULT_DATA_PATH"))
    log_level = _safe_level(os.getenv("INPUT_STORE_LOG_LEVEL"), DEFAULT_LOG_LEVEL)

    return Settings(
        db_path=db_path,
        default_data_path=default_data_path,
        log_level=log_level,
    )
