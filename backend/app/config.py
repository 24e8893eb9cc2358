from __future__ import annotations

import os
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

# repository_root/data (this file is backend/app/config.py)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


def data_dir() -> Path:
    return Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR)))


def env() -> str:
    return os.getenv("ENV", "prod")


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def display_timezone() -> tzinfo:
    return ZoneInfo(os.getenv("DISPLAY_TIMEZONE", "UTC"))


def page_size() -> int:
    try:
        size = int(os.getenv("NOTES_PAGE_SIZE", "10"))
    except ValueError:
        return 10
    return size if size > 0 else 10
