# config.py
"""Paths, defaults and logging setup for the finance tracker.

Values are read from the environment once at import time.
"""

import logging
import os
from pathlib import Path

STORAGE_KEY = "finance-tracker-data"

DATA_DIR = Path(os.getenv("FINANCE_TRACKER_DATA_DIR", "data"))
DATA_PATH = DATA_DIR / f"{STORAGE_KEY}.json"

LOCK_TIMEOUT = float(os.getenv("FINANCE_TRACKER_LOCK_TIMEOUT", "5"))
LOG_LEVEL = os.getenv("FINANCE_TRACKER_LOG_LEVEL", "WARNING")
CURRENCY = os.getenv("FINANCE_TRACKER_CURRENCY", "Toman")

# (id, name) of the categories seeded on first run
DEFAULT_CATEGORIES = [
    ("food", "Food"),
    ("supermarket", "Supermarket"),
    ("transport", "Transport"),
]

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def ensure_data_dir(path: Path = None) -> Path:
    directory = Path(path) if path else DATA_DIR
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def configure_logging(level=None):
    level = level or LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
