# storage.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from filelock import FileLock

import config
from models import Category, new_id

logger = logging.getLogger(__name__)


def _resolve(path) -> Path:
    return Path(path) if path else config.DATA_PATH


def _lock(path: Path) -> FileLock:
    return FileLock(str(path) + ".lock", timeout=config.LOCK_TIMEOUT)


def seed_categories() -> List[Category]:
    return [Category(id=cid, name=name) for cid, name in config.DEFAULT_CATEGORIES]


def _write(path: Path, categories: List[Category]):
    # atomic write: temp file in the same directory, then replace
    payload = [c.to_dict() for c in categories]
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", suffix=".json", dir=str(path.parent), text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _quarantine(path: Path) -> Path:
    # earlier backups are kept: <name>.corrupt, <name>.corrupt.1, ...
    target = path.with_name(path.name + ".corrupt")
    n = 0
    while target.exists():
        n += 1
        target = path.with_name(f"{path.name}.corrupt.{n}")
    os.replace(path, target)
    return target


def _dedupe_ids(categories: List[Category]):
    seen = set()
    for c in categories:
        if c.id in seen:
            old, c.id = c.id, new_id()
            logger.warning("Duplicate category id %s renamed to %s", old, c.id)
        seen.add(c.id)
        expense_ids = set()
        for e in c.expenses:
            if e.id in expense_ids:
                old, e.id = e.id, new_id()
                logger.warning("Duplicate expense id %s in %s renamed to %s", old, c.id, e.id)
            expense_ids.add(e.id)


def _decode(raw: bytes) -> Optional[List[Category]]:
    """Returns None when the document is not UTF-8 JSON holding an array."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, list):
        return None
    categories = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed category entry #%d", i)
            continue
        categories.append(Category.from_dict(entry))
    _dedupe_ids(categories)
    return categories


def save_categories(categories: List[Category], path=None):
    """
    Serializes the full category list and overwrites the persisted document.
    """
    path = _resolve(path)
    config.ensure_data_dir(path.parent)
    with _lock(path):
        _write(path, categories)
    logger.debug("Saved %d categories to %s", len(categories), path)


def load_categories(path=None) -> List[Category]:
    """
    Reads the persisted document. A missing document is seeded with the
    default categories, which are written back immediately. A document that
    is not a UTF-8 JSON array is moved aside to <name>.corrupt and reseeded.
    Repeated ids get fresh ones so every record stays addressable.
    """
    path = _resolve(path)
    config.ensure_data_dir(path.parent)
    with _lock(path):
        if path.exists():
            raw = path.read_bytes()
            categories = _decode(raw)
            if categories is not None:
                logger.info("Loaded %d categories from %s", len(categories), path)
                return categories
            moved = _quarantine(path)
            logger.warning("Unreadable data file %s moved to %s; reseeding defaults", path, moved)
        categories = seed_categories()
        _write(path, categories)
    logger.info("Seeded default categories in %s", path)
    return categories


def clear_categories(path=None):
    path = _resolve(path)
    if not path.parent.exists():
        return
    with _lock(path):
        if path.exists():
            path.unlink()
            logger.info("Removed data file %s", path)
