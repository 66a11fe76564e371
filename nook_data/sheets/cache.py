from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..models.record import RawRecord

"""Local JSON files: the per-category raw row cache and the export outputs.

Cache files hold a JSON array of raw rows ({"SourceSheet": ..., <label>: <cell>})
and are reused on the next run as-is. Delete a cache file to refetch that
category.
"""

__all__ = [
    "CACHE_INDENT",
    "OUTPUT_INDENT",
    "cache_path",
    "load_cache",
    "write_cache",
    "write_json",
]

logger = logging.getLogger(__name__)

CACHE_INDENT = 2
OUTPUT_INDENT = 1


def cache_path(cache_directory: Path, category: str) -> Path:
    return cache_directory / f"{category}.json"


def load_cache(path: Path) -> list[RawRecord] | None:
    """Read cached raw rows. Returns None on a cache miss.

    A missing, unreadable or malformed cache file is treated as a miss.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug(f"cache miss: {path}")
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"ignoring unreadable cache {path}: {e}")
        return None

    if not isinstance(data, list):
        logger.warning(f"ignoring cache {path}: expected a JSON array")
        return None
    try:
        return [RawRecord.from_dict(row) for row in data]
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning(f"ignoring cache {path}: {e}")
        return None


def write_json(path: Path, data: Any, indent: int = OUTPUT_INDENT) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
    return path


def write_cache(path: Path, records: Iterable[RawRecord]) -> Path:
    return write_json(path, [r.to_dict() for r in records], indent=CACHE_INDENT)
