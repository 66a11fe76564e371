from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ExportConfig
from ..models.category import Category
from ..models.export_result import CategoryStat, ExportResult
from ..normalize.formatters import UnexpectedValueError
from ..normalize.normalizer import normalize_data
from ..sheets.cache import write_json
from ..sheets.client import SheetFetchError
from .provider import SheetsProvider

"""Export orchestration: one sequential pass over all configured categories.

For each category (items, creatures, nookMiles, recipes):
1. load raw rows (cache or spreadsheet)
2. write <out>/<category>-raw.json
3. normalize
4. write <out>/<category>.json

Any failure stops the run at that point. The normalized file of the failing
category is not written and later categories are not processed.
"""

__all__ = [
    "ExportError",
    "export_all",
    "export_category",
    "raw_output_path",
    "output_path",
]

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Fatal error that stops the export run."""


def raw_output_path(output_directory: Path, category: Category) -> Path:
    return output_directory / f"{category.value}-raw.json"


def output_path(output_directory: Path, category: Category) -> Path:
    return output_directory / f"{category.value}.json"


def export_category(config: ExportConfig, provider: SheetsProvider, category: Category) -> CategoryStat:
    """Export a single category.

    Raises:
        ExportError: if a tab cannot be fetched or a cell cannot be normalized
    """
    started = datetime.now(UTC)
    logger.info(f"Loading {category.value}")
    try:
        batch = provider.load(category)
    except SheetFetchError as e:
        raise ExportError(f"{category.value}: {e}") from e

    logger.info("Writing raw file to disk")
    write_json(
        raw_output_path(config.output_directory, category),
        [r.to_dict() for r in batch.records],
    )

    logger.info("Normalising data")
    try:
        normalized = normalize_data(batch.records)
    except UnexpectedValueError as e:
        raise ExportError(f"{category.value}: {e}") from e

    logger.info("Writing data to disk")
    out = write_json(
        output_path(config.output_directory, category),
        [r.to_dict() for r in normalized],
    )

    logger.info(f"Finished {category.value}")
    return CategoryStat(
        category=category.value,
        sheet_count=len(batch.sheet_names),
        record_count=len(normalized),
        from_cache=batch.from_cache,
        output_path=out,
        elapsed_seconds=(datetime.now(UTC) - started).total_seconds(),
    )


def export_all(config: ExportConfig, provider: SheetsProvider | None = None) -> ExportResult:
    """Run the export for every configured category in fixed order.

    Args:
        config: Export configuration
        provider: Raw data provider (default: Sheets API + local cache)

    Returns:
        ExportResult with per-category stats

    Raises:
        ExportError: on the first fatal error
    """
    start_time = datetime.now(UTC)
    provider = provider or SheetsProvider(config)

    config.cache_directory.mkdir(parents=True, exist_ok=True)
    config.output_directory.mkdir(parents=True, exist_ok=True)

    stats: list[CategoryStat] = []
    for category in Category:
        if category not in config.categories:
            continue
        stats.append(export_category(config, provider, category))

    end_time = datetime.now(UTC)
    return ExportResult(
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        category_stats=stats,
    )
