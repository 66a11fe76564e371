from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..config.loader import ExportConfig
from ..models.category import Category
from ..models.record import RawRecord
from ..sheets.cache import cache_path, load_cache, write_cache
from ..sheets.client import SheetsClient, build_sheets_service, rows_to_records
from .progress import ProgressTracker

"""Raw data provider: per-category raw rows from cache or the spreadsheet.

On a cache hit the cached rows are returned untouched. On a miss every tab of
the category is fetched in configured order, the rows are concatenated and
the cache file is written before returning. The Sheets client is only built
on the first miss, so a fully cached run needs no credentials.
"""

__all__ = [
    "LoadedBatch",
    "SheetsProvider",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedBatch:
    category: Category
    records: list[RawRecord]
    sheet_names: tuple[str, ...]  # 対象タブ (除外タブを除く)
    from_cache: bool


class SheetsProvider:
    def __init__(
        self,
        config: ExportConfig,
        client: SheetsClient | None = None,
        client_factory: Callable[[], SheetsClient] | None = None,
    ) -> None:
        self.config = config
        self._client = client
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> SheetsClient:
        service = build_sheets_service(self.config.credentials_file)
        return SheetsClient(service, self.config.spreadsheet_id)

    @property
    def client(self) -> SheetsClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def sheets_for(self, category: Category) -> tuple[str, ...]:
        sheets = []
        for name in self.config.categories.get(category, ()):
            if name in self.config.ignored_sheets:
                logger.warning(f"{category.value}: skipping ignored sheet '{name}'")
                continue
            sheets.append(name)
        return tuple(sheets)

    def load(self, category: Category) -> LoadedBatch:
        """Return the raw rows of a category, fetching and caching on a miss.

        Raises:
            SheetFetchError: if credentials cannot be loaded or a tab fetch fails
        """
        sheets = self.sheets_for(category)
        path = cache_path(self.config.cache_directory, category.value)

        cached = load_cache(path)
        if cached is not None:
            logger.info(f"Using cache {path} ({len(cached)} rows)")
            return LoadedBatch(category, cached, sheets, from_cache=True)

        records: list[RawRecord] = []
        with ProgressTracker(len(sheets), description=f"Fetching {category.value}") as progress:
            for sheet in sheets:
                progress.start_sheet(sheet)
                rows = rows_to_records(self.client.fetch_values(sheet), sheet)
                if not rows:
                    logger.warning(f"{category.value}: sheet '{sheet}' has no data rows")
                logger.debug(f"{category.value}: sheet '{sheet}' rows={len(rows)}")
                records.extend(rows)
                progress.finish_sheet(len(rows))

        write_cache(path, records)
        logger.debug(f"wrote cache {path}")
        return LoadedBatch(category, records, sheets, from_cache=False)
