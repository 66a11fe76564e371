from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

"""Run result models for the spreadsheet export.

Aggregates per-category metrics for the SUMMARY line.
"""


@dataclass(frozen=True)
class CategoryStat:
    """Per-category export statistics."""
    category: str  # カテゴリ名 (items, creatures, ...)
    sheet_count: int  # 読み込んだタブ数
    record_count: int  # 正規化済レコード数
    from_cache: bool  # キャッシュから読んだか
    output_path: Path  # 正規化済 JSON の出力先
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class ExportResult:
    """Aggregated results of one export run."""
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    category_stats: list[CategoryStat] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return sum(s.record_count for s in self.category_stats)

    @property
    def total_sheets(self) -> int:
        return sum(s.sheet_count for s in self.category_stats)

    @property
    def cached_categories(self) -> int:
        return sum(1 for s in self.category_stats if s.from_cache)
