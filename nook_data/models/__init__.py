"""Domain models for the game-reference spreadsheet export.

Categories and their source tabs, raw and normalized records, and run
results.
"""

from .category import DEFAULT_CATEGORY_SHEETS, IGNORED_SHEETS, Category
from .export_result import CategoryStat, ExportResult
from .record import (
    SOURCE_SHEET_FIELD,
    CellValue,
    FieldValue,
    InvalidIdentifierError,
    NormalizedRecord,
    RawRecord,
)

__all__ = [
    # Categories
    "Category",
    "DEFAULT_CATEGORY_SHEETS",
    "IGNORED_SHEETS",
    # Records
    "CellValue",
    "FieldValue",
    "SOURCE_SHEET_FIELD",
    "InvalidIdentifierError",
    "NormalizedRecord",
    "RawRecord",
    # Results
    "CategoryStat",
    "ExportResult",
]
