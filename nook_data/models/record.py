from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

"""Record models for the spreadsheet export.

RawRecord is one spreadsheet row keyed by its header labels, plus the name of
the tab it came from. NormalizedRecord is the cleaned counterpart with
lower-camel-case identifiers and typed values. Both are immutable; the
normalizer builds a new NormalizedRecord rather than editing a RawRecord.
"""

__all__ = [
    "CellValue",
    "FieldValue",
    "SOURCE_SHEET_FIELD",
    "InvalidIdentifierError",
    "RawRecord",
    "NormalizedRecord",
    "is_identifier",
]

# Raw cell as returned by the Sheets API (FORMULA render) or read from cache.
# None = セル欠落 (API は末尾の空セルを返さない)
CellValue = Union[str, int, float, bool, None]

# Normalized value: scalar, null, or the split lines of a multi-line field.
FieldValue = Union[str, int, float, bool, None, list[str]]

SOURCE_SHEET_FIELD = "SourceSheet"

_IDENTIFIER_RE = re.compile(r"^[a-z0-9][a-zA-Z0-9]*$")


class InvalidIdentifierError(ValueError):
    """Raised when a normalized record key is not a lower-camel-case identifier."""


def is_identifier(key: str) -> bool:
    return bool(_IDENTIFIER_RE.match(key))


@dataclass(frozen=True)
class RawRecord:
    """One spreadsheet row as authored.

    Attributes:
        source_sheet: Name of the tab the row was read from
        cells: Header label -> raw cell value, in header order
    """
    source_sheet: str
    cells: Mapping[str, CellValue]

    def __post_init__(self) -> None:
        # 呼び出し側の dict と共有しない
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def items(self) -> Iterator[tuple[str, CellValue]]:
        """Yield (label, value) pairs with the provenance field first.

        A header that is itself labeled SourceSheet comes later and therefore
        wins, which matches how the cache file is written.
        """
        yield SOURCE_SHEET_FIELD, self.source_sheet
        yield from self.cells.items()

    def to_dict(self) -> dict[str, CellValue]:
        return dict(self.items())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawRecord:
        """Rebuild a record from its cache form (see to_dict)."""
        if SOURCE_SHEET_FIELD not in data:
            raise ValueError(f"cached row lacks {SOURCE_SHEET_FIELD}: {dict(data)!r}")
        cells = {k: v for k, v in data.items() if k != SOURCE_SHEET_FIELD}
        return cls(source_sheet=str(data[SOURCE_SHEET_FIELD]), cells=cells)


@dataclass(frozen=True)
class NormalizedRecord:
    """A cleaned row: identifier -> typed value.

    Raises:
        InvalidIdentifierError: if any key is not a lower-camel-case identifier
    """
    fields: Mapping[str, FieldValue]

    def __post_init__(self) -> None:
        bad = [k for k in self.fields if not isinstance(k, str) or not is_identifier(k)]
        if bad:
            raise InvalidIdentifierError(f"invalid field identifiers: {bad!r}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __getitem__(self, key: str) -> FieldValue:
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str, default: FieldValue = None) -> FieldValue:
        return self.fields.get(key, default)

    def to_dict(self) -> dict[str, FieldValue]:
        """Plain dict for JSON serialization (list values are copied)."""
        return {k: (list(v) if isinstance(v, list) else v) for k, v in self.fields.items()}
