from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..models.record import CellValue, FieldValue, NormalizedRecord, RawRecord
from .formatters import VALUE_FORMATTERS, Formatter
from .keys import normalize_keys

"""Row normalization: raw spreadsheet rows -> typed, consistently keyed records.

Per record, keys are normalized first (see keys.py), then every value goes
through the same steps in order:

1. strings are trimmed
2. the field's formatter runs, if one is registered for the identifier
3. "", "None", "NA", "Does not play music" -> None
4. "Yes" -> True, "No" -> False
5. "NFS" (not for sale) -> -1

Steps 3-5 only look at values that are still strings after step 2.

Records are independent of each other; output order and length match the
input. An UnexpectedValueError from a formatter propagates as-is and no
partial batch is returned.
"""

__all__ = [
    "NULL_VALUES",
    "NOT_FOR_SALE",
    "normalize_value",
    "normalize_record",
    "normalize_data",
]

NULL_VALUES: frozenset[str] = frozenset({"", "None", "NA", "Does not play music"})

BOOLEAN_VALUES: Mapping[str, bool] = MappingProxyType({"Yes": True, "No": False})

NOT_FOR_SALE = -1


def normalize_value(
    key: str,
    value: CellValue,
    record: Mapping[str, CellValue],
    formatters: Mapping[str, Formatter] = VALUE_FORMATTERS,
) -> FieldValue:
    """Normalize a single field value.

    Parameters:
        key: Field identifier (already key-normalized)
        value: Raw cell value
        record: The key-normalized record the value belongs to
        formatters: Identifier -> formatter table

    Raises:
        UnexpectedValueError: propagated from a formatter
    """
    result: FieldValue = value.strip() if isinstance(value, str) else value

    formatter = formatters.get(key)
    if formatter is not None:
        result = formatter(result, record)

    if not isinstance(result, str):
        return result
    if result in NULL_VALUES:
        return None
    if result in BOOLEAN_VALUES:
        return BOOLEAN_VALUES[result]
    if result == "NFS":
        return NOT_FOR_SALE
    return result


def normalize_record(
    raw: RawRecord,
    formatters: Mapping[str, Formatter] = VALUE_FORMATTERS,
    reported: set[tuple[str, ...]] | None = None,
) -> NormalizedRecord:
    """Build the normalized counterpart of one raw record. The input is not modified."""
    keyed = MappingProxyType(normalize_keys(raw, reported))
    fields = {key: normalize_value(key, value, keyed, formatters) for key, value in keyed.items()}
    return NormalizedRecord(fields=fields)


def normalize_data(
    records: Iterable[RawRecord], formatters: Mapping[str, Formatter] = VALUE_FORMATTERS
) -> list[NormalizedRecord]:
    """Normalize a whole category batch, preserving order.

    Header warnings (dropped or colliding columns) are logged once per batch.
    """
    reported: set[tuple[str, ...]] = set()
    return [normalize_record(raw, formatters, reported) for raw in records]
