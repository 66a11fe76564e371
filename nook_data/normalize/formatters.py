from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from ..models.record import CellValue, FieldValue

"""Field-specific value formatters.

A formatter receives the trimmed raw value and the key-normalized record it
belongs to (read-only, for formatters that need sibling fields) and returns
the normalized value. The table is built once at import and cannot be
modified.
"""

__all__ = [
    "Formatter",
    "UnexpectedValueError",
    "extract_image_url",
    "normalize_uses",
    "split_source",
    "VALUE_FORMATTERS",
]

Formatter = Callable[[CellValue, Mapping[str, CellValue]], FieldValue]

# =IMAGE("https://...") の前後
IMAGE_PREFIX_LEN = 8
IMAGE_SUFFIX_LEN = 2

UNLIMITED_USES = -1


class UnexpectedValueError(ValueError):
    """Raised when a cell holds a value the formatter does not know how to read.

    Indicates the upstream data changed shape; the export stops.
    """

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Unexpected {field} value: {value!r}")
        self.field = field
        self.value = value


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_image_url(value: CellValue, record: Mapping[str, CellValue]) -> FieldValue:
    """Strip the =IMAGE("...") wrapper, leaving the URL."""
    if not isinstance(value, str):
        return value
    return value[IMAGE_PREFIX_LEN:-IMAGE_SUFFIX_LEN]


def normalize_uses(value: CellValue, record: Mapping[str, CellValue]) -> FieldValue:
    """Tool durability: a number, or -1 for unlimited.

    Raises:
        UnexpectedValueError: for any other string
    """
    if value is None or _is_number(value):
        return value
    if value == "Unlimited":
        return UNLIMITED_USES
    # The flimsy fishing rod is the only tool listed with a variable use
    # count; pin it to 9.5 so the field stays numeric.
    if value == "9.5?":
        return 9.5
    raise UnexpectedValueError("uses", value)


def split_source(value: CellValue, record: Mapping[str, CellValue]) -> FieldValue:
    """One entry per line; lines are kept as written."""
    if not isinstance(value, str):
        return value
    return value.split("\n")


VALUE_FORMATTERS: Mapping[str, Formatter] = MappingProxyType({
    "image": extract_image_url,
    "house": extract_image_url,
    "uses": normalize_uses,
    "source": split_source,
})
