"""Normalization pipeline for raw spreadsheet rows."""

from .formatters import VALUE_FORMATTERS, UnexpectedValueError
from .keys import camel_case, normalize_key, normalize_keys
from .normalizer import normalize_data, normalize_record, normalize_value

__all__ = [
    "VALUE_FORMATTERS",
    "UnexpectedValueError",
    "camel_case",
    "normalize_key",
    "normalize_keys",
    "normalize_data",
    "normalize_record",
    "normalize_value",
]
