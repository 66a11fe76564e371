from __future__ import annotations

import logging
import re
import unicodedata

from ..models.record import CellValue, RawRecord

"""Header label -> field identifier conversion.

camel_case follows lodash's camelCase word splitting so that identifiers
stay stable with files produced by earlier exports:

    "Sell Price"      -> "sellPrice"
    "HHA Base Points" -> "hhaBasePoints"
    "SourceSheet"     -> "sourceSheet"
    "Color 1"         -> "color1"
"""

__all__ = [
    "NUM_LABEL",
    "NUM_IDENTIFIER",
    "camel_case",
    "normalize_key",
    "normalize_keys",
]

logger = logging.getLogger(__name__)

NUM_LABEL = "#"
NUM_IDENTIFIER = "num"

_APOSTROPHE_RE = re.compile(r"['’]")

_WORD_RE = re.compile(
    r"""
    [A-Z]?[a-z]+(?=[^a-zA-Z0-9]|[A-Z]|$)         # Word before a break or capital
    |[A-Z]+(?=[^a-zA-Z0-9]|[A-Z][a-z]|$)         # ACRONYM before a break or Word
    |[A-Z]?[a-z]+                                # Word before digits
    |[A-Z]+                                      # ACRONYM before digits
    |\d*(?:1ST|2ND|3RD|(?![123])\dTH)(?=\b|[a-z_])
    |\d*(?:1st|2nd|3rd|(?![123])\dth)(?=\b|[A-Z_])
    |\d+
    """,
    re.VERBOSE | re.ASCII,  # 非 ASCII の数字も区切り扱い
)


def _deburr(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def camel_case(text: str) -> str:
    """Convert arbitrary header text to lowerCamelCase.

    Apostrophes are dropped before splitting ("Nook's" -> "nooks"); any other
    non-alphanumeric character separates words. Text without words yields "".
    """
    words = _WORD_RE.findall(_APOSTROPHE_RE.sub("", _deburr(text)))
    if not words:
        return ""
    head, *rest = (w.lower() for w in words)
    return head + "".join(w.capitalize() for w in rest)


def normalize_key(label: str) -> str:
    # camel_case("#") は空文字になるため固定で num に置換
    if label == NUM_LABEL:
        return NUM_IDENTIFIER
    return camel_case(label)


def normalize_keys(record: RawRecord, reported: set[tuple[str, ...]] | None = None) -> dict[str, CellValue]:
    """Re-key a raw record by field identifier, preserving label order.

    Two labels that map to the same identifier resolve last-write-wins; the
    collision is logged at WARN. Labels with no usable identifier (blank
    header cells, pure punctuation) are dropped with a WARN.

    Parameters:
        record: Raw row
        reported: Warnings already emitted for this batch. Header problems
            repeat on every row of a tab, so each one is logged once per set.
    """
    if reported is None:
        reported = set()
    keyed: dict[str, CellValue] = {}
    origin: dict[str, str] = {}
    for label, value in record.items():
        label = str(label)
        key = normalize_key(label)
        if not key:
            warning = ("dropped", record.source_sheet, label)
            if warning not in reported:
                reported.add(warning)
                logger.warning(
                    f"sheet={record.source_sheet} dropping column with unusable header label {label!r}"
                )
            continue
        if key in keyed:
            warning = ("collision", record.source_sheet, origin[key], label)
            if warning not in reported:
                reported.add(warning)
                logger.warning(
                    f"sheet={record.source_sheet} header {label!r} collides with "
                    f"{origin[key]!r} as '{key}' (last value wins)"
                )
        keyed[key] = value
        origin[key] = label
    return keyed
