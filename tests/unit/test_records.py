from __future__ import annotations

import pytest

from nook_data.models.record import InvalidIdentifierError, NormalizedRecord, RawRecord


def test_raw_record_to_dict_puts_source_sheet_first():
    raw = RawRecord("Tops", {"#": 1, "Name": "Tee"})
    assert list(raw.to_dict()) == ["SourceSheet", "#", "Name"]


def test_raw_record_round_trips_cache_form():
    data = {"SourceSheet": "Tops", "#": 1, "Name": "Tee", "Color": None}
    raw = RawRecord.from_dict(data)
    assert raw.source_sheet == "Tops"
    assert dict(raw.cells) == {"#": 1, "Name": "Tee", "Color": None}
    assert raw.to_dict() == data


def test_raw_record_from_dict_requires_source_sheet():
    with pytest.raises(ValueError):
        RawRecord.from_dict({"Name": "Tee"})


def test_raw_record_cells_are_read_only_copy():
    cells = {"Name": "Tee"}
    raw = RawRecord("Tops", cells)
    cells["Name"] = "changed"
    assert raw.cells["Name"] == "Tee"
    with pytest.raises(TypeError):
        raw.cells["Name"] = "x"  # type: ignore[index]


@pytest.mark.parametrize("key", ["", "Name", "sell price", "sell-price", "_x"])
def test_normalized_record_rejects_bad_identifiers(key):
    with pytest.raises(InvalidIdentifierError):
        NormalizedRecord(fields={key: 1})


def test_normalized_record_accessors():
    record = NormalizedRecord(fields={"num": 1, "source": ["A", "B"], "color1": None})
    assert record["num"] == 1
    assert "source" in record
    assert len(record) == 3
    assert record.get("missing") is None
    d = record.to_dict()
    assert d == {"num": 1, "source": ["A", "B"], "color1": None}
    d["source"].append("C")
    assert record["source"] == ["A", "B"]
