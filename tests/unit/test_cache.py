from __future__ import annotations

import json
from pathlib import Path

from nook_data.models.record import RawRecord
from nook_data.sheets.cache import cache_path, load_cache, write_cache, write_json


def test_cache_path(tmp_path: Path):
    assert cache_path(tmp_path, "nookMiles") == tmp_path / "nookMiles.json"


def test_load_cache_missing_is_miss(tmp_path: Path):
    assert load_cache(tmp_path / "items.json") is None


def test_write_then_load_cache(tmp_path: Path):
    path = tmp_path / "cache" / "items.json"
    records = [
        RawRecord("Tops", {"#": 1, "Name": "Tee"}),
        RawRecord("Bags", {"#": 1, "Name": "Tote", "Color": None}),
    ]
    write_cache(path, records)
    text = path.read_text(encoding="utf-8")
    assert text.startswith('[\n  {\n    "SourceSheet": "Tops"')
    assert load_cache(path) == records


def test_load_cache_malformed_is_miss(tmp_path: Path):
    path = tmp_path / "items.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_cache(path) is None
    path.write_text('{"a": 1}', encoding="utf-8")
    assert load_cache(path) is None
    path.write_text('[{"Name": "no provenance"}]', encoding="utf-8")
    assert load_cache(path) is None


def test_write_json_keeps_unicode_and_indent(tmp_path: Path):
    path = write_json(tmp_path / "out" / "items.json", [{"name": "Crème"}])
    text = path.read_text(encoding="utf-8")
    assert "Crème" in text
    assert text == '[\n {\n  "name": "Crème"\n }\n]'
    assert json.loads(text) == [{"name": "Crème"}]
