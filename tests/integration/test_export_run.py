from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

from nook_data.cli import main as cli_main

"""End-to-end export: CLI -> Sheets API (mocked service) -> cache -> normalized JSON."""


def _fake_service(tabs: dict[str, list[list[Any]]]) -> MagicMock:
    service = MagicMock()

    def _get(spreadsheetId: str, range: str, valueRenderOption: str) -> MagicMock:
        assert spreadsheetId == "test-sheet-id"
        assert valueRenderOption == "FORMULA"
        name = range.strip("'").replace("''", "'")
        request = MagicMock()
        request.execute.return_value = {"values": tabs[name]} if name in tabs else {}
        return request

    service.spreadsheets.return_value.values.return_value.get.side_effect = _get
    return service


def test_full_export_from_spreadsheet_then_cache(write_config, temp_workdir: Path, sample_tabs, capsys):
    service = _fake_service(sample_tabs)
    with patch("nook_data.services.provider.build_sheets_service", return_value=service) as build:
        code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0, out
    build.assert_called_once_with(Path("./creds.json"))
    assert "SUMMARY categories=4/4 records=8 sheets=5 cached=0" in out

    out_dir = temp_workdir / "out"
    items = json.loads((out_dir / "items.json").read_text(encoding="utf-8"))
    assert [i["name"] for i in items] == [
        "Acoustic Guitar", "Anthurium Plant", "Flimsy Fishing Rod", "Golden Rod", "Wallet",
    ]
    assert items[-1] == {
        "sourceSheet": "Tools",
        "num": 3,
        "name": "Wallet",
        "uses": -1,
        "source": ["Nook's Cranny", "Nookazon"],
    }
    nook_miles = json.loads((out_dir / "nookMiles.json").read_text(encoding="utf-8"))
    assert nook_miles == [{"sourceSheet": "Nook Miles", "num": 1, "name": "Bell Voucher", "milesPrice": 500}]

    # 2 回目はキャッシュのみで完結し、認証情報も不要
    with patch("nook_data.services.provider.build_sheets_service") as build_again:
        code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    build_again.assert_not_called()
    assert "cached=4" in out
    assert json.loads((out_dir / "items.json").read_text(encoding="utf-8")) == items


def test_raw_cache_is_not_modified_by_normalization(write_config, temp_workdir: Path, sample_tabs):
    with patch("nook_data.services.provider.build_sheets_service", return_value=_fake_service(sample_tabs)):
        assert cli_main([]) == 0
    cache = json.loads((temp_workdir / "cache" / "items.json").read_text(encoding="utf-8"))
    raw_out = json.loads((temp_workdir / "out" / "items-raw.json").read_text(encoding="utf-8"))
    assert cache == raw_out
    assert cache[1]["Sell"] == "NFS"
    assert cache[1]["Source"] == "Tailor\nAble Sisters"
