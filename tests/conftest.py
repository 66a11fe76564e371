# Shared pytest fixtures
from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Any

import pytest

from nook_data.config.loader import ENV_CREDENTIALS, ENV_SPREADSHEET_ID
from nook_data.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv(ENV_SPREADSHEET_ID, raising=False)
    monkeypatch.delenv(ENV_CREDENTIALS, raising=False)
    reset_logging()
    yield
    reset_logging()
    # .env 読み込みで設定された値を残さない
    os.environ.pop(ENV_SPREADSHEET_ID, None)
    os.environ.pop(ENV_CREDENTIALS, None)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """spreadsheet_id: test-sheet-id
credentials_file: ./creds.json
cache_directory: ./cache
output_directory: ./out
categories:
  items: [Housewares, Tools]
  creatures: [Bugs - North]
  nookMiles: [Nook Miles]
  recipes: [Recipes]
ignored_sheets: [Construction, Achievements, Villagers]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "export.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


class FakeSheetsClient:
    """Stands in for SheetsClient; serves value grids keyed by tab name."""

    def __init__(self, tabs: dict[str, list[list[Any]]]) -> None:
        self.tabs = tabs
        self.calls: list[str] = []

    def fetch_values(self, sheet_name: str) -> list[list[Any]]:
        self.calls.append(sheet_name)
        return self.tabs.get(sheet_name, [])


@pytest.fixture()
def sample_tabs() -> dict[str, list[list[Any]]]:
    return {
        "Housewares": [
            ["#", "Name", "Image", "Sell", "DIY", "Source"],
            [1, "Acoustic Guitar", '=IMAGE("https://img.example/guitar.png")', 8000, "No", "Nook's Cranny"],
            [2, "Anthurium Plant", '=IMAGE("https://img.example/plant.png")', "NFS", "Yes", "Tailor\nAble Sisters"],
        ],
        "Tools": [
            ["#", "Name", "Uses", "Source"],
            [1, "Flimsy Fishing Rod", "9.5?", "Crafting"],
            [2, "Golden Rod", 90, "Crafting"],
            [3, "Wallet", "Unlimited", "Nook's Cranny\nNookazon"],
        ],
        "Bugs - North": [
            ["#", "Name", "Sell", "Jan"],
            [1, "Common Butterfly", 160, "NA"],
        ],
        "Nook Miles": [
            ["#", "Name", "Miles Price"],
            [1, "Bell Voucher", 500],
        ],
        "Recipes": [
            ["#", "Name", "Material 1"],
            [1, "Wooden Chair", "None"],
        ],
    }


@pytest.fixture()
def fake_client(sample_tabs) -> FakeSheetsClient:
    return FakeSheetsClient(sample_tabs)
