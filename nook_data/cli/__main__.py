from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from nook_data.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ExportConfig, load_config
from nook_data.logging.init import log_summary, setup_logging
from nook_data.models.category import Category
from nook_data.services.orchestrator import ExportError, export_all
from nook_data.services.provider import SheetsProvider
from nook_data.services.summary import render_summary_line
from nook_data.sheets.client import SheetFetchError

"""CLI entrypoint.

Flow:
- Load .env, then config/export.yml
- Export every category (cache or spreadsheet -> normalized JSON)
- Print the SUMMARY line

Exit codes: 0 on success, 1 on any fatal error (config, fetch, unexpected
cell value). There is no partial-success code: the first error stops the run.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so NOOK_SPREADSHEET_ID / GOOGLE_APPLICATION_CREDENTIALS take precedence."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Export game reference spreadsheet tabs to normalized JSON")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ExportConfig) -> int:
    provider = SheetsProvider(cfg)
    for category in Category:
        if category not in cfg.categories:
            continue
        try:
            batch = provider.load(category)
        except SheetFetchError as e:
            print(f"inspect: {category.value} fetch_error: {e}")
            return EXIT_FATAL
        print(f"CATEGORY: {category.value} rows={len(batch.records)} cached={batch.from_cache}")
        for sheet in batch.sheet_names:
            rows = [r for r in batch.records if r.source_sheet == sheet]
            labels = list(rows[0].cells) if rows else []
            print(f"  SHEET: {sheet} rows={len(rows)} cols={labels}")
            for r in rows[:INSPECT_SAMPLE_ROWS]:
                print("    sample_row=", json.dumps(r.to_dict(), ensure_ascii=False))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # [] を渡された場合に sys.argv が混入しないよう None のときだけ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.debug else logging.INFO)
    logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = export_all(cfg)
    except ExportError as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(len(cfg.categories), result)
    # log_summary が "SUMMARY " を付与するため除去
    log_summary(summary_line.removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
