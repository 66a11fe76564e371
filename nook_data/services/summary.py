from __future__ import annotations

from ..models.export_result import ExportResult

"""SUMMARY line rendering for the spreadsheet export."""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # 指数表記を避ける
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}"


def render_summary_line(total_categories: int, result: ExportResult) -> str:
    """Render the SUMMARY line for a finished run.

    Format:
    SUMMARY categories={done}/{total} records={records} sheets={sheets}
    cached={cached} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2023, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(4, ExportResult(start_time=t, end_time=t, elapsed_seconds=0))
        'SUMMARY categories=0/4 records=0 sheets=0 cached=0 elapsed_sec=0'
    """
    return (
        f"SUMMARY categories={len(result.category_stats)}/{total_categories} "
        f"records={result.total_records} "
        f"sheets={result.total_sheets} "
        f"cached={result.cached_categories} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
