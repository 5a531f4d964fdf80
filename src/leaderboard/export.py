"""
Static Leaderboard Export

Renders the unfiltered leaderboard once and writes:
- leaderboard.html: standalone page (status line + grouped table)
- leaderboard.csv: the table's data rows

Usage:
    python -m src.leaderboard.export
    OR
    python src/leaderboard/export.py
"""

import sys
from pathlib import Path

# Enable both `python src/leaderboard/export.py` and `python -m src.leaderboard.export` execution modes.
# This ensures src.config imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from src.config import (
    DATA_SOURCE,
    DEFAULT_DISPLAY_MODE,
    EXPORT_CSV_NAME,
    EXPORT_HTML_NAME,
    EXPORT_PAGE_TITLE,
    OUTPUT_FOLDER,
)
from src.leaderboard.render import table_to_frame
from src.leaderboard.session import RenderResult, open_session
from src.utils import atomic_write_csv, atomic_write_text, escape_html, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

PAGE_CSS = """
body { font-family: system-ui, sans-serif; margin: 1.5rem; }
#status { color: #555; margin-bottom: 0.75rem; }
table.pivot { border-collapse: collapse; width: 100%; font-size: 0.9rem; }
table.pivot th, table.pivot td { padding: 0.3rem 0.6rem; text-align: left; }
table.pivot thead th { border-bottom: 2px solid #333; }
tr.group-label td { font-weight: 700; padding-top: 1rem; }
tr.group-divider td { padding: 0; }
tr.group-divider .bar { height: 2px; background: #FF6B6B; }
"""


def render_page(result: RenderResult, title: str = EXPORT_PAGE_TITLE) -> str:
    """Wrap a render result into a standalone HTML page."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape_html(title)}</title>"
        f"<style>{PAGE_CSS}</style></head><body>"
        f"<h1>{escape_html(title)}</h1>"
        f'<div id="status">{escape_html(result.status)}</div>'
        f'<div id="output">{result.html}</div>'
        "</body></html>\n"
    )


def export_leaderboard(
    source: str = DATA_SOURCE,
    output_folder: Path = OUTPUT_FOLDER,
    display_mode: str = DEFAULT_DISPLAY_MODE,
) -> dict:
    """
    Render the leaderboard and write the HTML page and CSV.

    A load failure still produces a page showing the failure state; no CSV
    is written in that case.

    Args:
        source: Data folder or http(s) base URL
        output_folder: Folder to write the files to
        display_mode: "label" or "divider"

    Returns:
        Dictionary with the written paths
    """
    session, result = open_session(source, display_mode=display_mode)
    written = {}

    html_path = output_folder / EXPORT_HTML_NAME
    atomic_write_text(render_page(result), html_path)
    written['html'] = html_path
    logger.info(f"Leaderboard page: {html_path}")

    if session is not None and result.table is not None:
        csv_path = output_folder / EXPORT_CSV_NAME
        atomic_write_csv(table_to_frame(result.table), csv_path, index=False)
        written['csv'] = csv_path
        logger.info(f"Leaderboard CSV: {csv_path}")

    return written


def main() -> dict:
    """
    Main entry point for the static export.

    Returns:
        Dictionary with the written paths
    """
    logger.info("=" * 60)
    logger.info("Leaderboard Export")
    logger.info("=" * 60)

    written = export_leaderboard()

    logger.info("=" * 60)
    logger.info("Export complete")
    logger.info("=" * 60)

    return written


if __name__ == "__main__":
    main()
