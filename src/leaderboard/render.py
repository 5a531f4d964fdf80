"""
Leaderboard table rendering.

The table is built in two steps: build_table() turns sorted joined rows into
a structured Table of plain-text cells, and table_to_html() escapes and
emits the markup. Record-level columns are only filled on the first row of
each record, which gives a merged-cell look without rowspan.
"""

from dataclasses import dataclass

import pandas as pd

from src.config import (
    DEFAULT_DISPLAY_MODE,
    RECORD_COLUMNS,
    TABLE_CLASS,
    TABLE_HEADERS,
)
from src.leaderboard.filters import FilterState, apply_limit
from src.leaderboard.grouping import annotate_rows, group_label, pb_text, sort_joined_rows
from src.leaderboard.join import JoinedRow, join_records
from src.utils import as_text, escape_html, format_time, is_pov_url, validate_display_mode

ROW_LABEL = "label"
ROW_DIVIDER = "divider"
ROW_DATA = "data"


@dataclass(frozen=True)
class TableRow:
    kind: str
    cells: tuple[str, ...] = ()


@dataclass(frozen=True)
class Table:
    headers: tuple[str, ...]
    rows: tuple[TableRow, ...]

    @property
    def data_rows(self) -> list[TableRow]:
        return [row for row in self.rows if row.kind == ROW_DATA]


def data_cells(row: JoinedRow, is_first_in_record: bool) -> tuple[str, ...]:
    record = row.record
    values = {
        "Quest": row.quest_name,
        "Meta": as_text(record.get("meta")),
        "Category": as_text(record.get("category")),
        "PB": pb_text(record),
        "Time": format_time(record.get("time")),
        "Rank": as_text(record.get("rank")),
        "Player": row.player_name,
        "Class": row.pso_class,
        "POV": row.pov,
    }
    if not is_first_in_record:
        for column in RECORD_COLUMNS:
            values[column] = ""
    return tuple(values[h] for h in TABLE_HEADERS)


def build_table(rows: list[JoinedRow], display_mode: str = DEFAULT_DISPLAY_MODE) -> Table:
    """
    Build the structured table from sorted joined rows.

    Args:
        rows: Joined rows, already in display order
        display_mode: "label" for label + divider rows at each group change,
            "divider" for the divider alone

    Returns:
        Table of plain-text cells (not yet escaped)
    """
    validate_display_mode(display_mode)
    body = []

    for item in annotate_rows(rows):
        if item.is_first_in_group:
            if display_mode == ROW_LABEL:
                body.append(TableRow(ROW_LABEL, (group_label(item.row.record, item.row.quest_name),)))
            body.append(TableRow(ROW_DIVIDER))
        body.append(TableRow(ROW_DATA, data_cells(item.row, item.is_first_in_record)))

    return Table(headers=TABLE_HEADERS, rows=tuple(body))


def format_pov(pov: str) -> str:
    """Anchor for http(s) links, escaped plain text otherwise."""
    if pov and is_pov_url(pov):
        href = escape_html(pov)
        return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{href}</a>'
    return escape_html(pov)


def _row_html(row: TableRow, colspan: int) -> str:
    if row.kind == ROW_LABEL:
        return f'<tr class="group-label"><td colspan="{colspan}">{escape_html(row.cells[0])}</td></tr>'
    if row.kind == ROW_DIVIDER:
        return f'<tr class="group-divider"><td colspan="{colspan}"><div class="bar"></div></td></tr>'

    tds = []
    for header, value in zip(TABLE_HEADERS, row.cells):
        content = format_pov(value) if header == "POV" else escape_html(value)
        tds.append(f"<td>{content}</td>")
    return f"<tr>{''.join(tds)}</tr>"


def table_to_html(table: Table) -> str:
    """Emit the table markup; every cell is escaped."""
    colspan = len(table.headers)
    thead = "<thead><tr>" + "".join(f"<th>{escape_html(h)}</th>" for h in table.headers) + "</tr></thead>"
    tbody = "<tbody>" + "".join(_row_html(row, colspan) for row in table.rows) + "</tbody>"
    return f'<table class="{TABLE_CLASS}">{thead}{tbody}</table>'


def table_to_frame(table: Table) -> pd.DataFrame:
    """Data rows as a DataFrame with the table headers as columns."""
    return pd.DataFrame([row.cells for row in table.data_rows], columns=list(table.headers))


def render_grouped_table(
    records,
    quest_by_id: dict,
    player_records,
    player_by_id: dict,
    limit: int | None = None,
    display_mode: str = DEFAULT_DISPLAY_MODE,
) -> str:
    """
    Join, sort and render records as a grouped HTML table.

    Args:
        records: Records DataFrame, already filtered
        quest_by_id: Quest lookup
        player_records: Player records DataFrame
        player_by_id: Player lookup
        limit: Only render the first `limit` records (None or 0 = all)
        display_mode: "label" or "divider"

    Returns:
        HTML table markup
    """
    records = apply_limit(records, limit)
    rows = sort_joined_rows(join_records(records, player_records, quest_by_id, player_by_id))
    return table_to_html(build_table(rows, display_mode))


def format_status(count: int, player_names: list[str], state: FilterState) -> str:
    """
    One-line summary of the active filters and the matched record count.

    Examples:
        "Showing 12 records"
        "Filtered to 3 records for Alice, Bob"
        "Filtered to 1 records for Alice | class: ranger | PB"
    """
    if not state.is_active:
        return f"Showing {count} records"

    parts = []
    if player_names:
        parts.append(", ".join(player_names))
    if state.classes:
        parts.append("class: " + ", ".join(sorted(state.classes)))
    if state.meta:
        parts.append(f"meta: {state.meta}")
    if state.category:
        parts.append(f"category: {state.category}")
    if state.pb is not None:
        parts.append(pb_text({"pb": state.pb}))

    return f"Filtered to {count} records for " + " | ".join(parts)
