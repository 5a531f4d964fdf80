"""
Grouping and ordering of joined rows.

Rows are grouped by (quest, meta, category, PB) and ordered:
1. group key ascending (case-insensitive collation)
2. within a group: rank, time, record id ascending
3. within a record: participant id, then player name

Missing participants count as id 0; non-numeric rank or time sorts last.
Non-numeric record ids sort after numeric ones, by text, so each record
stays contiguous.
"""

from dataclasses import dataclass
from itertools import groupby

from src.config import (
    GROUP_KEY_DELIMITER,
    GROUP_KEY_NO_PB,
    GROUP_KEY_PB,
    GROUP_LABEL_SEPARATOR,
    NO_PB_LABEL,
    PB_LABEL,
)
from src.leaderboard.join import JoinedRow
from src.utils import as_text, sort_number, sort_text


def pb_text(record: dict) -> str:
    return PB_LABEL if record.get("pb") else NO_PB_LABEL


def group_key(record: dict, quest_name: str) -> str:
    """
    Composite key identifying a leaderboard section.

    The parts are joined with GROUP_KEY_DELIMITER without escaping, so a
    meta or category containing the delimiter may collide with another
    section. Inputs are expected not to contain it.
    """
    return GROUP_KEY_DELIMITER.join([
        quest_name,
        as_text(record.get("meta")),
        as_text(record.get("category")),
        GROUP_KEY_PB if record.get("pb") else GROUP_KEY_NO_PB,
    ])


def group_label(record: dict, quest_name: str) -> str:
    """Human-readable section title: quest, category, meta, PB."""
    return GROUP_LABEL_SEPARATOR.join([
        quest_name,
        as_text(record.get("category")),
        as_text(record.get("meta")),
        pb_text(record),
    ])


def row_group_key(row: JoinedRow) -> str:
    return group_key(row.record, row.quest_name)


def row_sort_key(row: JoinedRow) -> tuple:
    record = row.record
    return (
        sort_text(row_group_key(row)),
        sort_number(record.get("rank")),
        sort_number(record.get("time")),
        sort_number(row.record_id),
        sort_text(as_text(row.record_id)),
        sort_number(row.participant_id),
        sort_text(row.player_name),
    )


def sort_joined_rows(rows: list[JoinedRow]) -> list[JoinedRow]:
    """Total, stable order over joined rows (see module docstring)."""
    return sorted(rows, key=row_sort_key)


@dataclass(frozen=True)
class AnnotatedRow:
    row: JoinedRow
    is_first_in_record: bool
    is_first_in_group: bool


def annotate_rows(rows: list[JoinedRow]) -> list[AnnotatedRow]:
    """
    Mark the first row of each group and of each record within its group.

    This is the only stateful scan in the pipeline; rows must already be
    sorted so groups and records are contiguous.
    """
    annotated = []
    last_group = None
    last_record_id = None

    for row in rows:
        key = row_group_key(row)
        first_in_group = key != last_group
        if first_in_group:
            last_group = key
            last_record_id = None

        first_in_record = first_in_group or row.record_id != last_record_id
        last_record_id = row.record_id

        annotated.append(AnnotatedRow(row, first_in_record, first_in_group))

    return annotated


def partition_groups(rows: list[JoinedRow]) -> list[tuple[str, list[JoinedRow]]]:
    """Split sorted rows into contiguous (group key, rows) runs."""
    return [(key, list(group)) for key, group in groupby(rows, key=row_group_key)]
