"""
Record / participant join.

Produces one JoinedRow per (record, player record) pair, or a single
placeholder row for records nobody is attached to.
"""

from collections import defaultdict
from dataclasses import dataclass

from src.config import NO_PLAYER_LABEL, UNKNOWN_PLAYER_LABEL, UNKNOWN_QUEST_LABEL
from src.leaderboard.index import iter_entities, lookup_name
from src.utils import as_text, is_missing, sort_number


@dataclass(frozen=True)
class JoinedRow:
    """One display row: a record plus (at most) one participant."""
    record: dict
    quest_name: str
    player_record: dict | None
    player_name: str
    pso_class: str
    pov: str

    @property
    def record_id(self):
        return self.record.get("id")

    @property
    def participant_id(self):
        # Placeholder rows sort as participant 0
        if self.player_record is None:
            return 0
        return self.player_record.get("id")


def quest_label(quest_by_id: dict, quest_id) -> str:
    name = lookup_name(quest_by_id, quest_id)
    return UNKNOWN_QUEST_LABEL if is_missing(name) else str(name)


def player_label(player_by_id: dict, player_id) -> str:
    name = lookup_name(player_by_id, player_id)
    if is_missing(name):
        return UNKNOWN_PLAYER_LABEL.format(player_id=as_text(player_id))
    return str(name)


def participants_by_record(player_records) -> dict:
    """Bucket player records by record_id, each bucket sorted by id."""
    buckets = defaultdict(list)
    for pr in iter_entities(player_records):
        buckets[pr.get("record_id")].append(pr)
    for prs in buckets.values():
        prs.sort(key=lambda pr: sort_number(pr.get("id")))
    return buckets


def join_records(records, player_records, quest_by_id: dict, player_by_id: dict) -> list[JoinedRow]:
    """
    Join records with their participants.

    Args:
        records: DataFrame (or iterable of mappings) of records
        player_records: DataFrame (or iterable of mappings) of player records
        quest_by_id: Quest lookup from build_id_map
        player_by_id: Player lookup from build_id_map

    Returns:
        Joined rows in record order, participants by ascending id
    """
    buckets = participants_by_record(player_records)
    rows = []

    for record in iter_entities(records):
        quest_name = quest_label(quest_by_id, record.get("quest_id"))
        prs = buckets.get(record.get("id"), [])

        if not prs:
            rows.append(JoinedRow(
                record=record,
                quest_name=quest_name,
                player_record=None,
                player_name=NO_PLAYER_LABEL,
                pso_class="",
                pov="",
            ))
            continue

        for pr in prs:
            rows.append(JoinedRow(
                record=record,
                quest_name=quest_name,
                player_record=pr,
                player_name=player_label(player_by_id, pr.get("player_id")),
                pso_class=as_text(pr.get("pso_class")),
                pov=as_text(pr.get("pov")),
            ))

    return rows

