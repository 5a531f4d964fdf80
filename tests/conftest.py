"""
Shared fixtures: a small mixed-team leaderboard.

Records (group order after sorting):
    r4  unknown quest, no participants
    r1  Forest/Ultimate/4P/PB rank 1: Alice (RAcast), Alan (FOnewearl)
    r2  Forest/Ultimate/4P/PB rank 2: Alice (HUmar), Bob ("RAcast ")
    r3  Mine/Normal/1P/No-PB: Alan (HUmar)
    r5  Mine/Normal/2P/PB: O'Brien <3> (racast), unknown player 9 (FOmar)
"""

import json

import pytest

from src.config import DATASET_FILES, ENTITY_COLUMNS
from src.ingestion.loader import LeaderboardData, to_frame


TEAM_RAW = {
    "quests": [
        {"id": 1, "name": "Forest"},
        {"id": 2, "name": "Mine"},
    ],
    "players": [
        {"id": 1, "name": "Alice"},
        {"id": 2, "name": "Alan"},
        {"id": 3, "name": "Bob"},
        {"id": 4, "name": "O'Brien <3>"},
    ],
    "records": [
        {"id": 1, "quest_id": 1, "meta": "Ultimate", "category": "4P", "pb": True, "time": 454, "rank": 1},
        {"id": 2, "quest_id": 1, "meta": "Ultimate", "category": "4P", "pb": True, "time": 500, "rank": 2},
        {"id": 3, "quest_id": 2, "meta": "Normal", "category": "1P", "pb": False, "time": 300, "rank": 1},
        {"id": 4, "quest_id": 9, "meta": "Ultimate", "category": "1P", "pb": False, "time": -60, "rank": 1},
        {"id": 5, "quest_id": 2, "meta": "Normal", "category": "2P", "pb": True, "time": 400, "rank": 1},
    ],
    "player_records": [
        {"id": 2, "record_id": 1, "player_id": 2, "pso_class": "FOnewearl", "pov": ""},
        {"id": 1, "record_id": 1, "player_id": 1, "pso_class": "RAcast", "pov": ""},
        {"id": 3, "record_id": 2, "player_id": 1, "pso_class": "HUmar", "pov": ""},
        {"id": 4, "record_id": 2, "player_id": 3, "pso_class": "RAcast ", "pov": ""},
        {"id": 5, "record_id": 3, "player_id": 2, "pso_class": "HUmar", "pov": ""},
        {"id": 6, "record_id": 5, "player_id": 4, "pso_class": "racast", "pov": "http://pov.example/run?a=1&b=2"},
        {"id": 7, "record_id": 5, "player_id": 9, "pso_class": "FOmar", "pov": "notes <b>"},
    ],
}


def build_data(records=(), quests=(), player_records=(), players=()) -> LeaderboardData:
    """LeaderboardData built through the loader's defaulting."""
    return LeaderboardData(
        records=to_frame(list(records), ENTITY_COLUMNS["records"]),
        quests=to_frame(list(quests), ENTITY_COLUMNS["quests"]),
        player_records=to_frame(list(player_records), ENTITY_COLUMNS["player_records"]),
        players=to_frame(list(players), ENTITY_COLUMNS["players"]),
    )


def write_dataset(folder, raw: dict) -> None:
    folder.mkdir(parents=True, exist_ok=True)
    for name, filename in DATASET_FILES.items():
        (folder / filename).write_text(json.dumps(raw.get(name, [])), encoding="utf-8")


@pytest.fixture
def make_data():
    return build_data


@pytest.fixture
def team_data():
    return build_data(**TEAM_RAW)


@pytest.fixture
def data_folder(tmp_path):
    folder = tmp_path / "data"
    write_dataset(folder, TEAM_RAW)
    return folder
