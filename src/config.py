"""
Central configuration for the PSO Records Leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
OUTPUT_FOLDER = DATA_FOLDER / "processed"

# --- Data Source ---
# Either a local folder or an http(s) base URL holding the four JSON files
DATA_SOURCE = str(DATA_FOLDER)
FETCH_TIMEOUT = 30  # Seconds, only used for http(s) sources

DATASET_FILES = {
    "records": "records.json",
    "quests": "quests.json",
    "player_records": "player_records.json",
    "players": "players.json",
}

# Column defaults applied on load (None = leave missing)
ENTITY_COLUMNS = {
    "records": {
        "id": None,
        "quest_id": None,
        "meta": "",
        "category": "",
        "pb": False,
        "time": None,
        "rank": None,
    },
    "quests": {"id": None, "name": None},
    "player_records": {
        "id": None,
        "record_id": None,
        "player_id": None,
        "pso_class": "",
        "pov": "",
    },
    "players": {"id": None, "name": None},
}

# --- Table Layout ---
TABLE_HEADERS = ("Quest", "Meta", "Category", "PB", "Time", "Rank", "Player", "Class", "POV")
RECORD_COLUMNS = ("Quest", "Meta", "Category", "PB", "Time", "Rank")
TABLE_CLASS = "pivot"

# Display modes: "label" renders group label + divider rows, "divider" only the divider
DISPLAY_MODES = frozenset({"label", "divider"})
DEFAULT_DISPLAY_MODE = "label"
DEFAULT_ROW_LIMIT = None  # None = show every record

# --- Labels ---
UNKNOWN_QUEST_LABEL = "(unknown quest)"
NO_PLAYER_LABEL = "(none found)"
UNKNOWN_PLAYER_LABEL = "(unknown player {player_id})"
SELECTED_PLAYER_FALLBACK = "Player {key}"
PB_LABEL = "PB"
NO_PB_LABEL = "No-PB"
REMAINING_SUFFIX = " Remaining"
LOAD_FAILED_STATUS = "Failed to load data"

# --- Grouping ---
# Joined without escaping: a meta/category containing "||" can collide
GROUP_KEY_DELIMITER = "||"
GROUP_KEY_PB = "PB"
GROUP_KEY_NO_PB = "NoPB"
GROUP_LABEL_SEPARATOR = " — "

# --- Typeahead ---
MAX_SUGGESTIONS = 10

# --- Export ---
EXPORT_HTML_NAME = "leaderboard.html"
EXPORT_CSV_NAME = "leaderboard.csv"
EXPORT_PAGE_TITLE = "PSO Records Leaderboard"
