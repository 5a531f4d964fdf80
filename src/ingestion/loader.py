"""
Leaderboard Dataset Loader

This module loads the four leaderboard datasets (records, quests,
player_records, players) from a local folder or an http(s) base URL and
turns them into pandas DataFrames with every expected column present.

All four files are fetched concurrently and awaited jointly: if any one of
them fails, the whole load fails with a single DataLoadError.

Usage:
    python -m src.ingestion.loader
    OR
    from src.ingestion.loader import load_datasets
    data = load_datasets("data")
"""

import sys
from pathlib import Path

# Enable both `python src/ingestion/loader.py` and `python -m src.ingestion.loader` execution modes.
# This ensures src.config imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pandas as pd
import requests

from src.config import DATA_SOURCE, DATASET_FILES, ENTITY_COLUMNS, FETCH_TIMEOUT
from src.utils import is_missing, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-store"}


class DataLoadError(Exception):
    """Raised when any of the required datasets cannot be loaded"""
    pass


@dataclass
class LeaderboardData:
    """The four loaded collections, read-only for the rest of the session."""
    records: pd.DataFrame
    quests: pd.DataFrame
    player_records: pd.DataFrame
    players: pd.DataFrame


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def resolve_location(source: str, filename: str) -> str:
    """Join a data source (folder or base URL) with a dataset file name."""
    if is_url(source):
        return f"{source.rstrip('/')}/{filename}"
    return str(Path(source) / filename)


def fetch_json(url: str, timeout: int = FETCH_TIMEOUT):
    """
    Fetch and decode one JSON document over http(s).

    Raises:
        DataLoadError: On network failure, non-2xx status or invalid JSON
    """
    try:
        resp = requests.get(url, headers=NO_CACHE_HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise DataLoadError(f"{url} -> {e}") from e

    if not resp.ok:
        raise DataLoadError(f"{url} -> {resp.status_code} {resp.reason}")

    try:
        return resp.json()
    except ValueError as e:
        raise DataLoadError(f"{url} -> invalid JSON: {e}") from e


def read_json_file(path: Path):
    """
    Read and decode one JSON file.

    Raises:
        DataLoadError: If the file is missing, unreadable or not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DataLoadError(f"{path} -> file not found") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataLoadError(f"{path} -> invalid JSON: {e}") from e
    except OSError as e:
        raise DataLoadError(f"{path} -> {e}") from e


def load_json(location: str, timeout: int = FETCH_TIMEOUT) -> list:
    """
    Load one dataset and check that it is a JSON array.

    Args:
        location: File path or http(s) URL
        timeout: Request timeout in seconds (http(s) only)

    Returns:
        The decoded list of entities
    """
    if is_url(location):
        payload = fetch_json(location, timeout=timeout)
    else:
        payload = read_json_file(Path(location))

    if not isinstance(payload, list):
        raise DataLoadError(
            f"{location} -> expected a JSON array, got {type(payload).__name__}"
        )
    return payload


def to_frame(rows: list, columns: dict) -> pd.DataFrame:
    """
    Build an entity DataFrame with every expected column present.

    Values are kept as the raw JSON objects (object dtype) so ids stay ints
    and names stay strings. Columns with a default get missing values
    replaced; the rest keep NaN and degrade at display time.

    Args:
        rows: Decoded JSON array of flat objects
        columns: Mapping of column name -> default (None = no default)

    Returns:
        DataFrame with exactly the expected columns, in order
    """
    dicts = [row if isinstance(row, dict) else {} for row in rows]
    df = pd.DataFrame(dicts, columns=list(columns), dtype=object)

    for col, default in columns.items():
        if default is None:
            continue
        df[col] = df[col].map(lambda value, default=default: default if is_missing(value) else value)

    if "pb" in df.columns:
        df["pb"] = df["pb"].map(bool).astype(object)

    return df


def load_datasets(source: str = DATA_SOURCE, timeout: int = FETCH_TIMEOUT) -> LeaderboardData:
    """
    Load all four datasets concurrently.

    Args:
        source: Local folder or http(s) base URL holding the JSON files
        timeout: Request timeout in seconds (http(s) only)

    Returns:
        LeaderboardData with one DataFrame per dataset

    Raises:
        DataLoadError: If any dataset fails to load (no partial result)
    """
    logger.info(f"Loading datasets from {source}")

    with ThreadPoolExecutor(max_workers=len(DATASET_FILES)) as executor:
        futures = {
            name: executor.submit(load_json, resolve_location(source, filename), timeout)
            for name, filename in DATASET_FILES.items()
        }
        # result() re-raises the first failure in dataset order
        raw = {name: future.result() for name, future in futures.items()}

    frames = {name: to_frame(raw[name], ENTITY_COLUMNS[name]) for name in DATASET_FILES}

    for name, df in frames.items():
        logger.info(f"  {name}: {len(df)} rows")

    return LeaderboardData(**frames)


def main() -> LeaderboardData:
    """
    Load the configured data source and log a summary.

    Returns:
        The loaded LeaderboardData
    """
    logger.info("=" * 60)
    logger.info("Leaderboard Dataset Loader")
    logger.info("=" * 60)

    data = load_datasets(DATA_SOURCE)

    records = data.records
    logger.info("Summary:")
    logger.info(f"  Records: {len(records)} ({int(records['pb'].sum())} PB)")
    logger.info(f"  Quests: {len(data.quests)}")
    logger.info(f"  Players: {len(data.players)}")
    logger.info(f"  Player records: {len(data.player_records)}")

    return data


if __name__ == "__main__":
    main()
