"""
Data Ingestion

Modules:
- loader: Load the four leaderboard JSON datasets into DataFrames
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "load_datasets":
        from src.ingestion.loader import load_datasets
        return load_datasets
    if name == "DataLoadError":
        from src.ingestion.loader import DataLoadError
        return DataLoadError
    if name == "LeaderboardData":
        from src.ingestion.loader import LeaderboardData
        return LeaderboardData
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
