"""
Leaderboard Pipeline

Modules:
- index: Id lookups for quests and players
- join: One row per (record, participant)
- filters: Filter state and record selection
- grouping: Group keys, ordering and first-row marking
- render: Structured table, HTML and status line
- session: Session controller and top-level error handling
- export: Static HTML/CSV export
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "LeaderboardSession":
        from src.leaderboard.session import LeaderboardSession
        return LeaderboardSession
    if name == "open_session":
        from src.leaderboard.session import open_session
        return open_session
    if name == "render_grouped_table":
        from src.leaderboard.render import render_grouped_table
        return render_grouped_table
    if name == "run_export":
        from src.leaderboard.export import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
