"""
Leaderboard session controller.

A LeaderboardSession owns everything that lives for one page session: the
loaded (read-only) datasets, their id lookups, the mutable FilterState and
the two typeaheads (players, classes) that edit it. Every selection change
re-runs filter -> join -> sort -> render over the same immutable data.

open_session() is the single place where load failures are handled.

Usage:
    from src.leaderboard.session import open_session
    session, result = open_session("data")
    if session is not None:
        session.player_picker.input("ali")
        session.player_picker.press_enter()
        result = session.last_result
"""

from dataclasses import dataclass

from src.config import (
    DATA_SOURCE,
    DEFAULT_DISPLAY_MODE,
    DEFAULT_ROW_LIMIT,
    LOAD_FAILED_STATUS,
    SELECTED_PLAYER_FALLBACK,
)
from src.ingestion.loader import DataLoadError, LeaderboardData, load_datasets
from src.leaderboard.filters import FilterState, apply_limit, filter_records
from src.leaderboard.grouping import sort_joined_rows
from src.leaderboard.index import build_id_map, iter_entities
from src.leaderboard.join import join_records
from src.leaderboard.render import Table, build_table, format_status, table_to_html
from src.utils import (
    as_text,
    escape_html,
    setup_logging,
    sort_text,
    validate_display_mode,
    validate_row_limit,
)
from src.widgets.typeahead import Typeahead, TypeaheadItem

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class RenderResult:
    """What the page shows: status line, table markup and matched count."""
    status: str
    html: str
    record_count: int
    ok: bool = True
    table: Table | None = None


def player_items(players) -> list[TypeaheadItem]:
    return [
        TypeaheadItem(player.get("id"), as_text(player.get("name")))
        for player in iter_entities(players)
    ]


def class_items(player_records) -> list[TypeaheadItem]:
    """One item per distinct class (case/whitespace-insensitive), first spelling wins."""
    labels = {}
    for value in player_records["pso_class"].map(as_text).str.strip():
        if value:
            labels.setdefault(value.lower(), value)
    return [TypeaheadItem(key, label) for key, label in labels.items()]


def distinct_values(frame, column: str) -> list[str]:
    """Sorted non-empty distinct values of a column, for select options."""
    values = {value for value in frame[column].map(as_text).unique() if value}
    return sorted(values, key=sort_text)


def load_failure(error: Exception) -> RenderResult:
    """The result shown when the datasets could not be loaded."""
    logger.error(f"{LOAD_FAILED_STATUS}: {error}")
    return RenderResult(
        status=LOAD_FAILED_STATUS,
        html=escape_html(str(error)),
        record_count=0,
        ok=False,
    )


class LeaderboardSession:
    def __init__(
        self,
        data: LeaderboardData,
        display_mode: str = DEFAULT_DISPLAY_MODE,
        limit: int | None = DEFAULT_ROW_LIMIT,
    ):
        validate_display_mode(display_mode)
        validate_row_limit(limit)

        self.data = data
        self.quest_by_id = build_id_map(data.quests)
        self.player_by_id = build_id_map(data.players)

        self.filters = FilterState(limit=limit)
        self.display_mode = display_mode
        self.last_result: RenderResult | None = None

        self.player_picker = Typeahead(
            player_items(data.players),
            selection=self.filters.player_ids,
            on_change=self._selection_changed,
            missing_label=SELECTED_PLAYER_FALLBACK,
        )
        self.class_picker = Typeahead(
            class_items(data.player_records),
            selection=self.filters.classes,
            on_change=self._selection_changed,
        )

    # --- Options for the UI ---
    def meta_options(self) -> list[str]:
        return distinct_values(self.data.records, "meta")

    def category_options(self) -> list[str]:
        return distinct_values(self.data.records, "category")

    def selected_player_names(self) -> list[str]:
        return [chip.label for chip in self.player_picker.chips()]

    # --- Scalar filters ---
    def set_meta(self, meta: str | None) -> RenderResult:
        self.filters.meta = meta or None
        return self.refresh()

    def set_category(self, category: str | None) -> RenderResult:
        self.filters.category = category or None
        return self.refresh()

    def set_pb(self, pb: bool | None) -> RenderResult:
        self.filters.pb = pb
        return self.refresh()

    def set_limit(self, limit: int | None) -> RenderResult:
        validate_row_limit(limit)
        self.filters.limit = limit or None
        return self.refresh()

    def set_display_mode(self, display_mode: str) -> RenderResult:
        validate_display_mode(display_mode)
        self.display_mode = display_mode
        return self.refresh()

    def clear_filters(self) -> RenderResult:
        self.player_picker.close()
        self.class_picker.close()
        self.filters.clear()
        return self.refresh()

    # --- Rendering ---
    def build_table(self) -> tuple[Table, int]:
        """Run the pipeline; returns the table and the matched record count."""
        filtered = filter_records(self.data.records, self.data.player_records, self.filters)
        shown = apply_limit(filtered, self.filters.limit)
        rows = sort_joined_rows(
            join_records(shown, self.data.player_records, self.quest_by_id, self.player_by_id)
        )
        logger.debug(
            f"Filter matched {len(filtered)} of {len(self.data.records)} records, "
            f"{len(rows)} rows rendered"
        )
        return build_table(rows, self.display_mode), len(filtered)

    def render(self) -> RenderResult:
        table, count = self.build_table()
        return RenderResult(
            status=format_status(count, self.selected_player_names(), self.filters),
            html=table_to_html(table),
            record_count=count,
            table=table,
        )

    def refresh(self) -> RenderResult:
        self.last_result = self.render()
        return self.last_result

    def _selection_changed(self, widget: Typeahead) -> None:
        self.refresh()


def open_session(
    source: str = DATA_SOURCE,
    display_mode: str = DEFAULT_DISPLAY_MODE,
    limit: int | None = DEFAULT_ROW_LIMIT,
) -> tuple[LeaderboardSession | None, RenderResult]:
    """
    Load the datasets and render the unfiltered leaderboard.

    Returns:
        (session, result) on success, (None, failure result) if any dataset
        failed to load
    """
    try:
        data = load_datasets(source)
    except DataLoadError as e:
        return None, load_failure(e)

    session = LeaderboardSession(data, display_mode=display_mode, limit=limit)
    return session, session.refresh()
