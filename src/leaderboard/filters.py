"""
Record filtering.

A record passes when it satisfies every active predicate category:
- players: at least one participant is one of the selected players
- classes: at least one participant plays one of the selected classes
- meta / category: exact match on the raw value
- pb: personal-best flag equals the requested value

Unset categories impose no constraint.
"""

from dataclasses import dataclass, field

import pandas as pd

from src.utils import normalize, validate_row_limit


@dataclass
class FilterState:
    """Mutable filter selections, owned by the session controller."""
    player_ids: set = field(default_factory=set)
    classes: set = field(default_factory=set)
    meta: str | None = None
    category: str | None = None
    pb: bool | None = None
    limit: int | None = None

    @property
    def is_active(self) -> bool:
        """True if any predicate narrows the record set (the limit does not)."""
        return bool(
            self.player_ids
            or self.classes
            or self.meta
            or self.category
            or self.pb is not None
        )

    def clear(self) -> None:
        """Reset every predicate; the sets are cleared in place."""
        self.player_ids.clear()
        self.classes.clear()
        self.meta = None
        self.category = None
        self.pb = None


def matching_record_ids(player_records: pd.DataFrame, player_ids=None, classes=None) -> set:
    """
    Record ids with at least one participant matching the selection.

    Args:
        player_records: Player records DataFrame
        player_ids: Selected player ids (any-of)
        classes: Selected class names (any-of, trimmed and lowercased)

    Returns:
        Set of record ids
    """
    mask = pd.Series(False, index=player_records.index)

    if player_ids:
        mask |= player_records["player_id"].isin(player_ids)

    if classes:
        wanted = {normalize(c) for c in classes}
        mask |= player_records["pso_class"].map(normalize).isin(wanted)

    return set(player_records.loc[mask, "record_id"])


def filter_records(records: pd.DataFrame, player_records: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """
    Narrow records to those passing every active predicate.

    Args:
        records: Records DataFrame
        player_records: Player records DataFrame
        state: Current filter selections

    Returns:
        Filtered records, input order preserved
    """
    mask = pd.Series(True, index=records.index)

    if state.player_ids:
        ids = matching_record_ids(player_records, player_ids=state.player_ids)
        mask &= records["id"].isin(ids)

    if state.classes:
        ids = matching_record_ids(player_records, classes=state.classes)
        mask &= records["id"].isin(ids)

    if state.meta:
        mask &= records["meta"] == state.meta

    if state.category:
        mask &= records["category"] == state.category

    if state.pb is not None:
        mask &= records["pb"] == state.pb

    return records.loc[mask]


def apply_limit(records: pd.DataFrame, limit: int | None) -> pd.DataFrame:
    """First `limit` records in input order; None or 0 keeps everything."""
    validate_row_limit(limit)
    if not limit:
        return records
    return records.head(limit)
