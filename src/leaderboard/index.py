"""
Id lookups for quests and players.
"""

from collections.abc import Iterable, Mapping

import pandas as pd


def iter_entities(items) -> Iterable[dict]:
    """Yield entities as dicts from a DataFrame or an iterable of mappings."""
    if isinstance(items, pd.DataFrame):
        return items.to_dict("records")
    return (dict(item) for item in items)


def build_id_map(items) -> dict:
    """
    Map each entity's id to the entity.

    Duplicate ids are not an error: the last one wins.

    Args:
        items: DataFrame or iterable of mappings with an 'id' field

    Returns:
        Dict of id -> entity dict
    """
    id_map = {}
    for item in iter_entities(items):
        id_map[item.get("id")] = item
    return id_map


def lookup_name(id_map: Mapping, entity_id):
    """Name of the entity with this id, or None if unresolved."""
    entity = id_map.get(entity_id)
    if entity is None:
        return None
    return entity.get("name")
