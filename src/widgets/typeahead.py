"""
Multi-select typeahead.

A UI-agnostic state machine behind the "search and add as chip" filters.
The UI layer forwards events (text input, suggestion click, Enter, Escape,
click outside, chip removal) and reads back `state`, `suggestions` and
`chips()` to draw itself.

States:
    IDLE        no suggestions shown
    SUGGESTING  dropdown open with up to MAX_SUGGESTIONS matches
    COMMITTED   an item was just added; listeners run in this state,
                then the widget returns to IDLE with the input cleared

The selection is a set of opaque keys shared with the owner (usually a
FilterState set), so adding or removing a chip mutates the owner's state
directly. `on_change(widget)` runs after every selection change.
"""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import Enum

from src.config import MAX_SUGGESTIONS
from src.utils import normalize, sort_text


class TypeaheadState(Enum):
    IDLE = "idle"
    SUGGESTING = "suggesting"
    COMMITTED = "committed"


@dataclass(frozen=True)
class TypeaheadItem:
    key: Hashable
    label: str


class Typeahead:
    def __init__(
        self,
        items: Iterable[TypeaheadItem],
        selection: set | None = None,
        on_change: Callable[["Typeahead"], None] | None = None,
        missing_label: str = "{key}",
        max_suggestions: int = MAX_SUGGESTIONS,
    ):
        self.items = sorted(items, key=lambda item: sort_text(item.label))
        self.selection = selection if selection is not None else set()
        self.on_change = on_change
        self.missing_label = missing_label
        self.max_suggestions = max_suggestions

        self._labels = {item.key: item.label for item in self.items}
        self.query = ""
        self.state = TypeaheadState.IDLE
        self.suggestions: list[TypeaheadItem] = []

    # --- Matching ---
    def matches(self, query: str, limit: int | None = None) -> list[TypeaheadItem]:
        """Unselected items whose label contains the query, label order."""
        q = normalize(query)
        if not q:
            return []
        found = []
        for item in self.items:
            if item.key in self.selection:
                continue
            if q in normalize(item.label):
                found.append(item)
                if limit is not None and len(found) >= limit:
                    break
        return found

    def label_for(self, key) -> str:
        return self._labels.get(key, self.missing_label.format(key=key))

    def chips(self) -> list[TypeaheadItem]:
        """Selected keys with their labels, label order."""
        chips = [TypeaheadItem(key, self.label_for(key)) for key in self.selection]
        return sorted(chips, key=lambda chip: (sort_text(chip.label), str(chip.key)))

    # --- Events ---
    def input(self, text: str) -> list[TypeaheadItem]:
        """Text changed: open or close the suggestion list."""
        self.query = text
        self.suggestions = self.matches(text, limit=self.max_suggestions)
        self.state = TypeaheadState.SUGGESTING if self.suggestions else TypeaheadState.IDLE
        return self.suggestions

    def click_suggestion(self, key) -> bool:
        """A suggestion was picked; returns True if the selection changed."""
        return self._commit(key)

    def press_enter(self) -> bool:
        """Add the first unselected match for the current query, if any."""
        if not normalize(self.query):
            return False
        best = self.matches(self.query, limit=1)
        if not best:
            return False
        return self._commit(best[0].key)

    def press_escape(self) -> None:
        self.close()

    def click_outside(self) -> None:
        self.close()

    def close(self) -> None:
        """Hide suggestions without touching the selection or the query."""
        self.suggestions = []
        self.state = TypeaheadState.IDLE

    def add(self, key) -> bool:
        """Select a key directly; adding a selected key is a no-op."""
        if key is None or key in self.selection:
            return False
        self.selection.add(key)
        self._notify()
        return True

    def remove(self, key) -> bool:
        """Chip removed: drop the key and close suggestions."""
        self.close()
        if key not in self.selection:
            return False
        self.selection.discard(key)
        self._notify()
        return True

    def clear(self) -> None:
        self.close()
        self.query = ""
        if self.selection:
            self.selection.clear()
            self._notify()

    def _commit(self, key) -> bool:
        self.query = ""
        self.suggestions = []
        self.state = TypeaheadState.COMMITTED
        try:
            return self.add(key)
        finally:
            self.state = TypeaheadState.IDLE

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
