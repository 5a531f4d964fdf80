"""
Tests for the multi-select typeahead state machine.
"""

import pytest

from src.widgets.typeahead import Typeahead, TypeaheadItem, TypeaheadState


@pytest.fixture
def items():
    return [TypeaheadItem("1", "Alice"), TypeaheadItem("2", "Alan"), TypeaheadItem("3", "Bob")]


@pytest.fixture
def changes():
    return []


@pytest.fixture
def widget(items, changes):
    return Typeahead(items, selection=set(), on_change=lambda w: changes.append(set(w.selection)))


class TestMatching:
    """Tests for suggestion matching."""

    def test_label_sorted_matches(self):
        widget = Typeahead([TypeaheadItem("1", "Alice"), TypeaheadItem("2", "Alan")])
        assert [item.label for item in widget.input("al")] == ["Alan", "Alice"]

    def test_capped_at_ten(self):
        widget = Typeahead([TypeaheadItem(str(i), f"Player {i:02d}") for i in range(25)])
        suggestions = widget.input("player")
        assert len(suggestions) == 10
        assert suggestions[0].label == "Player 00"

    def test_substring_case_insensitive(self, widget):
        assert [item.key for item in widget.input("  LIC ")] == ["1"]

    def test_selected_items_excluded(self, widget):
        widget.add("2")
        assert [item.label for item in widget.input("al")] == ["Alice"]

    def test_empty_query_is_idle(self, widget):
        assert widget.input("   ") == []
        assert widget.state == TypeaheadState.IDLE

    def test_no_match_is_idle(self, widget):
        assert widget.input("zzz") == []
        assert widget.state == TypeaheadState.IDLE

    def test_input_opens_suggestions(self, widget):
        widget.input("b")
        assert widget.state == TypeaheadState.SUGGESTING
        assert [item.key for item in widget.suggestions] == ["3"]


class TestCommit:
    """Tests for clicking a suggestion and pressing Enter."""

    def test_click_adds_and_resets(self, widget, changes):
        widget.input("al")
        assert widget.click_suggestion("2")
        assert widget.selection == {"2"}
        assert widget.query == ""
        assert widget.suggestions == []
        assert widget.state == TypeaheadState.IDLE
        assert changes == [{"2"}]

    def test_enter_adds_first_match(self, widget):
        widget.input("al")
        assert widget.press_enter()
        assert widget.selection == {"2"}
        assert widget.state == TypeaheadState.IDLE

    def test_enter_skips_selected(self, widget):
        widget.add("2")
        widget.input("al")
        widget.press_enter()
        assert widget.selection == {"1", "2"}

    def test_enter_without_match_keeps_query(self, widget, changes):
        widget.input("zzz")
        assert not widget.press_enter()
        assert widget.query == "zzz"
        assert widget.selection == set()
        assert changes == []

    def test_enter_with_empty_query(self, widget):
        assert not widget.press_enter()

    def test_listener_sees_committed_state(self, items):
        seen = []
        widget = Typeahead(items, on_change=lambda w: seen.append(w.state))
        widget.input("bo")
        widget.press_enter()
        assert seen == [TypeaheadState.COMMITTED]
        assert widget.state == TypeaheadState.IDLE

    def test_duplicate_add_is_noop(self, widget, changes):
        assert widget.add("1")
        assert not widget.add("1")
        assert not widget.click_suggestion("1")
        assert widget.selection == {"1"}
        assert changes == [{"1"}]


class TestClose:
    """Tests for Escape and clicks outside."""

    def test_escape_closes_without_selecting(self, widget, changes):
        widget.input("al")
        widget.press_escape()
        assert widget.state == TypeaheadState.IDLE
        assert widget.suggestions == []
        assert widget.selection == set()
        assert widget.query == "al"
        assert changes == []

    def test_click_outside_closes(self, widget):
        widget.input("al")
        widget.click_outside()
        assert widget.state == TypeaheadState.IDLE

    def test_escape_when_idle(self, widget):
        widget.press_escape()
        assert widget.state == TypeaheadState.IDLE


class TestChips:
    """Tests for chips and chip removal."""

    def test_chips_label_sorted(self, widget):
        widget.add("3")
        widget.add("1")
        assert [chip.label for chip in widget.chips()] == ["Alice", "Bob"]

    def test_missing_label_fallback(self, items):
        widget = Typeahead(items, selection={"99"}, missing_label="Player {key}")
        assert widget.chips() == [TypeaheadItem("99", "Player 99")]

    def test_remove_chip(self, widget, changes):
        widget.add("1")
        widget.input("b")
        assert widget.remove("1")
        assert widget.selection == set()
        assert widget.state == TypeaheadState.IDLE
        assert changes == [{"1"}, set()]

    def test_remove_unknown_chip(self, widget, changes):
        assert not widget.remove("1")
        assert changes == []

    def test_shared_selection_set(self, items):
        owner = set()
        widget = Typeahead(items, selection=owner)
        widget.add("2")
        assert owner == {"2"}

    def test_clear(self, widget, changes):
        widget.add("1")
        widget.add("2")
        widget.clear()
        assert widget.selection == set()
        assert changes[-1] == set()
