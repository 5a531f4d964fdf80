"""
Tests for record filtering.
"""

import pytest

from src.leaderboard.filters import FilterState, apply_limit, filter_records, matching_record_ids


def ids(df):
    return df["id"].tolist()


class TestFilterState:
    """Tests for FilterState."""

    def test_default_is_inactive(self):
        assert not FilterState().is_active

    def test_limit_alone_is_inactive(self):
        assert not FilterState(limit=5).is_active

    def test_pb_false_is_active(self):
        assert FilterState(pb=False).is_active

    def test_clear_keeps_set_identity(self):
        state = FilterState(player_ids={1}, classes={"humar"}, meta="Normal", pb=True)
        players = state.player_ids
        state.clear()
        assert not state.is_active
        assert state.player_ids is players


class TestMatchingRecordIds:
    """Tests for matching_record_ids."""

    def test_players_any_of(self, team_data):
        assert matching_record_ids(team_data.player_records, player_ids={2, 3}) == {1, 2, 3}

    def test_classes_normalized(self, team_data):
        assert matching_record_ids(team_data.player_records, classes={" RACAST"}) == {1, 2, 5}

    def test_nothing_selected(self, team_data):
        assert matching_record_ids(team_data.player_records) == set()


class TestFilterRecords:
    """Tests for filter_records."""

    def test_no_predicates_pass_through(self, team_data):
        assert ids(filter_records(team_data.records, team_data.player_records, FilterState())) == [1, 2, 3, 4, 5]

    def test_single_player(self, team_data):
        state = FilterState(player_ids={1})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [1, 2]

    def test_any_selected_player(self, team_data):
        state = FilterState(player_ids={3, 4})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [2, 5]

    def test_unknown_player_matches_nothing(self, team_data):
        state = FilterState(player_ids={42})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == []

    def test_class_is_case_and_whitespace_insensitive(self, team_data):
        state = FilterState(classes={"racast"})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [1, 2, 5]

    def test_player_and_class_need_not_be_same_participant(self, team_data):
        # r2: Alice plays HUmar, Bob plays RAcast; it still matches Alice + RAcast
        state = FilterState(player_ids={1}, classes={"RAcast"})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [1, 2]

    def test_player_and_class_are_anded(self, team_data):
        # Alan is in r1 and r3, HUmar appears in r2 and r3
        state = FilterState(player_ids={2}, classes={"humar"})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [3]

    def test_any_selected_class(self, team_data):
        state = FilterState(classes={"fomar", "fonewearl"})
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [1, 5]

    def test_meta_exact(self, team_data):
        state = FilterState(meta="Normal")
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [3, 5]

    def test_meta_is_case_sensitive(self, team_data):
        state = FilterState(meta="normal")
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == []

    def test_category_exact(self, team_data):
        state = FilterState(category="1P")
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [3, 4]

    @pytest.mark.parametrize("pb, expected", [(True, [1, 2, 5]), (False, [3, 4])])
    def test_pb(self, team_data, pb, expected):
        state = FilterState(pb=pb)
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == expected

    def test_all_categories_combined(self, team_data):
        state = FilterState(player_ids={4}, classes={"fomar"}, meta="Normal", category="2P", pb=True)
        assert ids(filter_records(team_data.records, team_data.player_records, state)) == [5]

    def test_does_not_mutate_input(self, team_data):
        before = team_data.records.copy()
        filter_records(team_data.records, team_data.player_records, FilterState(meta="Normal"))
        assert team_data.records.equals(before)


class TestApplyLimit:
    """Tests for apply_limit."""

    def test_limit_keeps_input_order(self, team_data):
        assert ids(apply_limit(team_data.records, 2)) == [1, 2]

    @pytest.mark.parametrize("limit", [None, 0])
    def test_no_limit(self, team_data, limit):
        assert len(apply_limit(team_data.records, limit)) == 5

    def test_negative_limit_rejected(self, team_data):
        with pytest.raises(ValueError):
            apply_limit(team_data.records, -3)
