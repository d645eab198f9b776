"""
Tests for the rule engine.

Tests:
- Tile creation and id assignment
- Selection toggling and its limits
- Pair matching and dynamic adjacency
- Row removal eligibility
- Generation append
- Rejected operations leave the board unchanged
"""

import pytest

from ..engine_core import RuleEngine, RejectionCode, TileStatus


def board_state(engine):
    return [(t.tile_id, t.value, t.status) for t in engine.tiles]


class TestAddTile:
    """Tests for add_tile."""

    def test_ids_strictly_increase(self, engine):
        """Each new tile gets the next id."""
        ids = [engine.add_tile(v).tile_id for v in (3, 7, 5)]
        assert ids == [0, 1, 2]
        assert [t.value for t in engine.tiles] == [3, 7, 5]

    def test_new_tiles_are_active(self, engine):
        engine.add_tile(4)
        assert engine.tile_at(0).status == TileStatus.ACTIVE

    @pytest.mark.parametrize("value", [0, 10, -1])
    def test_out_of_range_value_rejected(self, engine, value):
        """Values outside 1..9 are rejected without touching the board."""
        result = engine.add_tile(value)
        assert not result.success
        assert result.error_code == RejectionCode.INVALID_VALUE
        assert len(engine) == 0

    def test_bool_value_rejected(self, engine):
        """True is an int subclass but never a tile value."""
        result = engine.add_tile(True)
        assert not result.success
        assert result.error_code == RejectionCode.INVALID_VALUE
        assert len(engine) == 0

    def test_ids_not_reused_after_row_removal(self, clearable_engine, consume):
        """Removing a row never frees ids."""
        for i, j in [(0, 1), (2, 3), (4, 5), (6, 7), (8, 9)]:
            assert consume(clearable_engine, i, j).success
        assert clearable_engine.remove_row(0).success

        new_id = clearable_engine.add_tile(1).tile_id
        assert new_id == 27


class TestToggleSelect:
    """Tests for toggle_select."""

    def test_select_and_deselect(self, make_engine):
        engine = make_engine([1, 2, 3])
        assert engine.toggle_select(1).success
        assert engine.get_tile(1).status == TileStatus.SELECTED
        assert engine.toggle_select(1).success
        assert engine.get_tile(1).status == TileStatus.ACTIVE

    def test_toggle_twice_restores_board(self, opening_engine):
        """Active -> Selected -> Active leaves every tile as it was."""
        before = board_state(opening_engine)
        opening_engine.toggle_select(5)
        opening_engine.toggle_select(5)
        assert board_state(opening_engine) == before

    def test_third_selection_rejected(self, make_engine):
        engine = make_engine([1, 2, 3])
        engine.toggle_select(0)
        engine.toggle_select(1)
        before = board_state(engine)

        result = engine.toggle_select(2)

        assert not result.success
        assert result.error_code == RejectionCode.SELECTION_FULL
        assert board_state(engine) == before

    def test_deselect_allowed_when_two_selected(self, make_engine):
        engine = make_engine([1, 2, 3])
        engine.toggle_select(0)
        engine.toggle_select(1)
        assert engine.toggle_select(0).success
        assert engine.selected_positions() == [1]

    def test_used_tile_rejected(self, make_engine, consume):
        engine = make_engine([4, 6, 1])
        assert consume(engine, 0, 1).success

        result = engine.toggle_select(0)
        assert not result.success
        assert result.error_code == RejectionCode.TILE_USED

    def test_unknown_tile_rejected(self, engine):
        result = engine.toggle_select(42)
        assert not result.success
        assert result.error_code == RejectionCode.UNKNOWN_TILE


class TestMatchablePair:
    """Tests for matchable_pair and adjacency."""

    def test_sum_to_ten_adjacent(self, make_engine):
        engine = make_engine([3, 7])
        assert engine.matchable_pair(0, 1)

    def test_equal_values_adjacent(self, make_engine):
        engine = make_engine([6, 6])
        assert engine.matchable_pair(0, 1)

    def test_incompatible_values(self, make_engine):
        engine = make_engine([3, 4])
        assert not engine.matchable_pair(0, 1)

    def test_blocked_by_unused_tile_between(self, make_engine):
        """A live tile between the pair blocks it."""
        engine = make_engine([3, 5, 7])
        assert not engine.matchable_pair(0, 2)

    def test_becomes_near_after_middle_consumed(self, make_engine, consume):
        """Adjacency is dynamic: clearing the gap joins the outer tiles."""
        engine = make_engine([3, 5, 5, 7])
        assert not engine.matchable_pair(0, 3)
        assert consume(engine, 1, 2).success
        assert engine.matchable_pair(0, 3)

    def test_horizontal_scan_wraps_rows(self, make_engine):
        """Last tile of a row is next to the first tile of the next row."""
        engine = make_engine([1, 2, 3, 4, 5, 6, 7, 8, 9, 1])
        assert engine.matchable_pair(8, 9)

    def test_vertical_neighbours(self, make_engine):
        """Same column, directly above and below."""
        engine = make_engine([2, 1, 1, 1, 1, 1, 1, 1, 1, 8])
        assert engine.near_vertical(0, 9)
        assert not engine.near_horizontal(0, 9)
        assert engine.matchable_pair(0, 9)

    def test_vertical_blocked_by_live_tile(self, make_engine):
        values = [2] + [1] * 8 + [3] + [1] * 8 + [8]
        engine = make_engine(values)
        assert not engine.matchable_pair(0, 18)

    def test_vertical_through_used_tile(self, make_engine, consume):
        values = [2] + [1] * 8 + [3, 7] + [1] * 7 + [8]
        engine = make_engine(values)
        assert consume(engine, 9, 10).success
        assert engine.near_vertical(0, 18)
        assert engine.matchable_pair(0, 18)

    def test_different_column_not_vertical(self, make_engine):
        engine = make_engine([1] * 11)
        assert not engine.near_vertical(0, 10)

    def test_opening_board_non_adjacent_pair(self, opening_engine):
        """Position 0 and 10 share neither a clear row run nor a column."""
        assert not opening_engine.matchable_pair(0, 10)

    def test_used_tiles_never_match(self, make_engine, consume):
        engine = make_engine([5, 5, 5])
        assert consume(engine, 0, 1).success
        assert not engine.matchable_pair(0, 2)
        assert not engine.matchable_pair(1, 2)

    @pytest.mark.parametrize("i,j", [(1, 0), (0, 0), (-1, 1), (0, 5)])
    def test_invalid_positions(self, make_engine, i, j):
        engine = make_engine([5, 5, 5])
        assert not engine.matchable_pair(i, j)

    def test_false_whenever_live_tile_between_in_row(self, make_engine):
        """Any unused tile between i and j in reading order blocks a horizontal pair."""
        engine = make_engine([4, 1, 2, 3, 6])
        for j in range(2, 5):
            assert not engine.near_horizontal(0, j)


class TestUseSelectedPair:
    """Tests for use_selected_pair."""

    def test_consumes_matching_pair(self, make_engine):
        engine = make_engine([4, 6])
        engine.toggle_select(0)
        engine.toggle_select(1)

        result = engine.use_selected_pair()

        assert result.success
        assert all(t.status == TileStatus.USED for t in engine.tiles)

    @pytest.mark.parametrize("selected", [[], [0]])
    def test_wrong_selection_count(self, make_engine, selected):
        engine = make_engine([4, 6])
        for tile_id in selected:
            engine.toggle_select(tile_id)

        result = engine.use_selected_pair()

        assert not result.success
        assert result.error_code == RejectionCode.SELECTION_COUNT

    def test_non_matching_pair_keeps_selection(self, make_engine):
        engine = make_engine([4, 5])
        engine.toggle_select(0)
        engine.toggle_select(1)
        before = board_state(engine)

        result = engine.use_selected_pair()

        assert not result.success
        assert result.error_code == RejectionCode.NOT_MATCHABLE
        assert board_state(engine) == before

    def test_opening_board_blocked_pair_rejected(self, opening_engine):
        """Two ones on the opening board with live tiles between them."""
        opening_engine.toggle_select(opening_engine.tile_at(0).tile_id)
        opening_engine.toggle_select(opening_engine.tile_at(10).tile_id)

        result = opening_engine.use_selected_pair()

        assert not result.success
        assert result.error_code == RejectionCode.NOT_MATCHABLE


class TestRemoveRow:
    """Tests for can_remove_row and remove_row."""

    def _clear_first_row(self, engine, consume):
        for i, j in [(0, 1), (2, 3), (4, 5), (6, 7), (8, 9)]:
            assert consume(engine, i, j).success

    def test_cleared_row_removable(self, clearable_engine, consume):
        assert not clearable_engine.can_remove_row(0)
        self._clear_first_row(clearable_engine, consume)
        assert clearable_engine.can_remove_row(0)

    def test_remove_shifts_later_tiles(self, clearable_engine, consume):
        self._clear_first_row(clearable_engine, consume)
        second_row_ids = [t.tile_id for t in clearable_engine.tiles[9:18]]

        result = clearable_engine.remove_row(0)

        assert result.success
        assert len(clearable_engine) == 18
        assert [t.tile_id for t in clearable_engine.tiles[:9]] == second_row_ids

    def test_last_two_rows_protected(self, make_engine, consume):
        """A used row needs two more rows after it."""
        engine = make_engine([1, 9, 2, 8, 3, 7, 4, 6, 5] + [5, 1, 1, 1, 1, 1, 1, 1, 1])
        self._clear_first_row(engine, consume)
        assert not engine.can_remove_row(0)

        # One tile past the second row is enough
        engine.add_tile(1)
        assert engine.can_remove_row(0)
        assert not engine.can_remove_row(1)

    def test_row_with_live_tiles_rejected(self, clearable_engine):
        before = board_state(clearable_engine)
        result = clearable_engine.remove_row(0)
        assert not result.success
        assert result.error_code == RejectionCode.ROW_NOT_REMOVABLE
        assert board_state(clearable_engine) == before

    def test_negative_row(self, clearable_engine):
        assert not clearable_engine.can_remove_row(-1)
        assert not clearable_engine.remove_row(-1).success


class TestAppendGeneration:
    """Tests for append_generation."""

    def test_copies_unused_values_in_order(self, make_engine, consume):
        engine = make_engine([4, 6, 2, 3])
        assert consume(engine, 0, 1).success
        engine.toggle_select(3)

        result = engine.append_generation()

        assert result.success
        assert len(engine) == 6
        appended = engine.tiles[4:]
        assert [t.value for t in appended] == [2, 3]
        assert all(t.status == TileStatus.ACTIVE for t in appended)

    def test_source_tiles_unchanged(self, make_engine):
        engine = make_engine([2, 3])
        engine.toggle_select(1)
        engine.append_generation()
        assert engine.get_tile(1).status == TileStatus.SELECTED

    def test_length_grows_by_unused_count(self, opening_engine):
        unused = sum(1 for t in opening_engine.tiles if not t.is_used)
        before = len(opening_engine)
        opening_engine.append_generation()
        assert len(opening_engine) == before + unused

    def test_nothing_to_append(self, make_engine, consume):
        engine = make_engine([5, 5])
        assert consume(engine, 0, 1).success
        assert not engine.can_append_generation()

        result = engine.append_generation()

        assert not result.success
        assert result.error_code == RejectionCode.NOTHING_TO_APPEND
        assert len(engine) == 2

    def test_empty_board_nothing_to_append(self, engine):
        assert not engine.can_append_generation()


class TestQueries:
    """Tests for board accessors."""

    def test_accessors(self, make_engine):
        engine = make_engine(list(range(1, 10)) + [1, 2])
        assert engine.row_count == 2
        assert engine.tile_at(10).value == 2
        assert engine.tile_at(11) is None
        assert engine.tile_at(-1) is None
        assert engine.position_of(10) == 10
        assert engine.position_of(99) is None
        assert engine.get_tile(99) is None

    def test_width_validated(self):
        with pytest.raises(ValueError):
            RuleEngine(width=0)

    def test_snapshot_does_not_alias_board(self, make_engine):
        engine = make_engine([1, 2])
        snapshot = engine.snapshot()
        engine.toggle_select(0)
        assert snapshot[0].render_class == "sq-active"
        assert engine.snapshot()[0].render_class == "sq-selected"
