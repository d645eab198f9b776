"""
Rule Engine - Applies the puzzle rules to the board.

The rule engine is the single point of board mutation.
All tile creation and status changes go through it.

Design principles:
- Validates before applying
- Returns OperationResult with success/failure
- A rejected operation leaves the board untouched
- Query helpers have no side effects
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .state import Board, Tile, TileStatus
from .result import OperationResult, RejectionCode

if TYPE_CHECKING:
    from ..view.snapshot import Snapshot

MIN_VALUE = 1
MAX_VALUE = 9
PAIR_SUM = 10
MAX_SELECTED = 2

# Rows that must remain after the one being removed.
PROTECTED_TRAILING_ROWS = 2


class RuleEngine:
    """
    Owns the authoritative board.

    Usage:
        engine = RuleEngine(width=9)
        engine.add_tile(3)
        engine.add_tile(7)

        engine.toggle_select(0)
        engine.toggle_select(1)
        result = engine.use_selected_pair()
        if not result:
            print(result.error)
    """

    def __init__(self, width: int = 9):
        self._board = Board(width=width)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def tiles(self) -> tuple[Tile, ...]:
        """Read-only view of the tiles in board order."""
        return tuple(self._board.tiles)

    @property
    def row_count(self) -> int:
        return self._board.row_count

    def __len__(self) -> int:
        return len(self._board)

    def get_tile(self, tile_id: int) -> Tile | None:
        """Get a tile by id."""
        return self._board.find(tile_id)

    def tile_at(self, position: int) -> Tile | None:
        """Get the tile at a linear position."""
        if 0 <= position < len(self._board):
            return self._board.tiles[position]
        return None

    def position_of(self, tile_id: int) -> int | None:
        """Linear position of a tile, or None if it is not on the board."""
        return self._board.index_of(tile_id)

    def selected_positions(self) -> list[int]:
        """Positions of selected tiles in board order."""
        return [p for p, t in enumerate(self._board.tiles) if t.is_selected]

    def snapshot(self) -> Snapshot:
        """Immutable projection of the current board."""
        from ..view.snapshot import Snapshot
        return Snapshot.from_tiles(self._board.tiles)

    # =========================================================================
    # Adjacency
    # =========================================================================

    def _first_unused_from(self, start: int, stop: int, step: int) -> int | None:
        """First position in start, start+step, ... <= stop whose tile is not used."""
        position = start
        while position <= stop:
            if not self._board.tiles[position].is_used:
                return position
            position += step
        return None

    def near_horizontal(self, i: int, j: int) -> bool:
        """Every tile between i and j in reading order is used."""
        return self._first_unused_from(i + 1, j, 1) == j

    def near_vertical(self, i: int, j: int) -> bool:
        """Every tile between i and j in the same column is used."""
        return self._first_unused_from(i + self.width, j, self.width) == j

    def near(self, i: int, j: int) -> bool:
        return self.near_horizontal(i, j) or self.near_vertical(i, j)

    def matchable_pair(self, i: int, j: int) -> bool:
        """
        Check whether tiles at positions i < j can be consumed together.

        Both must be unused, their values equal or summing to ten, and
        every tile between them (same row run or same column) already used.
        """
        if not (0 <= i < j < len(self._board)):
            return False

        first = self._board.tiles[i]
        second = self._board.tiles[j]
        if first.is_used or second.is_used:
            return False

        if first.value + second.value != PAIR_SUM and first.value != second.value:
            return False

        return self.near(i, j)

    def can_remove_row(self, row_index: int) -> bool:
        """A fully used row with at least two rows after it."""
        if row_index < 0:
            return False
        if (row_index + PROTECTED_TRAILING_ROWS) * self.width >= len(self._board):
            return False
        return all(tile.is_used for tile in self._board.row(row_index))

    def can_append_generation(self) -> bool:
        return any(not tile.is_used for tile in self._board.tiles)

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_tile(self, value: int) -> OperationResult:
        """Append a new active tile. The result carries the new tile id."""
        is_int = isinstance(value, int) and not isinstance(value, bool)
        if not is_int or not (MIN_VALUE <= value <= MAX_VALUE):
            return OperationResult.failure(
                f"Tile value must be between {MIN_VALUE} and {MAX_VALUE}, got {value!r}",
                RejectionCode.INVALID_VALUE,
            )
        tile = self._board.append(value)
        return OperationResult.ok(tile_id=tile.tile_id)

    def toggle_select(self, tile_id: int) -> OperationResult:
        """Select an active tile or deselect a selected one."""
        tile = self._board.find(tile_id)
        if tile is None:
            return OperationResult.failure(
                f"Tile {tile_id} not found", RejectionCode.UNKNOWN_TILE
            )

        if tile.status == TileStatus.USED:
            return OperationResult.failure(
                f"Tile {tile_id} is already used", RejectionCode.TILE_USED
            )

        if tile.status == TileStatus.SELECTED:
            tile.status = TileStatus.ACTIVE
            return OperationResult.ok(tile_id=tile_id)

        if len(self.selected_positions()) >= MAX_SELECTED:
            return OperationResult.failure(
                f"Cannot select more than {MAX_SELECTED} tiles",
                RejectionCode.SELECTION_FULL,
            )

        tile.status = TileStatus.SELECTED
        return OperationResult.ok(tile_id=tile_id)

    def use_selected_pair(self) -> OperationResult:
        """Consume the two selected tiles if they form a matchable pair."""
        selected = self.selected_positions()
        if len(selected) != MAX_SELECTED:
            return OperationResult.failure(
                f"Exactly {MAX_SELECTED} tiles must be selected, found {len(selected)}",
                RejectionCode.SELECTION_COUNT,
            )

        i, j = selected
        if not self.matchable_pair(i, j):
            return OperationResult.failure(
                f"Tiles at positions {i} and {j} do not match",
                RejectionCode.NOT_MATCHABLE,
            )

        self._board.tiles[i].status = TileStatus.USED
        self._board.tiles[j].status = TileStatus.USED
        return OperationResult.ok()

    def remove_row(self, row_index: int) -> OperationResult:
        """Delete a fully used row; later tiles shift up by one row."""
        if not self.can_remove_row(row_index):
            return OperationResult.failure(
                f"Row {row_index} cannot be removed",
                RejectionCode.ROW_NOT_REMOVABLE,
            )
        self._board.remove_row_block(row_index)
        return OperationResult.ok()

    def append_generation(self) -> OperationResult:
        """Append an active copy of every unused tile, in board order."""
        if not self.can_append_generation():
            return OperationResult.failure(
                "No unused tiles to duplicate", RejectionCode.NOTHING_TO_APPEND
            )

        values = [tile.value for tile in self._board.tiles if not tile.is_used]
        for value in values:
            self._board.append(value)
        return OperationResult.ok()
