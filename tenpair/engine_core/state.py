"""
Board State - Tiles and the row-partitioned board that holds them.

Design principles:
- The board is owned by the RuleEngine; nothing else mutates it
- Tiles are only appended at the tail
- The only shrinking operation removes one whole aligned row
- Tile ids strictly increase with linear position
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class TileStatus(Enum):
    """Lifecycle of a tile."""
    ACTIVE = "active"
    SELECTED = "selected"
    USED = "used"


@dataclass
class Tile:
    """
    A single numbered tile.

    Status is changed only by the rule engine; id and value never change.
    """
    tile_id: int
    value: int
    status: TileStatus = TileStatus.ACTIVE

    @property
    def is_used(self) -> bool:
        return self.status == TileStatus.USED

    @property
    def is_selected(self) -> bool:
        return self.status == TileStatus.SELECTED


@dataclass
class Board:
    """
    Ordered tile sequence partitioned into rows of `width` tiles.

    Row of linear position p is p // width. The last row may be partial.
    """
    width: int = 9
    tiles: list[Tile] = field(default_factory=list)
    next_id: int = 0

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"Board width must be positive, got {self.width}")

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    @property
    def row_count(self) -> int:
        """Number of rows, counting a trailing partial row."""
        return -(-len(self.tiles) // self.width)

    def row_of(self, position: int) -> int:
        return position // self.width

    def row(self, row_index: int) -> list[Tile]:
        """Tiles of one row (empty when out of range)."""
        if row_index < 0:
            return []
        start = row_index * self.width
        return self.tiles[start:start + self.width]

    def append(self, value: int) -> Tile:
        """Append a new active tile with the next id."""
        tile = Tile(tile_id=self.next_id, value=value)
        self.tiles.append(tile)
        self.next_id += 1
        return tile

    def remove_row_block(self, row_index: int) -> list[Tile]:
        """Delete the aligned block of `width` tiles at row_index."""
        start = row_index * self.width
        removed = self.tiles[start:start + self.width]
        del self.tiles[start:start + self.width]
        return removed

    def find(self, tile_id: int) -> Tile | None:
        for tile in self.tiles:
            if tile.tile_id == tile_id:
                return tile
        return None

    def index_of(self, tile_id: int) -> int | None:
        for position, tile in enumerate(self.tiles):
            if tile.tile_id == tile_id:
                return position
        return None
