"""
Snapshot - Immutable projection of the board's visible attributes.

A snapshot is what the presentation layer is believed to show.
It never aliases board tiles: every snapshot copies the values it needs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import Tile


RENDER_CLASS_PREFIX = "sq-"


@dataclass(frozen=True)
class SnapshotTile:
    """Visible attributes of one tile."""
    tile_id: int
    value: int
    render_class: str

    @classmethod
    def from_tile(cls, tile: Tile) -> SnapshotTile:
        return cls(
            tile_id=tile.tile_id,
            value=tile.value,
            render_class=RENDER_CLASS_PREFIX + tile.status.value,
        )


@dataclass(frozen=True)
class Snapshot:
    """
    Ordered, immutable sequence of snapshot tiles.

    Two snapshots are equal iff they hold the same tiles in the same order.
    All "mutators" return a new snapshot.
    """
    tiles: tuple[SnapshotTile, ...] = ()

    @classmethod
    def from_tiles(cls, tiles: Iterable[Tile]) -> Snapshot:
        return cls(tiles=tuple(SnapshotTile.from_tile(t) for t in tiles))

    @classmethod
    def empty(cls) -> Snapshot:
        return cls()

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[SnapshotTile]:
        return iter(self.tiles)

    def __getitem__(self, position: int) -> SnapshotTile:
        return self.tiles[position]

    def has_position(self, position: int) -> bool:
        return 0 <= position < len(self.tiles)

    def remove_row(self, row_index: int, width: int) -> Snapshot:
        """Return snapshot without the aligned block of `width` tiles."""
        start = row_index * width
        return Snapshot(tiles=self.tiles[:start] + self.tiles[start + width:])

    def replace(self, position: int, tile: SnapshotTile) -> Snapshot:
        """Return snapshot with one position replaced."""
        return Snapshot(
            tiles=self.tiles[:position] + (tile,) + self.tiles[position + 1:]
        )

    def append(self, tile: SnapshotTile) -> Snapshot:
        """Return snapshot with a tile added at the tail."""
        return Snapshot(tiles=self.tiles + (tile,))
