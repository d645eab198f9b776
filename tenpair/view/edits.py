"""
Edits - Atomic structural changes for the presentation layer.

Three variants, produced only by the reconciler and consumed exactly once,
in emission order:
- RowRemoved:   drop a whole row
- TileChanged:  restyle the tile at a position
- TileAppended: add a tile at the tail
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Union

from .snapshot import Snapshot, SnapshotTile


@dataclass(frozen=True)
class RowRemoved:
    """The row at row_index disappears; later rows move up."""
    row_index: int

    kind: ClassVar[str] = "row_removed"


@dataclass(frozen=True)
class TileChanged:
    """The tile at position now looks like `tile`."""
    position: int
    tile: SnapshotTile

    kind: ClassVar[str] = "tile_changed"


@dataclass(frozen=True)
class TileAppended:
    """A new tile at the end of the board."""
    tile: SnapshotTile

    kind: ClassVar[str] = "tile_appended"


Edit = Union[RowRemoved, TileChanged, TileAppended]


def apply_edit(snapshot: Snapshot, edit: Edit, width: int) -> Snapshot:
    """Apply one edit to a snapshot and return the result."""
    if isinstance(edit, RowRemoved):
        return snapshot.remove_row(edit.row_index, width)
    if isinstance(edit, TileChanged):
        return snapshot.replace(edit.position, edit.tile)
    if isinstance(edit, TileAppended):
        return snapshot.append(edit.tile)
    raise TypeError(f"Unknown edit type: {type(edit).__name__}")
