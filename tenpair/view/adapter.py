"""
Presentation adapters - Consumers of the edit stream.

The core only needs two things from a presentation layer:
- apply(edit): take one edit, in emission order
- verify(snapshot): confirm the rendered board matches a full snapshot

GridAdapter is the in-memory reference renderer. It lays tiles out in
rows exactly like a real grid widget would and is used by the CLI and tests.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..errors import InvariantViolation
from .edits import Edit, RowRemoved, TileChanged, TileAppended
from .snapshot import Snapshot, SnapshotTile


class PresentationAdapter(ABC):
    """Abstract consumer of edits."""

    @abstractmethod
    def apply(self, edit: Edit):
        """Apply a single edit."""
        pass

    @abstractmethod
    def verify(self, snapshot: Snapshot):
        """Raise InvariantViolation if the rendered board differs from snapshot."""
        pass


@dataclass
class GridCell:
    """One rendered tile."""
    tile_id: int
    value: int
    render_class: str

    @classmethod
    def from_snapshot_tile(cls, tile: SnapshotTile) -> GridCell:
        return cls(tile_id=tile.tile_id, value=tile.value, render_class=tile.render_class)


@dataclass
class GridAdapter(PresentationAdapter):
    """
    Renders edits into rows of at most `width` cells.

    Row and cell lookups are by index, the same way a DOM grid is walked.
    """
    width: int = 9
    rows: list[list[GridCell]] = field(default_factory=list)
    applied: int = 0

    def apply(self, edit: Edit):
        if isinstance(edit, RowRemoved):
            self._remove_row(edit.row_index)
        elif isinstance(edit, TileChanged):
            self._update_cell(edit.position, edit.tile)
        elif isinstance(edit, TileAppended):
            self._append_cell(edit.tile)
        else:
            raise TypeError(f"Unhandled edit type: {type(edit).__name__}")
        self.applied += 1

    def _last_row(self) -> list[GridCell]:
        if not self.rows or len(self.rows[-1]) >= self.width:
            self.rows.append([])
        return self.rows[-1]

    def _append_cell(self, tile: SnapshotTile):
        self._last_row().append(GridCell.from_snapshot_tile(tile))

    def _update_cell(self, position: int, tile: SnapshotTile):
        row, col = divmod(position, self.width)
        try:
            cell = self.rows[row][col]
        except IndexError:
            raise InvariantViolation(
                "No rendered cell at position", position=position
            ) from None
        cell.render_class = tile.render_class

    def _remove_row(self, row_index: int):
        if not 0 <= row_index < len(self.rows):
            raise InvariantViolation("No rendered row to remove", row_index=row_index)
        del self.rows[row_index]

    @property
    def cells(self) -> list[GridCell]:
        return [cell for row in self.rows for cell in row]

    def verify(self, snapshot: Snapshot):
        problems: list[str] = []
        expected_rows = -(-len(snapshot) // self.width)

        if len(self.rows) != expected_rows:
            problems.append(f"row count {len(self.rows)} != {expected_rows}")

        for row_index, row in enumerate(self.rows):
            leftover = len(snapshot) - row_index * self.width
            expected_cols = max(0, min(self.width, leftover))
            if len(row) != expected_cols:
                problems.append(
                    f"row {row_index}: {len(row)} columns, expected {expected_cols}"
                )

            for col, cell in enumerate(row):
                position = row_index * self.width + col
                if not snapshot.has_position(position):
                    break
                tile = snapshot[position]
                if cell.tile_id != tile.tile_id:
                    problems.append(f"position {position}: id {cell.tile_id} != {tile.tile_id}")
                if cell.value != tile.value:
                    problems.append(f"position {position}: value {cell.value} != {tile.value}")
                if cell.render_class != tile.render_class:
                    problems.append(
                        f"position {position}: class {cell.render_class} != {tile.render_class}"
                    )

        if problems:
            raise InvariantViolation(
                "Rendered grid does not match snapshot", problems=problems
            )

    def render(self) -> str:
        """Text grid: used tiles as '.', selected tiles in brackets."""
        lines = []
        for row in self.rows:
            parts = []
            for cell in row:
                if cell.render_class.endswith("used"):
                    parts.append(" . ")
                elif cell.render_class.endswith("selected"):
                    parts.append(f"[{cell.value}]")
                else:
                    parts.append(f" {cell.value} ")
            lines.append("".join(parts))
        return "\n".join(lines)
