"""
Reconciler - Turns two board snapshots into an ordered edit list.

The reconciler is the bridge between the rule engine (authoritative) and
the presentation layer (which only ever sees edits). It relies on the
board's discipline: tiles are appended at the tail, and the only removal
is a whole row aligned to a row boundary.

Three phases, strictly in this order:
1. Row removals  - find rows that vanished from the front part of the board
2. Tile changes  - restyle tiles whose render class changed
3. Tile appends  - add tiles beyond the old length

Anything outside that discipline is an InvariantViolation, never a
best-effort guess.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..errors import InvariantViolation
from .edits import Edit, RowRemoved, TileChanged, TileAppended
from .edit_queue import EditQueue
from .snapshot import Snapshot

logger = logging.getLogger(__name__)


def _violation(message: str, **details) -> InvariantViolation:
    logger.error("Reconciliation invariant violated: %s %s", message, details)
    return InvariantViolation(message, **details)


def _row_removal_phase(
    working: Snapshot, target: Snapshot, width: int
) -> tuple[list[Edit], Snapshot]:
    edits: list[Edit] = []
    row_index = 0
    # Each removal drops a row and each advance moves past one,
    # so the loop can never run more often than this.
    budget = 2 * (-(-len(working) // width)) + 1

    while True:
        budget -= 1
        if budget < 0:
            raise _violation(
                "Row removal phase did not converge",
                row_index=row_index,
                working_length=len(working),
                target_length=len(target),
            )

        first = row_index * width
        if not working.has_position(first):
            return edits, working

        if not target.has_position(first):
            raise _violation(
                "Row missing from new snapshot",
                row_index=row_index,
                working_length=len(working),
                target_length=len(target),
            )

        old_id = working[first].tile_id
        new_id = target[first].tile_id

        if new_id > old_id:
            edits.append(RowRemoved(row_index=row_index))
            working = working.remove_row(row_index, width)
        elif new_id == old_id:
            row_index += 1
        else:
            raise _violation(
                "New tile id is lower than previous tile id",
                row_index=row_index,
                previous_id=old_id,
                new_id=new_id,
            )


def _change_phase(working: Snapshot, target: Snapshot) -> tuple[list[Edit], Snapshot]:
    edits: list[Edit] = []
    common = min(len(working), len(target))

    for position in range(common):
        old = working[position]
        new = target[position]
        if old.tile_id != new.tile_id or old.value != new.value:
            raise _violation(
                "Tiles differ in id or value",
                position=position,
                previous=old,
                new=new,
            )
        if old.render_class != new.render_class:
            edits.append(TileChanged(position=position, tile=new))
            working = working.replace(position, new)

    return edits, working


def _append_phase(working: Snapshot, target: Snapshot) -> tuple[list[Edit], Snapshot]:
    edits: list[Edit] = []
    for position in range(len(working), len(target)):
        tile = target[position]
        edits.append(TileAppended(tile=tile))
        working = working.append(tile)
    return edits, working


def reconcile(
    previous: Snapshot, target: Snapshot, width: int
) -> tuple[list[Edit], Snapshot]:
    """
    Compute the edits that turn `previous` into `target`.

    Returns (edits, final snapshot). The final snapshot always equals
    `target`; anything else raises InvariantViolation.
    """
    removals, working = _row_removal_phase(previous, target, width)
    changes, working = _change_phase(working, target)
    appends, working = _append_phase(working, target)

    if working != target:
        raise _violation(
            "Snapshot after edits does not match target",
            working_length=len(working),
            target_length=len(target),
        )

    edits = removals + changes + appends
    if not edits and previous != target:
        raise _violation(
            "Snapshots differ but no edits were produced",
            previous_length=len(previous),
            target_length=len(target),
        )

    return edits, working


@dataclass
class Reconciler:
    """
    Holds the last delivered snapshot and feeds the edit queue.

    Usage:
        reconciler = Reconciler(width=9)
        edits = reconciler.queue_updates(engine.snapshot())

        while (edit := reconciler.queue.pop()) is not None:
            adapter.apply(edit)

        adapter.verify(reconciler.latest)
    """
    width: int = 9
    latest: Snapshot = field(default_factory=Snapshot.empty)
    queue: EditQueue = field(default_factory=EditQueue)

    def queue_updates(self, snapshot: Snapshot) -> list[Edit]:
        """
        Diff against the last delivered snapshot and enqueue the edits.

        On InvariantViolation nothing is enqueued and `latest` is kept.
        """
        edits, final = reconcile(self.latest, snapshot, self.width)
        self.latest = final
        self.queue.extend(edits)
        logger.debug(
            "Queued %d edits (%d pending, board length %d)",
            len(edits), len(self.queue), len(final),
        )
        return edits

    def take_next_edit(self) -> Edit | None:
        return self.queue.pop()
