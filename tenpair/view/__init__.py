"""
View - Keeps a presentation layer consistent with the board.

Flow:
1. The engine projects the board into a Snapshot
2. The Reconciler diffs it against the last delivered Snapshot
3. The resulting Edits go to the EditQueue
4. A consumer pops edits one at a time and hands them to an adapter
5. Once the queue is empty the adapter verifies against the full Snapshot
"""

from .snapshot import Snapshot, SnapshotTile
from .edits import Edit, RowRemoved, TileChanged, TileAppended, apply_edit
from .edit_queue import EditQueue
from .reconciler import Reconciler, reconcile
from .adapter import PresentationAdapter, GridAdapter, GridCell

__all__ = [
    "Snapshot",
    "SnapshotTile",
    "Edit",
    "RowRemoved",
    "TileChanged",
    "TileAppended",
    "apply_edit",
    "EditQueue",
    "Reconciler",
    "reconcile",
    "PresentationAdapter",
    "GridAdapter",
    "GridCell",
]
