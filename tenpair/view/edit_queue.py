"""
Edit Queue - FIFO of edits waiting for delivery.

The reconciler appends, the consumer (a scheduled render job or a pull-mode
client) pops from the front. Queue order is delivery order.
"""

from __future__ import annotations
from collections import deque
from typing import Iterable

from .edits import Edit


class EditQueue:
    """Unbounded FIFO of pending edits."""

    def __init__(self):
        self._edits: deque[Edit] = deque()

    def __len__(self) -> int:
        return len(self._edits)

    def __bool__(self) -> bool:
        return bool(self._edits)

    def push(self, edit: Edit):
        self._edits.append(edit)

    def extend(self, edits: Iterable[Edit]):
        self._edits.extend(edits)

    def pop(self) -> Edit | None:
        """Take the oldest edit, or None if the queue is empty."""
        if not self._edits:
            return None
        return self._edits.popleft()

    def drain(self) -> list[Edit]:
        """Take every pending edit in order."""
        edits = list(self._edits)
        self._edits.clear()
        return edits

    def peek_all(self) -> list[Edit]:
        """Pending edits in order, without removing them."""
        return list(self._edits)
