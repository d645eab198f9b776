"""
Fatal errors raised by the core.

Rejected operations are NOT errors - they come back as OperationResult.
InvariantViolation means the structural contract between the board, the
snapshots and the presentation layer has been broken upstream.
"""

from __future__ import annotations
from typing import Any


class InvariantViolation(RuntimeError):
    """
    The board, a snapshot or a presentation adapter left the expected
    append/remove discipline.

    Not recoverable locally. Callers must stop delivering edits for the
    current cycle.
    """

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.details = details

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        context = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{base} ({context})"
