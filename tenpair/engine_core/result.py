"""
Operation results for the rule engine.

Every public mutation validates its preconditions first and reports a
rejection as a value. A rejected operation never touches the board.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class RejectionCode(Enum):
    """Why an operation was rejected."""
    INVALID_VALUE = "invalid_value"
    UNKNOWN_TILE = "unknown_tile"
    TILE_USED = "tile_used"
    SELECTION_FULL = "selection_full"
    SELECTION_COUNT = "selection_count"
    NOT_MATCHABLE = "not_matchable"
    ROW_NOT_REMOVABLE = "row_not_removable"
    NOTHING_TO_APPEND = "nothing_to_append"


@dataclass
class OperationResult:
    """
    Result of a rule engine operation.

    Contains:
    - Whether the operation succeeded
    - Why it was rejected (if it was)
    - The tile it created (for add_tile)
    """
    success: bool
    error: str | None = None
    error_code: RejectionCode | None = None
    tile_id: int | None = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failure(cls, error: str, error_code: RejectionCode) -> OperationResult:
        """Create a rejected result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, tile_id: int | None = None) -> OperationResult:
        """Create a success result."""
        return cls(success=True, tile_id=tile_id)
