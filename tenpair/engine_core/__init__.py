"""
Engine Core - Authoritative board state and puzzle rules.

The engine:
1. Owns the board (tiles in fixed-width rows)
2. Creates tiles and changes their status
3. Decides which pairs match and which rows may go
4. Appends new generations of tiles
5. Reports every rejected operation as a result value
"""

from .state import Board, Tile, TileStatus
from .result import OperationResult, RejectionCode
from .rules import RuleEngine

__all__ = [
    "Board",
    "Tile",
    "TileStatus",
    "OperationResult",
    "RejectionCode",
    "RuleEngine",
]
