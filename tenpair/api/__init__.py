"""
API Module - Remote presentation interface.

Exposes the engine over REST. A client:
1. Creates a game and applies its opening edits
2. Sends board operations
3. Applies the edits each operation returns, in order
4. Compares its board with the snapshot when it wants to verify

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    GameResponse,
    GameListResponse,
    SnapshotResponse,
    OperationResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    TileInfo,
    EditInfo,
    # Enums
    EditKind,
    ErrorCode,
)
from .service import GameService, edit_to_info
from .app import create_app

__all__ = [
    "CreateGameRequest",
    "GameResponse",
    "GameListResponse",
    "SnapshotResponse",
    "OperationResponse",
    "ErrorResponse",
    "HealthResponse",
    "TileInfo",
    "EditInfo",
    "EditKind",
    "ErrorCode",
    "GameService",
    "edit_to_info",
    "create_app",
]
