"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a remote presentation client and
the engine. A client applies `edits` in order and may compare its board to
`GET /snapshot` at any time.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- VALIDATION_ERROR: Request parameters are invalid
- INTERNAL_ERROR: The engine's structural invariants were broken
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class EditKind(str, Enum):
    """Edit variants delivered to a client."""
    ROW_REMOVED = "row_removed"
    TILE_CHANGED = "tile_changed"
    TILE_APPENDED = "tile_appended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    """Visible attributes of one tile."""
    tile_id: int
    value: int = Field(ge=1, le=9)
    render_class: str

    model_config = {"from_attributes": True}


class EditInfo(BaseModel):
    """One structural edit. Which fields are set depends on `kind`."""
    kind: EditKind
    row_index: Optional[int] = None
    position: Optional[int] = None
    tile: Optional[TileInfo] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    seed_initial: bool = Field(True, description="Lay out the standard opening board")
    grid_width: Optional[int] = Field(None, ge=1, le=32, description="Tiles per row")


# =============================================================================
# Response Models
# =============================================================================

class SnapshotResponse(BaseModel):
    """Full current board, for verification."""
    game_id: str
    grid_width: int
    tiles: list[TileInfo] = Field(default_factory=list)
    row_count: int = 0
    can_append_generation: bool = False
    removable_rows: list[int] = Field(default_factory=list)


class OperationResponse(BaseModel):
    """Outcome of a board operation plus the edits it produced."""
    success: bool
    game_id: str
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, description="Rejection code when success is false")
    tile_id: Optional[int] = None
    edits: list[EditInfo] = Field(default_factory=list)


class GameResponse(BaseModel):
    """A newly created or fetched game."""
    game_id: str
    grid_width: int
    created_at: float
    tile_count: int
    edits: list[EditInfo] = Field(default_factory=list)
    api_version: str = "v1"


class GameListResponse(BaseModel):
    games: list[str] = Field(default_factory=list)
    count: int = 0


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    environment: str
