"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to GameLoop calls
2. Manages sessions
3. Converts edits and snapshots into response models

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Sessions run in pull mode: every operation response carries exactly the
edits that operation produced, in delivery order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .. import __version__
from ..config import GameConfig
from ..engine_core import OperationResult
from ..errors import InvariantViolation
from ..session import SessionManager, Session
from ..view import Edit, RowRemoved, TileChanged, TileAppended, Snapshot, SnapshotTile
from .schemas import (
    CreateGameRequest,
    EditInfo,
    EditKind,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    OperationResponse,
    SnapshotResponse,
    TileInfo,
)

logger = logging.getLogger(__name__)


def tile_to_info(tile: SnapshotTile) -> TileInfo:
    return TileInfo(tile_id=tile.tile_id, value=tile.value, render_class=tile.render_class)


def edit_to_info(edit: Edit) -> EditInfo:
    """Convert an edit to its wire model."""
    if isinstance(edit, RowRemoved):
        return EditInfo(kind=EditKind.ROW_REMOVED, row_index=edit.row_index)
    if isinstance(edit, TileChanged):
        return EditInfo(
            kind=EditKind.TILE_CHANGED,
            position=edit.position,
            tile=tile_to_info(edit.tile),
        )
    if isinstance(edit, TileAppended):
        return EditInfo(kind=EditKind.TILE_APPENDED, tile=tile_to_info(edit.tile))
    raise TypeError(f"Unknown edit type: {type(edit).__name__}")


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()

        game = service.create_game(CreateGameRequest())
        response = service.toggle_select(game.game_id, tile_id=0)
        for edit in response.edits:
            ...
    """
    config: GameConfig = field(default_factory=GameConfig)
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(config=self.config)

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )

    def health(self) -> HealthResponse:
        return HealthResponse(version=__version__, environment=self.config.environment)

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Create a game; the response carries the opening edits."""
        session = self.session_manager.create_session(
            seed_initial=request.seed_initial,
            width=request.grid_width,
        )
        edits = session.loop.take_edits()
        logger.info("Created game %s with %d tiles", session.session_id, len(session.engine))
        return GameResponse(
            game_id=session.session_id,
            grid_width=session.engine.width,
            created_at=session.created_at,
            tile_count=len(session.engine),
            edits=[edit_to_info(e) for e in edits],
        )

    def get_snapshot(self, game_id: str) -> SnapshotResponse | ErrorResponse:
        """Full board as last delivered to the client."""
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)

        engine = session.engine
        snapshot: Snapshot = session.loop.reconciler.latest
        return SnapshotResponse(
            game_id=game_id,
            grid_width=engine.width,
            tiles=[tile_to_info(t) for t in snapshot],
            row_count=engine.row_count,
            can_append_generation=engine.can_append_generation(),
            removable_rows=[r for r in range(engine.row_count) if engine.can_remove_row(r)],
        )

    def _run(
        self, game_id: str, operation: Callable[[Session], OperationResult]
    ) -> OperationResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)

        try:
            result = operation(session)
        except InvariantViolation:
            # Nothing from this cycle may reach the client.
            session.loop.take_edits()
            raise

        edits = session.loop.take_edits()
        if not result.success:
            logger.debug("Game %s rejected operation: %s", game_id, result.error)

        return OperationResponse(
            success=result.success,
            game_id=game_id,
            error=result.error,
            error_code=result.error_code.value if result.error_code else None,
            tile_id=result.tile_id,
            edits=[edit_to_info(e) for e in edits],
        )

    def add_tile(self, game_id: str, value: int) -> OperationResponse | ErrorResponse:
        return self._run(game_id, lambda s: s.loop.add_tile(value))

    def toggle_select(self, game_id: str, tile_id: int) -> OperationResponse | ErrorResponse:
        return self._run(game_id, lambda s: s.loop.toggle_select(tile_id))

    def use_selected_pair(self, game_id: str) -> OperationResponse | ErrorResponse:
        return self._run(game_id, lambda s: s.loop.use_selected_pair())

    def remove_row(self, game_id: str, row_index: int) -> OperationResponse | ErrorResponse:
        return self._run(game_id, lambda s: s.loop.remove_row(row_index))

    def append_generation(self, game_id: str) -> OperationResponse | ErrorResponse:
        return self._run(game_id, lambda s: s.loop.append_generation())

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    def list_games(self) -> GameListResponse:
        games = self.session_manager.list_sessions()
        return GameListResponse(games=games, count=len(games))
