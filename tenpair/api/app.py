"""
FastAPI Application - REST API for remote presentation clients.

Endpoints:
    GET    /api/v1/health                          Service health
    POST   /api/v1/games                           Create game
    GET    /api/v1/games                           List games
    GET    /api/v1/games/{id}/snapshot             Full board for verification
    DELETE /api/v1/games/{id}                      End game
    POST   /api/v1/games/{id}/tiles                Add a tile
    POST   /api/v1/games/{id}/tiles/{tile_id}/toggle   Select / deselect
    POST   /api/v1/games/{id}/pair                 Consume the selected pair
    POST   /api/v1/games/{id}/rows/{row}/remove    Remove a used row
    POST   /api/v1/games/{id}/generation           Append a new generation

Edit delivery:
    Every operation response carries the edits it produced. A client applies
    them in order; rejected operations return success=false and no edits.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging

from ..config import GameConfig

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Body, Request
        from fastapi.encoders import jsonable_encoder
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from ..errors import InvariantViolation
    from .service import GameService
    from .schemas import (
        CreateGameRequest,
        ErrorCode,
        ErrorResponse,
        GameListResponse,
        GameResponse,
        HealthResponse,
        OperationResponse,
        SnapshotResponse,
    )

    app = FastAPI(
        title="Tenpair Engine API",
        description="""
Number pairing puzzle engine with ordered edit delivery.

## Edit Delivery

Apply the `edits` of every operation response in order:

1. `row_removed` - drop row `row_index`, later rows move up
2. `tile_changed` - restyle the tile at `position`
3. `tile_appended` - add `tile` at the end of the board

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `VALIDATION_ERROR` | Invalid request parameters |
| `INTERNAL_ERROR` | Engine invariants broken; resync from `/snapshot` |
""",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    api_service = service or GameService(config=GameConfig.from_env())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_service.config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request parameters",
            status_code=422,
            details={
                "errors": jsonable_encoder(
                    [{k: v for k, v in e.items() if k != "ctx"} for e in exc.errors()]
                )
            },
        )

    @app.exception_handler(InvariantViolation)
    async def invariant_violation_handler(request: Request, exc: InvariantViolation):
        logger.error("Invariant violation on %s: %s", request.url.path, exc)
        return make_error_response(
            ErrorCode.INTERNAL_ERROR,
            str(exc),
            status_code=500,
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return api_service.health()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(
        request: Annotated[CreateGameRequest, Body()] = CreateGameRequest(),
    ) -> GameResponse:
        """Create a game. The response carries the opening edits."""
        return api_service.create_game(request)

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{game_id}/snapshot",
        response_model=SnapshotResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get the full board",
    )
    async def get_snapshot(game_id: str) -> Union[SnapshotResponse, JSONResponse]:
        return respond(api_service.get_snapshot(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str):
        if not api_service.end_game(game_id):
            return make_error_response(
                ErrorCode.GAME_NOT_FOUND, f"Game {game_id} not found", status_code=404
            )
        return {"success": True, "game_id": game_id}

    # =========================================================================
    # Board Operations
    # =========================================================================

    operation_responses = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}

    @app.post(
        "/api/v1/games/{game_id}/tiles",
        response_model=OperationResponse,
        responses=operation_responses,
        tags=["Board"],
        summary="Append a tile",
    )
    async def add_tile(
        game_id: str,
        value: Annotated[int, Body(embed=True, ge=1, le=9)],
    ) -> Union[OperationResponse, JSONResponse]:
        return respond(api_service.add_tile(game_id, value))

    @app.post(
        "/api/v1/games/{game_id}/tiles/{tile_id}/toggle",
        response_model=OperationResponse,
        responses=operation_responses,
        tags=["Board"],
        summary="Select or deselect a tile",
    )
    async def toggle_select(game_id: str, tile_id: int) -> Union[OperationResponse, JSONResponse]:
        return respond(api_service.toggle_select(game_id, tile_id))

    @app.post(
        "/api/v1/games/{game_id}/pair",
        response_model=OperationResponse,
        responses=operation_responses,
        tags=["Board"],
        summary="Consume the two selected tiles",
    )
    async def use_selected_pair(game_id: str) -> Union[OperationResponse, JSONResponse]:
        return respond(api_service.use_selected_pair(game_id))

    @app.post(
        "/api/v1/games/{game_id}/rows/{row_index}/remove",
        response_model=OperationResponse,
        responses=operation_responses,
        tags=["Board"],
        summary="Remove a fully used row",
    )
    async def remove_row(game_id: str, row_index: int) -> Union[OperationResponse, JSONResponse]:
        return respond(api_service.remove_row(game_id, row_index))

    @app.post(
        "/api/v1/games/{game_id}/generation",
        response_model=OperationResponse,
        responses=operation_responses,
        tags=["Board"],
        summary="Duplicate every unused tile at the end of the board",
    )
    async def append_generation(game_id: str) -> Union[OperationResponse, JSONResponse]:
        return respond(api_service.append_generation(game_id))

    return app
