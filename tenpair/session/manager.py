"""
Session Manager - Creates and tracks in-memory game sessions.

A session is one board plus the machinery that delivers its edits.
There is no persistence: ending a session drops the board for good.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import time
import uuid

from ..config import GameConfig
from .game_loop import GameLoop


@dataclass
class Session:
    """An ephemeral game session."""
    session_id: str
    loop: GameLoop
    created_at: float
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def engine(self):
        return self.loop.engine


class SessionManager:
    """
    Manages game sessions.

    Sessions created here run in pull mode: the caller takes edits
    from the session's queue instead of a scheduler pushing them.
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._sessions: dict[str, Session] = {}

    def create_session(self, seed_initial: bool = True, width: int | None = None) -> Session:
        """
        Create a new session.

        Args:
            seed_initial: Lay out the standard opening board
            width: Override the configured grid width

        Returns:
            New Session with its opening edits already queued
        """
        config = self.config
        if width is not None:
            config = GameConfig(
                grid_width=width,
                tick_ms=config.tick_ms,
                environment=config.environment,
                allowed_origins=config.allowed_origins,
            )

        loop = GameLoop.create(config, scheduled=False)
        if seed_initial:
            loop.create_initial_state()

        session = Session(
            session_id=str(uuid.uuid4()),
            loop=loop,
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> list[str]:
        return list(self._sessions.keys())

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """Drop sessions older than max_age_seconds. Returns how many went."""
        now = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if now - session.created_at > max_age_seconds
        ]
        for sid in stale:
            self.end_session(sid)
        return len(stale)
