"""
Session Module - Drives edit delivery for one or more boards.

- CooperativeScheduler runs one render job per tick
- GameLoop wires engine, reconciler, scheduler and adapter together
- SessionManager keeps in-memory sessions for the API

Sessions are EPHEMERAL: nothing is persisted.
"""

from .scheduler import CooperativeScheduler
from .game_loop import GameLoop
from .manager import SessionManager, Session

__all__ = [
    "CooperativeScheduler",
    "GameLoop",
    "SessionManager",
    "Session",
]
