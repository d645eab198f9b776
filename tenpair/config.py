"""
Runtime configuration read from the environment.

    TENPAIR_GRID_WIDTH   tiles per row (default 9)
    TENPAIR_TICK_MS      scheduler delay between ticks in ms (default 100)
    TENPAIR_ENV          deployment label (default "development")
    ALLOWED_ORIGINS      comma separated CORS origins for the API (default "*")
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

DEFAULT_GRID_WIDTH = 9
DEFAULT_TICK_MS = 100


@dataclass(frozen=True)
class GameConfig:
    """Board and scheduler settings shared by a game loop."""
    grid_width: int = DEFAULT_GRID_WIDTH
    tick_ms: int = DEFAULT_TICK_MS
    environment: str = "development"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if self.grid_width < 1:
            raise ValueError(f"grid_width must be positive, got {self.grid_width}")
        if self.tick_ms < 0:
            raise ValueError(f"tick_ms must not be negative, got {self.tick_ms}")

    @property
    def tick_interval(self) -> float:
        """Tick delay in seconds."""
        return self.tick_ms / 1000.0

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build a config from TENPAIR_* environment variables."""
        try:
            grid_width = int(os.getenv("TENPAIR_GRID_WIDTH", str(DEFAULT_GRID_WIDTH)))
            tick_ms = int(os.getenv("TENPAIR_TICK_MS", str(DEFAULT_TICK_MS)))
        except ValueError as e:
            raise ValueError(f"Invalid TENPAIR_* setting: {e}") from e

        return cls(
            grid_width=grid_width,
            tick_ms=tick_ms,
            environment=os.getenv("TENPAIR_ENV", "development"),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )
