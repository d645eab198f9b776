"""
Pytest fixtures for Tenpair tests.
"""

import pytest

from ..engine_core import RuleEngine
from ..session import GameLoop, CooperativeScheduler
from ..view import GridAdapter, Reconciler


OPENING_VALUES = list(range(1, 10)) + [v for k in range(1, 10) for v in (1, k)]


@pytest.fixture
def engine() -> RuleEngine:
    """Empty 9-wide board."""
    return RuleEngine(width=9)


@pytest.fixture
def make_engine():
    """Factory for an engine pre-filled with the given values."""
    def _make(values, width=9) -> RuleEngine:
        built = RuleEngine(width=width)
        for value in values:
            assert built.add_tile(value).success
        return built
    return _make


@pytest.fixture
def opening_engine(make_engine) -> RuleEngine:
    """The standard 27-tile opening board."""
    return make_engine(OPENING_VALUES)


@pytest.fixture
def consume():
    """Select the tiles at two positions and use them as a pair."""
    def _consume(engine: RuleEngine, i: int, j: int):
        assert engine.toggle_select(engine.tile_at(i).tile_id).success
        assert engine.toggle_select(engine.tile_at(j).tile_id).success
        return engine.use_selected_pair()
    return _consume


@pytest.fixture
def clearable_engine(make_engine) -> RuleEngine:
    """
    Three rows whose first row can be cleared with horizontal matches:
    (0,1) (2,3) (4,5) (6,7) sum to ten, (8,9) are equal fives.
    """
    return make_engine(
        [1, 9, 2, 8, 3, 7, 4, 6, 5]
        + [5, 2, 3, 4, 6, 7, 8, 9, 1]
        + [2, 4, 6, 8, 1, 3, 5, 7, 9]
    )


@pytest.fixture
def scheduled_loop() -> GameLoop:
    """Game loop with a grid adapter and a running, manually ticked scheduler."""
    engine = RuleEngine(width=9)
    return GameLoop(
        engine=engine,
        reconciler=Reconciler(width=9),
        adapter=GridAdapter(width=9),
        scheduler=CooperativeScheduler(interval=0.0, running=True),
    )
