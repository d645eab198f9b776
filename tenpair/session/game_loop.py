"""
Game Loop - Wires the rule engine to a presentation adapter.

The loop:
1. A caller (input handler, autoplay policy, API) invokes an operation
2. The rule engine validates and mutates the board
3. On success, the reconciler diffs the new snapshot into edits
4. Each edit is scheduled as one render job
5. The scheduler runs one job per tick; each job applies one edit
6. When the queue runs dry the adapter verifies the full snapshot

Rejected operations never reach step 3, so they produce no edits.
Without a scheduler the loop runs in pull mode: edits stay queued until
take_edits() is called.
"""

from __future__ import annotations
import logging

from ..config import GameConfig
from ..engine_core import RuleEngine, OperationResult
from ..view import Edit, Reconciler, PresentationAdapter, GridAdapter
from .scheduler import CooperativeScheduler

logger = logging.getLogger(__name__)


class GameLoop:
    """
    The main game driver.

    Usage:
        loop = GameLoop.create(GameConfig())
        loop.create_initial_state()

        # Clicks come in
        loop.on_click(tile_id)

        # Inside an event loop the first toggle starts delivery
        loop.toggle_pause()
    """

    def __init__(
        self,
        engine: RuleEngine,
        reconciler: Reconciler | None = None,
        adapter: PresentationAdapter | None = None,
        scheduler: CooperativeScheduler | None = None,
    ):
        self.engine = engine
        self.reconciler = reconciler or Reconciler(width=engine.width)
        self.adapter = adapter
        self.scheduler = scheduler

    @classmethod
    def create(
        cls,
        config: GameConfig | None = None,
        adapter: PresentationAdapter | None = None,
        scheduled: bool = True,
    ) -> GameLoop:
        """Build a loop with a grid adapter and a scheduler from config."""
        config = config or GameConfig()
        engine = RuleEngine(width=config.grid_width)
        scheduler = None
        if scheduled:
            scheduler = CooperativeScheduler(interval=config.tick_interval)
            adapter = adapter or GridAdapter(width=config.grid_width)
        return cls(engine=engine, adapter=adapter, scheduler=scheduler)

    # =========================================================================
    # Operations
    # =========================================================================

    def create_initial_state(self) -> int:
        """Seed 1..9 followed by the pairs (1, 1) .. (1, 9)."""
        for value in range(1, 10):
            self.engine.add_tile(value)
        for value in range(1, 10):
            self.engine.add_tile(1)
            self.engine.add_tile(value)
        return self.queue_updates()

    def add_tile(self, value: int) -> OperationResult:
        return self._apply(self.engine.add_tile(value))

    def toggle_select(self, tile_id: int) -> OperationResult:
        return self._apply(self.engine.toggle_select(tile_id))

    def use_selected_pair(self) -> OperationResult:
        return self._apply(self.engine.use_selected_pair())

    def remove_row(self, row_index: int) -> OperationResult:
        return self._apply(self.engine.remove_row(row_index))

    def append_generation(self) -> OperationResult:
        return self._apply(self.engine.append_generation())

    def on_click(self, tile_id: int) -> OperationResult:
        """Handle a click on a tile: toggle its selection."""
        return self.toggle_select(tile_id)

    def _apply(self, result: OperationResult) -> OperationResult:
        if result.success:
            self.queue_updates()
        return result

    # =========================================================================
    # Edit delivery
    # =========================================================================

    def queue_updates(self) -> int:
        """Reconcile the board and schedule one render job per new edit."""
        edits = self.reconciler.queue_updates(self.engine.snapshot())
        if self.scheduler is not None:
            for _ in edits:
                self.scheduler.schedule(self.render_single_update)
        return len(edits)

    def render_single_update(self) -> bool:
        """
        Deliver the oldest pending edit to the adapter.

        Returns False when nothing was delivered or the queue is now empty.
        """
        edit = self.reconciler.take_next_edit()
        if edit is None:
            logger.warning("No edit to take")
            return False

        if self.adapter is not None:
            self.adapter.apply(edit)

        if not self.reconciler.queue:
            if self.adapter is not None:
                self.adapter.verify(self.reconciler.latest)
            return False
        return True

    def render_updates(self, count: int) -> int:
        """Deliver up to `count` edits synchronously. Returns how many were delivered."""
        delivered = 0
        for _ in range(count):
            if not self.reconciler.queue:
                break
            delivered += 1
            if not self.render_single_update():
                break
        return delivered

    def take_edits(self) -> list[Edit]:
        """Pull mode: take every pending edit."""
        return self.reconciler.queue.drain()

    def toggle_pause(self):
        if self.scheduler is None:
            return
        if self.scheduler.running:
            self.scheduler.pause()
        else:
            self.scheduler.resume()

    @property
    def pending_edits(self) -> int:
        return len(self.reconciler.queue)
