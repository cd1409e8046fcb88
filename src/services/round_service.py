"""
Round Service - live play and recovery over the outcome pipeline

Control flow per round:
    raw JSON -> registry.resolve(context) -> adapter.parse -> adapter.to_normalized
    -> each step's StepMeta into the persistent stores -> outcome listeners

Recovery (reconnect mid-round):
    normalize the resumed payload -> hydrate stores from the snapshot
    -> overlay sticky wilds on the resume step grid -> RecoveredRound
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from adapters.registry import AdapterRegistry
from config import config
from models import AdapterContext, CascadeOutcome
from persistence import PersistentStoreManager, StickyWildStore

from .logger import PerformanceLogger

logger = logging.getLogger(__name__)

OutcomeListener = Callable[[CascadeOutcome], None]


@dataclass(frozen=True)
class RecoveredRound:
    """What a client needs to rebuild its view after a reconnect"""

    outcome: CascadeOutcome
    resume_step: int
    visible_grid: list[list[int]]


class RoundService:
    """
    Drives rounds through the adapter registry and persistent stores.

    Usage:
        service = RoundService(build_adapter_registry(), build_store_manager())
        service.begin_round()
        outcome = service.process(raw, AdapterContext(game_id="wildvodu"))
        snapshot = service.snapshot()
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        stores: PersistentStoreManager,
        sticky_symbol_id: int = config.STICKY["wild_symbol_id"],
        sticky_store_key: str = config.STICKY["store_key"],
    ):
        self.registry = registry
        self.stores = stores
        self.sticky_symbol_id = sticky_symbol_id
        self.sticky_store_key = sticky_store_key
        self._listeners: list[OutcomeListener] = []
        self._rounds_processed = 0

    @property
    def rounds_processed(self) -> int:
        return self._rounds_processed

    def on_outcome(self, listener: OutcomeListener) -> None:
        """Register a callback invoked with every processed outcome"""
        self._listeners.append(listener)

    def begin_round(self) -> None:
        """Clear per-round feature state (sticky wilds reset at round start)"""
        self.stores.reset_all()
        logger.debug("Persistent stores reset for new round")

    def normalize(self, raw: Any, context: AdapterContext) -> CascadeOutcome:
        """Resolve, parse and normalize without touching the stores"""
        adapter = self.registry.resolve(context)
        with PerformanceLogger(logger, f"normalize:{adapter.id}"):
            return adapter.to_normalized(adapter.parse(raw), context)

    def process(self, raw: Any, context: AdapterContext) -> CascadeOutcome:
        """
        Normalize a live round and fold its steps into the persistent stores

        Raises:
            OutcomeContractError: On any validation failure; stores are left
                as they were because nothing is applied before normalization
                succeeds
        """
        outcome = self.normalize(raw, context)

        for step in outcome.steps:
            self.stores.apply_from_step(step.meta)

        self._rounds_processed += 1
        logger.info(
            f"Processed round {outcome.round_id} ({len(outcome.steps)} steps, "
            f"total_win={outcome.total_win})"
        )
        self._emit(outcome)
        return outcome

    def snapshot(self) -> dict[str, Any]:
        """Recovery snapshot of every persistent store"""
        return self.stores.serialize_all()

    def recover(
        self,
        snapshot: Mapping[str, Any] | None,
        raw: Any,
        context: AdapterContext,
    ) -> RecoveredRound:
        """
        Restore feature state and rebuild the visible grid after a reconnect

        The payload is normalized before hydration, so a malformed payload
        raises with the prior store state intact.
        """
        outcome = self.normalize(raw, context)
        self.stores.hydrate_all(snapshot)

        resume_step = self._resume_index(outcome)
        grid = outcome.steps[resume_step].grid_after

        sticky = self.stores.get(self.sticky_store_key)
        if isinstance(sticky, StickyWildStore):
            grid = sticky.apply_to_grid(grid, self.sticky_symbol_id)
        else:
            grid = [list(row) for row in grid]

        logger.info(f"Recovered round {outcome.round_id} at step {resume_step}")
        return RecoveredRound(outcome=outcome, resume_step=resume_step, visible_grid=grid)

    @staticmethod
    def _resume_index(outcome: CascadeOutcome) -> int:
        # restoreStep comes from the backend resume pointer and can point past
        # the steps we actually received; clamp into range.
        hint = outcome.presentation_hints.restore_step
        return max(0, min(hint, len(outcome.steps) - 1))

    def _emit(self, outcome: CascadeOutcome) -> None:
        for listener in self._listeners:
            try:
                listener(outcome)
            except Exception as e:
                logger.error(f"Outcome listener error: {e}", exc_info=True)
