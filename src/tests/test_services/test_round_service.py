"""
Tests for RoundService - live processing and mid-round recovery
"""

import logging

import pytest

from core.errors import AdapterNotFoundError, OutcomeContractError
from models import AdapterContext
from services import RecoveredRound, RoundService

WILD = 90


@pytest.fixture
def service(registry, store_manager):
    return RoundService(registry, store_manager)


def default_row_major(rows=4, columns=5):
    """Row-major view of the default record grid (cell = col * 4 + row)"""
    return [[c * 4 + r for c in range(columns)] for r in range(rows)]


class TestProcess:
    """Test RoundService.process()"""

    def test_returns_outcome(self, service, context, reference_payload):
        outcome = service.process(reference_payload, context)

        assert outcome.total_win == 50
        assert service.rounds_processed == 1

    def test_steps_feed_sticky_store(self, service, context, cascade_payload, sticky_store):
        service.process(cascade_payload, context)

        assert sticky_store.active_wilds == {"0,0", "1,2"}

    def test_stickies_accumulate_until_round_reset(self, service, context, cascade_payload, sticky_store):
        service.process(cascade_payload, context)

        service.begin_round()

        assert len(sticky_store) == 0

    def test_failed_round_leaves_stores(self, service, context, sticky_store):
        sticky_store.hydrate({"wilds": ["2,2"]})

        with pytest.raises(OutcomeContractError):
            service.process({"success": False, "results": {}}, context)

        assert sticky_store.active_wilds == {"2,2"}
        assert service.rounds_processed == 0

    def test_unknown_game(self, service, reference_payload):
        with pytest.raises(AdapterNotFoundError):
            service.process(reference_payload, AdapterContext(game_id="unknown"))

    def test_listeners_notified(self, service, context, reference_payload):
        seen = []
        service.on_outcome(seen.append)

        outcome = service.process(reference_payload, context)

        assert seen == [outcome]

    def test_listener_error_does_not_break_round(self, service, context, reference_payload, caplog):
        seen = []

        def broken(outcome):
            raise RuntimeError("listener failed")

        service.on_outcome(broken)
        service.on_outcome(seen.append)

        with caplog.at_level(logging.ERROR):
            outcome = service.process(reference_payload, context)

        assert seen == [outcome]
        assert "listener failed" in caplog.text

    def test_normalize_does_not_touch_stores(self, service, context, cascade_payload, sticky_store):
        service.normalize(cascade_payload, context)

        assert len(sticky_store) == 0
        assert service.rounds_processed == 0


class TestSnapshotAndRecover:
    """Test snapshot() and recover()"""

    def test_snapshot(self, service, context, cascade_payload):
        service.process(cascade_payload, context)

        assert service.snapshot() == {"sticky_wilds": {"wilds": ["0,0", "1,2"]}}

    def test_recover_overlays_sticky_wilds(self, service, context, cascade_payload):
        snapshot = {"sticky_wilds": {"wilds": ["0,0", "1,2"]}}

        recovered = service.recover(snapshot, cascade_payload, context)

        expected = default_row_major()
        expected[0][0] = WILD
        expected[2][1] = WILD

        assert isinstance(recovered, RecoveredRound)
        assert recovered.resume_step == 2
        assert recovered.visible_grid == expected

    def test_recover_leaves_outcome_grid_untouched(self, service, context, cascade_payload):
        recovered = service.recover({"sticky_wilds": {"wilds": ["0,0"]}}, cascade_payload, context)

        assert recovered.outcome.steps[2].grid_after == default_row_major()

    def test_recover_hydrates_stores(self, service, context, reference_payload, sticky_store):
        sticky_store.hydrate({"wilds": ["4,4"]})

        service.recover({"sticky_wilds": {"wilds": ["3,1"]}}, reference_payload, context)

        assert sticky_store.active_wilds == {"3,1"}

    def test_resume_step_clamped(self, service, context, reference_payload):
        """restoreStep 1 on a single-step round resumes at step 0"""
        recovered = service.recover(None, reference_payload, context)

        assert recovered.outcome.presentation_hints.restore_step == 1
        assert recovered.resume_step == 0
        assert recovered.visible_grid[0] == [1, 1, 1, 1, 1]

    def test_custom_sticky_symbol(self, registry, store_manager, context, reference_payload):
        service = RoundService(registry, store_manager, sticky_symbol_id=7)

        recovered = service.recover({"sticky_wilds": {"wilds": ["4,3"]}}, reference_payload, context)

        assert recovered.visible_grid[3][4] == 7

    def test_malformed_payload_keeps_prior_state(self, service, context, sticky_store):
        sticky_store.hydrate({"wilds": ["1,1"]})

        with pytest.raises(OutcomeContractError):
            service.recover({"sticky_wilds": {"wilds": ["0,0"]}}, {"results": {}}, context)

        assert sticky_store.active_wilds == {"1,1"}
