"""
Tests for AdapterRegistry resolution order
"""

import logging

import pytest

from adapters import AdapterRegistry, OutcomeAdapter
from core.errors import AdapterNotFoundError, OutcomeContractError
from models import AdapterContext, ContractErrorCode


class FakeAdapter(OutcomeAdapter):
    """Adapter that supports a fixed set of game ids and records calls"""

    def __init__(self, adapter_id, priority=100, games=("wildvodu",)):
        self.id = adapter_id
        self.priority = priority
        self.games = set(games)
        self.calls = []

    def supports(self, context):
        return context.game_id in self.games

    def parse(self, raw):
        self.calls.append(("parse", raw))
        return raw

    def to_normalized(self, parsed, context):
        self.calls.append(("to_normalized", parsed))
        return f"{self.id}:{parsed}"


@pytest.fixture
def empty_registry():
    return AdapterRegistry()


class TestResolve:
    """Test AdapterRegistry.resolve()"""

    def test_single_adapter(self, registry, adapter, context):
        assert registry.resolve(context) is adapter

    def test_lowest_priority_wins(self, empty_registry, context):
        late = FakeAdapter("late", priority=200)
        early = FakeAdapter("early", priority=10)
        empty_registry.register(late)
        empty_registry.register(early)

        assert empty_registry.resolve(context) is early

    def test_equal_priority_keeps_registration_order(self, empty_registry, context):
        first = FakeAdapter("first", priority=50)
        second = FakeAdapter("second", priority=50)
        empty_registry.register(first)
        empty_registry.register(second)

        assert empty_registry.resolve(context) is first

    def test_unsupported_adapters_skipped(self, empty_registry, context):
        other = FakeAdapter("other", priority=1, games=("other-game",))
        fallback = FakeAdapter("fallback", priority=500)
        empty_registry.register(other)
        empty_registry.register(fallback)

        assert empty_registry.resolve(context) is fallback

    def test_no_adapter_raises(self, empty_registry):
        empty_registry.register(FakeAdapter("other", games=("other-game",)))

        with pytest.raises(AdapterNotFoundError) as exc_info:
            empty_registry.resolve(AdapterContext(game_id="unknown-game"))

        assert exc_info.value.code == ContractErrorCode.ADAPTER_NOT_FOUND
        assert exc_info.value.game_id == "unknown-game"
        assert "unknown-game" in str(exc_info.value)

    def test_empty_registry_raises(self, empty_registry, context):
        with pytest.raises(OutcomeContractError):
            empty_registry.resolve(context)

    def test_registration_after_resolution_warns(self, registry, context, caplog):
        registry.resolve(context)

        with caplog.at_level(logging.WARNING):
            registry.register(FakeAdapter("late"))

        assert "after first resolution" in caplog.text
        assert len(registry) == 2


class TestNormalize:
    def test_routes_through_resolved_adapter(self, empty_registry, context):
        adapter = FakeAdapter("fake")
        empty_registry.register(adapter)

        result = empty_registry.normalize("payload", context)

        assert result == "fake:payload"
        assert adapter.calls == [("parse", "payload"), ("to_normalized", "payload")]

    def test_reference_payload(self, registry, context, reference_payload):
        outcome = registry.normalize(reference_payload, context)

        assert outcome.total_win == 50


class TestIntrospection:
    def test_adapters_in_resolution_order(self, empty_registry):
        empty_registry.register(FakeAdapter("b", priority=20))
        empty_registry.register(FakeAdapter("a", priority=10))

        assert [a.id for a in empty_registry.adapters] == ["a", "b"]
        assert len(empty_registry) == 2

    def test_repr(self, registry):
        assert "reference:wildvodu" in repr(registry)
