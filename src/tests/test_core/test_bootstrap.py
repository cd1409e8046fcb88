"""
Tests for bootstrap wiring
"""

from config import Config
from core import build_adapter_registry, build_store_manager
from models import AdapterContext
from persistence import StickyWildStore


class TestBuildAdapterRegistry:
    def test_reference_adapter_registered(self, context, reference_payload):
        registry = build_adapter_registry()

        assert [a.id for a in registry.adapters] == ["reference:wildvodu"]
        assert registry.normalize(reference_payload, context).total_win == 50

    def test_fresh_instance_per_call(self):
        assert build_adapter_registry() is not build_adapter_registry()

    def test_uses_given_config(self, reference_payload):
        cfg = Config(use_env=False)
        cfg.ADAPTER["reference_game_id"] = "wildvodu-eu"
        cfg.ADAPTER["schema_version"] = "2.0.0"

        registry = build_adapter_registry(cfg)
        outcome = registry.normalize(reference_payload, AdapterContext(game_id="wildvodu-eu"))

        assert outcome.schema_version == "2.0.0"


class TestBuildStoreManager:
    def test_sticky_store_registered(self):
        manager = build_store_manager()

        assert isinstance(manager.get("sticky_wilds"), StickyWildStore)
        assert manager.serialize_all() == {"sticky_wilds": {"wilds": []}}

    def test_store_key_from_config(self):
        cfg = Config(use_env=False)
        cfg.STICKY["store_key"] = "wilds_v2"

        assert build_store_manager(cfg).keys() == ["wilds_v2"]
