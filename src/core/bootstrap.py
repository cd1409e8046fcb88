"""
Bootstrap wiring

Builds the adapter registry and persistent store manager an application needs.
Every call returns fresh instances; callers own them and pass them on.
"""

import logging

from adapters import AdapterRegistry, ReferenceOutcomeAdapter
from config import Config, config
from persistence import PersistentStoreManager, StickyWildStore

logger = logging.getLogger(__name__)


def build_adapter_registry(cfg: Config = config) -> AdapterRegistry:
    """Registry with every adapter this build ships (just the reference one today)"""
    registry = AdapterRegistry()
    registry.register(
        ReferenceOutcomeAdapter(
            game_id=cfg.ADAPTER["reference_game_id"],
            adapter_id=cfg.ADAPTER["reference_adapter_id"],
            priority=cfg.ADAPTER["reference_priority"],
            columns=cfg.GRID["columns"],
            rows=cfg.GRID["rows"],
            schema_version=cfg.ADAPTER["schema_version"],
        )
    )
    return registry


def build_store_manager(cfg: Config = config) -> PersistentStoreManager:
    """Store manager with every persistent feature store registered"""
    manager = PersistentStoreManager()
    manager.register(cfg.STICKY["store_key"], StickyWildStore())
    return manager
