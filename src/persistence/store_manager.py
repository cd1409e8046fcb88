"""
PersistentStoreManager - named registry of persistent feature stores

Aggregates stores for unified serialize/hydrate/reset so recovery snapshots
are built and restored in one place:

    {"sticky_wilds": {"wilds": ["0,1", "3,2"]}}

Constructed once by the application and passed to consumers explicitly.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from models import StepMeta

from .base import PersistentFeatureStore

logger = logging.getLogger(__name__)


class PersistentStoreManager:
    """
    Keyed registry over PersistentFeatureStore instances.

    One lock guards apply/hydrate/reset so per-round application and recovery
    never interleave when the host is multi-threaded.
    """

    def __init__(self):
        self._stores: dict[str, PersistentFeatureStore] = {}
        self._lock = threading.RLock()

    def register(self, key: str, store: PersistentFeatureStore) -> None:
        """Install a store under a key, replacing any previous one"""
        with self._lock:
            if key in self._stores:
                logger.warning(f"Replacing persistent store '{key}'")
            self._stores[key] = store
        logger.info(f"Registered persistent store '{key}' ({type(store).__name__})")

    def get(self, key: str) -> PersistentFeatureStore | None:
        with self._lock:
            return self._stores.get(key)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._stores.keys())

    def serialize_all(self) -> dict[str, Any]:
        """Snapshot of every registered store, keyed by store key"""
        with self._lock:
            return {key: store.serialize() for key, store in self._stores.items()}

    def hydrate_all(self, snapshot: Mapping[str, Any] | None) -> None:
        """
        Hydrate every store whose key is present in the snapshot

        Stores absent from the snapshot keep their state (they are not
        reset). An empty or missing snapshot is a no-op.
        """
        if not snapshot:
            return

        with self._lock:
            for key, store in self._stores.items():
                if key in snapshot:
                    store.hydrate(snapshot[key])
                    logger.debug(f"Hydrated persistent store '{key}'")

    def reset_all(self) -> None:
        """Reset every store that supports reset()"""
        with self._lock:
            for key, store in self._stores.items():
                reset = getattr(store, "reset", None)
                if callable(reset):
                    reset()

    def apply_from_step(self, step_meta: StepMeta | Mapping[str, Any]) -> None:
        """Feed one step's metadata into every registered store"""
        with self._lock:
            for store in self._stores.values():
                store.apply_from_step(step_meta)

    def __contains__(self, key: str) -> bool:
        return key in self._stores

    def __len__(self) -> int:
        return len(self._stores)
