"""
PersistentFeatureStore Interface - keyed, serializable cross-round feature state

A store is fed per-step metadata during live play and is serialized into
recovery snapshots. Stores may optionally define `reset()`; the store manager
only calls it on stores that have it.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from models import StepMeta


class PersistentFeatureStore(ABC):
    """
    Abstract base class for persistent feature stores

    Implementations must:
    - grow their state from step metadata (apply_from_step)
    - round-trip that state through serialize/hydrate
    - treat hydrate as a full replacement, never a merge
    """

    @abstractmethod
    def apply_from_step(
        self,
        step_meta: StepMeta | Mapping[str, Any],
        step_features: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Fold one step's metadata into the store

        Args:
            step_meta: Metadata of a canonical step (or its mapping form)
            step_features: Optional feature payloads for the step
        """
        pass

    @abstractmethod
    def serialize(self) -> Any:
        """Return a JSON-compatible blob of the current state"""
        pass

    @abstractmethod
    def hydrate(self, data: Any) -> None:
        """Replace the current state with a previously serialized blob"""
        pass
