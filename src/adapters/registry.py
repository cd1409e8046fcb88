"""
Adapter Registry - resolves the outcome adapter for a round context

Populated once at startup and read-only afterwards. Construct one per
application (or per test) and pass it to consumers; there is no global
instance.
"""

import logging
import threading
from typing import Any

from core.errors import AdapterNotFoundError
from models import AdapterContext, CascadeOutcome

from .base import OutcomeAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Priority-ordered collection of outcome adapters.

    Resolution is a linear scan: the first adapter (lowest priority value,
    ties broken by registration order) whose `supports` returns True wins.

    Usage:
        registry = AdapterRegistry()
        registry.register(ReferenceOutcomeAdapter())
        adapter = registry.resolve(AdapterContext(game_id="wildvodu"))
    """

    def __init__(self):
        self._adapters: list[OutcomeAdapter] = []
        self._lock = threading.Lock()
        self._resolved_once = False

    def register(self, adapter: OutcomeAdapter) -> None:
        """Append an adapter to the registry"""
        with self._lock:
            if self._resolved_once:
                logger.warning(f"Adapter {adapter.id} registered after first resolution")
            self._adapters.append(adapter)
        logger.info(f"Registered outcome adapter {adapter.id} (priority={adapter.priority})")

    def resolve(self, context: AdapterContext) -> OutcomeAdapter:
        """
        Return the first adapter supporting the context

        Raises:
            AdapterNotFoundError: If no registered adapter supports it
        """
        with self._lock:
            self._resolved_once = True
            # sorted() is stable, so equal priorities keep registration order
            for adapter in sorted(self._adapters, key=lambda a: a.priority):
                if adapter.supports(context):
                    return adapter
        raise AdapterNotFoundError(context.game_id)

    def normalize(self, raw: Any, context: AdapterContext) -> CascadeOutcome:
        """Resolve, parse and normalize a raw payload in one call"""
        return self.resolve(context).normalize(raw, context)

    @property
    def adapters(self) -> list[OutcomeAdapter]:
        """Adapters in resolution order"""
        with self._lock:
            return sorted(self._adapters, key=lambda a: a.priority)

    def __len__(self) -> int:
        return len(self._adapters)

    def __repr__(self) -> str:
        return f"AdapterRegistry({[a.id for a in self.adapters]})"
