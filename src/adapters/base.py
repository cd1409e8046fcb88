"""
OutcomeAdapter Interface - Abstract base for backend game variants

One adapter exists per backend game variant. Adapters are selected by the
AdapterRegistry through `supports` and then:
- parse: validate the raw, untyped payload
- to_normalized: reshape the parsed payload into a CascadeOutcome
"""

from abc import ABC, abstractmethod
from typing import Any

from models import AdapterContext, CascadeOutcome


class OutcomeAdapter(ABC):
    """
    Abstract base class for outcome adapters

    Subclasses set `id` and `priority` (lower runs first during resolution).
    Neither parse nor to_normalized performs I/O.
    """

    id: str = "abstract"
    priority: int = 100

    @abstractmethod
    def supports(self, context: AdapterContext) -> bool:
        """
        Cheap membership test for a round context

        Args:
            context: Round context (game id, currency)

        Returns:
            True if this adapter understands rounds for that context
        """
        pass

    @abstractmethod
    def parse(self, raw: Any) -> Any:
        """
        Validate a raw payload

        Raises:
            OutcomeContractError: INVALID_RAW_SCHEMA if malformed or failed
        """
        pass

    @abstractmethod
    def to_normalized(self, parsed: Any, context: AdapterContext) -> CascadeOutcome:
        """
        Reshape a parsed payload into the canonical outcome

        Raises:
            OutcomeContractError: INVALID_RAW_SCHEMA on structural problems
        """
        pass

    def normalize(self, raw: Any, context: AdapterContext) -> CascadeOutcome:
        """parse followed by to_normalized"""
        return self.to_normalized(self.parse(raw), context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, priority={self.priority})"
