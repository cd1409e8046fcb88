"""
Outcome Replay Runner
Feeds a pre-recorded fixture pack through the adapter pipeline in place of a
live backend. Same registry and adapters, different raw-payload source.

State machine:
    UNLOADED --load()--> LOADED --next()--> CONSUMING
    CONSUMING --last fixture served, EXHAUST--> EXHAUSTED (next() raises)
    CONSUMING --past the end, CYCLE--> CYCLING (wraps to the first fixture)
load() is the only way into LOADED and may be called again at any time; it
replaces the fixture set and rewinds the cursor.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from adapters.registry import AdapterRegistry
from config import config
from models import AdapterContext, CascadeOutcome, ReplayPolicy, ReplayState

from .errors import ReplayExhaustedError, ReplayNotLoadedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fixture:
    """One raw payload plus an optional round-context override"""

    payload: Any
    context: AdapterContext | None = None


def load_fixture_pack(path: str | Path) -> list[Any]:
    """
    Load a fixture pack (JSON array) from disk

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON array
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Fixture pack not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in fixture pack {path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Fixture pack must be a JSON array, got {type(data).__name__}")

    return data


def _to_fixture(entry: Any, index: int) -> Fixture:
    """
    Accepts a bare raw payload, a Fixture, or an override envelope:
        {"payload": {...raw...}, "context": {"gameId": "...", "currency": "..."}}
    """
    if isinstance(entry, Fixture):
        return entry

    if isinstance(entry, Mapping) and "payload" in entry and "results" not in entry:
        context = entry.get("context")
        if context is None or isinstance(context, AdapterContext):
            return Fixture(payload=entry["payload"], context=context)
        try:
            return Fixture(payload=entry["payload"], context=AdapterContext.model_validate(context))
        except ValidationError as e:
            raise ValueError(f"Invalid context override in fixture {index}: {e}") from e

    return Fixture(payload=entry)


class ReplayRunner:
    """
    Serves fixtures in order and normalizes them through an AdapterRegistry.

    The end-of-pack policy is fixed at construction:
    - EXHAUST: after the last fixture, next() raises ReplayExhaustedError
    - CYCLE: next() wraps around to the first fixture

    Usage:
        runner = ReplayRunner(registry)
        runner.load(load_fixture_pack("fixtures/reference_p0.json"))
        outcome = runner.next()
    """

    def __init__(
        self,
        registry: AdapterRegistry,
        policy: ReplayPolicy = ReplayPolicy.EXHAUST,
        default_context: AdapterContext | None = None,
    ):
        """
        Args:
            registry: Registry used to resolve adapters for every fixture
            policy: End-of-pack behaviour
            default_context: Context for fixtures without an override
        """
        self._registry = registry
        self.policy = ReplayPolicy(policy)
        self.default_context = default_context or AdapterContext(
            game_id=config.ADAPTER["reference_game_id"],
            currency=config.ADAPTER["default_currency"],
        )

        self._fixtures: list[Fixture] = []
        self._cursor = 0
        self._cycles = 0
        self._state = ReplayState.UNLOADED

    @property
    def state(self) -> ReplayState:
        return self._state

    @property
    def cycles(self) -> int:
        """Number of times the pack has wrapped around (CYCLE policy)"""
        return self._cycles

    def load(self, pack: Iterable[Any]) -> None:
        """Replace the fixture set and rewind the cursor"""
        self._fixtures = [_to_fixture(entry, i) for i, entry in enumerate(pack)]
        self._cursor = 0
        self._cycles = 0
        self._state = ReplayState.LOADED
        logger.info(f"Loaded fixture pack ({len(self._fixtures)} fixtures, policy={self.policy.value})")

    def load_file(self, path: str | Path) -> None:
        self.load(load_fixture_pack(path))

    def next_raw(self) -> tuple[Any, AdapterContext]:
        """
        Advance and return the next raw payload with its round context

        Raises:
            ReplayNotLoadedError: If no pack has been loaded
            ReplayExhaustedError: If the pack is consumed (EXHAUST policy)
        """
        if self._state is ReplayState.UNLOADED:
            raise ReplayNotLoadedError("No fixture pack loaded")

        if self._cursor >= len(self._fixtures):
            if self.policy is ReplayPolicy.CYCLE and self._fixtures:
                self._cursor = 0
                self._cycles += 1
                self._state = ReplayState.CYCLING
                logger.info(f"Fixture pack wrapped around (cycle {self._cycles})")
            else:
                self._state = ReplayState.EXHAUSTED
                raise ReplayExhaustedError(
                    f"Fixture pack exhausted after {len(self._fixtures)} fixtures"
                )

        fixture = self._fixtures[self._cursor]
        self._cursor += 1

        if self._state is ReplayState.LOADED:
            self._state = ReplayState.CONSUMING
        if self.policy is ReplayPolicy.EXHAUST and self._cursor >= len(self._fixtures):
            self._state = ReplayState.EXHAUSTED

        logger.debug(f"Serving fixture {self._cursor}/{len(self._fixtures)}")
        return fixture.payload, fixture.context or self.default_context

    def next(self) -> CascadeOutcome:
        """Advance and return the next fixture as a canonical outcome"""
        payload, context = self.next_raw()
        return self._registry.normalize(payload, context)

    def has_next(self) -> bool:
        if self._state is ReplayState.UNLOADED:
            return False
        if self.policy is ReplayPolicy.CYCLE:
            return bool(self._fixtures)
        return self._cursor < len(self._fixtures)

    def peek_raw(self) -> Any | None:
        """Raw payload next() would serve, without advancing"""
        if not self.has_next():
            return None
        return self._fixtures[self._cursor % len(self._fixtures)].payload

    def progress(self) -> tuple[int, int]:
        """(fixtures served in the current pass, total fixtures)"""
        return (self._cursor, len(self._fixtures))

    def remaining(self) -> int:
        return len(self._fixtures) - self._cursor

    def __len__(self) -> int:
        return len(self._fixtures)

    def __repr__(self) -> str:
        return (f"ReplayRunner({self._cursor}/{len(self._fixtures)} fixtures, "
                f"state={self._state.value}, policy={self.policy.value})")
