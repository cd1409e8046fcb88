"""
ReferenceOutcomeAdapter - reference game ("wildvodu") backend

Contract:
- Input: SpinResponse JSON (see models.raw_payload)
- Output: CascadeOutcome
- Grid: column-major [col][row] -> row-major [row][col]
- Win positions: row-major flat indices (row * columns + col)
"""

import json
import logging
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from config import config
from core.errors import invalid_raw_schema
from models import (
    AdapterContext,
    Bet,
    CascadeOutcome,
    PresentationHints,
    ResultEntry,
    RoundRecord,
    SpinResponse,
    Step,
    StepMeta,
)

from .base import OutcomeAdapter
from .features import extract_features
from .grid import GRID_COLUMNS, GRID_ROWS, transpose_grid
from .steps import classify_step
from .wins import map_line_wins

logger = logging.getLogger(__name__)

# Which entry of the results map is authoritative. The backend does not
# document whether a response can carry more than one request key, nor which
# one wins if it does. Until that is confirmed we take the first key in
# payload order and log when others are present.
RESULT_KEY_POLICY = "first-in-payload-order"


def select_result_key(results: Mapping[str, ResultEntry]) -> str:
    """
    Pick the authoritative request key from a results map.

    Raises:
        OutcomeContractError: INVALID_RAW_SCHEMA if the map is empty
    """
    keys = list(results.keys())
    if not keys:
        raise invalid_raw_schema("No keys in results map")
    if len(keys) > 1:
        logger.warning(
            f"Results map has {len(keys)} keys {keys}; using '{keys[0]}' ({RESULT_KEY_POLICY})"
        )
    return keys[0]


def _default_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def _format_validation_error(error: ValidationError) -> str:
    details = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        details.append(f"{loc}: {err['msg']}")
    return "; ".join(details)


class ReferenceOutcomeAdapter(OutcomeAdapter):
    """
    Adapts the reference backend response to a CascadeOutcome.

    Single-step and cascade rounds share one path: a single record is wrapped
    into a one-element list before steps are built.
    """

    def __init__(
        self,
        game_id: str = config.ADAPTER["reference_game_id"],
        adapter_id: str = config.ADAPTER["reference_adapter_id"],
        priority: int = config.ADAPTER["reference_priority"],
        columns: int = GRID_COLUMNS,
        rows: int = GRID_ROWS,
        schema_version: str = config.ADAPTER["schema_version"],
        id_factory: Callable[[str], str] | None = None,
    ):
        """
        Args:
            game_id: Game identifier this adapter supports
            adapter_id: Adapter identity reported to the registry
            priority: Resolution priority (lower runs first)
            columns: Expected grid columns
            rows: Expected grid rows
            schema_version: Version stamped on every outcome
            id_factory: Builds round/spin ids from a prefix (random by default)
        """
        self.game_id = game_id
        self.id = adapter_id
        self.priority = priority
        self.columns = columns
        self.rows = rows
        self.schema_version = schema_version
        self._make_id = id_factory or _default_id

    def supports(self, context: AdapterContext) -> bool:
        return context.game_id == self.game_id

    def parse(self, raw: Any) -> SpinResponse:
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise invalid_raw_schema(f"Reference adapter received non-JSON response: {e}") from e

        if not isinstance(raw, dict) or "results" not in raw:
            raise invalid_raw_schema("Reference adapter received invalid raw response")

        if not raw.get("success"):
            raise invalid_raw_schema("Backend response indicated failure")

        try:
            return SpinResponse.model_validate(raw)
        except ValidationError as e:
            raise invalid_raw_schema(
                f"Reference adapter received invalid raw response: {_format_validation_error(e)}"
            ) from e

    def to_normalized(self, response: SpinResponse, context: AdapterContext) -> CascadeOutcome:
        source_key = select_result_key(response.results)
        entry = response.results[source_key]

        if entry is None or entry.data is None:
            raise invalid_raw_schema(f"Missing data for key {source_key}")

        records = entry.data if isinstance(entry.data, list) else [entry.data]
        if not records:
            raise invalid_raw_schema("Data array is empty")

        steps = [self._map_step(record, index, source_key) for index, record in enumerate(records)]
        first = records[0]

        outcome = CascadeOutcome(
            game_id=context.game_id,
            schema_version=self.schema_version,
            round_id=self._make_id("ref"),
            spin_id=self._make_id("spin"),
            bet=Bet(amount=first.betAmount, currency=context.currency),
            total_win=records[-1].totalWon,
            steps=steps,
            features=extract_features(records),
            presentation_hints=PresentationHints(
                restore_step=first.current.next if first.current else 0
            ),
        )

        logger.debug(
            f"Normalized round {outcome.round_id}: key={source_key}, "
            f"steps={len(steps)}, total_win={outcome.total_win}"
        )
        return outcome

    def _map_step(self, record: RoundRecord, index: int, source_key: str) -> Step:
        spin = record.spinResult

        grid_after = transpose_grid(spin.grid, self.columns, self.rows)
        wins = map_line_wins(spin.lines, self.columns)

        meta = StepMeta(
            step_type=classify_step(index),
            step_index=index,
            source_key=source_key,
            sticky_wilds=spin.stickyWilds,
            scatter_count=spin.scatterCount,
            trigger_free_game=spin.triggerFreeGame,
        )

        return Step(index=index, grid_after=grid_after, wins=wins, removed_positions=[], meta=meta)
