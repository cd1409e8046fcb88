"""
Canonical Outcome Schema - engine-agnostic round result

Produced once per raw payload by an outcome adapter and consumed by the
rendering side. Python fields are snake_case; the wire form (``to_wire``)
uses camelCase keys:

    {"type": "CASCADE", "gameId", "schemaVersion", "roundId", "spinId",
     "bet": {"amount", "currency"}, "totalWin", "steps": [...],
     "features": [...], "presentationHints": {"restoreStep"}}

Models are frozen: an outcome is immutable once constructed.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import FeatureType, StepType


class CanonicalModel(BaseModel):
    """Base for canonical models: camelCase on the wire, immutable in memory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# STEP MODELS
# =============================================================================


class NormalizedWin(CanonicalModel):
    """A paying line with flat row-major positions (row * columns + col)."""

    symbol_id: int
    amount: float
    positions: list[int] = Field(default_factory=list)


class StepMeta(CanonicalModel):
    """Per-step metadata; also the input to persistent feature stores."""

    step_type: StepType
    step_index: int
    source_key: str
    sticky_wilds: dict[str, Any] = Field(default_factory=dict)
    scatter_count: int = 0
    trigger_free_game: bool = False


class Step(CanonicalModel):
    """One discrete grid state plus its wins."""

    index: int
    grid_after: list[list[int]] = Field(..., description="Row-major [row][col]")
    wins: list[NormalizedWin] = Field(default_factory=list)
    removed_positions: list[int] = Field(
        default_factory=list, description="Reserved for cascade removal; always empty today"
    )
    meta: StepMeta


# =============================================================================
# OUTCOME
# =============================================================================


class Bet(CanonicalModel):
    amount: float
    currency: str


class FeaturePayload(CanonicalModel):
    type: FeatureType
    payload: Any = None


class PresentationHints(CanonicalModel):
    restore_step: int = 0


class CascadeOutcome(CanonicalModel):
    """Canonical outcome made of an ordered sequence of steps."""

    type: Literal["CASCADE"] = "CASCADE"
    game_id: str
    schema_version: str
    round_id: str
    spin_id: str
    bet: Bet
    total_win: float
    steps: list[Step]
    features: list[FeaturePayload] = Field(default_factory=list)
    presentation_hints: PresentationHints = Field(default_factory=PresentationHints)

    def feature(self, feature_type: FeatureType) -> FeaturePayload | None:
        """Return the feature payload of the given type, if present."""
        for feature in self.features:
            if feature.type == feature_type:
                return feature
        return None

    def to_wire(self) -> dict:
        """Serialize to the camelCase JSON shape consumed by the renderer."""
        return self.model_dump(mode="json", by_alias=True)
