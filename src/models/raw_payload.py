"""
Raw Round Payload Schema - reference backend (wildvodu)

Wire format returned by the backend play/init endpoints:

    {"success": bool, "balance": number,
     "results": {"<requestKey>": {"data": RoundRecord | [RoundRecord, ...]}}}

Field names mirror the wire. Grid dimensions are deliberately not checked
here; the adapter checks them while building steps.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# NESTED MODELS
# =============================================================================


class LineWin(BaseModel):
    """One paying line as reported by the backend."""

    s: int = Field(0, description="Symbol ID")
    l: list[int] | None = Field(None, description="Symbols on the line")  # noqa: E741
    mc: int = Field(0, description="Match count (columns from the left)")
    w: float = Field(0, description="Win amount")
    p: list[int] | None = Field(None, description="Row index per column, length = columns")

    @field_validator("s", "mc", "w", mode="before")
    @classmethod
    def coerce_missing(cls, v):
        """Backend sends null for zero values on some lines."""
        if v is None:
            return 0
        return v

    @field_validator("p", mode="before")
    @classmethod
    def drop_falsy_pattern(cls, v):
        """A falsy non-list pattern (0, false, "") means no pattern; [] is kept."""
        if not isinstance(v, list) and not v:
            return None
        return v


class SpinResult(BaseModel):
    """Per-step spin block."""

    grid: list[list[int]] = Field(default_factory=list, description="Column-major [col][row]")
    lines: list[LineWin | None] = Field(default_factory=list)
    scatterCount: int = Field(0, description="Scatter symbols landed")
    scatterPositions: list[list[int]] = Field(default_factory=list, description="[col, row] pairs")
    triggerFreeGame: bool = Field(False, description="Free game triggered on this step")
    respinsOffer: int | None = None
    stickyWilds: dict[str, Any] = Field(
        default_factory=dict, description="Coordinate key -> truthy marker"
    )

    @field_validator("lines", "scatterPositions", mode="before")
    @classmethod
    def coerce_list(cls, v):
        if v is None:
            return []
        return v

    @field_validator("stickyWilds", mode="before")
    @classmethod
    def coerce_map(cls, v):
        if v is None:
            return {}
        return v


class CurrentPointer(BaseModel):
    """Resume pointer used for mid-round recovery."""

    next: int = 0

    @field_validator("next", mode="before")
    @classmethod
    def coerce_missing(cls, v):
        """null or any other falsy pointer resumes at step 0."""
        if not v:
            return 0
        return v


class RoundRecord(BaseModel):
    """One round-data record (one step of a possibly multi-step round)."""

    gameType: str = ""
    betAmount: float = 0
    currentSpinWon: float = 0
    totalWon: float = 0
    current: CurrentPointer | None = None
    spinResult: SpinResult


class ResultEntry(BaseModel):
    """Entry in the results map; data is a single record or a cascade list."""

    data: RoundRecord | list[RoundRecord] | None = None


# =============================================================================
# TOP-LEVEL RESPONSE
# =============================================================================


class SpinResponse(BaseModel):
    """Complete backend response for a play/init request."""

    success: bool = False
    balance: float = 0
    results: dict[str, ResultEntry] = Field(default_factory=dict)
    session: Any = None
