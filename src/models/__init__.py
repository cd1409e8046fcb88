"""
Data contracts: raw backend payloads, canonical outcomes, round context

Schema Version: 1.0.0
"""

from .context import AdapterContext
from .enums import ContractErrorCode, FeatureType, ReplayPolicy, ReplayState, StepType
from .outcome import (
    Bet,
    CascadeOutcome,
    FeaturePayload,
    NormalizedWin,
    PresentationHints,
    Step,
    StepMeta,
)
from .raw_payload import (
    CurrentPointer,
    LineWin,
    ResultEntry,
    RoundRecord,
    SpinResponse,
    SpinResult,
)

__all__ = [
    "AdapterContext",
    "Bet",
    "CascadeOutcome",
    "ContractErrorCode",
    "CurrentPointer",
    "FeaturePayload",
    "FeatureType",
    "LineWin",
    "NormalizedWin",
    "PresentationHints",
    "ReplayPolicy",
    "ReplayState",
    "ResultEntry",
    "RoundRecord",
    "SpinResponse",
    "SpinResult",
    "Step",
    "StepMeta",
    "StepType",
]
