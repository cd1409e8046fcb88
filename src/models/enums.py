"""
Enumerations for step classification, feature payloads, errors and replay
"""

from enum import Enum


class StepType(str, Enum):
    """Semantic type of one step inside a cascade outcome.

    Only BASE and FEATURE_STEP are produced today. The remaining members are
    reserved so a finer classifier (respins vs free-spin steps) can be added
    without changing the wire type.
    """

    BASE = "BASE"
    FEATURE_STEP = "FEATURE_STEP"
    RESPIN = "RESPIN"
    FREE_SPIN = "FREE_SPIN"
    UNKNOWN = "UNKNOWN"


class FeatureType(str, Enum):
    """Feature payload types, in the order they appear on an outcome"""

    SCATTER_INFO = "scatter_info"
    FREE_SPINS_TRIGGER = "free_spins_trigger"
    STICKY_WILDS = "sticky_wilds"


class ContractErrorCode(str, Enum):
    """Error codes raised at the transport boundary"""

    INVALID_RAW_SCHEMA = "INVALID_RAW_SCHEMA"
    ADAPTER_NOT_FOUND = "ADAPTER_NOT_FOUND"


class ReplayState(str, Enum):
    """Fixture replay lifecycle"""

    UNLOADED = "UNLOADED"
    LOADED = "LOADED"
    CONSUMING = "CONSUMING"
    CYCLING = "CYCLING"
    EXHAUSTED = "EXHAUSTED"


class ReplayPolicy(str, Enum):
    """What a replay runner does once every fixture has been served"""

    EXHAUST = "exhaust"
    CYCLE = "cycle"
