"""
Outcome adapters: raw backend payloads -> canonical CascadeOutcome
"""

from .base import OutcomeAdapter
from .features import extract_features
from .grid import flat_index, transpose_grid
from .reference import RESULT_KEY_POLICY, ReferenceOutcomeAdapter, select_result_key
from .registry import AdapterRegistry
from .steps import classify_step
from .wins import map_line_win, map_line_wins

__all__ = [
    "AdapterRegistry",
    "OutcomeAdapter",
    "RESULT_KEY_POLICY",
    "ReferenceOutcomeAdapter",
    "classify_step",
    "extract_features",
    "flat_index",
    "map_line_win",
    "map_line_wins",
    "select_result_key",
    "transpose_grid",
]
