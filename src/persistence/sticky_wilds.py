"""
StickyWildStore - sticky wild positions that persist across steps

Responsibilities:
- Maintain the set of active sticky coordinate keys
- Overlay sticky positions onto a row-major grid
- Serialize/hydrate for recovery snapshots ({"wilds": [key, ...]})

Keys arrive from the backend as "a,b" strings. We read them as "col,row"
(STICKY_KEY_AXES), but the backend contract has never confirmed the axis
order; it still needs sign-off from the backend owners. Keep every decode
going through StickyCoordinate so the order can change in one place.
"""

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from models import StepMeta

from .base import PersistentFeatureStore

logger = logging.getLogger(__name__)

STICKY_KEY_AXES = ("col", "row")


class StickyCoordinate(NamedTuple):
    """Decoded sticky wild position"""

    col: int
    row: int

    @classmethod
    def from_key(cls, key: str) -> "StickyCoordinate | None":
        """
        Decode a "col,row" key

        Returns None instead of raising when the key is malformed: one bad key
        must not blank an otherwise valid spin.
        """
        if not isinstance(key, str):
            return None
        parts = key.split(",")
        if len(parts) != 2:
            return None
        try:
            col, row = (int(part.strip()) for part in parts)
        except ValueError:
            return None
        return cls(col=col, row=row)

    def to_key(self) -> str:
        return f"{self.col},{self.row}"


def _sticky_map(step_meta: StepMeta | Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if step_meta is None:
        return None
    if isinstance(step_meta, StepMeta):
        return step_meta.sticky_wilds
    if isinstance(step_meta, Mapping):
        return step_meta.get("sticky_wilds", step_meta.get("stickyWilds"))
    return None


class StickyWildStore(PersistentFeatureStore):
    """
    Set of sticky wild coordinate keys for the current round.

    Grows monotonically within a round; cleared by reset() at round start and
    replaced wholesale by hydrate() on recovery.
    """

    def __init__(self):
        self._wilds: set[str] = set()

    @property
    def active_wilds(self) -> frozenset[str]:
        return frozenset(self._wilds)

    @property
    def coordinates(self) -> list[StickyCoordinate]:
        """Decodable coordinates, sorted; malformed keys are left out"""
        decoded = (StickyCoordinate.from_key(key) for key in self._wilds)
        return sorted(coord for coord in decoded if coord is not None)

    def reset(self) -> None:
        self._wilds.clear()

    def apply_from_step(
        self,
        step_meta: StepMeta | Mapping[str, Any],
        step_features: Mapping[str, Any] | None = None,
    ) -> None:
        """Union every key with a truthy marker into the set. Never removes keys."""
        payload = _sticky_map(step_meta)
        if not payload:
            return

        for key, marker in payload.items():
            if marker:
                self._wilds.add(key)

    def apply_to_grid(self, grid: list[list[int]], sticky_symbol_id: int) -> list[list[int]]:
        """
        Overlay sticky wilds onto a grid

        Args:
            grid: Row-major grid [row][col]; left untouched
            sticky_symbol_id: Symbol placed on every sticky position

        Returns:
            A new grid with sticky cells overwritten
        """
        new_grid = [list(row) for row in grid]

        for key in self._wilds:
            coord = StickyCoordinate.from_key(key)
            if coord is None:
                logger.debug(f"Skipping malformed sticky wild key {key!r}")
                continue
            if not (0 <= coord.row < len(new_grid) and 0 <= coord.col < len(new_grid[coord.row])):
                logger.debug(f"Skipping sticky wild {key!r} outside grid")
                continue
            new_grid[coord.row][coord.col] = sticky_symbol_id

        return new_grid

    def serialize(self) -> dict:
        return {"wilds": sorted(self._wilds)}

    def hydrate(self, data: Any) -> None:
        self._wilds.clear()
        if isinstance(data, Mapping) and isinstance(data.get("wilds"), list):
            self._wilds.update(str(key) for key in data["wilds"])

    def __len__(self) -> int:
        return len(self._wilds)

    def __repr__(self) -> str:
        return f"StickyWildStore({sorted(self._wilds)})"
