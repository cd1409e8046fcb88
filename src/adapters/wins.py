"""
Win mapping: raw line wins to normalized wins with flat positions
"""

from collections.abc import Iterable

from models import LineWin, NormalizedWin

from .grid import GRID_COLUMNS, flat_index


def has_pattern(line: LineWin | None) -> bool:
    """A line is mappable only when it carries a per-column row pattern.

    An empty pattern still counts (it maps to a win with no positions); only a
    missing pattern or a missing line is dropped.
    """
    return line is not None and line.p is not None


def map_line_win(line: LineWin, columns: int = GRID_COLUMNS) -> NormalizedWin:
    """
    Convert one raw line win into a normalized win.

    Positions cover only the first `mc` columns of the pattern, so a win has
    exactly min(mc, len(p)) positions. A match count longer than the pattern
    consumes what is there, nothing more.
    """
    positions = [
        flat_index(row_index, col_index, columns)
        for col_index, row_index in enumerate(line.p or [])
        if col_index < line.mc
    ]
    return NormalizedWin(symbol_id=int(line.s), amount=float(line.w), positions=positions)


def map_line_wins(
    lines: Iterable[LineWin | None], columns: int = GRID_COLUMNS
) -> list[NormalizedWin]:
    """Map every line that has a pattern; lines without one are filtered out."""
    return [map_line_win(line, columns) for line in lines if has_pattern(line)]
