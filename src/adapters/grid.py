"""
Grid mapping: column-major backend grids to row-major canonical grids
"""

from collections.abc import Sequence

from config import config
from core.errors import invalid_raw_schema

GRID_COLUMNS = config.GRID["columns"]
GRID_ROWS = config.GRID["rows"]


def transpose_grid(
    grid: Sequence[Sequence[int]] | None,
    columns: int = GRID_COLUMNS,
    rows: int = GRID_ROWS,
) -> list[list[int]]:
    """
    Transpose a column-major grid ([col][row]) into row-major form ([row][col]).

    Args:
        grid: Exactly `columns` columns, each holding exactly `rows` symbols
        columns: Expected column count
        rows: Expected row count per column

    Returns:
        New grid of `rows` rows by `columns` entries with out[r][c] == grid[c][r]

    Raises:
        OutcomeContractError: INVALID_RAW_SCHEMA on a wrong column or row count
    """
    if not grid or len(grid) != columns:
        raise invalid_raw_schema(f"Expected {columns} columns in grid")

    for column in grid:
        if column is None or len(column) != rows:
            raise invalid_raw_schema(f"Expected {rows} rows per column")

    return [[int(grid[c][r]) for c in range(columns)] for r in range(rows)]


def flat_index(row: int, col: int, columns: int = GRID_COLUMNS) -> int:
    """Row-major flat index of a cell"""
    return row * columns + col
