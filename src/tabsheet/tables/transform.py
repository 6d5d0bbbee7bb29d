"""Column remapping, column selection/reordering, and header/footer trimming.

Steps run in a fixed order against a copy of the input grid:
  1. column modifiers  -- per-column string functions on every body row,
                          indexed against the ORIGINAL column layout
  2. column order      -- select and reorder columns (identity when empty)
  3. header / footer   -- drop the first and/or last row of the result

The column order and modifier columns are validated before any step runs, so a broken preset
aborts the call without producing a partially shaped grid.
"""

import logging
from typing import Any, Callable, Mapping

from tabsheet.tables.errors import ConfigurationError, ErrorKind
from tabsheet.tables.schema import Grid, TableOptions

logger = logging.getLogger(__name__)


def _validate_column_order(column_order: tuple[Any, ...]) -> list[int]:
    """Return the column order as ints, or raise if any entry is not a zero-based index."""
    for entry in column_order:
        # bool is an int subclass but never a meaningful column index
        if isinstance(entry, bool) or not isinstance(entry, int) or entry < 0:
            raise ConfigurationError(
                ErrorKind.INVALID_COLUMN_ORDER,
                f"column filters must be zero-based integer indices (got {entry!r})",
            )
    return list(column_order)


def _validate_modifier_columns(modifiers: Mapping[int, Callable[[str], str]]) -> None:
    """Raise if any column modifier is keyed by a negative column index."""
    for col_idx in modifiers:
        if col_idx < 0:
            raise ConfigurationError(
                ErrorKind.INVALID_COLUMN_MODIFIER,
                f"column modifiers must be keyed by zero-based column indices (got {col_idx!r})",
            )


def _apply_modifiers(grid: Grid, modifiers: Mapping[int, Callable[[str], str]]) -> None:
    """Apply column modifiers in place to every row except the header."""
    for row_idx in range(1, len(grid)):
        row = grid[row_idx]
        for col_idx, modifier in modifiers.items():
            if col_idx >= len(row):
                logger.debug("Row %d has no column %d; modifier skipped", row_idx, col_idx)
                continue
            row[col_idx] = modifier(row[col_idx])


def _select_columns(grid: Grid, column_order: list[int]) -> Grid:
    """Build each row from the listed columns; a column past the row's end reads as ''."""
    if not column_order:
        return grid
    return [[row[i] if i < len(row) else "" for i in column_order] for row in grid]


def _trim_rows(grid: Grid, remove_header: bool, remove_footer: bool) -> Grid:
    """Drop the header and/or footer row."""
    if remove_header and remove_footer:
        return grid[1:-1] if len(grid) >= 2 else []
    if remove_header:
        return grid[1:]
    if remove_footer:
        return grid[:-1]
    return grid


def transform(grid: Grid, options: TableOptions) -> Grid:
    """Shape an extracted grid according to the options.  The input grid is not mutated.

    Raises ConfigurationError when the column order holds anything other
    than non-negative integers, or a column modifier is keyed by a
    negative column index.
    """
    column_order = _validate_column_order(options.column_order)
    _validate_modifier_columns(options.column_modifiers)

    result = [list(row) for row in grid]
    _apply_modifiers(result, options.column_modifiers)
    result = _select_columns(result, column_order)
    result = _trim_rows(result, options.remove_header_row, options.remove_footer_row)

    logger.info("Transformed grid: %d -> %d rows", len(grid), len(result))
    return result
