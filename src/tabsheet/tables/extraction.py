"""Raw table source → normalised rectangular grid.

The header group is flattened into row 0 with no cell policy applied.
Body cells are collapsed to one string each according to the options'
multi-value policy and trimming flag, fully blank body rows are dropped,
and every row is padded to the widest row so the grid is rectangular.

Any object exposing ``header`` and ``body`` row groups (rows with ``cells``,
cells with ``fragments``) is accepted; RawTable is the in-tree one.
"""

import logging

from tabsheet.tables.schema import Grid, MultiValuePolicy, RawCell, RawRow, RawTable, Row, TableOptions

logger = logging.getLogger(__name__)


# ─── Header ──────────────────────────────────────────────────────────────────


def _header_row(header: list[RawRow]) -> Row:
    """Concatenate each header cell's fragments; all header rows flatten into one."""
    return ["".join(cell.fragments) for row in header for cell in row.cells]


# ─── Body ────────────────────────────────────────────────────────────────────


def _resolve_cell(cell: RawCell, options: TableOptions) -> str:
    """Collapse a body cell's fragments to a single string."""
    if not cell.fragments:
        return ""

    if options.multi_value_policy == MultiValuePolicy.KEEP_FIRST:
        text = cell.fragments[0]
        if options.trim_cells:
            text = text.strip()
        # A stacked annotation sits below the primary value
        text = text.split("\n", 1)[0]
    else:
        text = "".join(cell.fragments)

    return text.strip() if options.trim_cells else text


def _body_rows(body: list[RawRow], options: TableOptions) -> Grid:
    """Resolve every body row, dropping fully blank rows when configured to."""
    rows: Grid = []
    for idx, raw_row in enumerate(body):
        row = [_resolve_cell(cell, options) for cell in raw_row.cells]
        if options.skip_empty_rows and all(value == "" for value in row):
            logger.debug("Skipping empty body row %d", idx)
            continue
        rows.append(row)
    return rows


def _pad(grid: Grid) -> Grid:
    """Pad every row with empty strings up to the widest row."""
    width = max((len(row) for row in grid), default=0)
    return [row + [""] * (width - len(row)) for row in grid]


# ─── Entry Point ─────────────────────────────────────────────────────────────


def extract(source: RawTable, options: TableOptions) -> Grid:
    """Turn a raw table source into a rectangular grid with the header as row 0.

    Never raises on a missing or empty source: a source with no header and
    no body rows extracts to ``[[]]``, which callers treat as "not ready".
    """
    header = _header_row(list(getattr(source, "header", None) or []))
    body = _body_rows(list(getattr(source, "body", None) or []), options)
    grid = _pad([header] + body)
    logger.info("Extracted grid: %d header cells, %d body rows", len(header), len(body))
    return grid
