"""Grid → tab/line-break delimited sheet text.

Cells are joined with tabs and rows with line breaks, without a trailing
line break, so the result pastes straight into a spreadsheet.  Tabs or line
breaks inside a cell are NOT escaped and will shift the pasted layout.
"""

from tabsheet.tables.schema import Grid

COLUMN_SEPARATOR = "\t"
ROW_SEPARATOR = "\n"


def serialize(grid: Grid) -> str:
    """Flatten a grid into sheet text.  An empty grid serializes to ''."""
    text = "".join(COLUMN_SEPARATOR.join(row) + ROW_SEPARATOR for row in grid)
    return text[: -len(ROW_SEPARATOR)] if text else text
