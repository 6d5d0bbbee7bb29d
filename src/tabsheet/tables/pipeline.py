"""Main table → sheet pipeline.

Two output modes, matching the two copy actions of the browser tool:
  RAW     -- extract + serialize: the table as displayed, header included
  SHAPED  -- extract + transform + serialize: the preset's column layout,
             ready to paste into the portfolio sheet
"""

import logging
from enum import Enum

from tabsheet.tables.extraction import extract
from tabsheet.tables.schema import RawTable, TableOptions
from tabsheet.tables.serialize import serialize
from tabsheet.tables.transform import transform

logger = logging.getLogger(__name__)


class SheetMode(str, Enum):
    RAW = "raw"
    SHAPED = "shaped"


def run(source: RawTable, options: TableOptions, mode: SheetMode = SheetMode.SHAPED) -> str:
    """Extract the source's table and return it as sheet text.

    Raises ConfigurationError (SHAPED mode only) when the options' column
    order is malformed.
    """
    grid = extract(source, options)
    if mode == SheetMode.SHAPED:
        grid = transform(grid, options)

    sheet = serialize(grid)
    logger.info("Built %s sheet: %d rows, %d characters", mode.value, len(grid), len(sheet))
    return sheet
