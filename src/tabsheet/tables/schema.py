"""Pydantic models for table options and raw table sources.

TableOptions describes how one table layout is parsed and shaped.  It is
built once per preset and never mutated afterwards.  RawTable / RawRow /
RawCell describe the irregular input the extractor consumes: a header
group and a body group of rows, each cell holding zero or more text
fragments.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Row = list[str]
Grid = list[Row]


class MultiValuePolicy(str, Enum):
    """How a body cell holding several fragments collapses to one string."""

    KEEP_FIRST = "keepFirst"
    KEEP_ALL = "keepAll"


class TableOptions(BaseModel):
    """Parsing and shaping options for one table layout.

    Field names are snake_case; the camelCase names used by the browser
    version of this tool are accepted as aliases so preset files written
    for it load unchanged.

    ``column_order`` is stored as given.  Its content is only checked when
    a grid is transformed, so a broken preset fails at use, not at import.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skip_empty_rows: bool = Field(default=True, alias="skipEmptyRows")
    multi_value_policy: MultiValuePolicy = Field(default=MultiValuePolicy.KEEP_FIRST, alias="manyElementsInTDStrategy")
    trim_cells: bool = Field(default=True, alias="trim")
    column_modifiers: Mapping[int, Callable[[str], str]] = Field(default_factory=dict, alias="columnModifiers", validate_default=True)
    column_order: tuple[Any, ...] = Field(default=(), alias="columnFilterAndOrder")
    remove_header_row: bool = Field(default=True, alias="removeHeaders")
    remove_footer_row: bool = Field(default=False, alias="removeFooter")

    @field_validator("column_modifiers", mode="after")
    @classmethod
    def freeze_modifiers(cls, value: Mapping[int, Callable[[str], str]]) -> Mapping[int, Callable[[str], str]]:
        """Store the modifiers as a read-only copy so shared presets cannot be altered."""
        return MappingProxyType(dict(value))


def build_options(partial: dict[str, Any] | None = None, **overrides: Any) -> TableOptions:
    """Return a TableOptions from a partial config; omitted fields take their defaults."""
    fields = dict(partial or {})
    fields.update(overrides)
    return TableOptions(**fields)


# ─── Raw Source ──────────────────────────────────────────────────────────────


class RawCell(BaseModel):
    """One table cell before multi-value resolution."""

    fragments: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_shorthand(cls, data: Any) -> Any:
        """Allow a bare string or a list of strings in place of {"fragments": [...]}."""
        if isinstance(data, str):
            return {"fragments": [data]}
        if isinstance(data, list):
            return {"fragments": data}
        return data


class RawRow(BaseModel):
    """An ordered sequence of raw cells."""

    cells: list[RawCell] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_shorthand(cls, data: Any) -> Any:
        """Allow a bare list of cells in place of {"cells": [...]}."""
        if isinstance(data, list):
            return {"cells": data}
        return data


class RawTable(BaseModel):
    """A table source: a header row group and a body row group.

    Either group may be empty; an empty source extracts to ``[[]]``.
    """

    header: list[RawRow] = Field(default_factory=list)
    body: list[RawRow] = Field(default_factory=list)

    def is_ready(self) -> bool:
        """Return True once the header group holds at least one cell."""
        return any(row.cells for row in self.header)
