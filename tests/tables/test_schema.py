"""Unit tests for TableOptions, build_options, and the raw source models."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest
from pydantic import ValidationError

from tabsheet.tables.schema import MultiValuePolicy, RawCell, RawRow, RawTable, TableOptions, build_options


class TestBuildOptionsDefaults:

    def test_defaults(self):
        options = build_options()
        assert options.skip_empty_rows is True
        assert options.multi_value_policy == MultiValuePolicy.KEEP_FIRST
        assert options.trim_cells is True
        assert options.column_modifiers == {}
        assert options.column_order == ()
        assert options.remove_header_row is True
        assert options.remove_footer_row is False

    def test_partial_overrides_only_given_fields(self):
        options = build_options({"remove_footer_row": True})
        assert options.remove_footer_row is True
        assert options.remove_header_row is True

    def test_keyword_overrides_win_over_partial(self):
        options = build_options({"trim_cells": True}, trim_cells=False)
        assert options.trim_cells is False

    def test_partial_not_mutated(self):
        partial = {"skip_empty_rows": False}
        build_options(partial, trim_cells=False)
        assert partial == {"skip_empty_rows": False}


class TestBuildOptionsAliases:

    def test_camel_case_names_accepted(self):
        options = build_options(
            {
                "skipEmptyRows": False,
                "manyElementsInTDStrategy": "keepAll",
                "trim": False,
                "columnFilterAndOrder": [2, 0],
                "removeHeaders": False,
                "removeFooter": True,
            }
        )
        assert options.skip_empty_rows is False
        assert options.multi_value_policy == MultiValuePolicy.KEEP_ALL
        assert options.trim_cells is False
        assert options.column_order == (2, 0)
        assert options.remove_header_row is False
        assert options.remove_footer_row is True

    def test_modifier_keys_coerced_to_int(self):
        options = build_options({"columnModifiers": {"3": str.upper}})
        assert options.column_modifiers[3]("a") == "A"


class TestColumnOrderNotValidatedAtBuild:

    def test_mixed_types_accepted(self):
        """Malformed column orders are only rejected when a grid is transformed."""
        options = build_options(column_order=[1, "x"])
        assert options.column_order == (1, "x")

    def test_negative_accepted(self):
        assert build_options(column_order=[-1]).column_order == (-1,)


class TestTableOptionsImmutable:

    def test_frozen(self):
        options = build_options()
        with pytest.raises(ValidationError):
            options.trim_cells = False

    def test_modifiers_read_only(self):
        options = build_options(column_modifiers={3: str.upper})
        with pytest.raises(TypeError):
            options.column_modifiers[0] = str.lower  # type: ignore[index]
        assert dict(options.column_modifiers) == {3: str.upper}

    def test_default_modifiers_read_only(self):
        with pytest.raises(TypeError):
            build_options().column_modifiers[0] = str.lower  # type: ignore[index]

    def test_source_dict_changes_do_not_leak(self):
        modifiers = {3: str.upper}
        options = build_options(column_modifiers=modifiers)
        modifiers[0] = str.lower
        assert 0 not in options.column_modifiers

    def test_non_callable_modifier_rejected(self):
        with pytest.raises(ValidationError):
            TableOptions(column_modifiers={0: "not a function"})


class TestRawModels:

    def test_cell_from_string(self):
        assert RawCell.model_validate("abc").fragments == ["abc"]

    def test_cell_from_list(self):
        assert RawCell.model_validate(["a", "b"]).fragments == ["a", "b"]

    def test_row_from_list(self):
        row = RawRow.model_validate(["a", ["b", "c"], []])
        assert [cell.fragments for cell in row.cells] == [["a"], ["b", "c"], []]

    def test_table_from_json(self):
        table = RawTable.model_validate_json('{"header": [["H0", "H1"]], "body": [["a", ["b", "note"]]]}')
        assert table.header[0].cells[1].fragments == ["H1"]
        assert table.body[0].cells[1].fragments == ["b", "note"]

    def test_empty_table_not_ready(self):
        assert RawTable().is_ready() is False

    def test_header_with_empty_row_not_ready(self):
        assert RawTable(header=[RawRow()]).is_ready() is False

    def test_header_with_cell_ready(self):
        assert RawTable.model_validate({"header": [["H0"]]}).is_ready() is True
