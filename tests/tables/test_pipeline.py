"""End-to-end tests for the extract -> transform -> serialize pipeline."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from tabsheet.tables.errors import ConfigurationError
from tabsheet.tables.pipeline import SheetMode, run
from tabsheet.tables.presets import PRESETS
from tabsheet.tables.schema import RawTable, build_options
from tabsheet.tables.sources import table_source_from_html


class TestRun:

    def test_shaped_dividendos(self, portfolio_source):
        sheet = run(portfolio_source, PRESETS["dividendos"])
        # Columns 0, 2, 5, 6, 8, 3; header and totals footer dropped; blank row skipped
        assert sheet == (
            "TAEE11\tR$ 35,10\tR$ 30,00\tR$ 38,00\t9,5%\t10/05/2024\n"
            "BBSE3\tR$ 33,00\tR$ 28,00\tR$ 36,00\t8,1%\t02/01/2023"
        )

    def test_shaped_keeps_footer_for_fiis(self, portfolio_source):
        sheet = run(portfolio_source, PRESETS["fiis"])
        assert sheet.split("\n")[-1] == "Total\t\t\t\t\t"

    def test_raw_mode_keeps_table_as_displayed(self, portfolio_source):
        sheet = run(portfolio_source, PRESETS["dividendos"], SheetMode.RAW)
        lines = sheet.split("\n")
        assert lines[0].split("\t")[0] == "Ativo"
        assert len(lines) == 4
        # No column modifiers in raw mode
        assert "10.05.2024" in lines[1]

    def test_raw_mode_ignores_bad_column_order(self, portfolio_source):
        options = build_options(column_order=[0, "x"])
        assert run(portfolio_source, options, SheetMode.RAW).startswith("Ativo")

    def test_bad_column_order_raises_in_shaped_mode(self, portfolio_source):
        with pytest.raises(ConfigurationError):
            run(portfolio_source, build_options(column_order=[0, "x"]))

    def test_empty_source(self):
        assert run(RawTable(), PRESETS["fiis"]) == ""
        assert run(RawTable(), PRESETS["fiis"], SheetMode.RAW) == ""

    def test_html_page(self):
        html = """
        <table><thead><tr><th><span>H0</span></th><th><span>H1</span></th><th><span>H2</span></th></tr></thead></table>
        <table><tbody>
          <tr><td><span>a</span></td><td><span>b</span></td><td><span>c</span></td></tr>
          <tr><td><span>d</span></td><td><span>e</span></td><td><span>f</span></td></tr>
        </tbody></table>
        """
        source = table_source_from_html(html, header_table=0, body_table=1)
        options = build_options(column_order=[2, 0], remove_header_row=True, remove_footer_row=False)
        assert run(source, options) == "c\ta\nf\td"
