"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from tabsheet.tables.schema import RawCell, RawRow, RawTable

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


def make_source(header: list[list[str]], body: list[list[list[str]]]) -> RawTable:
    """Build a RawTable from header cell fragments and body cell fragments."""
    return RawTable(
        header=[RawRow(cells=[RawCell(fragments=[frag]) for frag in header_row]) for header_row in header],
        body=[RawRow(cells=[RawCell(fragments=cell) for cell in row]) for row in body],
    )


@pytest.fixture
def portfolio_source() -> RawTable:
    """A Suno-style dividend portfolio table: 9 columns, a blank row, and a totals footer."""
    return make_source(
        header=[["Ativo", "Empresa", "Preço", "Data", "Setor", "Entrada", "Teto", "Peso", "Yield"]],
        body=[
            [["TAEE11"], ["Taesa"], [" R$ 35,10\nvs R$ 34,00 "], ["10.05.2024"], ["Energia"], ["R$ 30,00"], ["R$ 38,00"], ["10%"], ["9,5%"]],
            [[], [], [], [], [], [], [], [], []],
            [["BBSE3"], ["BB Seguridade"], ["R$ 33,00"], ["02.01.2023"], ["Seguros"], ["R$ 28,00"], ["R$ 36,00"], ["8%"], ["8,1%"]],
            [["Total"], [""], [""], [""], [""], [""], [""], ["18%"], [""]],
        ],
    )
