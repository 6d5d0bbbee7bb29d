"""Table source adapters: HTML documents and JSON files → RawTable.

HTML handling mirrors what a browser shows for the table:
  - rows under <thead> form the header group, rows under <tbody> (or
    directly under <table>) form the body group, <tfoot> rows are ignored
  - each direct child element of a cell is one text fragment; a cell with
    no child elements has its own text as its only fragment
  - fragment text is whitespace-collapsed, with <br> and block elements
    (div, p, li, ...) producing line breaks

Some pages render the header and the body as two separate <table>
elements, so the header group and the body group can be taken from
different tables of the same document.
"""

import logging
import re
from html.parser import HTMLParser
from pathlib import Path

from tabsheet.tables.schema import RawCell, RawRow, RawTable

logger = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")

# Elements that never have an end tag
_VOID_TAGS = frozenset(
    ("area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr")
)

# Elements whose boundaries become line breaks in rendered text
_BLOCK_TAGS = frozenset(
    ("div", "p", "li", "ul", "ol", "tr", "table", "section", "article", "header", "footer", "h1", "h2", "h3", "h4", "h5", "h6")
)

# Tags that implicitly close an open cell when met outside its child elements
_ROW_STRUCTURE_TAGS = frozenset(("td", "th", "tr", "thead", "tbody", "tfoot"))

_SECTION_TAGS = ("thead", "tbody", "tfoot")
_SPACES_RE = re.compile(r"[ \t\r\f\v\n]+")
_BREAK_RE = re.compile(r" *\n[ \n]*")


def _render_text(pieces: list[str]) -> str:
    """Join collected text pieces and tidy spaces around line breaks."""
    text = _BREAK_RE.sub("\n", "".join(pieces))
    return text.strip(" \n")


class _Cell:
    """Text collected for one <td>/<th> while it is open."""

    def __init__(self):
        self.direct: list[str] = []
        self.children: list[list[str]] = []
        self.open_tags: list[str] = []

    def target(self) -> list[str]:
        return self.children[-1] if self.open_tags else self.direct

    def start(self, tag: str):
        if tag == "br":
            self.target().append("\n")
            return
        if tag in _VOID_TAGS:
            return
        if not self.open_tags:
            self.children.append([])
        elif tag in _BLOCK_TAGS:
            self.children[-1].append("\n")
        self.open_tags.append(tag)

    def end(self, tag: str) -> bool:
        """Close an element inside the cell.  Returns False if *tag* was never opened here."""
        if tag in _VOID_TAGS:
            return True
        if tag not in self.open_tags:
            return False
        while self.open_tags.pop() != tag:
            pass
        if self.open_tags and tag in _BLOCK_TAGS:
            self.children[-1].append("\n")
        return True

    def to_raw(self) -> RawCell:
        if self.children:
            return RawCell(fragments=[_render_text(child) for child in self.children])
        text = _render_text(self.direct)
        return RawCell(fragments=[text] if text else [])


class _TableCollector(HTMLParser):
    """Collect every top-level <table> of a document as a RawTable."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.tables: list[RawTable] = []
        self._table: RawTable | None = None
        self._section: str | None = None
        self._row: list[RawCell] | None = None
        self._cell: _Cell | None = None

    def _close_cell(self):
        if self._cell is not None and self._row is not None:
            self._row.append(self._cell.to_raw())
        self._cell = None

    def _close_row(self):
        self._close_cell()
        if self._row is not None and self._table is not None:
            if self._section == "thead":
                self._table.header.append(RawRow(cells=self._row))
            elif self._section == "tfoot":
                logger.debug("Ignoring <tfoot> row with %d cells", len(self._row))
            else:
                self._table.body.append(RawRow(cells=self._row))
        self._row = None

    def _close_table(self):
        self._close_row()
        if self._table is not None:
            self.tables.append(self._table)
        self._table = None
        self._section = None

    def handle_starttag(self, tag, attrs):
        # Inside a cell every non-structural tag is content, nested tables included
        if self._cell is not None and (self._cell.open_tags or tag not in _ROW_STRUCTURE_TAGS):
            self._cell.start(tag)
            return

        if tag == "table":
            self._close_table()
            self._table = RawTable()
        elif self._table is None:
            return
        elif tag in _SECTION_TAGS:
            self._close_row()
            self._section = tag
        elif tag == "tr":
            self._close_row()
            self._row = []
        elif tag in ("td", "th"):
            self._close_cell()
            if self._row is None:
                self._row = []
            self._cell = _Cell()

    def handle_endtag(self, tag):
        if self._cell is not None and self._cell.end(tag):
            return
        if self._table is None:
            return

        if tag in ("td", "th"):
            self._close_cell()
        elif tag == "tr":
            self._close_row()
        elif tag in _SECTION_TAGS:
            self._close_row()
            self._section = None
        elif tag == "table":
            self._close_table()

    def handle_data(self, data):
        if self._cell is not None:
            self._cell.target().append(_SPACES_RE.sub(" ", data))

    def close(self):
        super().close()
        self._close_table()


def parse_html_tables(html: str) -> list[RawTable]:
    """Parse every <table> in an HTML document into a RawTable, in document order."""
    collector = _TableCollector()
    collector.feed(html)
    collector.close()
    logger.debug("Found %d tables in HTML document", len(collector.tables))
    return collector.tables


def table_source_from_html(html: str, header_table: int = 0, body_table: int | None = None) -> RawTable:
    """Build a source from the header group of one table and the body group of another.

    *body_table* defaults to *header_table*.  A table index that does not
    exist contributes an empty group rather than an error.
    """
    tables = parse_html_tables(html)
    body_table = header_table if body_table is None else body_table

    header = tables[header_table].header if 0 <= header_table < len(tables) else []
    body = tables[body_table].body if 0 <= body_table < len(tables) else []
    if not header and not body:
        logger.debug("No table content at header=%d body=%d (%d tables)", header_table, body_table, len(tables))
    return RawTable(header=header, body=body)


def load_source(path: Path, header_table: int = 0, body_table: int | None = None) -> RawTable:
    """Load a table source from an HTML file or a RawTable JSON file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in HTML_SUFFIXES:
        return table_source_from_html(text, header_table, body_table)
    return RawTable.model_validate_json(text)
