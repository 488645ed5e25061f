"""Tests for table wrappers used by cleanup."""

import pytest
from _docx_helpers import WORD_NAMESPACE, cell, para, row, table
from lxml import etree

from docx_merge.models.table import Table, TableCell, TableRow


def parse_table(xml: str) -> Table:
    body = etree.fromstring(f'<w:body xmlns:w="{WORD_NAMESPACE}">{xml}</w:body>')
    return Table(body.find(f"{{{WORD_NAMESPACE}}}tbl"))


class TestTableStructure:
    """Tests for navigating rows and cells."""

    def test_rows_and_cells(self):
        """Rows and cells are listed in order."""
        tbl = parse_table(
            table(row(cell(para("a")), cell(para("b"))), row(cell(para("c")), cell()))
        )
        assert tbl.row_count == 2
        assert [c.text for c in tbl.rows[0].cells] == ["a", "b"]
        assert [c.text for c in tbl.rows[1].cells] == ["c", ""]

    def test_nested_table_rows_belong_to_nested_table(self):
        """Rows of a table inside a cell are not rows of the outer table."""
        inner = table(row(cell(para("inner 1"))), row(cell(para("inner 2"))))
        tbl = parse_table(table(row(cell(para("outer"), inner))))

        assert tbl.row_count == 1
        assert len(tbl.rows[0].cells) == 1

    def test_navigation_upwards(self):
        """A cell knows its row, a row knows its table."""
        tbl = parse_table(table(row(cell(para("a")))))
        c = tbl.rows[0].cells[0]
        assert c.row.element is tbl.rows[0].element
        assert c.row.table.element is tbl.element

    def test_wrong_element_rejected(self):
        """Wrappers only accept their own element type."""
        tbl = parse_table(table(row(cell(para("a")))))
        with pytest.raises(ValueError):
            TableRow(tbl.element)
        with pytest.raises(ValueError):
            TableCell(tbl.element)


class TestEmptiness:
    """Tests for empty cells and rows."""

    def test_empty_row(self):
        """A row is empty when all its cells are."""
        tbl = parse_table(table(row(cell(), cell(para(""))), row(cell(), cell(para("x")))))
        assert tbl.rows[0].is_empty()
        assert not tbl.rows[1].is_empty()

    def test_cell_with_picture_is_not_empty(self):
        """Embedded objects count as content."""
        tbl = parse_table(table(row(cell("<w:p><w:r><w:drawing/></w:r></w:p>"))))
        assert not tbl.rows[0].cells[0].is_empty()


class TestRemoval:
    """Tests for removing rows and tables."""

    def test_remove_row(self):
        """A removed row leaves the other rows in place."""
        tbl = parse_table(table(row(cell(para("a"))), row(cell(para("b")))))
        tbl.rows[0].remove()
        assert tbl.row_count == 1
        assert tbl.rows[0].cells[0].text == "b"

    def test_remove_table(self):
        """A removed table is detached from the body."""
        tbl = parse_table(para("before") + table(row(cell(para("a")))))
        body = tbl.element.getparent()
        tbl.remove()
        assert body.find(f"{{{WORD_NAMESPACE}}}tbl") is None
