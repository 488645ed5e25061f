"""
Table wrapper classes used by structural cleanup.

A merge may leave a table row with nothing but empty cells; these wrappers
answer "is this cell/row empty?" and remove rows (and a table left without
rows).
"""

from typing import TYPE_CHECKING

from lxml import etree

from docx_merge.constants import w

if TYPE_CHECKING:
    from docx_merge.models.paragraph import Paragraph


class TableCell:
    """Wrapper around a w:tc (table cell) element."""

    def __init__(self, element: etree._Element):
        """Initialize TableCell wrapper.

        Args:
            element: The w:tc XML element to wrap
        """
        if element.tag != w("tc"):
            raise ValueError(f"Expected w:tc element, got {element.tag}")
        self._element = element

    @property
    def element(self) -> etree._Element:
        """Get the underlying XML element."""
        return self._element

    @property
    def paragraphs(self) -> list["Paragraph"]:
        """Get all paragraphs in this cell, nested tables included.

        Returns:
            List of Paragraph objects
        """
        from docx_merge.models.paragraph import Paragraph

        return [Paragraph(p) for p in self._element.iter(w("p"))]

    @property
    def text(self) -> str:
        """Get the visible text of the cell, one line per paragraph."""
        return "\n".join(p.text for p in self.paragraphs)

    def is_empty(self) -> bool:
        """Check if no paragraph of the cell has text or embedded objects."""
        return all(p.is_empty() for p in self.paragraphs)

    @property
    def row(self) -> "TableRow | None":
        """Get the row holding this cell."""
        for ancestor in self._element.iterancestors(w("tr")):
            return TableRow(ancestor)
        return None

    def __repr__(self) -> str:
        """String representation of the cell."""
        text = self.text
        text_preview = text[:30] + "..." if len(text) > 30 else text
        return f"<TableCell: {text_preview!r}>"


class TableRow:
    """Wrapper around a w:tr (table row) element."""

    def __init__(self, element: etree._Element):
        """Initialize TableRow wrapper.

        Args:
            element: The w:tr XML element to wrap
        """
        if element.tag != w("tr"):
            raise ValueError(f"Expected w:tr element, got {element.tag}")
        self._element = element

    @property
    def element(self) -> etree._Element:
        """Get the underlying XML element."""
        return self._element

    @property
    def cells(self) -> list[TableCell]:
        """Get all cells in this row, including cells wrapped in content controls.

        Returns:
            List of TableCell objects
        """
        return [
            TableCell(elem)
            for elem in self._element.iter(w("tc"))
            if next(elem.iterancestors(w("tr"))) is self._element
        ]

    @property
    def table(self) -> "Table | None":
        """Get the table holding this row."""
        for ancestor in self._element.iterancestors(w("tbl")):
            return Table(ancestor)
        return None

    def is_empty(self) -> bool:
        """Check if every cell of the row is empty."""
        return all(cell.is_empty() for cell in self.cells)

    def remove(self) -> None:
        """Remove this row from its table."""
        parent = self._element.getparent()
        if parent is not None:
            parent.remove(self._element)

    def __repr__(self) -> str:
        """String representation of the row."""
        return f"<TableRow: {len(self.cells)} cells>"


class Table:
    """Wrapper around a w:tbl (table) element."""

    def __init__(self, element: etree._Element):
        """Initialize Table wrapper.

        Args:
            element: The w:tbl XML element to wrap
        """
        if element.tag != w("tbl"):
            raise ValueError(f"Expected w:tbl element, got {element.tag}")
        self._element = element

    @property
    def element(self) -> etree._Element:
        """Get the underlying XML element."""
        return self._element

    @property
    def rows(self) -> list[TableRow]:
        """Get all rows of this table (not of nested tables).

        Returns:
            List of TableRow objects
        """
        return [
            TableRow(elem)
            for elem in self._element.iter(w("tr"))
            if next(elem.iterancestors(w("tbl"))) is self._element
        ]

    @property
    def row_count(self) -> int:
        """Get the number of rows in table."""
        return len(self.rows)

    def remove(self) -> None:
        """Remove this table from its parent."""
        parent = self._element.getparent()
        if parent is not None:
            parent.remove(self._element)

    def __repr__(self) -> str:
        """String representation of the table."""
        return f"<Table: {self.row_count} rows>"
