"""
Document part model: one tree root of a Word document.

A document is scanned part by part: headers, the body, footers, then each
footnote and endnote. Every part is a tree root whose paragraphs are the
text containers handed to the tag scanner.
"""

from enum import Enum
from typing import TYPE_CHECKING

from lxml import etree

from docx_merge.constants import w

if TYPE_CHECKING:
    from docx_merge.models.paragraph import Paragraph
    from docx_merge.models.table import Table


class PartKind(Enum):
    """Kinds of document parts, in scanning order."""

    HEADER = "header"
    BODY = "body"
    FOOTER = "footer"
    FOOTNOTE = "footnote"
    ENDNOTE = "endnote"


class DocumentPart:
    """A tree root of the document and the paragraphs it owns.

    Attributes:
        element: The root element (w:body, w:hdr, w:ftr, w:footnote, w:endnote)
        kind: What kind of part this is
        file_path: Package member holding the part's XML
    """

    kind: PartKind = PartKind.BODY

    def __init__(self, element: etree._Element, file_path: str) -> None:
        """Initialize a DocumentPart.

        Args:
            element: Root element of the part
            file_path: Package member name (e.g., "word/document.xml")
        """
        self.element = element
        self.file_path = file_path

    @property
    def paragraphs(self) -> list["Paragraph"]:
        """Get every paragraph of the part in tree order.

        Paragraphs inside tables and text boxes are included, each after
        the paragraphs that precede it in the XML.

        Returns:
            List of Paragraph objects
        """
        from docx_merge.models.paragraph import Paragraph

        return [Paragraph(p) for p in self.element.iter(w("p"))]

    @property
    def tables(self) -> list["Table"]:
        """Get every table of the part in tree order."""
        from docx_merge.models.table import Table

        return [Table(tbl) for tbl in self.element.iter(w("tbl"))]

    @property
    def text(self) -> str:
        """Get the text of the part, one line per paragraph."""
        return "\n".join(p.text for p in self.paragraphs)

    def __repr__(self) -> str:
        """Return string representation of the part."""
        preview = self.text[:50].replace("\n", " ")
        if len(self.text) > 50:
            preview += "..."
        return f'<{type(self).__name__} {self.kind.value} "{preview}">'


class Body(DocumentPart):
    """The main story of the document (w:body)."""

    kind = PartKind.BODY
