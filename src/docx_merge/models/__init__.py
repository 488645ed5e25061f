"""
Document model classes for docx_merge.

These classes provide convenient wrappers around OOXML elements.
"""

from docx_merge.models.container import TextContainer
from docx_merge.models.footnote import Endnote, Footnote
from docx_merge.models.header_footer import Footer, Header, HeaderFooterType
from docx_merge.models.paragraph import ListGlyph, Paragraph
from docx_merge.models.part import Body, DocumentPart, PartKind
from docx_merge.models.table import Table, TableCell, TableRow

__all__ = [
    "TextContainer",
    "Paragraph",
    "ListGlyph",
    "Table",
    "TableRow",
    "TableCell",
    "DocumentPart",
    "PartKind",
    "Body",
    "Header",
    "Footer",
    "HeaderFooterType",
    "Footnote",
    "Endnote",
]
