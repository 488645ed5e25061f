"""
Footnote and Endnote parts.

All footnotes live in word/footnotes.xml (endnotes in word/endnotes.xml);
each w:footnote element is a part of its own. Word's separator and
continuation-separator notes carry a w:type attribute and are not content.
"""

from lxml import etree

from docx_merge.constants import w
from docx_merge.models.part import DocumentPart, PartKind


class _Note(DocumentPart):
    def __init__(self, element: etree._Element, file_path: str) -> None:
        """Initialize a note part.

        Args:
            element: The w:footnote or w:endnote element
            file_path: Package member holding all notes of this kind
        """
        super().__init__(element, file_path)
        self._id = element.get(w("id"))

    @property
    def id(self) -> str | None:
        """Get the note ID."""
        return self._id

    @staticmethod
    def is_content_note(element: etree._Element) -> bool:
        """Check that a note element is real content, not a separator."""
        return element.get(w("type")) is None


class Footnote(_Note):
    """A footnote body (w:footnote)."""

    kind = PartKind.FOOTNOTE


class Endnote(_Note):
    """An endnote body (w:endnote)."""

    kind = PartKind.ENDNOTE
