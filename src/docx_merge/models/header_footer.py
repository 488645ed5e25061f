"""
Header and Footer parts.

Headers and footers in OOXML are stored in separate XML files (header1.xml,
footer1.xml, etc.) and are linked via relationships in sectPr elements.
"""

from enum import Enum

from lxml import etree

from docx_merge.models.part import DocumentPart, PartKind


class HeaderFooterType(Enum):
    """Types of headers and footers in Word documents.

    Word supports three types of headers/footers per section:
    - DEFAULT: Used on all pages except first (if first is different) and even pages
    - FIRST: Used on the first page of the section (if enabled)
    - EVEN: Used on even-numbered pages (if different from odd)
    """

    DEFAULT = "default"
    FIRST = "first"
    EVEN = "even"


class _HeaderFooter(DocumentPart):
    def __init__(
        self,
        element: etree._Element,
        file_path: str,
        part_type: HeaderFooterType = HeaderFooterType.DEFAULT,
        rel_id: str = "",
    ) -> None:
        """Initialize a header or footer part.

        Args:
            element: The w:hdr or w:ftr root element
            file_path: Package member name (e.g., "word/header1.xml")
            part_type: The type of header/footer (default, first, even)
            rel_id: The relationship ID linking it (e.g., "rId7")
        """
        super().__init__(element, file_path)
        self.part_type = part_type
        self.rel_id = rel_id

    @property
    def type(self) -> str:
        """Get the type as a string: 'default', 'first', or 'even'."""
        return self.part_type.value


class Header(_HeaderFooter):
    """A header part (w:hdr)."""

    kind = PartKind.HEADER


class Footer(_HeaderFooter):
    """A footer part (w:ftr)."""

    kind = PartKind.FOOTER
