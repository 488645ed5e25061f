"""
Document part enumeration.

The merge engine scans a document one part at a time. This module fixes
the order: headers, body, footers, footnotes, endnotes.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Document
    from .models.part import DocumentPart


def get_document_parts(document: "Document") -> list["DocumentPart"]:
    """Return the parts of a document in scanning order.

    Headers and footers come in the order their references appear in the
    section properties; notes in the order they appear in their XML file.
    Absent parts are simply not listed.

    Args:
        document: The document to enumerate

    Returns:
        List of DocumentPart: headers, body, footers, footnotes, endnotes
    """
    parts: list["DocumentPart"] = []
    parts.extend(document.headers)
    parts.append(document.body)
    parts.extend(document.footers)
    parts.extend(document.footnotes)
    parts.extend(document.endnotes)
    return parts
