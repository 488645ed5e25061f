"""
Centralized constants for OOXML namespaces, part names and element tags.

Import from here instead of spelling namespace URLs in each module.
"""

# =============================================================================
# Namespaces
# =============================================================================

# Main WordprocessingML namespace (Word 2007+)
WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

# Office Document relationships (r:id attributes)
OFFICE_RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)

# Open Packaging Convention relationships (.rels files)
PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"

# XML namespace (xml:space)
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

NSMAP = {"w": WORD_NAMESPACE}


# =============================================================================
# Package part names
# =============================================================================

DOCUMENT_PART = "word/document.xml"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"
FOOTNOTES_PART = "word/footnotes.xml"
ENDNOTES_PART = "word/endnotes.xml"


# =============================================================================
# Tag grammar
# =============================================================================

# <prefix<tagName?>suffix>, one level of nesting, no brackets in prefix/suffix
TAG_PATTERN = r"<[^<>]*<[^<>?]+\??>[^<>]*>"

# Marker turning a tag into an optional tag
OPTIONAL_MARKER = "?"


# =============================================================================
# Helper Functions
# =============================================================================


def w(tag: str) -> str:
    """Create a fully qualified Word namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "p", "r", "t")

    Returns:
        Fully qualified tag (e.g., "{http://...wordprocessingml/2006/main}p")

    Example:
        >>> w("p")
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}p'
    """
    return f"{{{WORD_NAMESPACE}}}{tag}"


def r(tag: str) -> str:
    """Create a fully qualified Office Relationships namespace tag."""
    return f"{{{OFFICE_RELATIONSHIPS_NAMESPACE}}}{tag}"
