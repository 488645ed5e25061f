"""
docx_merge - Merge field data into Word document templates.

Templates mark fields with tag constructs such as `<<Name>>`, `<Dear <Name>, >`
(literal text dropped along with an empty value) or `<<Nickname?>>` (optional).
The merge replaces them in headers, body, footers, footnotes and endnotes,
splits multi-line values of list items into one item per line, and removes
paragraphs and table rows left empty.

Example:
    >>> from docx_merge import Document
    >>> doc = Document("letter_template.docx")
    >>> doc.merge({"Name": "Bob", "City": "Lyon"})
    >>> doc.save("letter_bob.docx")
"""

__version__ = "0.1.0"
__all__ = [
    "Document",
    "OOXMLPackage",
    "merge",
    "MergeEngine",
    "Substitution",
    "merge_batch",
    "load_field_map",
    "load_field_rows",
    "normalize_value",
    "from_python_docx",
    "to_python_docx",
    "scan",
    "scan_text",
    "decompose",
    "TagMatch",
    "TagParts",
    "DocxMergeError",
    "ValidationError",
    "FieldMapError",
    "StaleMatchError",
    "MergeStats",
    "MergeResult",
    "Paragraph",
    "Table",
    "Header",
    "Footer",
    "HeaderFooterType",
    "Footnote",
    "Endnote",
]

# Import batch merging
from .batch import merge_batch

# Import compatibility helpers (python-docx integration)
from .compat import from_python_docx, to_python_docx

# Import document class
from .document import Document
from .errors import DocxMergeError, FieldMapError, StaleMatchError, ValidationError

# Import field data loaders
from .field_map import load_field_map, load_field_rows, normalize_value

# Import the merge engine
from .merge import MergeEngine, Substitution, merge

# Import model classes
from .models.footnote import Endnote, Footnote
from .models.header_footer import Footer, Header, HeaderFooterType
from .models.paragraph import Paragraph
from .models.table import Table

# Import package class
from .package import OOXMLPackage

# Import result types
from .results import MergeResult, MergeStats

# Import tag scanning
from .scanner import TagMatch, TagParts, decompose, scan, scan_text
