"""
Compatibility helpers for integrating with python-docx.

Templates are often produced with python-docx; these helpers hand a
document across without saving it to disk in between.
"""

from __future__ import annotations

import io
from typing import Any

from .document import Document


def from_python_docx(python_docx_doc: Any) -> Document:
    """Create a docx_merge Document from a python-docx Document.

    Args:
        python_docx_doc: A python-docx Document object

    Returns:
        A docx_merge Document ready for merging

    Raises:
        ImportError: If python-docx is not installed (with helpful message)
        TypeError: If the input is not a python-docx Document

    Example:
        >>> from docx import Document as PythonDocxDocument
        >>> from docx_merge import from_python_docx
        >>>
        >>> py_doc = PythonDocxDocument()
        >>> py_doc.add_paragraph("Dear <<Name>>,")
        >>>
        >>> doc = from_python_docx(py_doc)
        >>> doc.merge({"Name": "Bob"})
        >>> doc.save("letter.docx")
    """
    try:
        from docx.document import Document as PythonDocxDocType
    except ImportError as e:
        raise ImportError(
            "python-docx is required for from_python_docx(). "
            "Install it with: pip install python-docx"
        ) from e

    if not isinstance(python_docx_doc, PythonDocxDocType):
        raise TypeError(
            f"Expected python-docx Document, got {type(python_docx_doc).__name__}. "
            "Pass a Document object created with: from docx import Document"
        )

    buffer = io.BytesIO()
    python_docx_doc.save(buffer)
    buffer.seek(0)
    return Document(buffer)


def to_python_docx(doc: Document) -> Any:
    """Convert a docx_merge Document to a python-docx Document.

    Args:
        doc: A docx_merge Document, merged or not

    Returns:
        A python-docx Document object

    Raises:
        ImportError: If python-docx is not installed

    Example:
        >>> doc = Document("letter_template.docx")
        >>> doc.merge({"Name": "Bob"})
        >>> py_doc = to_python_docx(doc)
        >>> py_doc.add_paragraph("Added with python-docx")
        >>> py_doc.save("final.docx")
    """
    try:
        from docx import Document as PythonDocxDoc
    except ImportError as e:
        raise ImportError(
            "python-docx is required for to_python_docx(). Install it with: pip install python-docx"
        ) from e

    return PythonDocxDoc(io.BytesIO(doc.save_to_bytes()))
