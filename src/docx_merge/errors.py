"""
Custom exception classes for the docx_merge package.

The merge engine itself treats malformed tags and unknown fields as plain
text; these exceptions cover loading and saving documents, loading field
data, and inconsistencies detected while mutating a document.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scanner import TagMatch


class DocxMergeError(Exception):
    """Base exception for all docx_merge errors."""

    pass


class ValidationError(DocxMergeError):
    """Raised when a document cannot be loaded, parsed or saved.

    This can occur when:
    - The source is not a .docx (ZIP) package
    - Required parts such as word/document.xml are missing
    - A part contains malformed XML
    - Writing the output file fails

    Attributes:
        errors: List of specific error messages (optional)
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        """Format error with all details."""
        if not self.errors:
            return super().__str__()

        error_details = "\n  - " + "\n  - ".join(self.errors)
        return f"{super().__str__()}{error_details}"


class FieldMapError(DocxMergeError):
    """Raised when field data cannot be loaded.

    Attributes:
        path: The file that was being read
        reason: Explanation of what went wrong
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message naming the file."""
        return f"Cannot load field data from '{self.path}': {self.reason}"


class StaleMatchError(DocxMergeError):
    """Raised when a tag match no longer lines up with its paragraph text.

    Matches are collected before any edit and applied from the end of the
    document backwards, so their offsets stay valid. Seeing this error
    means the tree was changed underneath the merge. The document is left
    partially merged and should be discarded.

    Attributes:
        match: The match that could not be applied
        actual: The text found at the match's span
    """

    def __init__(self, match: "TagMatch", actual: str) -> None:
        self.match = match
        self.actual = actual
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message showing expected and actual text."""
        return (
            f"Stale match for tag '{self.match.tag_name}' at "
            f"[{self.match.start_offset}, {self.match.end_offset_inclusive}]: "
            f"expected {self.match.full_text!r}, found {self.actual!r}"
        )
