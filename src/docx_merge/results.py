"""
Result classes for merge operations.

These types report what a merge did; the merged document itself is the
real output.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class MergeStats:
    """Counters collected while merging one document.

    Attributes:
        tags_found: Tag constructs found in all parts
        applied: Tags replaced (or deleted, for empty values)
        skipped: Unknown, non-optional tags left as written
        items_inserted: List items created from multi-line values
        paragraphs_removed: Paragraphs removed because they became empty
        rows_removed: Table rows removed because all their cells became empty
        tables_removed: Tables removed because their last row went away
    """

    tags_found: int = 0
    applied: int = 0
    skipped: int = 0
    items_inserted: int = 0
    paragraphs_removed: int = 0
    rows_removed: int = 0
    tables_removed: int = 0

    def __str__(self) -> str:
        """Get string representation of the counters."""
        msg = f"{self.applied} of {self.tags_found} tags merged, {self.skipped} skipped"
        if self.items_inserted:
            msg += f", {self.items_inserted} list items added"
        if self.paragraphs_removed:
            msg += f", {self.paragraphs_removed} empty paragraphs removed"
        if self.rows_removed:
            msg += f", {self.rows_removed} empty rows removed"
        if self.tables_removed:
            msg += f", {self.tables_removed} empty tables removed"
        return msg


@dataclass
class MergeResult:
    """Result of producing one merged document in a batch.

    Attributes:
        success: Whether the document was merged and saved
        row: 1-based number of the data row
        message: Human-readable message about the result
        output_path: Where the document was written, if it was
        stats: Merge counters, if the merge ran
        error: Exception that stopped this row, if any
    """

    success: bool
    row: int
    message: str
    output_path: Path | None = None
    stats: MergeStats = field(default_factory=MergeStats)
    error: Exception | None = None

    def __str__(self) -> str:
        """Get string representation of the result."""
        status = "✓" if self.success else "✗"
        return f"{status} row {self.row}: {self.message}"
