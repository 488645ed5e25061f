"""
Substitution engine: merging field values into a document.

The merge runs in two phases. First every part is scanned and each tag
construct is resolved against the field map; nothing is modified yet.
Then the resolved substitutions are applied from the last one in the
document to the first. Editing a later span of a paragraph never moves an
earlier one, so every recorded offset is still valid when its turn comes.

After each edit the engine cleans up right away: an emptied paragraph is
removed, and a table row whose cells are all empty goes with it. A
multi-line value filling a whole list item becomes one item per line.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .errors import StaleMatchError
from .results import MergeStats
from .scanner import TagMatch, find_all_tags

if TYPE_CHECKING:
    from .document import Document
    from .models.container import TextContainer

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True)
class Substitution:
    """A resolved tag: the match and the value that replaces it.

    Attributes:
        match: Where the tag construct is
        value: Resolved field value ("" deletes the whole construct)
    """

    match: TagMatch
    value: str


class MergeEngine:
    """Merges one field map into documents.

    Example:
        >>> engine = MergeEngine({"Name": "Bob"})
        >>> stats = engine.run(Document("letter.docx"))
        >>> print(stats)
        1 of 1 tags merged, 0 skipped
    """

    def __init__(self, field_map: Mapping[str, Any]) -> None:
        """Initialize the engine with a snapshot of the field map.

        Args:
            field_map: Tag name to value. Keys match tag names exactly
                (case-sensitive, no trimming); values go through str().
        """
        self._field_map = dict(field_map)

    def resolve(self, match: TagMatch) -> Substitution | None:
        """Resolve a tag against the field map.

        Args:
            match: The tag to resolve

        Returns:
            Substitution, or None if the tag is unknown and not optional
        """
        if match.tag_name in self._field_map:
            return Substitution(match, str(self._field_map[match.tag_name]))
        if match.optional:
            return Substitution(match, "")
        return None

    def plan(self, matches: list[TagMatch]) -> list[Substitution]:
        """Resolve all matches, dropping the ones to leave as written.

        Args:
            matches: Matches in document order

        Returns:
            Substitutions in document order
        """
        substitutions = []
        for match in matches:
            substitution = self.resolve(match)
            if substitution is None:
                logger.debug("Skipping unknown tag %s", match.full_text)
                continue
            substitutions.append(substitution)
        return substitutions

    def run(self, document: "Document") -> MergeStats:
        """Merge the field map into a document, in place.

        Args:
            document: The document to modify

        Returns:
            MergeStats describing what was done

        Raises:
            StaleMatchError: If a paragraph changed under the merge. The
                document is left partially merged.
        """
        matches = find_all_tags(document)
        substitutions = self.plan(matches)

        stats = MergeStats(tags_found=len(matches), skipped=len(matches) - len(substitutions))
        self.apply(substitutions, stats)

        logger.debug("Merge done: %s", stats)
        return stats

    def apply(
        self, substitutions: list[Substitution], stats: MergeStats | None = None
    ) -> MergeStats:
        """Apply planned substitutions, last one first.

        Args:
            substitutions: Substitutions in document order, as planned
            stats: Counters to update; a new MergeStats if None

        Returns:
            The updated counters

        Raises:
            StaleMatchError: If a match no longer lines up with its text
        """
        if stats is None:
            stats = MergeStats()
        for substitution in reversed(substitutions):
            self._apply(substitution, stats)
        return stats

    def _apply(self, substitution: Substitution, stats: MergeStats) -> None:
        match = substitution.match
        container = match.container
        value = substitution.value

        logger.debug("Processing tag %s", match.full_text)

        text = container.text
        actual = text[match.start_offset : match.end_offset_inclusive + 1]
        if actual != match.full_text:
            raise StaleMatchError(match, actual)

        full_replacement = text == match.full_text and not match.prefix and not match.suffix

        extra_lines: list[str] = []
        if full_replacement and container.is_list_item:
            value, *extra_lines = _LINE_BREAK.split(value)

        replacement = f"{match.prefix}{value}{match.suffix}" if value else ""
        container.replace_span(match.start_offset, match.end_offset_inclusive, replacement)
        stats.applied += 1

        if extra_lines:
            logger.debug(
                "Expanding list item into %d more items with glyph %s",
                len(extra_lines),
                container.glyph,
            )
            item = container
            for line in extra_lines:
                item = item.insert_list_item_after(line)
                stats.items_inserted += 1

        self._cleanup(container, stats)

    def _cleanup(self, container: "TextContainer", stats: MergeStats) -> None:
        """Remove an emptied paragraph, then its row if the row is now empty."""
        if not container.is_empty():
            return

        cell = container.cell
        if container.remove():
            stats.paragraphs_removed += 1
            logger.debug("Removed empty paragraph")

        if cell is None or not cell.is_empty():
            return

        row = cell.row
        if row is None or not row.is_empty():
            return

        table = row.table
        row.remove()
        stats.rows_removed += 1
        logger.debug("Removed empty table row")

        if table is not None and table.row_count == 0:
            table.remove()
            stats.tables_removed += 1
            logger.debug("Removed table left without rows")


def merge(document: "Document", field_map: Mapping[str, Any]) -> None:
    """Replace every resolvable tag of a document with its field value.

    - `<prefix<Name>suffix>` becomes prefix + value + suffix.
    - An empty value deletes the whole construct, prefix and suffix included.
    - An unknown tag is left as written, unless marked optional
      (`<<Name?>>`), in which case it is deleted.

    Args:
        document: The document to modify in place
        field_map: Tag name to value
    """
    MergeEngine(field_map).run(document)
