"""
Capability interface shared by every text container the merge engine edits.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docx_merge.models.paragraph import ListGlyph
    from docx_merge.models.table import TableCell


class TextContainer(Protocol):
    """What the scanner and the merge engine need from a node of the tree.

    The scanner only reads `text`. The engine edits through
    `replace_span` and performs structural cleanup through the rest.
    """

    @property
    def text(self) -> str: ...

    @property
    def is_list_item(self) -> bool: ...

    @property
    def glyph(self) -> "ListGlyph | None": ...

    @property
    def cell(self) -> "TableCell | None": ...

    def replace_span(self, start: int, end_inclusive: int, replacement: str) -> None: ...

    def insert_list_item_after(self, text: str) -> "TextContainer": ...

    def is_empty(self) -> bool: ...

    def remove(self) -> bool: ...
