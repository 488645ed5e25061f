"""
Paragraph wrapper class: the text container of a Word document.

A paragraph's text is spread over runs (w:r). Each run carries its own
formatting (w:rPr) and holds text (w:t), tabs (w:tab) and line breaks
(w:br, w:cr). Editing a character range rewrites only the w:t elements
that overlap it, so formatting outside the range is untouched.
"""

import copy
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from lxml import etree

from docx_merge.constants import XML_NAMESPACE, w

if TYPE_CHECKING:
    from docx_merge.models.table import TableCell

# Characters of inserted text that become elements instead of w:t content
_SPECIAL_CHARS = re.compile(r"(\r\n|\n|\r|\t)")

# Built-in list styles that number paragraphs without a direct w:numPr
_LIST_STYLE = re.compile(r"^List(Bullet|Number)\d*$")

# Runs nested under these are not part of the visible text
_HIDDEN_WRAPPERS = {w("del"), w("moveFrom")}

# Parents whose content must end with a paragraph to stay valid OOXML
_ENDS_WITH_PARAGRAPH = {
    w("tc"),
    w("hdr"),
    w("ftr"),
    w("footnote"),
    w("endnote"),
    w("txbxContent"),
}

# Range markers that may follow the last block of a story
_RANGE_MARKERS = {
    w("bookmarkStart"),
    w("bookmarkEnd"),
    w("commentRangeStart"),
    w("commentRangeEnd"),
    w("permStart"),
    w("permEnd"),
    w("proofErr"),
}

# Inline content that makes a paragraph non-empty even without text
_EMBEDDED_OBJECTS = (w("drawing"), w("pict"), w("object"))


@dataclass(frozen=True)
class ListGlyph:
    """Numbering of a list item: which list, which level, which style.

    Attributes:
        num_id: Numbering instance ID (w:numId), None for style-only lists
        level: Indentation level (w:ilvl), 0-based
        style: Paragraph style ID (w:pStyle), if any
    """

    num_id: str | None
    level: int
    style: str | None


class _Segment(NamedTuple):
    element: etree._Element
    text: str
    editable: bool


def _set_text(t_elem: etree._Element, value: str) -> None:
    """Set w:t text, preserving significant leading/trailing whitespace."""
    t_elem.text = value
    if value and (value[0].isspace() or value[-1].isspace()):
        t_elem.set(f"{{{XML_NAMESPACE}}}space", "preserve")


def _text_elements(text: str) -> list[etree._Element]:
    """Build w:t / w:br / w:tab elements spelling out text."""
    elements = []
    for token in _SPECIAL_CHARS.split(text):
        if not token:
            continue
        if token == "\t":
            elements.append(etree.Element(w("tab")))
        elif token in ("\r\n", "\n", "\r"):
            elements.append(etree.Element(w("br")))
        else:
            t_elem = etree.Element(w("t"))
            _set_text(t_elem, token)
            elements.append(t_elem)
    return elements


class Paragraph:
    """Wrapper around a w:p (paragraph) element.

    Implements the TextContainer capabilities: reading text, replacing a
    character span, list-item handling and removal from the tree.
    """

    def __init__(self, element: etree._Element):
        """Initialize Paragraph wrapper.

        Args:
            element: The w:p XML element to wrap
        """
        if element.tag != w("p"):
            raise ValueError(f"Expected w:p element, got {element.tag}")
        self._element = element

    @property
    def element(self) -> etree._Element:
        """Get the underlying XML element."""
        return self._element

    def _owns(self, node: etree._Element) -> bool:
        """Check that a text node belongs to this paragraph's visible runs.

        Excludes tab stops in w:pPr, runs in tracked deletions and text of
        paragraphs nested in text boxes.
        """
        run = node.getparent()
        if run is None or run.tag != w("r"):
            return False
        parent = run.getparent()
        while parent is not None and parent is not self._element:
            if parent.tag in _HIDDEN_WRAPPERS or parent.tag == w("p"):
                return False
            parent = parent.getparent()
        return parent is self._element

    def _segments(self) -> list[_Segment]:
        segments = []
        for node in self._element.iter(w("t"), w("tab"), w("br"), w("cr")):
            if not self._owns(node):
                continue
            if node.tag == w("t"):
                segments.append(_Segment(node, node.text or "", True))
            elif node.tag == w("tab"):
                segments.append(_Segment(node, "\t", False))
            else:
                segments.append(_Segment(node, "\n", False))
        return segments

    @property
    def text(self) -> str:
        """Get the visible text of the paragraph.

        Tabs read as "\\t" and line breaks as "\\n"; tracked deletions are
        left out.

        Returns:
            Combined text from all runs in the paragraph
        """
        return "".join(segment.text for segment in self._segments())

    def replace_span(self, start: int, end_inclusive: int, replacement: str) -> None:
        """Replace the characters [start, end_inclusive] with new text.

        Text outside the span keeps its runs and formatting. The new text
        goes into the run holding the span's first character, so it takes
        that run's formatting. Line breaks and tabs in the replacement
        become w:br and w:tab elements.

        Args:
            start: Offset of the first character to replace
            end_inclusive: Offset of the last character to replace
                (start - 1 for a pure insertion)
            replacement: Text to put in place of the span

        Raises:
            IndexError: If the span is outside the paragraph text
        """
        end = end_inclusive + 1
        segments = self._segments()
        total = sum(len(segment.text) for segment in segments)
        if start < 0 or end < start or end > total:
            raise IndexError(f"Span [{start}, {end_inclusive}] out of range (0-{total - 1})")

        anchor: etree._Element | None = None
        anchor_offset = 0
        fallback: tuple[etree._Element, int] | None = None
        touched_runs: list[etree._Element] = []

        pos = 0
        for segment in segments:
            seg_start, seg_end = pos, pos + len(segment.text)
            pos = seg_end

            if anchor is None and segment.editable and seg_start <= start:
                if start < seg_end or (start == end and start == seg_end):
                    anchor = segment.element
                    anchor_offset = start - seg_start

            lo, hi = max(start, seg_start), min(end, seg_end)
            if lo >= hi:
                continue

            run = segment.element.getparent()
            if fallback is None:
                fallback = (run, run.index(segment.element))
            if run not in touched_runs:
                touched_runs.append(run)

            if segment.editable:
                _set_text(segment.element, segment.text[: lo - seg_start] + segment.text[hi - seg_start :])
            else:
                run.remove(segment.element)

        if replacement:
            if anchor is None:
                anchor = self._new_anchor(fallback)
                anchor_offset = 0
            self._insert_at(anchor, anchor_offset, replacement)

        for run in touched_runs:
            self._drop_empty_text(run)

    def _new_anchor(self, fallback: tuple[etree._Element, int] | None) -> etree._Element:
        """Create an empty w:t where text can be inserted."""
        t_elem = etree.Element(w("t"))
        if fallback is not None:
            run, index = fallback
            run.insert(index, t_elem)
        else:
            run = etree.SubElement(self._element, w("r"))
            run.append(t_elem)
        return t_elem

    def _insert_at(self, t_elem: etree._Element, offset: int, text: str) -> None:
        """Insert text into a w:t at a character offset."""
        current = t_elem.text or ""
        combined = current[:offset] + text + current[offset:]
        new_elements = _text_elements(combined)

        run = t_elem.getparent()
        index = run.index(t_elem)
        run.remove(t_elem)
        for i, elem in enumerate(new_elements):
            run.insert(index + i, elem)

    @staticmethod
    def _drop_empty_text(run: etree._Element) -> None:
        """Remove emptied w:t elements, and the run if nothing is left."""
        for t_elem in run.findall(w("t")):
            if not t_elem.text:
                run.remove(t_elem)
        if all(child.tag == w("rPr") for child in run):
            parent = run.getparent()
            if parent is not None:
                parent.remove(run)

    def is_empty(self) -> bool:
        """Check if the paragraph has neither text nor embedded objects."""
        if self.text:
            return False
        return not any(self._element.find(f".//{tag}") is not None for tag in _EMBEDDED_OBJECTS)

    @property
    def style(self) -> str | None:
        """Get the paragraph style ID, or None if no style is set."""
        p_style = self._element.find(f"{w('pPr')}/{w('pStyle')}")
        if p_style is None:
            return None
        return p_style.get(w("val"))

    @property
    def is_list_item(self) -> bool:
        """Check if this paragraph is a numbered or bulleted list item."""
        return self.glyph is not None

    @property
    def glyph(self) -> ListGlyph | None:
        """Get the list numbering of this paragraph.

        A paragraph is a list item when it carries a w:numPr with a non-zero
        numId, or uses a built-in list style (ListBullet, ListNumber2...).

        Returns:
            ListGlyph, or None if the paragraph is not a list item
        """
        style = self.style
        num_pr = self._element.find(f"{w('pPr')}/{w('numPr')}")
        if num_pr is not None:
            num_id_elem = num_pr.find(w("numId"))
            num_id = num_id_elem.get(w("val")) if num_id_elem is not None else None
            # numId 0 removes numbering inherited from the style
            if num_id == "0":
                return None
            ilvl = num_pr.find(w("ilvl"))
            level = int(ilvl.get(w("val"), "0")) if ilvl is not None else 0
            return ListGlyph(num_id, level, style)

        if style is not None and _LIST_STYLE.match(style):
            return ListGlyph(None, 0, style)
        return None

    def insert_list_item_after(self, text: str) -> "Paragraph":
        """Insert a sibling paragraph right after this one.

        The new paragraph copies this one's properties (style, numbering,
        indentation), so it shows the same glyph, and takes the formatting
        of this paragraph's first run.

        Args:
            text: Text of the new item

        Returns:
            The new Paragraph
        """
        new_p = etree.Element(w("p"))
        p_pr = self._element.find(w("pPr"))
        if p_pr is not None:
            new_p.append(copy.deepcopy(p_pr))

        if text:
            run = etree.SubElement(new_p, w("r"))
            first_run = next(
                (node.getparent() for node in self._element.iter(w("t")) if self._owns(node)),
                None,
            )
            if first_run is not None:
                r_pr = first_run.find(w("rPr"))
                if r_pr is not None:
                    run.append(copy.deepcopy(r_pr))
            run.extend(_text_elements(text))

        self._element.addnext(new_p)
        return Paragraph(new_p)

    @property
    def cell(self) -> "TableCell | None":
        """Get the table cell holding this paragraph, if any."""
        from docx_merge.models.table import TableCell

        for ancestor in self._element.iterancestors(w("tc")):
            return TableCell(ancestor)
        return None

    def remove(self) -> bool:
        """Remove this paragraph from its parent.

        The paragraph is emptied in place instead, keeping its properties,
        when it carries a section break (w:pPr/w:sectPr) or when detaching
        it would leave a table cell, header, footer, note or text box not
        ending with a paragraph.

        Returns:
            True if the paragraph was detached, False if it was kept empty
        """
        parent = self._element.getparent()
        if parent is None:
            return False

        if self._element.find(f"{w('pPr')}/{w('sectPr')}") is not None or (
            parent.tag in _ENDS_WITH_PARAGRAPH and not self._has_paragraph_after_removal(parent)
        ):
            for child in list(self._element):
                if child.tag != w("pPr"):
                    self._element.remove(child)
            return False

        parent.remove(self._element)
        return True

    def _has_paragraph_after_removal(self, parent: etree._Element) -> bool:
        """Check that parent's last block would still be a w:p without this one."""
        blocks = [
            child
            for child in parent
            if child is not self._element
            and isinstance(child.tag, str)
            and child.tag not in _RANGE_MARKERS
        ]
        return bool(blocks) and blocks[-1].tag == w("p")

    def __repr__(self) -> str:
        """String representation of the paragraph."""
        text = self.text
        text_preview = text[:50] + "..." if len(text) > 50 else text
        style_info = f" style={self.style}" if self.style else ""
        return f"<Paragraph{style_info}: {text_preview!r}>"
