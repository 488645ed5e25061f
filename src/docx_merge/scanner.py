"""
Tag scanning: finding `<prefix<tagName?>suffix>` constructs in text.

A tag construct is a field name in angle brackets, wrapped in a second
pair of brackets that may hold literal text on either side:

    <<Name>>                 -> the value of Name
    <Dear <Name>, >          -> "Dear " + value + ", ", or nothing if empty
    <<Nickname?>>            -> optional: empty when the field is unknown

Scanning works on a snapshot of a container's text and never mutates
anything, so it can run over a whole document before any edit is made.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from .constants import OPTIONAL_MARKER, TAG_PATTERN

if TYPE_CHECKING:
    from .document import Document
    from .models.container import TextContainer

TAG_REGEX = re.compile(TAG_PATTERN)

# Prefix and suffix have no escaping: a literal "<" or ">" cannot appear in
# them. In "<a < b <Name>>" only "< b <Name>>" is a tag.
_BRACKETS = re.compile(r"[<>]")


class TagParts(NamedTuple):
    """Symbolic parts of a tag construct."""

    prefix: str
    tag_name: str
    optional: bool
    suffix: str


class RawMatch(NamedTuple):
    """A tag construct found in plain text, not yet bound to a container."""

    start: int
    end_inclusive: int
    full_text: str
    parts: TagParts


@dataclass(frozen=True)
class TagMatch:
    """A tag construct found in a text container.

    Offsets are valid until the container is edited at or before them.

    Attributes:
        full_text: The whole construct, brackets included
        container: The container the construct was found in
        start_offset: Offset of the opening "<"
        end_offset_inclusive: Offset of the closing ">"
        prefix: Literal text between the two opening brackets
        tag_name: Field name, without the optional marker
        optional: True if the name was followed by "?"
        suffix: Literal text between the two closing brackets
    """

    full_text: str
    container: "TextContainer"
    start_offset: int
    end_offset_inclusive: int
    prefix: str
    tag_name: str
    optional: bool
    suffix: str

    @property
    def tag_spec(self) -> str:
        """Get the tag name as written, with its optional marker."""
        return self.tag_name + OPTIONAL_MARKER if self.optional else self.tag_name

    def __str__(self) -> str:
        """Get the construct as written."""
        return self.full_text


def decompose(full_text: str) -> TagParts | None:
    """Split a tag construct into prefix, tag name and suffix.

    Args:
        full_text: A construct such as "<Dear <Name?>, >"

    Returns:
        TagParts, or None if the text does not split into exactly three
        segments (not a tag construct)

    Example:
        >>> decompose("<Dear <Name?>, >")
        TagParts(prefix='Dear ', tag_name='Name', optional=True, suffix=', ')
    """
    if len(full_text) < 2 or full_text[0] != "<" or full_text[-1] != ">":
        return None

    segments = _BRACKETS.split(full_text[1:-1])
    if len(segments) != 3:
        return None

    prefix, tag_name, suffix = segments
    optional = tag_name.endswith(OPTIONAL_MARKER)
    if optional:
        tag_name = tag_name[: -len(OPTIONAL_MARKER)]
    if not tag_name:
        return None

    return TagParts(prefix, tag_name, optional, suffix)


def scan_text(text: str) -> Iterator[RawMatch]:
    """Find tag constructs in a string, left to right.

    Matches never overlap: each search resumes right after the previous
    match. The function is pure; calling it again restarts the sequence.

    Args:
        text: Text to scan

    Yields:
        RawMatch for each tag construct
    """
    for match in TAG_REGEX.finditer(text):
        parts = decompose(match.group(0))
        if parts is None:
            continue
        yield RawMatch(match.start(), match.end() - 1, match.group(0), parts)


def scan(container: "TextContainer") -> list[TagMatch]:
    """Find tag constructs in a text container.

    Args:
        container: Any object exposing a `text` property

    Returns:
        List of TagMatch in order of occurrence
    """
    return [
        TagMatch(
            full_text=raw.full_text,
            container=container,
            start_offset=raw.start,
            end_offset_inclusive=raw.end_inclusive,
            prefix=raw.parts.prefix,
            tag_name=raw.parts.tag_name,
            optional=raw.parts.optional,
            suffix=raw.parts.suffix,
        )
        for raw in scan_text(container.text)
    ]


def find_all_tags(document: "Document") -> list[TagMatch]:
    """Scan every part of a document.

    Args:
        document: The document to scan

    Returns:
        All matches in part order, then container order, then left to right
    """
    matches: list[TagMatch] = []
    for part in document.parts:
        for paragraph in part.paragraphs:
            matches.extend(scan(paragraph))
    return matches


def find_tag_names(document: "Document") -> list[str]:
    """List the distinct tags used in a document.

    Args:
        document: The document to scan

    Returns:
        Tag specs in first-seen order; optional tags keep their "?"
    """
    return list(dict.fromkeys(match.tag_spec for match in find_all_tags(document)))
