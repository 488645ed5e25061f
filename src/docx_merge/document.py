"""
Document class for merging field values into Word templates.

This module provides the main Document class which handles loading .docx
files, exposing the parts the merge engine scans (headers, body, footers,
footnotes, endnotes), and saving the merged result.
"""

import io
import logging
import posixpath
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

from lxml import etree

from .constants import (
    DOCUMENT_PART,
    DOCUMENT_RELS_PART,
    ENDNOTES_PART,
    FOOTNOTES_PART,
    PACKAGE_RELATIONSHIPS_NAMESPACE,
    r,
    w,
)
from .errors import ValidationError
from .models.footnote import Endnote, Footnote
from .models.header_footer import Footer, Header, HeaderFooterType
from .models.part import Body
from .package import OOXMLPackage

if TYPE_CHECKING:
    from .models.paragraph import Paragraph
    from .models.part import DocumentPart
    from .models.table import Table

logger = logging.getLogger(__name__)


class Document:
    """A Word document open for merging.

    Documents can be loaded from:
    - File paths (str or Path)
    - Raw bytes
    - BytesIO objects
    - Open file objects (in binary mode)

    XML parts are parsed once and kept, so edits made through the parts
    stay in place until `save()` or `save_to_bytes()` writes them back.

    Example:
        >>> doc = Document("letter_template.docx")
        >>> doc.merge({"Name": "Bob", "City": "Lyon"})
        >>> doc.save("letter_bob.docx")

    Attributes:
        path: Path to the document file (None for in-memory documents)
        xml_root: Root element (w:document) of the main document part
    """

    def __init__(self, source: str | Path | bytes | BinaryIO) -> None:
        """Initialize a Document from a .docx file or in-memory data.

        Args:
            source: Document source - can be:
                    - Path to a .docx file (str or Path)
                    - Raw bytes of a .docx file
                    - BytesIO object containing a .docx file
                    - Open file object in binary mode

        Raises:
            ValidationError: If the document cannot be loaded or is invalid
        """
        if isinstance(source, bytes):
            self._source_stream: BinaryIO | None = io.BytesIO(source)
            self.path: Path | None = None
        elif hasattr(source, "read"):
            self._source_stream = source  # type: ignore[assignment]
            self.path = None
        else:
            self._source_stream = None
            self.path = Path(source)

        self._package: OOXMLPackage | None = None
        self._xml_parts: dict[str, etree._Element] = {}

        self._load_document()

    def _load_document(self) -> None:
        """Open the package and parse word/document.xml.

        Raises:
            ValidationError: If the source is not a .docx package or the
                main document part is missing or malformed
        """
        if self._source_stream is not None:
            source: Path | BinaryIO = self._source_stream
            source_desc = "<in-memory document>"
        else:
            assert self.path is not None
            source = self.path
            source_desc = str(self.path)

        self._package = OOXMLPackage.open(source)

        root = self._get_xml_part(DOCUMENT_PART)
        if root is None:
            raise ValidationError(f"{DOCUMENT_PART} not found in {source_desc}")
        if root.find(w("body")) is None:
            raise ValidationError(f"No w:body in {DOCUMENT_PART} of {source_desc}")
        self.xml_root = root

    @property
    def package(self) -> OOXMLPackage:
        """Get the underlying OOXML package."""
        if self._package is None:
            raise ValidationError("Document is closed")
        return self._package

    def _get_xml_part(self, part_name: str) -> etree._Element | None:
        """Get a parsed XML part, parsing it on first access.

        Args:
            part_name: Package member name (e.g., "word/header1.xml")

        Returns:
            Root element of the part, or None if the package has no such part
        """
        if part_name not in self._xml_parts:
            root = self.package.get_part(part_name)
            if root is None:
                return None
            self._xml_parts[part_name] = root
        return self._xml_parts[part_name]

    # Parts

    @property
    def body(self) -> Body:
        """Get the main story of the document."""
        return Body(self.xml_root.find(w("body")), DOCUMENT_PART)

    @property
    def paragraphs(self) -> list["Paragraph"]:
        """Get all paragraphs of the body, including those in tables."""
        return self.body.paragraphs

    @property
    def tables(self) -> list["Table"]:
        """Get all tables of the body."""
        return self.body.tables

    @property
    def headers(self) -> list[Header]:
        """Get all headers in the document.

        Headers are linked via relationships in section properties (sectPr).
        Each section can have up to three headers: default, first, even. A
        header file shared by several sections is listed once.

        Returns:
            List of Header objects, in declaration order
        """
        return self._header_footer_parts("headerReference", Header)  # type: ignore[return-value]

    @property
    def footers(self) -> list[Footer]:
        """Get all footers in the document.

        Returns:
            List of Footer objects, in declaration order
        """
        return self._header_footer_parts("footerReference", Footer)  # type: ignore[return-value]

    def _header_footer_parts(
        self, reference_tag: str, part_class: type[Header] | type[Footer]
    ) -> list[Header | Footer]:
        rel_map = self._load_document_relationships()

        parts: list[Header | Footer] = []
        seen_files: set[str] = set()

        for sect_pr in self.xml_root.iter(w("sectPr")):
            for ref in sect_pr.findall(w(reference_tag)):
                rel_id = ref.get(r("id"), "")
                target = rel_map.get(rel_id)
                if target is None:
                    logger.warning("Unknown relationship %s in %s", rel_id, reference_tag)
                    continue

                part_name = self._resolve_target(target)
                if part_name in seen_files:
                    continue
                seen_files.add(part_name)

                root = self._get_xml_part(part_name)
                if root is None:
                    logger.warning("Referenced part %s is missing from the package", part_name)
                    continue

                type_attr = ref.get(w("type"), "default")
                try:
                    part_type = HeaderFooterType(type_attr)
                except ValueError:
                    part_type = HeaderFooterType.DEFAULT
                parts.append(part_class(root, part_name, part_type=part_type, rel_id=rel_id))

        return parts

    def _load_document_relationships(self) -> dict[str, str]:
        """Load document.xml.rels and return rId -> Target mapping.

        Returns:
            Dictionary mapping relationship IDs to target filenames
        """
        root = self.package.get_part(DOCUMENT_RELS_PART)
        if root is None:
            return {}

        rel_map: dict[str, str] = {}
        for rel in root.findall(f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship"):
            rel_id = rel.get("Id", "")
            target = rel.get("Target", "")
            if rel_id and target and rel.get("TargetMode") != "External":
                rel_map[rel_id] = target
        return rel_map

    @staticmethod
    def _resolve_target(target: str) -> str:
        """Turn a relationship target into a package member name.

        Targets are relative to word/ unless they start with "/".
        """
        if target.startswith("/"):
            return target.lstrip("/")
        return posixpath.normpath(posixpath.join("word", target))

    @property
    def footnotes(self) -> list[Footnote]:
        """Get all footnotes in the document, in document order.

        Returns:
            List of Footnote objects (separators excluded)
        """
        root = self._get_xml_part(FOOTNOTES_PART)
        if root is None:
            return []
        return [
            Footnote(elem, FOOTNOTES_PART)
            for elem in root.findall(w("footnote"))
            if Footnote.is_content_note(elem)
        ]

    @property
    def endnotes(self) -> list[Endnote]:
        """Get all endnotes in the document, in document order.

        Returns:
            List of Endnote objects (separators excluded)
        """
        root = self._get_xml_part(ENDNOTES_PART)
        if root is None:
            return []
        return [
            Endnote(elem, ENDNOTES_PART)
            for elem in root.findall(w("endnote"))
            if Endnote.is_content_note(elem)
        ]

    @property
    def parts(self) -> list["DocumentPart"]:
        """Get every part the merge engine scans, in scanning order."""
        from .parts import get_document_parts

        return get_document_parts(self)

    def get_text(self) -> str:
        """Get the text of all parts, one line per paragraph."""
        return "\n".join(part.text for part in self.parts)

    # Merging

    def find_tags(self) -> list[str]:
        """List the distinct tags used in the document.

        Returns:
            Tag names in first-seen order; optional tags keep their "?"

        Example:
            >>> Document("letter_template.docx").find_tags()
            ['Name', 'City?']
        """
        from .scanner import find_tag_names

        return find_tag_names(self)

    def merge(self, field_map: Mapping[str, Any]) -> None:
        """Replace tags with field values, in place.

        Args:
            field_map: Tag name to value; values are converted with str()
        """
        from .merge import merge

        merge(self, field_map)

    # Persisting

    def _write_parts(self) -> None:
        """Serialize every parsed part back into the package."""
        for part_name, root in self._xml_parts.items():
            self.package.set_part(part_name, root)

    def save(self, output_path: str | Path | None = None) -> None:
        """Save the document to a file.

        Args:
            output_path: Path to save the document. If None, saves to original path.
                        For in-memory documents, output_path is required.

        Raises:
            ValidationError: If writing the document fails
            ValueError: If output_path is not provided for in-memory documents
        """
        if output_path is None:
            if self.path is None:
                raise ValueError(
                    "output_path is required for in-memory documents. "
                    "Use doc.save(path) or doc.save_to_bytes() instead."
                )
            output_path = self.path

        try:
            self._write_parts()
            self.package.save(output_path)
        except ValidationError:
            raise
        except (OSError, etree.LxmlError) as e:
            raise ValidationError(f"Failed to save document: {e}") from e
        logger.debug("Saved document to %s", output_path)

    def save_to_bytes(self) -> bytes:
        """Save the document to bytes (in-memory).

        Returns:
            bytes: The complete .docx file as bytes

        Raises:
            ValidationError: If serializing the document fails
        """
        try:
            self._write_parts()
            return self.package.save_to_bytes()
        except ValidationError:
            raise
        except etree.LxmlError as e:
            raise ValidationError(f"Failed to save document to bytes: {e}") from e

    def close(self) -> None:
        """Release the package held in memory."""
        if self._package is not None:
            self._package.close()
            self._package = None
        self._xml_parts = {}

    def __enter__(self) -> "Document":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()

    def __repr__(self) -> str:
        """String representation of the document."""
        source = str(self.path) if self.path is not None else "<in-memory document>"
        return f"<Document {source}>"
