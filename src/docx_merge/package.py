"""
OOXMLPackage class for reading and writing the .docx ZIP container.

The package keeps every archive member in memory as raw bytes, in archive
order. XML parts are parsed on request and written back as bytes when a
caller hands in a modified element tree.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Any, BinaryIO

from lxml import etree

from .errors import ValidationError

logger = logging.getLogger(__name__)


class OOXMLPackage:
    """Holds the members of an OOXML ZIP package.

    Example:
        >>> with OOXMLPackage.open("template.docx") as pkg:
        ...     root = pkg.get_part("word/document.xml")
        ...     # Modify root...
        ...     pkg.set_part("word/document.xml", root)
        ...     pkg.save("merged.docx")
    """

    def __init__(self, members: dict[str, bytes], source_path: Path | None = None) -> None:
        """Initialize package from already-read archive members.

        Use the class methods `open()` or `from_bytes()` instead of
        calling this constructor directly.

        Args:
            members: Mapping of member name to raw content, in archive order
            source_path: Original source file path, if any
        """
        self._members = members
        self._source_path = source_path
        self._closed = False

    @classmethod
    def open(cls, source: str | Path | BinaryIO) -> "OOXMLPackage":
        """Open an OOXML package from a file path or file-like object.

        Args:
            source: Path to .docx file or binary file-like object

        Returns:
            OOXMLPackage instance holding the archive members

        Raises:
            ValidationError: If the source is missing or not a valid ZIP file
        """
        source_path: Path | None = None

        if isinstance(source, str | Path):
            source_path = Path(source)
            if not source_path.exists():
                raise ValidationError(f"Document not found: {source_path}")
            zip_source: Path | BinaryIO = source_path
        else:
            zip_source = source

        if not zipfile.is_zipfile(zip_source):
            raise ValidationError("Source must be a valid .docx (ZIP) file")

        # is_zipfile moves the stream position
        if hasattr(zip_source, "seek"):
            zip_source.seek(0)

        members: dict[str, bytes] = {}
        try:
            with zipfile.ZipFile(zip_source, "r") as zip_ref:
                for info in zip_ref.infolist():
                    if info.is_dir():
                        continue
                    members[info.filename] = zip_ref.read(info)
        except (zipfile.BadZipFile, OSError) as e:
            raise ValidationError(f"Failed to read .docx file: {e}") from e

        logger.debug("Opened package with %d members", len(members))
        return cls(members, source_path)

    @classmethod
    def from_bytes(cls, data: bytes) -> "OOXMLPackage":
        """Open an OOXML package from bytes.

        Args:
            data: Bytes containing a .docx file

        Returns:
            OOXMLPackage instance
        """
        return cls.open(io.BytesIO(data))

    @property
    def source_path(self) -> Path | None:
        """Get the original source file path, if available."""
        return self._source_path

    @property
    def part_names(self) -> list[str]:
        """Get the names of all members, in archive order."""
        return list(self._members)

    def part_exists(self, part_name: str) -> bool:
        """Check if a package part exists.

        Args:
            part_name: Member name within the package (e.g., "word/document.xml")

        Returns:
            True if the part exists
        """
        return part_name in self._members

    def get_part(self, part_name: str) -> etree._Element | None:
        """Get a package part as a parsed XML element.

        Args:
            part_name: Member name within the package (e.g., "word/document.xml")

        Returns:
            Root element of the parsed part, or None if the part doesn't exist

        Raises:
            ValidationError: If the part is not well-formed XML
        """
        data = self._members.get(part_name)
        if data is None:
            return None

        parser = etree.XMLParser(remove_blank_text=False)
        try:
            return etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise ValidationError(f"Invalid XML in {part_name}: {e}") from e

    def set_part(self, part_name: str, element: etree._Element) -> None:
        """Serialize an XML element into a package part.

        Args:
            part_name: Member name within the package
            element: Root XML element to write
        """
        self._members[part_name] = etree.tostring(
            element.getroottree(),
            encoding="UTF-8",
            xml_declaration=True,
            standalone=True,
        )

    def save(self, output_path: str | Path) -> None:
        """Save the package to a .docx file.

        Args:
            output_path: Path to save the .docx file
        """
        Path(output_path).write_bytes(self.save_to_bytes())

    def save_to_bytes(self) -> bytes:
        """Save the package to bytes.

        Returns:
            The complete .docx file as bytes
        """
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zip_ref:
            # [Content_Types].xml must stay the first member
            for name, data in self._members.items():
                zip_ref.writestr(name, data)
        return buffer.getvalue()

    def close(self) -> None:
        """Release the in-memory members."""
        if not self._closed:
            self._members = {}
            self._closed = True

    def __enter__(self) -> "OOXMLPackage":
        """Context manager support."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager cleanup."""
        self.close()
