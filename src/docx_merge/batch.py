"""
Batch merging: one document per row of field data.

Each row gets a fresh copy of the template, so rows never see each
other's values. A row that fails is reported in its MergeResult and the
batch moves on to the next row.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .document import Document
from .errors import DocxMergeError, ValidationError
from .merge import MergeEngine
from .results import MergeResult

logger = logging.getLogger(__name__)

DEFAULT_NAME_FIELD = "Document Name"

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]+')


def safe_file_stem(name: str) -> str:
    """Turn a field value into a usable file name (without extension).

    Args:
        name: Requested document name

    Returns:
        The name with path separators and reserved characters replaced by
        "_", surrounding dots and spaces stripped. May be empty.

    Example:
        >>> safe_file_stem("Offer: Bob/Lyon")
        'Offer_ Bob_Lyon'
    """
    return _UNSAFE_CHARS.sub("_", name).strip(" .")


def _unique_stem(stem: str, used: set[str]) -> str:
    candidate = stem
    counter = 2
    while candidate.lower() in used:
        candidate = f"{stem}-{counter}"
        counter += 1
    used.add(candidate.lower())
    return candidate


def merge_batch(
    template: str | Path,
    rows: Iterable[Mapping[str, Any]],
    output_dir: str | Path,
    name_field: str = DEFAULT_NAME_FIELD,
    stop_on_error: bool = False,
) -> list[MergeResult]:
    """Create one merged document per row.

    Args:
        template: Path to the .docx template
        rows: Field maps, one per output document
        output_dir: Directory for the merged documents (created if missing)
        name_field: Field holding the output document name. Rows without
            it are named "<template stem>-<row number>".
        stop_on_error: If True, re-raise the first row failure instead of
            recording it

    Returns:
        One MergeResult per processed row, in row order

    Raises:
        ValidationError: If the template cannot be read
        DocxMergeError: A row failure, when stop_on_error is True

    Example:
        >>> rows = load_field_rows("students.csv")
        >>> results = merge_batch("letter.docx", rows, "out/")
        >>> print(f"Merged {sum(r.success for r in results)}/{len(results)} documents")
    """
    template_path = Path(template)
    try:
        template_bytes = template_path.read_bytes()
    except OSError as e:
        raise ValidationError(f"Cannot read template {template_path}: {e}") from e

    # Fails early on a template that is not a .docx at all
    Document(template_bytes).close()

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    results: list[MergeResult] = []
    used_stems: set[str] = set()

    for row_number, row in enumerate(rows, start=1):
        stem = safe_file_stem(str(row.get(name_field) or ""))
        if not stem:
            stem = f"{template_path.stem}-{row_number}"
        output_path = out_dir / f"{_unique_stem(stem, used_stems)}.docx"

        try:
            with Document(template_bytes) as doc:
                stats = MergeEngine(row).run(doc)
                doc.save(output_path)
        except (DocxMergeError, OSError) as e:
            logger.warning("Row %d failed: %s", row_number, e)
            if stop_on_error:
                raise
            results.append(
                MergeResult(
                    success=False,
                    row=row_number,
                    message=f"Error: {e}",
                    error=e,
                )
            )
            continue

        logger.info("Row %d: wrote %s (%s)", row_number, output_path, stats)
        results.append(
            MergeResult(
                success=True,
                row=row_number,
                message=f"{output_path.name}: {stats}",
                output_path=output_path,
                stats=stats,
            )
        )

    succeeded = sum(result.success for result in results)
    logger.info("Batch done: %d of %d documents merged", succeeded, len(results))
    return results
