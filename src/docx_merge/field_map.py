"""
Loading field maps from data files.

The merge engine expects a mapping of tag name to string. This module
reads such mappings from JSON, YAML or CSV files and normalizes every
value to a string first, so the engine itself never has to guess how to
render a date or a list.

Example YAML field map:
    ```yaml
    Name: Bob
    Start date: 2024-09-01
    Courses:
      - Algebra
      - Physics
    ```

Example CSV table (one field map per row):
    ```
    Document Name,Name,City
    letter-bob,Bob,Lyon
    letter-ann,Ann,Nantes
    ```
"""

import csv
import datetime
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import FieldMapError

FieldMap = dict[str, str]

# Joins list values; a multi-line value fills a list item with one item per line
LIST_SEPARATOR = "\n"

_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml", ".csv": "csv"}


def normalize_value(value: Any) -> str:
    """Render a field value as the string the merge will insert.

    Args:
        value: A value read from a data file

    Returns:
        "" for None, "true"/"false" for booleans, ISO format for dates,
        one line per item for lists, str(value) otherwise. Strings are
        returned unchanged (no trimming).
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.date | datetime.datetime):
        return value.isoformat()
    if isinstance(value, list | tuple):
        return LIST_SEPARATOR.join(normalize_value(item) for item in value)
    return str(value)


def normalize_field_map(data: Mapping[Any, Any]) -> FieldMap:
    """Normalize keys and values of a mapping to strings.

    Args:
        data: Raw mapping read from a data file

    Returns:
        Field map ready for the merge engine
    """
    return {str(key): normalize_value(value) for key, value in data.items() if key is not None}


def _detect_format(file_path: Path, format: str | None) -> str:
    if format is not None:
        if format not in ("json", "yaml", "csv"):
            raise FieldMapError(str(file_path), f"Unsupported format: {format}")
        return format
    try:
        return _FORMATS[file_path.suffix.lower()]
    except KeyError:
        raise FieldMapError(
            str(file_path),
            f"Unsupported file type '{file_path.suffix}' (expected .json, .yaml, .yml or .csv)",
        ) from None


def _read(file_path: Path, format: str) -> Any:
    if not file_path.exists():
        raise FieldMapError(str(file_path), "file not found")

    try:
        # utf-8-sig drops the BOM spreadsheet exports put in front of CSV files
        with open(file_path, encoding="utf-8-sig", newline="") as f:
            if format == "json":
                return json.load(f)
            if format == "yaml":
                return yaml.safe_load(f)
            return list(csv.DictReader(f))
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error, UnicodeDecodeError) as e:
        raise FieldMapError(str(file_path), str(e)) from e
    except OSError as e:
        raise FieldMapError(str(file_path), e.strerror or str(e)) from e


def load_field_map(path: str | Path, format: str | None = None) -> FieldMap:
    """Load one field map from a JSON or YAML mapping file.

    Args:
        path: Path to the data file
        format: "json" or "yaml"; guessed from the file extension if None

    Returns:
        Field map with string keys and normalized string values

    Raises:
        FieldMapError: If the file cannot be read or is not a mapping
    """
    file_path = Path(path)
    format = _detect_format(file_path, format)
    if format == "csv":
        raise FieldMapError(str(file_path), "a CSV file holds rows; use load_field_rows()")

    data = _read(file_path, format)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise FieldMapError(str(file_path), "expected a mapping of tag names to values")
    return normalize_field_map(data)


def load_field_rows(path: str | Path, format: str | None = None) -> list[FieldMap]:
    """Load a table of field maps, one per row.

    CSV files use their header row as tag names. JSON and YAML files must
    hold a list of mappings.

    Args:
        path: Path to the data file
        format: "csv", "json" or "yaml"; guessed from the file extension if None

    Returns:
        List of field maps, in file order

    Raises:
        FieldMapError: If the file cannot be read or has the wrong shape
    """
    file_path = Path(path)
    data = _read(file_path, _detect_format(file_path, format))
    if data is None:
        return []
    if not isinstance(data, list):
        raise FieldMapError(str(file_path), "expected a list of rows")

    rows = []
    for index, row in enumerate(data, start=1):
        if not isinstance(row, Mapping):
            raise FieldMapError(str(file_path), f"row {index} is not a mapping")
        rows.append(normalize_field_map(row))
    return rows
