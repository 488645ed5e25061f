"""Tests for loading field maps from data files."""

import datetime
import json

import pytest

from docx_merge import FieldMapError, load_field_map, load_field_rows, normalize_value


class TestNormalizeValue:
    """Tests for rendering values as strings."""

    def test_none_is_empty(self):
        """None renders as an empty string."""
        assert normalize_value(None) == ""

    def test_strings_unchanged(self):
        """Strings are not trimmed."""
        assert normalize_value("  Bob ") == "  Bob "

    def test_booleans(self):
        """Booleans render in lower case."""
        assert normalize_value(True) == "true"
        assert normalize_value(False) == "false"

    def test_dates(self):
        """Dates render in ISO format."""
        assert normalize_value(datetime.date(2024, 9, 1)) == "2024-09-01"
        assert normalize_value(datetime.datetime(2024, 9, 1, 8, 30)) == "2024-09-01T08:30:00"

    def test_lists(self):
        """Lists render one item per line."""
        assert normalize_value(["a", 2, None]) == "a\n2\n"

    def test_numbers(self):
        """Other values go through str()."""
        assert normalize_value(3) == "3"
        assert normalize_value(2.5) == "2.5"


class TestLoadFieldMap:
    """Tests for load_field_map."""

    def test_json(self, tmp_path):
        """A JSON object becomes a field map."""
        path = tmp_path / "fields.json"
        path.write_text(json.dumps({"Name": "Bob", "Age": 30, "Nick": None}), encoding="utf-8")
        assert load_field_map(path) == {"Name": "Bob", "Age": "30", "Nick": ""}

    def test_yaml(self, tmp_path):
        """YAML dates and lists are normalized."""
        path = tmp_path / "fields.yaml"
        path.write_text(
            "Name: Bob\nStart: 2024-09-01\nCourses:\n  - Algebra\n  - Physics\n", encoding="utf-8"
        )
        assert load_field_map(path) == {
            "Name": "Bob",
            "Start": "2024-09-01",
            "Courses": "Algebra\nPhysics",
        }

    def test_yml_extension_and_str_path(self, tmp_path):
        """.yml files and string paths work."""
        path = tmp_path / "fields.yml"
        path.write_text("A: 1\n", encoding="utf-8")
        assert load_field_map(str(path)) == {"A": "1"}

    def test_empty_yaml(self, tmp_path):
        """An empty file is an empty field map."""
        path = tmp_path / "fields.yaml"
        path.write_text("", encoding="utf-8")
        assert load_field_map(path) == {}

    def test_explicit_format(self, tmp_path):
        """The format can be given when the extension says nothing."""
        path = tmp_path / "fields.txt"
        path.write_text('{"A": "x"}', encoding="utf-8")
        assert load_field_map(path, format="json") == {"A": "x"}

    def test_missing_file(self, tmp_path):
        """A missing file raises FieldMapError naming it."""
        with pytest.raises(FieldMapError) as exc_info:
            load_field_map(tmp_path / "missing.json")
        assert "missing.json" in str(exc_info.value)

    def test_unsupported_extension(self, tmp_path):
        """Unknown extensions are rejected."""
        path = tmp_path / "fields.txt"
        path.write_text("A: 1", encoding="utf-8")
        with pytest.raises(FieldMapError, match="Unsupported file type"):
            load_field_map(path)

    def test_not_a_mapping(self, tmp_path):
        """A list is not a field map."""
        path = tmp_path / "fields.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(FieldMapError, match="mapping"):
            load_field_map(path)

    def test_invalid_json(self, tmp_path):
        """Syntax errors are reported as FieldMapError."""
        path = tmp_path / "fields.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(FieldMapError):
            load_field_map(path)

    def test_csv_rejected(self, tmp_path):
        """CSV files hold rows, not a single map."""
        path = tmp_path / "fields.csv"
        path.write_text("A\n1\n", encoding="utf-8")
        with pytest.raises(FieldMapError, match="load_field_rows"):
            load_field_map(path)


class TestLoadFieldRows:
    """Tests for load_field_rows."""

    def test_csv(self, tmp_path):
        """The header row names the fields."""
        path = tmp_path / "rows.csv"
        path.write_text("Document Name,Name\nletter-bob,Bob\nletter-ann,Ann\n", encoding="utf-8")
        assert load_field_rows(path) == [
            {"Document Name": "letter-bob", "Name": "Bob"},
            {"Document Name": "letter-ann", "Name": "Ann"},
        ]

    def test_csv_with_bom_and_short_rows(self, tmp_path):
        """A spreadsheet BOM is dropped and missing cells are empty."""
        path = tmp_path / "rows.csv"
        path.write_bytes("\ufeffName,City\nBob\n".encode("utf-8"))
        assert load_field_rows(path) == [{"Name": "Bob", "City": ""}]

    def test_csv_multiline_cell(self, tmp_path):
        """Quoted cells may span lines."""
        path = tmp_path / "rows.csv"
        path.write_text('Items\n"a\nb"\n', encoding="utf-8")
        assert load_field_rows(path) == [{"Items": "a\nb"}]

    def test_yaml_list(self, tmp_path):
        """A YAML list of mappings is a table."""
        path = tmp_path / "rows.yaml"
        path.write_text("- Name: Bob\n- Name: Ann\n  Active: true\n", encoding="utf-8")
        assert load_field_rows(path) == [{"Name": "Bob"}, {"Name": "Ann", "Active": "true"}]

    def test_json_not_a_list(self, tmp_path):
        """A single mapping is not a table."""
        path = tmp_path / "rows.json"
        path.write_text('{"Name": "Bob"}', encoding="utf-8")
        with pytest.raises(FieldMapError, match="list of rows"):
            load_field_rows(path)

    def test_row_not_a_mapping(self, tmp_path):
        """Every row must be a mapping."""
        path = tmp_path / "rows.json"
        path.write_text('[{"Name": "Bob"}, "oops"]', encoding="utf-8")
        with pytest.raises(FieldMapError, match="row 2"):
            load_field_rows(path)
