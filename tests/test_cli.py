"""Tests for the command-line interface."""

import json

from _docx_helpers import body_texts, para, write_docx
from typer.testing import CliRunner

from docx_merge import Document, __version__
from docx_merge.cli import app

runner = CliRunner()


class TestCLIVersion:
    """Tests for version option."""

    def test_version_flag(self):
        """Test --version shows version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestCLIHelp:
    """Tests for help output."""

    def test_main_help(self):
        """Test main --help lists the commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "merge" in result.stdout
        assert "batch" in result.stdout
        assert "tags" in result.stdout

    def test_batch_help(self):
        """Test batch --help shows options."""
        result = runner.invoke(app, ["batch", "--help"])
        assert result.exit_code == 0
        assert "--output-dir" in result.stdout
        assert "--name-field" in result.stdout
        assert "--stop-on-error" in result.stdout


class TestCLIMerge:
    """Tests for merge command."""

    def test_merge_to_output(self, tmp_path):
        """Test merging a JSON field map into a new file."""
        template = write_docx(tmp_path / "t.docx", para("Hello <<Name>>"))
        fields = tmp_path / "fields.json"
        fields.write_text(json.dumps({"Name": "Bob"}), encoding="utf-8")
        output = tmp_path / "out.docx"

        result = runner.invoke(app, ["merge", str(template), str(fields), "-o", str(output)])

        assert result.exit_code == 0
        assert "1 of 1 tags merged" in result.stdout
        assert body_texts(Document(output)) == ["Hello Bob"]

    def test_merge_default_output(self, tmp_path):
        """Test the default output name leaves the template alone."""
        template = write_docx(tmp_path / "t.docx", para("<<A>>"))
        fields = tmp_path / "fields.yaml"
        fields.write_text("A: x\n", encoding="utf-8")

        result = runner.invoke(app, ["merge", str(template), str(fields)])

        assert result.exit_code == 0
        assert body_texts(Document(tmp_path / "t-merged.docx")) == ["x"]
        assert body_texts(Document(template)) == ["<<A>>"]

    def test_merge_verbose(self, tmp_path):
        """Test --verbose is accepted before the command."""
        template = write_docx(tmp_path / "t.docx", para("<<A>>"))
        fields = tmp_path / "fields.json"
        fields.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["--verbose", "merge", str(template), str(fields)])
        assert result.exit_code == 0

    def test_merge_bad_fields(self, tmp_path):
        """Test an unreadable field file fails with exit code 1."""
        template = write_docx(tmp_path / "t.docx", para("<<A>>"))

        result = runner.invoke(app, ["merge", str(template), str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_merge_bad_template(self, tmp_path):
        """Test a non-docx template fails with exit code 1."""
        template = tmp_path / "t.docx"
        template.write_bytes(b"nope")
        fields = tmp_path / "fields.json"
        fields.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["merge", str(template), str(fields)])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestCLIBatch:
    """Tests for batch command."""

    def test_batch_from_csv(self, tmp_path):
        """Test one document is written per CSV row."""
        template = write_docx(tmp_path / "t.docx", para("Dear <<Name>>"))
        table = tmp_path / "rows.csv"
        table.write_text("Document Name,Name\nbob,Bob\nann,Ann\n", encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(app, ["batch", str(template), str(table), "-d", str(out)])

        assert result.exit_code == 0
        assert "Merged 2 documents (0 failed)" in result.stdout
        assert body_texts(Document(out / "bob.docx")) == ["Dear Bob"]
        assert body_texts(Document(out / "ann.docx")) == ["Dear Ann"]

    def test_batch_name_field(self, tmp_path):
        """Test --name-field picks the file name column."""
        template = write_docx(tmp_path / "t.docx", para("<<Name>>"))
        table = tmp_path / "rows.json"
        table.write_text(json.dumps([{"Name": "Bob"}]), encoding="utf-8")
        out = tmp_path / "out"

        result = runner.invoke(
            app, ["batch", str(template), str(table), "-d", str(out), "--name-field", "Name"]
        )

        assert result.exit_code == 0
        assert (out / "Bob.docx").exists()

    def test_batch_failed_row(self, tmp_path):
        """Test a failing row is reported and sets exit code 1."""
        template = write_docx(tmp_path / "t.docx", para("<<Name>>"))
        table = tmp_path / "rows.csv"
        table.write_text("Document Name\nblocked\nfine\n", encoding="utf-8")
        out = tmp_path / "out"
        (out / "blocked.docx").mkdir(parents=True)

        result = runner.invoke(app, ["batch", str(template), str(table), "-d", str(out)])

        assert result.exit_code == 1
        assert "Failed: row 1" in result.output
        assert (out / "fine.docx").exists()

    def test_batch_stop_on_error(self, tmp_path):
        """Test --stop-on-error aborts with an error message."""
        template = write_docx(tmp_path / "t.docx", para("<<Name>>"))
        table = tmp_path / "rows.csv"
        table.write_text("Document Name\nblocked\nfine\n", encoding="utf-8")
        out = tmp_path / "out"
        (out / "blocked.docx").mkdir(parents=True)

        result = runner.invoke(
            app, ["batch", str(template), str(table), "-d", str(out), "--stop-on-error"]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not (out / "fine.docx").exists()


class TestCLITags:
    """Tests for tags command."""

    def test_lists_tags(self, tmp_path):
        """Test the tags of a template are printed one per line."""
        template = write_docx(
            tmp_path / "t.docx", para("<<Name>> <x<City?>y>"), headers=[para("<<Title>>")]
        )

        result = runner.invoke(app, ["tags", str(template)])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["Title", "Name", "City?"]

    def test_missing_template(self, tmp_path):
        """Test a missing template fails with exit code 1."""
        result = runner.invoke(app, ["tags", str(tmp_path / "missing.docx")])
        assert result.exit_code == 1
        assert "Error:" in result.output
