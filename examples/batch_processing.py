"""
Example: Producing one letter per student from a template and a CSV table.

The template uses tag constructs such as:

    Dear <<First Name>>,
    <Your tutor is <Tutor?>.>
    • <<Courses>>                 (a bulleted paragraph)

and students.csv has a header row naming the tags, plus a "Document Name"
column used for the output file names.
"""

from pathlib import Path

from docx_merge import Document, load_field_rows, merge_batch


def preview_tags(template: Path) -> None:
    """Show which tags a template expects."""
    with Document(template) as doc:
        print(f"Tags in {template.name}:")
        for name in doc.find_tags():
            print(f"  • {name}")


def main() -> None:
    """Example usage of batch merging."""
    template = Path("./letter_template.docx")
    table = Path("./students.csv")
    output_dir = Path("./letters")

    preview_tags(template)

    print("Starting batch merge...")
    print("-" * 60)

    rows = load_field_rows(table)
    results = merge_batch(template, rows, output_dir)

    for result in results:
        print(f"  {result}")

    # Print overall summary
    print("-" * 60)
    successful = sum(1 for r in results if r.success)
    print(f"  Total rows: {len(results)}")
    print(f"  Documents written: {successful}")
    print(f"  Failed: {len(results) - successful}")


if __name__ == "__main__":
    main()
