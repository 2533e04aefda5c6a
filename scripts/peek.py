import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from vcfimport.vcards import VCFParserError, parse_vcf_report, validate_content

console = Console()


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    parser = argparse.ArgumentParser(description="Show the contacts parsed from a .vcf file.")
    parser.add_argument("path", type=Path)
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8", errors="replace")
    if not validate_content(text):
        console.print(f"[red]{args.path} does not look like vCard data[/red]")
        sys.exit(1)
    try:
        report = parse_vcf_report(text)
    except VCFParserError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)

    table = Table(title=f"{args.path.name}: {len(report.contacts)} contact(s)")
    for column in ("Name", "Phone", "Email", "Address", "Notes"):
        table.add_column(column)
    for c in report.contacts:
        table.add_row(c.name, c.phone or "", c.email or "", c.address or "", c.notes or "")
    console.print(table)
    if report.skipped:
        console.print(f"{len(report.skipped)} card(s) skipped")


if __name__ == "__main__":
    main()
