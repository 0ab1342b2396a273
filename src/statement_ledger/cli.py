"""Command-line interface for statement-ledger."""

from pathlib import Path
from typing import Optional

import typer

from .config import get_settings
from .exceptions import StatementLedgerError
from .extractor import detect_bytes, parse_file
from .logging_setup import configure_logging
from .models import ExportFormat, Transaction
from .outputs import write_ledger_csv

app = typer.Typer(
    name="statement-ledger",
    help="Convert bank statement exports into a budgeting ledger CSV.",
)


@app.command()
def convert(
    files: list[Path] = typer.Argument(
        ...,
        help="Statement files (.csv, .pdf, .xlsx, .xls)",
    ),
    output: Path = typer.Option(
        Path("ledger.csv"),
        "--output",
        "-o",
        help="Path of the ledger CSV to write",
    ),
    fmt: Optional[ExportFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output layout; defaults to the STATEMENT_LEDGER_DEFAULT_EXPORT_FORMAT setting",
        case_sensitive=False,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    ),
) -> None:
    """Parse each statement and write all transactions to one ledger CSV."""
    configure_logging(log_level)
    export_format = fmt or get_settings().default_export_format

    collected: list[Transaction] = []
    for path in files:
        typer.echo(f"Processing: {path}")
        try:
            result = parse_file(path)
        except OSError as e:
            typer.echo(f"  Error: {e}", err=True)
            continue

        typer.echo(f"  Bank: {result.bank_name}")
        typer.echo(f"  Statement: {result.statement_type}")
        for key, value in sorted(result.metadata.items()):
            typer.echo(f"  {key}: {value}")

        summary = result.summary()
        typer.echo(
            f"  Extracted {summary['total_transactions']} transactions "
            f"({summary['outflows']} outflows, {summary['inflows']} inflows)"
        )
        typer.echo(
            f"  Total outflow: {summary['total_outflow']}, "
            f"total inflow: {summary['total_inflow']}"
        )
        for error in result.errors:
            typer.echo(f"  Error: {error}", err=True)

        collected.extend(result.transactions)

    if not collected:
        typer.echo("No transactions extracted; nothing written.", err=True)
        raise typer.Exit(1)

    write_ledger_csv(collected, output, export_format)
    typer.echo(f"\nWrote {len(collected)} transactions to {output} ({export_format.value})")


@app.command()
def info(
    path: Path = typer.Argument(
        ...,
        help="Path to the statement file",
        exists=True,
        readable=True,
    ),
) -> None:
    """Show which bank and statement type a file is, without extracting."""
    typer.echo(f"File: {path}")

    try:
        variant = detect_bytes(path.name, path.read_bytes())
    except StatementLedgerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if variant:
        typer.echo(f"Detected bank: {variant.institution.value}")
        typer.echo(f"Statement type: {variant.statement_type.value}")
    else:
        typer.echo("Could not detect statement type - may not be supported")


if __name__ == "__main__":
    app()
