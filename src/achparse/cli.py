from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from achparse.config import ParserConfig, load_config
from achparse.data.generator import generate_synthetic_dataset
from achparse.errors import AchError
from achparse.logs import configure_logging, get_logger
from achparse.parser import parse
from achparse.records import AchFile
from achparse.report import (
    append_csv,
    append_jsonl,
    entries_to_arrow,
    entries_to_jsonl,
    file_to_dict,
    summarize_file,
    summarize_log,
    summary_to_row,
)

app = typer.Typer(help="Parse and validate NACHA ACH payment files.")
dataset_app = typer.Typer(help="Dataset helpers (synthetic ACH fixtures).")
log_app = typer.Typer(help="Trend logs written by `validate`.")
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)
EXPORT_FORMATS = {"jsonl", "arrow"}

app.add_typer(dataset_app, name="dataset")
app.add_typer(log_app, name="log")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG shows per-batch totals."),
) -> None:
    configure_logging(log_level)


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path.read_bytes()


def _config(path: Path | None) -> ParserConfig:
    if path is None:
        return ParserConfig()
    if not path.is_file():
        raise typer.BadParameter(f"Config file not found: {path}")
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_or_exit(input: Path, config: Path | None) -> AchFile:
    data = _read_bytes(input)
    try:
        return parse(data, _config(config))
    except AchError as exc:
        logger.warning("parse_failed", path=str(input), kind=exc.kind.value)
        err_console.print(f"[bold red]Invalid ACH file[/] {input}: {escape(str(exc))}")
        err_console.print(
            orjson.dumps(exc.to_dict(), option=orjson.OPT_INDENT_2).decode(), markup=False
        )
        raise typer.Exit(code=1) from exc


@app.command("parse")
def parse_cmd(
    input: Path = typer.Argument(..., help="ACH file to parse."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the parsed tree as JSON."
    ),
    config: Path | None = typer.Option(None, "--config", help="Parser config (json/yaml)."),
) -> None:
    """Parse a file and emit the validated File/Batch/Entry/Addenda tree as JSON."""
    ach = _parse_or_exit(input, config)
    payload = file_to_dict(ach)
    if output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote parsed tree[/] to {output}")
    else:
        # field text is free-form, so skip rich markup
        console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode(), markup=False)


@app.command()
def validate(
    input: Path = typer.Argument(..., help="ACH file to validate."),
    config: Path | None = typer.Option(None, "--config", help="Parser config (json/yaml)."),
    log_csv: Path | None = typer.Option(
        None, "--log-csv", help="Append the summary as a CSV row for trend tracking."
    ),
    log_jsonl: Path | None = typer.Option(
        None, "--log-jsonl", help="Append the summary as JSONL for trend tracking."
    ),
    tag: str | None = typer.Option(None, "--tag", help="Optional tag to mark this run."),
) -> None:
    """Validate structure and control totals, then print a summary."""
    ach = _parse_or_exit(input, config)
    summary = summarize_file(ach)

    table = Table(title=f"{input.name}: valid")
    table.add_column("Batch", justify="right")
    table.add_column("Company")
    table.add_column("SEC")
    table.add_column("Entries", justify="right")
    table.add_column("Debits (cents)", justify="right")
    table.add_column("Credits (cents)", justify="right")
    for batch in ach.batches:
        table.add_row(
            str(batch.header.batch_number),
            batch.header.company_name.strip(),
            batch.header.standard_entry_class_code,
            str(len(batch.entries)),
            str(batch.control.total_debit_amount),
            str(batch.control.total_credit_amount),
        )
    console.print(table)
    console.print(
        f"[bold green]OK[/] batches={summary.batches} entries={summary.entries} "
        f"addenda={summary.addenda} debit={summary.total_debit_amount} "
        f"credit={summary.total_credit_amount}"
    )

    if log_csv:
        append_csv(log_csv, summary_to_row(summary, source=str(input), tag=tag))
        console.print(f"[bold green]Appended CSV log[/] to {log_csv}")
    if log_jsonl:
        append_jsonl(log_jsonl, {"source": str(input), "tag": tag, "summary": summary})
        console.print(f"[bold green]Appended JSONL log[/] to {log_jsonl}")


@app.command()
def export(
    input: Path = typer.Argument(..., help="ACH file to export."),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the entry table."),
    format: str = typer.Option("jsonl", "--format", "-f", help="Output format: jsonl | arrow."),
    config: Path | None = typer.Option(None, "--config", help="Parser config (json/yaml)."),
) -> None:
    """Flatten entries (one row each, addenda inlined) to JSONL or Arrow IPC."""
    fmt = format.lower()
    if fmt not in EXPORT_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {EXPORT_FORMATS}.")
    ach = _parse_or_exit(input, config)
    rows = entries_to_arrow(ach, output) if fmt == "arrow" else entries_to_jsonl(ach, output)
    console.print(f"[bold green]Wrote[/] {rows} entries to {output}")


@dataset_app.command("synthetic")
def dataset_synthetic(
    output: Path = typer.Argument(..., help="Path to write the synthetic ACH file."),
    metadata: Path | None = typer.Option(
        None, "--metadata", "-m", help="Optional path to write JSON metadata about entries."
    ),
    count: int = typer.Option(8, "--count", "-c", help="Number of entries to emit."),
    batches: int = typer.Option(2, "--batches", "-b", help="Number of batches."),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
) -> None:
    """Generate a well-formed ACH file with correct control totals."""
    text, meta = generate_synthetic_dataset(count=count, seed=seed, batches=batches)
    output.write_text(text, encoding="latin-1")
    console.print(f"[bold green]Wrote[/] {count} entries in {batches} batches to {output}")

    if metadata:
        metadata.write_bytes(orjson.dumps(meta, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote metadata[/] to {metadata}")


@log_app.command("summarize")
def log_summarize(
    log: Path = typer.Argument(..., help="CSV or JSONL log file produced by validate."),
) -> None:
    """Summarize trend logs produced by `validate --log-csv/--log-jsonl`."""
    summary = summarize_log(log)
    console.print(orjson.dumps(summary, option=orjson.OPT_INDENT_2).decode())


if __name__ == "__main__":
    app()
