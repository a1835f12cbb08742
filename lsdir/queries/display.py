"""Display and output formatting for query results.

Renders a QueryResult as rich tables (one per group, or one aggregate table)
or as a TSV file.
"""

from pathlib import Path
from typing import Any

from rich.markup import escape
from rich.table import Table

from ..cli.common import console, format_datetime, format_size
from ..core.models import FileRecord
from .aggregate import AggregateFunction, AggregateSpec
from .query_engine import QueryResult

RECORD_COLUMNS = ("Modified", "Accessed", "Created", "Type", "Size (bytes)", "Name")


def _add_record_columns(table: Table) -> None:
    table.add_column("Modified")
    table.add_column("Accessed")
    table.add_column("Created")
    table.add_column("Type")
    table.add_column("Size (bytes)", justify="right")
    table.add_column("Name", style="cyan", no_wrap=False)


def _record_cells(record: FileRecord) -> list[str]:
    return [
        format_datetime(record.modified),
        format_datetime(record.accessed),
        format_datetime(record.created),
        record.file_type,
        f"{record.size:,}",
        escape(record.name),
    ]


def format_aggregate_value(spec: AggregateSpec, value: Any) -> str:
    """Render a scalar aggregate value; None means the group has no value."""
    if value is None:
        return "[dim]N/A[/dim]"
    if spec.function is AggregateFunction.COUNT:
        return f"{value:,}"
    if spec.function is AggregateFunction.SUM:
        return f"{value:,} ({format_size(value)})"
    return f"{value:,.2f}"


def print_groups(result: QueryResult) -> None:
    """Print each group's records in a formatted table."""
    if not result.records:
        console.print("[yellow]No entries found matching criteria.[/yellow]")
        return

    for key in sorted(result.groups):
        records = result.groups[key]
        table = Table(title=f"{escape(key)} ({len(records)} entries)", title_justify="left")
        _add_record_columns(table)
        for record in records:
            table.add_row(*_record_cells(record))
        console.print(table)


def print_aggregates(result: QueryResult) -> None:
    """Print one row per group with its aggregate value."""
    spec = result.aggregate
    table = Table(title=f"{spec.label} ({len(result.aggregates)} groups)")
    table.add_column("Group", style="cyan")

    extremal = spec.function in (AggregateFunction.MAX, AggregateFunction.MIN)
    if extremal:
        _add_record_columns(table)
    else:
        table.add_column(spec.label, justify="right")

    for key in sorted(result.aggregates):
        value = result.aggregates[key]
        if not extremal:
            table.add_row(escape(key), format_aggregate_value(spec, value))
        elif value is None:
            table.add_row(escape(key), *(["[dim]N/A[/dim]"] + [""] * (len(RECORD_COLUMNS) - 1)))
        else:
            table.add_row(escape(key), *_record_cells(value))

    console.print(table)


def write_tsv(result: QueryResult, output_path: Path) -> None:
    """Write results to TSV file.

    Without an aggregate, one line per record prefixed by its group key;
    with one, one line per group.  Missing aggregate values are left empty.
    """
    with open(output_path, "w") as f:
        if result.aggregate is None:
            f.write("group\tmodified\taccessed\tcreated\tfile_type\tsize\tname\n")
            for key in sorted(result.groups):
                for r in result.groups[key]:
                    f.write(
                        f"{key}\t{format_datetime(r.modified)}\t{format_datetime(r.accessed)}\t"
                        f"{format_datetime(r.created)}\t{r.file_type}\t{r.size}\t{r.name}\n"
                    )
        else:
            spec = result.aggregate
            f.write(f"group\t{spec.function.value}\n")
            for key in sorted(result.aggregates):
                value = result.aggregates[key]
                if value is None:
                    cell = ""
                elif isinstance(value, FileRecord):
                    cell = value.name
                else:
                    cell = str(value)
                f.write(f"{key}\t{cell}\n")

    console.print(f"[green]Results written to {output_path}[/green]")
