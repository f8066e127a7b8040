"""Presentation of aggregate counts as a terminal table or CSV."""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from rwc.common.models import AggregateResult, CountOptions, OutputFormat, SourceKind, SourceResult

PATH_HEADER = "path"
_UNBOUNDED_WIDTH = 1 << 16


@dataclass(slots=True)
class Labels:
    stdin: str = "Stdin"
    totals: str = "Totals"


@dataclass(slots=True)
class ReportRow:
    """One rendered row: a label plus either count cells or an error message."""

    label: str
    cells: List[str]
    error: Optional[str] = None
    is_totals: bool = False


def build_rows(result: AggregateResult, options: CountOptions, labels: Optional[Labels] = None) -> List[ReportRow]:
    """Flatten an aggregate result into display rows for the selected columns."""

    labels = labels or Labels()
    columns = options.columns()
    rows: List[ReportRow] = []
    for entry in result.entries:
        label = _entry_label(entry, labels)
        if entry.ok:
            rows.append(ReportRow(label=label, cells=[str(entry.counts.get(name)) for name in columns]))
        else:
            message = entry.error.reason if entry.error is not None else "no counts"
            rows.append(ReportRow(label=label, cells=[], error=message))
    if options.show_totals and result.totals is not None:
        rows.append(
            ReportRow(
                label=labels.totals,
                cells=[str(result.totals.get(name)) for name in columns],
                is_totals=True,
            )
        )
    return rows


def render_csv(result: AggregateResult, options: CountOptions, labels: Optional[Labels] = None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([PATH_HEADER, *options.columns()])
    for row in build_rows(result, options, labels):
        writer.writerow([row.label, row.error] if row.error is not None else [row.label, *row.cells])
    return buffer.getvalue()


def build_table(result: AggregateResult, options: CountOptions, labels: Optional[Labels] = None) -> Table:
    table = Table(header_style="bold blue")
    table.add_column(PATH_HEADER, overflow="fold")
    for name in options.columns():
        table.add_column(name, justify="right")

    for row in build_rows(result, options, labels):
        if row.error is not None:
            # The error takes the first count cell; the remaining cells stay blank.
            blanks = [""] * max(0, len(options.columns()) - 1)
            table.add_row(Text(row.label, style="bold green"), Text(row.error, style="bold red"), *blanks)
        elif row.is_totals:
            table.add_row(Text(row.label, style="bold magenta"), *row.cells)
        else:
            table.add_row(Text(row.label, style="bold green"), *row.cells)
    return table


def render_table(
    result: AggregateResult,
    options: CountOptions,
    labels: Optional[Labels] = None,
    *,
    width: int = 100,
) -> str:
    """Render the table to plain text; used by tests and non-terminal callers."""

    table = build_table(result, options, labels)
    console = Console(file=io.StringIO(), width=width, color_system=None, force_terminal=False)
    _widen_for(console, table)
    console.print(table)
    return console.file.getvalue()


def write_report(
    fmt: OutputFormat,
    result: AggregateResult,
    options: CountOptions,
    stream: TextIO,
    labels: Optional[Labels] = None,
) -> None:
    if fmt is OutputFormat.CSV:
        stream.write(render_csv(result, options, labels))
        return
    table = build_table(result, options, labels)
    console = Console(file=stream)
    if not console.is_terminal:
        _widen_for(console, table)
    console.print(table)


def _widen_for(console: Console, table: Table) -> None:
    # Off a terminal there is no real width limit; keep every path on one line.
    needed = console.measure(table, options=console.options.update_width(_UNBOUNDED_WIDTH)).maximum
    if needed > console.width:
        console.width = needed


def _entry_label(entry: SourceResult, labels: Labels) -> str:
    if entry.kind is SourceKind.STDIN:
        return labels.stdin
    return entry.identifier
