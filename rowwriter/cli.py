"""
Purpose: CLI for the row writer.
Description: Provides `rowwriter demo` to append a sample record and `rowwriter append` to append a single
             row described on the command line.
Key Functions/Classes: Click entrypoints `rowwriter`, `demo`, `append`.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Tuple

import click
from pydantic import BaseModel, ValidationError

from .codec import csv_writer
from .config import DestinationPolicy, HeaderPolicy, get_float_precision, load_config
from .errors import RowWriterError
from .schema import FieldKind, RecordShape


class SampleRun(BaseModel):
    name: str = "test"
    ip: str = "127.0.0.1"
    samples: int
    count: int
    cpus: float


_HEADER_CHOICE = click.Choice([p.value for p in HeaderPolicy])
_DESTINATION_CHOICE = click.Choice([p.value for p in DestinationPolicy])


def _writer_options(func):
    func = click.option("--precision", type=click.IntRange(min=0), default=None,
                        help="Digits after the decimal point for float columns")(func)
    func = click.option("--file", "file_path", type=click.Path(dir_okay=False), default=None,
                        help="Target CSV file")(func)
    func = click.option("--destination", type=_DESTINATION_CHOICE, default=None,
                        help="Write to the file, the console, or both")(func)
    func = click.option("--header", type=_HEADER_CHOICE, default=None,
                        help="When to print the header line")(func)
    return func


def parse_field(item: str) -> Tuple[str, FieldKind, Any]:
    """Parse ``NAME:KIND=VALUE`` into a name, a kind and a typed value."""
    spec, sep, raw = item.partition("=")
    name, colon, kind_text = spec.rpartition(":")
    if not sep or not colon or not name:
        raise click.BadParameter(f"expected NAME:KIND=VALUE, got {item!r}")
    try:
        kind = FieldKind(kind_text)
    except ValueError:
        raise click.BadParameter(f"unknown kind {kind_text!r} in {item!r}")
    try:
        if kind in (FieldKind.INT, FieldKind.UINT):
            value: Any = int(raw)
        elif kind is FieldKind.FLOAT:
            value = float(raw)
        elif kind is FieldKind.BOOL:
            if raw.lower() not in ("true", "false"):
                raise ValueError(raw)
            value = raw.lower() == "true"
        elif kind is FieldKind.TEXT:
            value = raw
        else:
            raise click.BadParameter(f"kind {kind.value!r} cannot be given on the command line")
    except ValueError:
        raise click.BadParameter(f"{raw!r} is not a valid {kind.value} value")
    return name, kind, value


def _run(shape: RecordShape, record: Any, header: Optional[str], destination: Optional[str],
         file_path: Optional[str], precision: Optional[int]) -> None:
    try:
        config = load_config(header_policy=header, destination_policy=destination, file_path=file_path)
        float_precision = precision if precision is not None else get_float_precision()
        csv_writer(shape, float_precision).init(config).add_row(record)
    except (RowWriterError, ValidationError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
def rowwriter() -> None:
    """Append typed rows to CSV files and the console."""


@rowwriter.command()
@_writer_options
@click.option("--samples", default=10, type=int, show_default=True)
@click.option("--count", default=1, type=int, show_default=True)
@click.option("--cpus", default=0.1, type=float, show_default=True)
def demo(header: Optional[str], destination: Optional[str], file_path: Optional[str],
         precision: Optional[int], samples: int, count: int, cpus: float) -> None:
    """Append one sample run record."""
    record = SampleRun(samples=samples, count=count, cpus=cpus)
    _run(RecordShape.from_model(SampleRun), record, header, destination, file_path, precision)


@rowwriter.command()
@_writer_options
@click.option("--field", "fields", multiple=True, required=True, metavar="NAME:KIND=VALUE",
              help="One column; repeat in column order. KIND is int, uint, float, bool or text.")
def append(header: Optional[str], destination: Optional[str], file_path: Optional[str],
           precision: Optional[int], fields: Tuple[str, ...]) -> None:
    """Append one row given as NAME:KIND=VALUE fields."""
    parsed = [parse_field(item) for item in fields]
    try:
        shape = RecordShape.of(*[(name, kind) for name, kind, _ in parsed])
    except RowWriterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    values: List[Any] = [value for _, _, value in parsed]
    _run(shape, values, header, destination, file_path, precision)


if __name__ == "__main__":  # pragma: no cover
    rowwriter()
