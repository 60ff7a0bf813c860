"""
Purpose: Row-oriented CSV writer for fixed record shapes.
Description: Serializes records of a declared shape as comma-separated lines, with a configurable header
             policy, to an append-mode file, the console, or both.
Key Functions/Classes: `RecordShape`, `csv_writer`, `RowFormat`, `CSVWriter`, `Config`.
"""

from .codec import RowFormat, column_names, csv_writer, format_value
from .config import Config, DestinationPolicy, HeaderPolicy, load_config
from .errors import RecordError, RowWriterError, SchemaError, SinkError
from .schema import FieldKind, FieldSpec, RecordShape
from .writer import CSVWriter

__all__ = [
    "CSVWriter",
    "Config",
    "DestinationPolicy",
    "FieldKind",
    "FieldSpec",
    "HeaderPolicy",
    "RecordError",
    "RecordShape",
    "RowFormat",
    "RowWriterError",
    "SchemaError",
    "SinkError",
    "column_names",
    "csv_writer",
    "format_value",
    "load_config",
]
