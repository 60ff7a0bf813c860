"""
Purpose: Exception types raised by the rowwriter package.
Description: Separates schema problems (caught before a writer exists) from record and sink failures
             (raised by add_row).
Key Functions/Classes: RowWriterError, SchemaError, RecordError, SinkError.
"""

from __future__ import annotations

from typing import List, Optional


class RowWriterError(Exception):
    """Base class for every error raised by rowwriter."""


class SchemaError(RowWriterError):
    """The record shape or float precision cannot be serialized."""


class RecordError(RowWriterError, ValueError):
    """A record does not conform to the shape it is written with."""


class SinkError(RowWriterError):
    """Writing to the file or console sink failed.

    The underlying ``OSError`` is chained as ``__cause__``. When both sinks are
    active and more than one failed, the later failures are kept in ``secondary``.
    """

    def __init__(self, sink: str, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.sink = sink
        self.path = path
        self.secondary: List[SinkError] = []
