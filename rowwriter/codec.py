"""
Purpose: Row serialization for a fixed record shape.
Description: Pure helpers turning typed values into their canonical text and records into CSV lines,
             plus RowFormat, the compiled (shape, float precision) pair that writers are built from.
Key Functions/Classes: column_names, format_value, header_line, data_line, RowFormat, csv_writer.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple, Union

from pydantic import BaseModel

from .constants import COLUMN_SEPARATOR, DEFAULT_FLOAT_PRECISION, LINE_TERMINATOR
from .errors import RecordError, SchemaError
from .schema import FORMATTERS, FieldKind, Formattable, RecordShape
from .writer_logging import get_logger, log_event

if TYPE_CHECKING:  # pragma: no cover
    from .config import Config
    from .writer import CSVWriter


logger = get_logger()


def column_names(shape: RecordShape) -> List[str]:
    return list(shape.column_names)


def format_value(value: Any, kind: Union[FieldKind, str], float_precision: int = DEFAULT_FLOAT_PRECISION) -> str:
    """Return the canonical text for one value of the given kind.

    Raises SchemaError for an unknown kind and RecordError when the value does not fit the kind.
    """
    try:
        formatter = FORMATTERS[FieldKind(kind)]
    except ValueError as exc:
        raise SchemaError(f"field kind {kind!r} is not supported for serialization") from exc
    return formatter.format(value, _check_precision(float_precision))


def header_line(shape: RecordShape) -> str:
    return data_line(shape.column_names)


def data_line(values: Sequence[str]) -> str:
    return COLUMN_SEPARATOR.join(values) + LINE_TERMINATOR


def _check_precision(float_precision: Any) -> int:
    if isinstance(float_precision, bool) or not isinstance(float_precision, int) or float_precision < 0:
        raise SchemaError(f"float precision must be a non-negative integer, got {float_precision!r}")
    return float_precision


class RowFormat:
    """A record shape compiled together with its float precision.

    Everything that depends only on the shape (column order, header text, one
    formatter per column) is resolved here once; ``serialize`` only looks values up
    and formats them.
    """

    def __init__(self, shape: RecordShape, float_precision: int = DEFAULT_FLOAT_PRECISION) -> None:
        if not isinstance(shape, RecordShape):
            raise SchemaError(f"expected a RecordShape, got {type(shape).__name__}")
        self.shape = shape
        self.float_precision = _check_precision(float_precision)
        self.header = header_line(shape)
        self._columns: List[Tuple[str, Formattable]] = [(spec.name, spec.formatter()) for spec in shape.fields]
        log_event(logger, "schema_compiled", columns=list(shape.column_names),
                  float_precision=self.float_precision)

    @property
    def column_names(self) -> List[str]:
        return column_names(self.shape)

    def values(self, record: Any) -> List[Any]:
        """Pull one value per column out of a model, dataclass, mapping or positional sequence."""
        if isinstance(record, Mapping):
            missing = [name for name, _ in self._columns if name not in record]
            if missing:
                raise RecordError(f"record is missing field(s): {', '.join(missing)}")
            return [record[name] for name, _ in self._columns]
        if isinstance(record, (tuple, list)):
            if len(record) != len(self._columns):
                raise RecordError(f"expected {len(self._columns)} values, got {len(record)}")
            return list(record)
        if isinstance(record, BaseModel) or dataclasses.is_dataclass(record):
            try:
                return [getattr(record, name) for name, _ in self._columns]
            except AttributeError as exc:
                raise RecordError(f"record is missing a field: {exc}") from exc
        raise RecordError(f"cannot read fields from a {type(record).__name__}")

    def serialize(self, record: Any) -> str:
        """Return the data line for one record, newline included."""
        texts = []
        for (name, formatter), value in zip(self._columns, self.values(record)):
            try:
                texts.append(formatter.format(value, self.float_precision))
            except RecordError as exc:
                raise RecordError(f"field {name!r}: {exc}") from exc
        return data_line(texts)

    def init(self, config: "Config") -> "CSVWriter":
        from .writer import CSVWriter

        return CSVWriter(self, config)

    def __repr__(self) -> str:
        return f"RowFormat(columns={self.column_names!r}, float_precision={self.float_precision})"


def csv_writer(shape: RecordShape, float_precision: int = DEFAULT_FLOAT_PRECISION) -> RowFormat:
    """Compile ``shape`` for writing; call ``.init(config)`` on the result to get a writer."""
    return RowFormat(shape, float_precision)
