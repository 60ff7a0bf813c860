"""
Purpose: Typed description of a record shape and the per-kind value formatters.
Description: A RecordShape is an explicit, ordered list of (name, kind) pairs validated once.
             Each supported kind has a Formattable implementation; unsupported kinds are rejected
             while the shape is being built, never while a row is being written.
Key Functions/Classes: FieldKind, FieldSpec, RecordShape, Formattable, FORMATTERS, kind_for_annotation.
"""

from __future__ import annotations

import dataclasses
import numbers
import typing
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Protocol, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import COLUMN_SEPARATOR, FALSE_LITERAL, LINE_TERMINATOR, TRUE_LITERAL
from .errors import RecordError, SchemaError


class FieldKind(str, Enum):
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BOOL = "bool"
    TEXT = "text"
    ENUM = "enum"


class Formattable(Protocol):
    def format(self, value: Any, float_precision: int) -> str:
        ...


class IntFormatter:
    """Plain decimal, sign only when negative. ``bool`` is not an integer here."""

    def format(self, value: Any, float_precision: int) -> str:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise RecordError(f"expected an integer, got {type(value).__name__}")
        return str(int(value))


class UIntFormatter(IntFormatter):
    def format(self, value: Any, float_precision: int) -> str:
        text = super().format(value, float_precision)
        if value < 0:
            raise RecordError(f"expected a non-negative integer, got {text}")
        return text


class FloatFormatter:
    """Fixed-point with exactly ``float_precision`` decimals.

    Rounds the exact binary value with ties to even (Python's ``format``), so
    ``0.125`` -> ``0.12`` and ``2.5`` at precision 0 -> ``2``.
    """

    def format(self, value: Any, float_precision: int) -> str:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise RecordError(f"expected a float, got {type(value).__name__}")
        if isinstance(value, numbers.Integral):
            # Exact, so integers too large for a float still format.
            return format(Decimal(int(value)), f".{float_precision}f")
        return format(float(value), f".{float_precision}f")


class BoolFormatter:
    def format(self, value: Any, float_precision: int) -> str:
        if not isinstance(value, bool):
            raise RecordError(f"expected a bool, got {type(value).__name__}")
        return TRUE_LITERAL if value else FALSE_LITERAL


class TextFormatter:
    def format(self, value: Any, float_precision: int) -> str:
        if not isinstance(value, str):
            raise RecordError(f"expected text, got {type(value).__name__}")
        return value


class EnumFormatter:
    def __init__(self, enum_type: Optional[type] = None) -> None:
        self.enum_type = enum_type

    def format(self, value: Any, float_precision: int) -> str:
        expected = self.enum_type or Enum
        if not isinstance(value, expected):
            raise RecordError(f"expected a {expected.__name__} member, got {type(value).__name__}")
        return value.name


FORMATTERS: Dict[FieldKind, Formattable] = {
    FieldKind.INT: IntFormatter(),
    FieldKind.UINT: UIntFormatter(),
    FieldKind.FLOAT: FloatFormatter(),
    FieldKind.BOOL: BoolFormatter(),
    FieldKind.TEXT: TextFormatter(),
    FieldKind.ENUM: EnumFormatter(),
}


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    kind: FieldKind
    enum_type: Optional[type] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        # Names are written unescaped into the header line.
        if COLUMN_SEPARATOR in value or LINE_TERMINATOR in value or "\r" in value:
            raise ValueError(f"field name {value!r} contains a separator or newline")
        return value

    @model_validator(mode="after")
    def _validate_enum_type(self) -> "FieldSpec":
        if self.enum_type is None:
            return self
        if self.kind is not FieldKind.ENUM:
            raise ValueError(f"enum_type given for non-enum field {self.name!r}")
        if not (isinstance(self.enum_type, type) and issubclass(self.enum_type, Enum)):
            raise ValueError(f"enum_type for {self.name!r} is not an Enum subclass")
        return self

    def formatter(self) -> Formattable:
        if self.kind is FieldKind.ENUM and self.enum_type is not None:
            return EnumFormatter(self.enum_type)
        return FORMATTERS[self.kind]


FieldPair = Union[FieldSpec, Tuple[str, Union[str, FieldKind]], Tuple[str, Union[str, FieldKind], type]]


class RecordShape(BaseModel):
    """Ordered, non-empty set of named, typed fields describing one row."""

    model_config = ConfigDict(frozen=True)

    fields: Tuple[FieldSpec, ...]

    @field_validator("fields")
    @classmethod
    def _validate_fields(cls, value: Tuple[FieldSpec, ...]) -> Tuple[FieldSpec, ...]:
        if not value:
            raise ValueError("a record shape needs at least one field")
        seen = set()
        for spec in value:
            if spec.name in seen:
                raise ValueError(f"duplicate field name {spec.name!r}")
            seen.add(spec.name)
        return value

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @classmethod
    def of(cls, *pairs: FieldPair) -> "RecordShape":
        """Build a shape from ``(name, kind)`` or ``(name, "enum", EnumType)`` pairs.

        Raises SchemaError for unknown kinds, empty or duplicate names.
        """
        try:
            specs = [_to_spec(pair) for pair in pairs]
            return cls(fields=tuple(specs))
        except ValidationError as exc:
            raise SchemaError(str(exc)) from exc

    @classmethod
    def from_model(cls, model: type) -> "RecordShape":
        """Derive a shape from a pydantic model or dataclass, in declaration order."""
        if isinstance(model, type) and issubclass(model, BaseModel):
            annotations: Iterable[Tuple[str, Any]] = [
                (name, info.annotation) for name, info in model.model_fields.items()
            ]
        elif dataclasses.is_dataclass(model) and isinstance(model, type):
            hints = typing.get_type_hints(model)
            annotations = [(f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(model)]
        else:
            raise SchemaError(f"{model!r} is neither a pydantic model nor a dataclass")

        pairs = []
        for name, annotation in annotations:
            kind, enum_type = kind_for_annotation(annotation, field_name=name)
            pairs.append((name, kind, enum_type) if enum_type is not None else (name, kind))
        return cls.of(*pairs)


def _to_spec(pair: FieldPair) -> FieldSpec:
    if isinstance(pair, FieldSpec):
        return pair
    if not isinstance(pair, (tuple, list)):
        raise SchemaError(f"expected (name, kind) or (name, kind, enum_type), got {pair!r}")
    if len(pair) == 2:
        name, kind = pair
        enum_type = None
    elif len(pair) == 3:
        name, kind, enum_type = pair
    else:
        raise SchemaError(f"expected (name, kind) or (name, kind, enum_type), got {pair!r}")
    return FieldSpec(name=name, kind=kind, enum_type=enum_type)


def kind_for_annotation(annotation: Any, field_name: str = "?") -> Tuple[FieldKind, Optional[type]]:
    # bool before int: bool is an int subclass
    if annotation is bool:
        return FieldKind.BOOL, None
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return FieldKind.ENUM, annotation
    if annotation is int:
        return FieldKind.INT, None
    if annotation is float:
        return FieldKind.FLOAT, None
    if annotation is str:
        return FieldKind.TEXT, None
    raise SchemaError(f"type {annotation!r} of field {field_name!r} is not supported for serialization")
