"""
Purpose: Unit tests for record shape construction.
Description: Ensures shapes keep declaration order, reject unsupported kinds before any writer exists,
             and can be derived from pydantic models and dataclasses.
Key Tests: test_of_keeps_order, test_unsupported_kind_rejected, test_from_model_pydantic, test_from_dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pytest
from pydantic import BaseModel

from rowwriter.codec import csv_writer
from rowwriter.errors import SchemaError
from rowwriter.schema import FieldKind, FieldSpec, RecordShape, kind_for_annotation


class Mode(Enum):
    FAST = "f"
    SLOW = "s"


class Sample(BaseModel):
    name: str = "test"
    samples: int
    cpus: float
    ok: bool
    mode: Mode


@dataclass
class SampleDC:
    count: int
    rate: float
    label: str


class BadModel(BaseModel):
    count: int
    tags: List[str]


def test_of_keeps_order():
    shape = RecordShape.of(("z", "int"), ("a", "float"), ("m", FieldKind.TEXT))
    assert shape.column_names == ("z", "a", "m")
    assert [f.kind for f in shape.fields] == [FieldKind.INT, FieldKind.FLOAT, FieldKind.TEXT]
    assert len(shape) == 3


def test_of_accepts_field_specs():
    shape = RecordShape.of(FieldSpec(name="x", kind="uint"), ("y", "bool"))
    assert shape.fields[0].kind is FieldKind.UINT


def test_unsupported_kind_rejected():
    with pytest.raises(SchemaError):
        RecordShape.of(("count", "int"), ("tags", "list"))


def test_empty_shape_rejected():
    with pytest.raises(SchemaError):
        RecordShape.of()


def test_duplicate_and_bad_names_rejected():
    with pytest.raises(SchemaError):
        RecordShape.of(("a", "int"), ("a", "float"))
    with pytest.raises(SchemaError):
        RecordShape.of(("", "int"))
    with pytest.raises(SchemaError):
        RecordShape.of(("a,b", "int"))
    with pytest.raises(SchemaError):
        RecordShape.of(("a\nb", "int"))


def test_enum_type_only_for_enum_kind():
    with pytest.raises(SchemaError):
        RecordShape.of(("a", "int", Mode))
    with pytest.raises(SchemaError):
        RecordShape.of(("a", "enum", int))


def test_from_model_pydantic():
    shape = RecordShape.from_model(Sample)
    assert shape.column_names == ("name", "samples", "cpus", "ok", "mode")
    kinds = [f.kind for f in shape.fields]
    assert kinds == [FieldKind.TEXT, FieldKind.INT, FieldKind.FLOAT, FieldKind.BOOL, FieldKind.ENUM]
    assert shape.fields[4].enum_type is Mode

    line = csv_writer(shape).serialize(Sample(samples=10, cpus=0.1, ok=True, mode=Mode.SLOW))
    assert line == "test,10,0.10,true,SLOW\n"


def test_from_dataclass():
    shape = RecordShape.from_model(SampleDC)
    assert shape.column_names == ("count", "rate", "label")
    assert csv_writer(shape, 1).serialize(SampleDC(3, 2.25, "x")) == "3,2.2,x\n"


def test_from_model_rejects_unsupported_annotation():
    with pytest.raises(SchemaError, match="tags"):
        RecordShape.from_model(BadModel)
    with pytest.raises(SchemaError):
        RecordShape.from_model(dict)


def test_kind_for_annotation():
    assert kind_for_annotation(bool) == (FieldKind.BOOL, None)
    assert kind_for_annotation(int) == (FieldKind.INT, None)
    assert kind_for_annotation(Mode) == (FieldKind.ENUM, Mode)
    with pytest.raises(SchemaError):
        kind_for_annotation(Optional[int])
    with pytest.raises(SchemaError):
        kind_for_annotation(bytes)


def test_non_sequence_pair_rejected():
    with pytest.raises(SchemaError):
        RecordShape.of(5)  # type: ignore[arg-type]
    with pytest.raises(SchemaError):
        RecordShape.of("count")  # type: ignore[arg-type]
