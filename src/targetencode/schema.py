"""Schema description of the frames a target encoder consumes and produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

import pandas as pd
from pandas.api.types import (
    is_bool_dtype,
    is_datetime64_any_dtype,
    is_float_dtype,
    is_integer_dtype,
    is_numeric_dtype,
)

STRUCT = "struct"
DOUBLE = "double"


@dataclass(frozen=True)
class SchemaField:
    """A named, typed column. Fields with ``children`` are structs."""

    name: str
    dtype: str
    nullable: bool = True
    children: Tuple["SchemaField", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists for convenience but keep the dataclass hashable
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_struct(self) -> bool:
        return bool(self.children) or self.dtype == STRUCT

    @classmethod
    def struct(cls, name: str, children: Sequence["SchemaField"], nullable: bool = True) -> "SchemaField":
        return cls(name=name, dtype=STRUCT, nullable=nullable, children=tuple(children))


@dataclass(frozen=True)
class Schema:
    """Ordered, immutable sequence of fields."""

    fields: Tuple[SchemaField, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, name: str) -> SchemaField:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def add(self, new_field: SchemaField) -> "Schema":
        """Return a new schema with ``new_field`` appended."""
        return Schema(self.fields + (new_field,))

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Schema":
        """Describe a pandas DataFrame as a flat schema.

        Columns holding no missing values are reported as non-nullable,
        except for float and object columns which can always hold NaN/None.
        """
        fields = []
        for col in df.columns:
            series = df[col]
            dtype = _dtype_name(series.dtype)
            nullable = dtype in (DOUBLE, "string") or bool(series.isna().any())
            fields.append(SchemaField(name=str(col), dtype=dtype, nullable=nullable))
        return cls(tuple(fields))


def _dtype_name(dtype) -> str:
    if isinstance(dtype, pd.CategoricalDtype):
        return "category"
    if is_bool_dtype(dtype):
        return "boolean"
    if is_integer_dtype(dtype):
        return "long"
    if is_float_dtype(dtype):
        return DOUBLE
    if is_datetime64_any_dtype(dtype):
        return "timestamp"
    if is_numeric_dtype(dtype):
        return DOUBLE
    return "string"


def flatten_fields(fields: Sequence[SchemaField], prefix: str = "") -> List[SchemaField]:
    """Expand struct fields into leaf fields with dotted names, keeping order.

    A leaf inherits nullability from any nullable ancestor.
    """
    flat: List[SchemaField] = []
    for f in fields:
        qualified = f"{prefix}{f.name}"
        if f.is_struct:
            children = [
                SchemaField(c.name, c.dtype, c.nullable or f.nullable, c.children)
                for c in f.children
            ]
            flat.extend(flatten_fields(children, prefix=qualified + "."))
        else:
            flat.append(SchemaField(name=qualified, dtype=f.dtype, nullable=f.nullable))
    return flat


def flatten_schema(schema: Schema) -> Schema:
    """Flat version of ``schema``, used for name lookups only."""
    return Schema(tuple(flatten_fields(schema.fields)))
