"""Validation utilities for targetencode."""

from __future__ import annotations

from typing import NoReturn

import pandas as pd

from .config import TargetEncoderConfig
from .exceptions import SchemaValidationError
from .logging import get_logger
from .schema import DOUBLE, Schema, SchemaField, flatten_schema

logger = get_logger(__name__)


def transform_schema(config: TargetEncoderConfig, schema: Schema) -> Schema:
    """Check ``schema`` against ``config`` and return the encoder's output schema.

    Checks run in order and the first failure is raised:

    1. the label column is set
    2. the input columns are set and non-empty
    3. the label column exists in the (flattened) schema
    4. every input column exists in the (flattened) schema
    5. no input column is also an output column

    Args:
        config: Encoder configuration
        schema: Schema of the input dataset

    Returns:
        ``schema`` with one nullable double field appended per output column

    Raises:
        SchemaValidationError: On the first violated check
    """
    label_col = config.get_label_col()
    input_cols = config.get_input_cols()

    if label_col is None:
        _fail("Label column can't be null!", SchemaValidationError.LABEL_MISSING, [])
    if not input_cols:
        _fail(
            "The list of input columns can't be null or empty!",
            SchemaValidationError.INPUT_COLS_EMPTY,
            [],
        )

    field_names = set(flatten_schema(schema).names)
    if label_col not in field_names:
        _fail(
            f"The specified label column '{label_col}' was not found in the input dataset!",
            SchemaValidationError.LABEL_NOT_FOUND,
            [label_col],
        )
    for input_col in input_cols:
        if input_col not in field_names:
            _fail(
                f"The specified input column '{input_col}' was not found in the input dataset!",
                SchemaValidationError.INPUT_COL_NOT_FOUND,
                [input_col],
            )

    output_cols = config.get_output_cols()
    output_set = set(output_cols)
    overlap = []
    for col in input_cols:
        if col in output_set and col not in overlap:
            overlap.append(col)
    if overlap:
        quoted = ", ".join(f"'{c}'" for c in overlap)
        _fail(
            f"The columns [{quoted}] are specified as input columns and also as output columns. "
            "There can't be an overlap.",
            SchemaValidationError.INPUT_OUTPUT_OVERLAP,
            overlap,
        )

    result = schema
    for name in output_cols:
        result = result.add(SchemaField(name=name, dtype=DOUBLE, nullable=True))
    logger.debug(f"✓ Schema validated: {len(input_cols)} column(s) to encode -> {output_cols}")
    return result


def _fail(message: str, invariant: str, columns: list[str]) -> NoReturn:
    logger.warning(f"✗ {message}")
    raise SchemaValidationError(message, invariant, columns)


def validate_input_frame(df: pd.DataFrame, config: TargetEncoderConfig) -> Schema:
    """Validate a DataFrame before fitting and return the expected output schema."""
    if df.empty:
        raise ValueError("Input DataFrame is empty.")
    if df.columns.duplicated().any():
        raise ValueError("DataFrame contains duplicated column names.")
    return transform_schema(config, Schema.from_frame(df))
