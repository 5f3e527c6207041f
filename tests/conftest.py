from __future__ import annotations

import pandas as pd
import pytest

from targetencode import Schema, SchemaField, TargetEncoderConfig


@pytest.fixture
def config() -> TargetEncoderConfig:
    return TargetEncoderConfig(labelCol="label", inputCols=["color", "city"])


@pytest.fixture
def schema() -> Schema:
    return Schema(
        (
            SchemaField("label", "long", nullable=False),
            SchemaField("color", "string"),
            SchemaField("city", "string"),
        )
    )


@pytest.fixture
def frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "color": ["red", "red", "red", "blue", "blue", "green"],
            "city": ["a", "b", "a", "b", "a", "b"],
            "fold": [0, 1, 0, 1, 0, 1],
            "label": [1, 0, 1, 0, 1, 1],
        }
    )
