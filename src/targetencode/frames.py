"""Frame adapters and the hook that marks encoder columns as categorical."""

from __future__ import annotations

from typing import Protocol

import pandas as pd
from pandas.api.types import CategoricalDtype

from .config import TargetEncoderConfig
from .logging import get_logger

logger = get_logger(__name__)


class CategoricalFrame(Protocol):
    """Anything that can turn one of its columns into a categorical column."""

    def to_categorical_col(self, name: str) -> None:
        ...


class PandasFrame:
    """Wrap a pandas DataFrame so the encoder can categorize its columns in place."""

    def __init__(self, df: pd.DataFrame) -> None:
        self.df = df

    def to_categorical_col(self, name: str) -> None:
        """Convert ``name`` to a pandas categorical column (no-op if it already is one)."""
        if isinstance(self.df[name].dtype, CategoricalDtype):
            return
        self.df[name] = self.df[name].astype("category")


def change_relevant_columns_to_categorical(
    config: TargetEncoderConfig,
    frame: CategoricalFrame,
) -> None:
    """Mark every input column, then the label column, as categorical on ``frame``."""
    relevant_columns = list(config.get_input_cols() or []) + [config.get_label_col()]
    for col in relevant_columns:
        frame.to_categorical_col(col)
    logger.debug(f"Converted {len(relevant_columns)} column(s) to categorical")
