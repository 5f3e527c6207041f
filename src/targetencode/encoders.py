"""Target encoder transformer driven by a TargetEncoderConfig."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .config import TargetEncoderConfig
from .exceptions import ConfigurationError, SchemaValidationError
from .frames import PandasFrame, change_relevant_columns_to_categorical
from .logging import get_logger
from .schema import Schema
from .types import HoldoutStrategy
from .validators import transform_schema, validate_input_frame

logger = get_logger(__name__)

MISSING_SENTINEL = "__MISSING__"


def _category_keys(series: pd.Series) -> pd.Series:
    """Group keys for a column; missing values form their own group."""
    keys = series.astype(object)
    return keys.where(series.notna(), MISSING_SENTINEL).reset_index(drop=True)


class TargetEncoder(BaseEstimator, TransformerMixin):
    """Replace categories with the average of a binary label over their group.

    For every input column ``c`` a column ``c_te`` is appended. On training
    data the configured holdout strategy decides which rows feed the average
    of each row (``transform_training``); on new data the full-data average is
    used (``transform``). Blending pulls small groups toward the global
    average and noise is added to training encodings only.

    Args:
        config: Encoder options. Defaults to ``TargetEncoderConfig()``.

    Attributes:
        config_: Configuration used by the last fit
        global_mean_: Average label over the fitted rows
        label_categories_: Label categories; the second one is the positive class
        stats_: Dict mapping input column to a frame of label ``sum``/``count`` per category
        fold_stats_: Same as ``stats_`` but per (category, fold); empty without a fold column
        feature_names_in_: Columns of the fitted frame
    """

    def __init__(self, config: Optional[TargetEncoderConfig] = None) -> None:
        self.config = config

    @classmethod
    def from_options(cls, **options: Any) -> "TargetEncoder":
        """Build an encoder from option keywords, e.g. ``inputCols=["color"]``."""
        return cls(config=TargetEncoderConfig(**options))

    def _get_config(self) -> TargetEncoderConfig:
        return self.config if self.config is not None else TargetEncoderConfig()

    def transform_schema(self, schema: Schema) -> Schema:
        """Validate ``schema`` and return the schema ``transform`` produces."""
        return transform_schema(self._get_config(), schema)

    # ------------------------------------------------------------------
    # Fitting
    # ------------------------------------------------------------------
    def fit(self, X: pd.DataFrame, y: pd.Series | None = None) -> "TargetEncoder":
        """Learn per-category label sums and counts.

        The label is read from ``X[label_col]``; ``y`` is accepted for
        scikit-learn compatibility and ignored.
        """
        config = self._get_config()
        df = pd.DataFrame(X)
        validate_input_frame(df, config)

        work = df.copy()
        change_relevant_columns_to_categorical(config, PandasFrame(work))

        label = work[config.label_col]
        categories = list(label.cat.categories)
        if len(categories) != 2:
            raise ValueError(
                f"Target encoding needs a binary label; column '{config.label_col}' "
                f"has {len(categories)} distinct value(s)"
            )
        self.label_categories_ = categories
        target = self._encode_label(label)

        folds = None
        if config.fold_col is not None:
            if config.fold_col not in work.columns:
                raise SchemaValidationError(
                    f"The specified fold column '{config.fold_col}' was not found in the input dataset!",
                    SchemaValidationError.FOLD_COL_NOT_FOUND,
                    [config.fold_col],
                )
            folds = _category_keys(work[config.fold_col])

        self.config_ = config.model_copy(deep=True)
        self.global_mean_ = float(target.mean())
        self.stats_: dict[str, pd.DataFrame] = {}
        self.fold_stats_: dict[str, pd.DataFrame] = {}
        target_series = pd.Series(target)
        for col in config.input_cols:
            keys = _category_keys(work[col])
            temp = pd.DataFrame({"key": keys, "target": target_series})
            self.stats_[col] = temp.groupby("key")["target"].agg(["sum", "count"])
            if folds is not None:
                temp["fold"] = folds
                self.fold_stats_[col] = temp.groupby(["key", "fold"])["target"].agg(["sum", "count"])

        self.feature_names_in_ = np.asarray(df.columns, dtype=object)
        self.n_features_in_ = len(df.columns)
        logger.info(
            f"Fitted target encoder on {len(df)} rows: {len(config.input_cols)} column(s), "
            f"global mean {self.global_mean_:.4f}"
        )
        return self

    def _encode_label(self, label: pd.Series) -> np.ndarray:
        codes = pd.Categorical(label, categories=self.label_categories_).codes
        if (codes < 0).any():
            raise ValueError(
                f"Label column '{label.name}' contains missing or unseen values"
            )
        return (codes == 1).astype(float)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def _blend(self, sums: np.ndarray, counts: np.ndarray) -> np.ndarray:
        prior = self.global_mean_
        with np.errstate(divide="ignore", invalid="ignore"):
            means = np.where(counts > 0, sums / counts, prior)
        blending = self.config_.blending
        if blending is not None:
            weight = 1.0 / (1.0 + np.exp((blending.inflection_point - counts) / blending.smoothing))
            means = np.where(counts > 0, weight * means + (1.0 - weight) * prior, prior)
        return means.astype(float)

    def _lookup(self, col: str, keys: pd.Series) -> tuple[np.ndarray, np.ndarray]:
        stats = self.stats_[col]
        sums = keys.map(stats["sum"]).fillna(0.0).to_numpy(dtype=float)
        counts = keys.map(stats["count"]).fillna(0.0).to_numpy(dtype=float)
        return sums, counts

    def _check_columns(self, df: pd.DataFrame, columns: list[str]) -> None:
        for col in columns:
            if col not in df.columns:
                raise SchemaValidationError(
                    f"The specified input column '{col}' was not found in the input dataset!",
                    SchemaValidationError.INPUT_COL_NOT_FOUND,
                    [col],
                )

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Append encoded columns using full-data category averages."""
        check_is_fitted(self, "stats_")
        df = pd.DataFrame(X)
        config = self.config_
        self._check_columns(df, config.input_cols)

        out = df.copy()
        for col, out_col in zip(config.input_cols, config.output_cols):
            sums, counts = self._lookup(col, _category_keys(df[col]))
            out[out_col] = self._blend(sums, counts)
        return out

    def transform_training(self, X: pd.DataFrame) -> pd.DataFrame:
        """Append encoded columns honoring the holdout strategy, then add noise."""
        check_is_fitted(self, "stats_")
        df = pd.DataFrame(X)
        config = self.config_
        strategy = config.holdout_strategy
        if strategy == HoldoutStrategy.K_FOLD and config.fold_col is None:
            raise ConfigurationError("Holdout strategy 'KFold' requires the option 'foldCol' to be set")
        required = list(config.input_cols)
        if strategy != HoldoutStrategy.NONE:
            required.append(config.label_col)
        if strategy == HoldoutStrategy.K_FOLD:
            required.append(config.fold_col)
        self._check_columns(df, required)

        target = self._encode_label(df[config.label_col]) if strategy != HoldoutStrategy.NONE else None
        folds = _category_keys(df[config.fold_col]) if strategy == HoldoutStrategy.K_FOLD else None

        noise = config.noise
        rng = np.random.default_rng(None if noise.seed == -1 else noise.seed)

        out = df.copy()
        for col, out_col in zip(config.input_cols, config.output_cols):
            keys = _category_keys(df[col])
            sums, counts = self._lookup(col, keys)
            if strategy == HoldoutStrategy.LEAVE_ONE_OUT:
                sums = sums - target
                counts = counts - 1.0
            elif strategy == HoldoutStrategy.K_FOLD:
                fold_stats = self.fold_stats_[col].reindex(pd.MultiIndex.from_arrays([keys, folds]))
                sums = sums - fold_stats["sum"].fillna(0.0).to_numpy(dtype=float)
                counts = counts - fold_stats["count"].fillna(0.0).to_numpy(dtype=float)
            values = self._blend(sums, counts)
            if noise.amount > 0:
                values = values + rng.uniform(-noise.amount, noise.amount, size=len(values))
            out[out_col] = values
        logger.debug(f"Encoded {len(df)} training rows with holdout strategy {strategy}")
        return out

    def fit_transform(self, X: pd.DataFrame, y: pd.Series | None = None, **fit_params: Any) -> pd.DataFrame:
        """Fit, then encode the same rows with the holdout strategy."""
        return self.fit(X, y).transform_training(X)

    def get_feature_names_out(self, input_features: Optional[list[str]] = None) -> list[str]:
        """Input columns followed by the encoded columns.

        Args:
            input_features: Input feature names (defaults to the fitted columns)

        Returns:
            List of output column names
        """
        check_is_fitted(self, "stats_")
        names = list(input_features) if input_features is not None else list(self.feature_names_in_)
        return names + self.config_.output_cols
