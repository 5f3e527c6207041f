from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest
from sklearn.base import clone

from targetencode import (
    ConfigurationError,
    NoiseSettings,
    SchemaValidationError,
    TargetEncoder,
    TargetEncoderConfig,
)

PRIOR = 4 / 6


def make_encoder(**options) -> TargetEncoder:
    options.setdefault("inputCols", ["color"])
    options.setdefault("noise", NoiseSettings(amount=0.0))
    return TargetEncoder.from_options(**options)


def test_fit_learns_group_statistics(frame):
    encoder = make_encoder().fit(frame)

    assert encoder.global_mean_ == pytest.approx(PRIOR)
    stats = encoder.stats_["color"]
    assert stats.loc["red", "sum"] == 2
    assert stats.loc["red", "count"] == 3
    assert encoder.label_categories_ == [0, 1]


def test_fit_does_not_modify_input(frame):
    before = frame.copy()
    make_encoder().fit(frame)

    pd.testing.assert_frame_equal(frame, before)


def test_transform_uses_full_group_average(frame):
    encoder = make_encoder().fit(frame)

    out = encoder.transform(frame)

    assert list(out.columns) == list(frame.columns) + ["color_te"]
    np.testing.assert_allclose(out["color_te"], [2 / 3, 2 / 3, 2 / 3, 0.5, 0.5, 1.0])


def test_transform_unseen_category_gets_global_average(frame):
    encoder = make_encoder().fit(frame)

    out = encoder.transform(pd.DataFrame({"color": ["purple", None, "red"]}))

    np.testing.assert_allclose(out["color_te"], [PRIOR, PRIOR, 2 / 3])


def test_missing_values_form_their_own_group():
    df = pd.DataFrame({"color": ["red", None, None, "red"], "label": [1, 1, 1, 0]})
    encoder = make_encoder().fit(df)

    out = encoder.transform(df)

    np.testing.assert_allclose(out["color_te"], [0.5, 1.0, 1.0, 0.5])


def test_leave_one_out_excludes_current_row(frame):
    encoder = make_encoder(holdoutStrategy="LeaveOneOut")

    out = encoder.fit_transform(frame)

    np.testing.assert_allclose(out["color_te"], [0.5, 1.0, 0.5, 1.0, 0.0, PRIOR])


def test_kfold_excludes_current_fold(frame):
    encoder = make_encoder(holdoutStrategy="KFold", foldCol="fold")

    out = encoder.fit_transform(frame)

    np.testing.assert_allclose(out["color_te"], [0.0, 1.0, 0.0, 1.0, 0.0, PRIOR])


def test_kfold_without_fold_column_fails_at_encoding_time(frame):
    encoder = make_encoder(holdoutStrategy="KFold").fit(frame)

    with pytest.raises(ConfigurationError, match="foldCol"):
        encoder.transform_training(frame)


def test_unknown_fold_column(frame):
    with pytest.raises(SchemaValidationError, match="fold column 'folds'"):
        make_encoder(foldCol="folds").fit(frame)


def test_blending_pulls_small_groups_to_global_average(frame):
    encoder = make_encoder(blending={"inflection_point": 2, "smoothing": 1}).fit(frame)

    out = encoder.transform(frame)

    green_weight = 1 / (1 + math.exp(1))
    red_weight = 1 / (1 + math.exp(-1))
    assert out["color_te"].iloc[5] == pytest.approx(green_weight + (1 - green_weight) * PRIOR)
    assert out["color_te"].iloc[0] == pytest.approx(red_weight * 2 / 3 + (1 - red_weight) * PRIOR)


def test_noise_is_bounded_and_seeded(frame):
    noisy = make_encoder(noise={"amount": 0.1, "seed": 42})

    first = noisy.fit_transform(frame)["color_te"].to_numpy()
    second = clone(noisy).fit_transform(frame)["color_te"].to_numpy()
    clean = make_encoder().fit(frame).transform(frame)["color_te"].to_numpy()

    np.testing.assert_allclose(first, second)
    assert np.all(np.abs(first - clean) <= 0.1)
    assert not np.allclose(first, clean)


def test_transform_adds_no_noise(frame):
    encoder = make_encoder(noise={"amount": 0.5, "seed": 1}).fit(frame)

    np.testing.assert_allclose(encoder.transform(frame)["color_te"], [2 / 3, 2 / 3, 2 / 3, 0.5, 0.5, 1.0])


def test_multiple_columns_in_input_order(frame):
    encoder = make_encoder(inputCols=["city", "color"])

    out = encoder.fit(frame).transform(frame)

    assert list(out.columns[-2:]) == ["city_te", "color_te"]
    np.testing.assert_allclose(out["city_te"], [1.0, 1 / 3, 1.0, 1 / 3, 1.0, 1 / 3])


def test_string_labels_use_second_category_as_positive():
    df = pd.DataFrame({"color": ["red", "red", "blue"], "label": ["yes", "no", "yes"]})

    encoder = make_encoder().fit(df)

    assert encoder.label_categories_ == ["no", "yes"]
    np.testing.assert_allclose(encoder.transform(df)["color_te"], [0.5, 0.5, 1.0])


def test_multiclass_label_is_rejected():
    df = pd.DataFrame({"color": ["red", "blue", "green"], "label": ["a", "b", "c"]})

    with pytest.raises(ValueError, match="binary label"):
        make_encoder().fit(df)


def test_fit_validates_schema(frame):
    with pytest.raises(SchemaValidationError, match="input column 'shape'"):
        make_encoder(inputCols=["color", "shape"]).fit(frame)
    with pytest.raises(SchemaValidationError, match="label column 'target'"):
        make_encoder(labelCol="target").fit(frame)


def test_transform_requires_input_columns(frame):
    encoder = make_encoder().fit(frame)

    with pytest.raises(SchemaValidationError, match="'color'"):
        encoder.transform(frame.drop(columns=["color"]))


def test_transform_schema_and_feature_names(frame, schema):
    encoder = make_encoder(inputCols=["color", "city"])

    assert encoder.transform_schema(schema).names[-2:] == ["color_te", "city_te"]
    encoder.fit(frame)
    assert encoder.get_feature_names_out() == list(frame.columns) + ["color_te", "city_te"]


def test_default_config_is_used_when_none_given(frame):
    encoder = TargetEncoder()

    with pytest.raises(SchemaValidationError, match="null or empty"):
        encoder.fit(frame)


def test_config_changes_after_fit_do_not_affect_fitted_encoder(frame):
    config = TargetEncoderConfig(inputCols=["color"], noise={"amount": 0.0})
    encoder = TargetEncoder(config=config).fit(frame)

    config.set("inputCols", ["city"])

    assert list(encoder.transform(frame).columns[-1:]) == ["color_te"]
    assert clone(encoder).get_params()["config"].input_cols == ["city"]


@pytest.mark.parametrize("labels", [[1, 1, 1], [0, 0, 0], ["yes", "yes", "yes"]])
def test_single_class_label_is_rejected(labels):
    df = pd.DataFrame({"color": ["red", "blue", "red"], "label": labels})

    with pytest.raises(ValueError, match="binary label.*1 distinct value"):
        make_encoder().fit(df)
