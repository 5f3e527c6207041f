from __future__ import annotations

import pytest

from targetencode import ConfigurationError, HoldoutStrategy, HoldoutStrategyParam


@pytest.mark.parametrize(
    "name, expected",
    [
        ("None", HoldoutStrategy.NONE),
        ("LeaveOneOut", HoldoutStrategy.LEAVE_ONE_OUT),
        ("KFold", HoldoutStrategy.K_FOLD),
    ],
)
def test_from_name_matches_exact_variant_names(name, expected):
    assert HoldoutStrategy.from_name(name) is expected


def test_from_name_is_case_sensitive():
    with pytest.raises(ConfigurationError, match="'kfold'") as excinfo:
        HoldoutStrategy.from_name("kfold")
    message = str(excinfo.value)
    for valid in ("None", "LeaveOneOut", "KFold"):
        assert valid in message


def test_from_name_rejects_python_none():
    with pytest.raises(ConfigurationError):
        HoldoutStrategy.from_name(None)


def test_from_name_passes_members_through():
    assert HoldoutStrategy.from_name(HoldoutStrategy.K_FOLD) is HoldoutStrategy.K_FOLD


def test_param_accepts_everything_by_default():
    param = HoldoutStrategyParam()
    assert [param.validate(name) for name in HoldoutStrategy.names()] == list(HoldoutStrategy)


def test_param_applies_predicate():
    param = HoldoutStrategyParam(is_valid=lambda s: s != HoldoutStrategy.K_FOLD)
    assert param.validate("LeaveOneOut") is HoldoutStrategy.LEAVE_ONE_OUT
    with pytest.raises(ConfigurationError, match="KFold"):
        param.validate(HoldoutStrategy.K_FOLD)


def test_param_still_rejects_unknown_names():
    param = HoldoutStrategyParam(is_valid=lambda s: True)
    with pytest.raises(ConfigurationError, match="Valid values are"):
        param.validate("Stratified")
