"""Configuration settings for the target encoder stage."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .exceptions import ConfigurationError
from .types import HoldoutStrategy, HoldoutStrategyParam

OUTPUT_SUFFIX = "_te"


class _Settings(BaseModel):
    """Immutable settings record; invalid fields raise ConfigurationError."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(type(self).__name__, exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(type(self).__name__, exc) from exc


class BlendingSettings(_Settings):
    """Blend the group target average with the global target average.

    The weight given to the group average grows with the group size following
    a logistic curve.

    Attributes:
        inflection_point: Group size at which group and global averages weigh
            the same. Bigger values pull more groups toward the global average.
        smoothing: Controls the rate of transition between group and global
            target values.
    """

    inflection_point: float = Field(gt=0.0, description="Group size of the half-and-half blend")
    smoothing: float = Field(gt=0.0, description="Steepness of the transition")


class NoiseSettings(_Settings):
    """How much random noise is added to the encoded values.

    Attributes:
        amount: Half-width of the uniform noise interval
        seed: Seed of the noise generator, -1 for an unseeded generator
    """

    amount: float = Field(default=0.01, ge=0.0, description="Amount of random noise")
    seed: int = Field(default=-1, description="Noise generator seed (-1 = unseeded)")


class TargetEncoderConfig(BaseModel):
    """Options of a target encoder stage.

    Options can be passed by Python name (``label_col``) or by their
    camelCase alias (``labelCol``), at construction or through
    :meth:`set` / :meth:`get`. Setting an option only checks its type;
    whether the options fit a dataset is decided by
    :func:`targetencode.validators.transform_schema`.

    Example:
        >>> config = TargetEncoderConfig(inputCols=["color", "city"])
        >>> config.output_cols
        ['color_te', 'city_te']
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # ========== Columns ==========
    fold_col: Optional[str] = Field(
        default=None,
        description="Fold column name",
    )
    label_col: Optional[str] = Field(
        default="label",
        description="Label column name",
    )
    input_cols: Optional[List[str]] = Field(
        default_factory=list,
        description="Names of columns that will be transformed",
    )

    # ========== Encoding ==========
    holdout_strategy: HoldoutStrategy = Field(
        default=HoldoutStrategy.NONE,
        description="Rows excluded when calculating the target average on the training dataset",
    )
    blending: Optional[BlendingSettings] = Field(
        default=None,
        description="If set, the target average is blended with the global target average",
    )
    noise: NoiseSettings = Field(
        default_factory=NoiseSettings,
        description="Noise added to the target average",
    )

    _holdout_strategy_param: HoldoutStrategyParam = PrivateAttr(default_factory=HoldoutStrategyParam)

    def __init__(
        self,
        *,
        holdout_strategy_param: Optional[HoldoutStrategyParam] = None,
        **data: Any,
    ) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(type(self).__name__, exc) from exc
        if holdout_strategy_param is not None:
            self._holdout_strategy_param = holdout_strategy_param
        self._holdout_strategy_param.validate(self.holdout_strategy)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "holdout_strategy":
            value = self._holdout_strategy_param.validate(value)
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(type(self).__name__, exc) from exc

    @field_validator("holdout_strategy", mode="before")
    @classmethod
    def _parse_holdout_strategy(cls, v: Any) -> HoldoutStrategy:
        return HoldoutStrategy.from_name(v)

    @classmethod
    def with_strategy_predicate(
        cls,
        is_valid: Callable[[HoldoutStrategy], bool],
        **options: Any,
    ) -> "TargetEncoderConfig":
        """Create a config whose holdout strategy must satisfy ``is_valid``."""
        return cls(holdout_strategy_param=HoldoutStrategyParam(is_valid=is_valid), **options)

    @classmethod
    def from_env(cls, prefix: str = "TARGETENCODE") -> "TargetEncoderConfig":
        """Load configuration from environment variables.

        Example: TARGETENCODE__LABEL_COL=target

        Args:
            prefix: Environment variable prefix

        Returns:
            TargetEncoderConfig instance
        """
        from .settings import load_from_env

        return cls(**load_from_env(prefix))

    # ========== Derived ==========
    @property
    def output_cols(self) -> List[str]:
        """Names of the encoded columns, one per input column, in input order."""
        return [col + OUTPUT_SUFFIX for col in (self.input_cols or [])]

    @property
    def holdout_strategy_param(self) -> HoldoutStrategyParam:
        return self._holdout_strategy_param

    # ========== Generic access ==========
    @classmethod
    def option_names(cls) -> List[str]:
        """Python names of all options, the derived ``output_cols`` included."""
        return list(cls.model_fields) + ["output_cols"]

    @classmethod
    def resolve_option(cls, option: str) -> str:
        """Map an option name or camelCase alias to its Python name.

        Raises:
            ConfigurationError: If no such option exists
        """
        if option in ("output_cols", "outputCols"):
            return "output_cols"
        for name, field in cls.model_fields.items():
            if option == name or option == field.alias:
                return name
        raise ConfigurationError(
            f"Unknown option '{option}'. Known options: {', '.join(cls.option_names())}"
        )

    def set(self, option: str, value: Any) -> "TargetEncoderConfig":
        """Overwrite the value of an option.

        Args:
            option: Option name or alias
            value: New value

        Returns:
            self, so calls can be chained
        """
        name = self.resolve_option(option)
        if name == "output_cols":
            raise ConfigurationError("Option 'outputCols' is derived from 'inputCols' and cannot be set")
        setattr(self, name, value)
        return self

    def get(self, option: str) -> Any:
        """Current value of an option, or its default when never set."""
        return getattr(self, self.resolve_option(option))

    def is_set(self, option: str) -> bool:
        """Whether an option was given explicitly rather than defaulted."""
        name = self.resolve_option(option)
        if name == "output_cols":
            return "input_cols" in self.model_fields_set
        return name in self.model_fields_set

    # ========== Typed getters ==========
    def get_fold_col(self) -> Optional[str]:
        return self.fold_col

    def get_label_col(self) -> Optional[str]:
        return self.label_col

    def get_input_cols(self) -> Optional[List[str]]:
        return self.input_cols

    def get_output_cols(self) -> List[str]:
        return self.output_cols

    def get_holdout_strategy(self) -> HoldoutStrategy:
        return self.holdout_strategy

    def get_blending(self) -> Optional[BlendingSettings]:
        return self.blending

    def get_noise(self) -> NoiseSettings:
        return self.noise
