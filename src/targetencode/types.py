"""Core types for targetencode."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

from .exceptions import ConfigurationError


class HoldoutStrategy(str, Enum):
    """Which rows are left out when averaging the label of a category.

    Options:
        None        - all rows are used, including the row being encoded
        LeaveOneOut - all rows except the row being encoded
        KFold       - only out-of-fold rows (requires a fold column)
    """

    NONE = "None"
    LEAVE_ONE_OUT = "LeaveOneOut"
    K_FOLD = "KFold"

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: Any) -> "HoldoutStrategy":
        """Parse a strategy from its exact (case-sensitive) name."""
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            for member in cls:
                if member.value == name:
                    return member
        raise ConfigurationError(
            f"Invalid holdout strategy {name!r}. Valid values are: {', '.join(cls.names())}"
        )

    def __str__(self) -> str:
        return self.value


def _always_valid(_: HoldoutStrategy) -> bool:
    return True


class HoldoutStrategyParam:
    """Descriptor of the ``holdoutStrategy`` option.

    Holds the option's name, documentation and the predicate deciding which
    variants the owning configuration accepts.
    """

    def __init__(
        self,
        name: str = "holdoutStrategy",
        doc: str = "",
        is_valid: Optional[Callable[[HoldoutStrategy], bool]] = None,
    ) -> None:
        self.name = name
        self.doc = doc or (HoldoutStrategy.__doc__ or "").strip()
        self.is_valid = is_valid or _always_valid

    def validate(self, value: Any) -> HoldoutStrategy:
        """Parse ``value`` and check it against the predicate.

        Raises:
            ConfigurationError: If the value is not a known variant or the
                predicate rejects it
        """
        strategy = HoldoutStrategy.from_name(value)
        if not self.is_valid(strategy):
            raise ConfigurationError(
                f"Holdout strategy '{strategy.value}' is not allowed for option '{self.name}'"
            )
        return strategy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HoldoutStrategyParam):
            return NotImplemented
        return self.name == other.name and self.is_valid is other.is_valid

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HoldoutStrategyParam(name={self.name!r})"
