"""Exceptions raised by targetencode."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import ValidationError


class TargetEncodingError(Exception):
    """Base class for all targetencode errors."""


class ConfigurationError(TargetEncodingError, ValueError):
    """An option or settings value violates its constraints."""

    @classmethod
    def from_validation_error(cls, owner: str, exc: ValidationError) -> "ConfigurationError":
        """Build from a pydantic ValidationError, naming each offending field.

        Args:
            owner: Name of the model the error came from
            exc: The pydantic error

        Returns:
            ConfigurationError with one line per violated constraint
        """
        problems = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
            message = err.get("msg", "invalid value")
            # Drop pydantic's "Value error, " prefix on custom validator messages
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            problems.append(f"{field}: {message}")
        return cls(f"Invalid {owner}: " + "; ".join(problems))


class SchemaValidationError(TargetEncodingError, ValueError):
    """The input schema is incompatible with the encoder configuration.

    Attributes:
        invariant: Identifier of the violated check
        columns: Column names the failure refers to
    """

    LABEL_MISSING = "label_missing"
    INPUT_COLS_EMPTY = "input_cols_empty"
    LABEL_NOT_FOUND = "label_not_found"
    INPUT_COL_NOT_FOUND = "input_col_not_found"
    INPUT_OUTPUT_OVERLAP = "input_output_overlap"
    FOLD_COL_NOT_FOUND = "fold_col_not_found"

    def __init__(
        self,
        message: str,
        invariant: str,
        columns: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message)
        self.invariant = invariant
        self.columns = list(columns or [])
