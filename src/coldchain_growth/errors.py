"""Error taxonomy for growth-model evaluation and model comparison."""

from typing import Any, Dict, Optional


class GrowthAnalysisError(Exception):
    """Base class for errors raised by the growth analysis pipeline."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for reporting."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ParameterFormatError(GrowthAnalysisError, ValueError):
    """
    Raised when a model parameter record cannot be normalized.

    Covers negative or non-numeric coefficients and unit encodings outside the
    recognized time / scale / log-basis enumerations.
    """

    def __init__(self, message: str, record: Any = None):
        self.record = record
        super().__init__(message, {"record": repr(record)} if record is not None else None)


class IncompleteDesignError(GrowthAnalysisError):
    """
    Raised when a repeated-measures test sees an unbalanced design.

    Every block must hold exactly one observation per treatment.
    """

    def __init__(self, missing: int, duplicated: int, n_blocks: int, n_treatments: int):
        self.missing = missing
        self.duplicated = duplicated
        self.n_blocks = n_blocks
        self.n_treatments = n_treatments
        msg = (
            f"Unbalanced design over {n_blocks} blocks x {n_treatments} treatments: "
            f"{missing} missing and {duplicated} duplicated cells"
        )
        super().__init__(
            msg,
            {
                "missing": missing,
                "duplicated": duplicated,
                "n_blocks": n_blocks,
                "n_treatments": n_treatments,
            },
        )


class InsufficientDataError(GrowthAnalysisError):
    """Raised when fewer than 2 blocks or 2 treatments are available."""

    def __init__(self, n_blocks: int, n_treatments: int):
        self.n_blocks = n_blocks
        self.n_treatments = n_treatments
        super().__init__(
            f"Need at least 2 blocks and 2 treatments, got {n_blocks} blocks "
            f"and {n_treatments} treatments",
            {"n_blocks": n_blocks, "n_treatments": n_treatments},
        )


class MissingReadingWarning(UserWarning):
    """Emitted when readings without a temperature are excluded from a growth sum."""
