"""Exception hierarchy.

Two families are kept apart: :class:`InputValidationError` is an
expected, recoverable rejection of caller input, while
:class:`InternalConsistencyError` and its subclasses signal a defect in a
calculation method and should be logged and treated as fatal.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

__all__ = [
    "MentalMathError",
    "InputValidationError",
    "ExpressionError",
    "InternalConsistencyError",
    "InvalidSolutionError",
    "CrossValidationError",
    "SelectorInvariantError",
]


class MentalMathError(Exception):
    """Root of all package errors."""


class InputValidationError(MentalMathError, ValueError):
    """Operands rejected before any method ran."""

    def __init__(self, message: str, *values: Any) -> None:
        super().__init__(message)
        self.values = values


class ExpressionError(MentalMathError, ValueError):
    """A step expression could not be evaluated safely."""


class InternalConsistencyError(MentalMathError, RuntimeError):
    """A calculation method violated an arithmetic invariant."""


class InvalidSolutionError(InternalConsistencyError):
    """A method's freshly generated solution failed self-validation."""

    def __init__(self, method: str, errors: Iterable[str]) -> None:
        self.method = method
        self.errors = list(errors)
        super().__init__(
            f"Method {method} generated an invalid solution: {'; '.join(self.errors)}"
        )


class CrossValidationError(InternalConsistencyError):
    """Methods disagreed on the product of the same operands."""

    def __init__(self, num1: int, num2: int, results: Mapping[str, int | None]) -> None:
        self.num1 = num1
        self.num2 = num2
        self.results = dict(results)
        answers = ", ".join(
            f"{name}: {'ERROR - solution has no steps' if value is None else value}"
            for name, value in self.results.items()
        )
        super().__init__(
            f"Cross-validation failed for {num1} × {num2} (expected {num1 * num2}). "
            f"Different methods produced different answers: {answers}"
        )


class SelectorInvariantError(InternalConsistencyError):
    """No method could be scored, which the always-applicable fallback rules out."""
