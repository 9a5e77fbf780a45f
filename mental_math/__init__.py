"""Pick and explain the best mental-multiplication method for two integers."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .errors import (
    CrossValidationError,
    ExpressionError,
    InputValidationError,
    InternalConsistencyError,
    InvalidSolutionError,
    MentalMathError,
    SelectorInvariantError,
)
from .expression import evaluate_expression
from .selector import (
    AlternativeMethod,
    MethodRanking,
    MethodSelector,
    RankedMethod,
    select_optimal_method,
)
from .solution import CalculationStep, MethodName, Solution, ValidationResult
from .validator import cross_validate, validate_solution, validate_step

try:
    __version__ = version("mental_math")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "select_optimal_method",
    "MethodSelector",
    "MethodRanking",
    "RankedMethod",
    "AlternativeMethod",
    "MethodName",
    "CalculationStep",
    "Solution",
    "ValidationResult",
    "evaluate_expression",
    "validate_step",
    "validate_solution",
    "cross_validate",
    "MentalMathError",
    "InputValidationError",
    "ExpressionError",
    "InternalConsistencyError",
    "InvalidSolutionError",
    "CrossValidationError",
    "SelectorInvariantError",
]
