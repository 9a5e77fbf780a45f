"""Step-tree and solution records shared by every calculation method."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

__all__ = [
    "MethodName",
    "CalculationStep",
    "Solution",
    "ValidationResult",
]


class MethodName(str, Enum):
    """Identifiers of the available calculation methods."""

    DISTRIBUTIVE = "distributive"
    DIFFERENCE_SQUARES = "difference-squares"
    NEAR_POWER_10 = "near-power-10"
    FACTORIZATION = "factorization"
    SQUARING = "squaring"
    NEAR_100 = "near-100"
    SUM_TO_TEN = "sum-to-ten"
    SQUARING_END_5 = "squaring-end-5"
    NEAR_SQUARES = "near-squares"
    MULTIPLY_BY_111 = "multiply-by-111"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


@dataclass
class CalculationStep:
    """One node of a derivation tree.

    ``expression`` is plain arithmetic (``+ - * / ( )``) that evaluates to
    ``result``. ``sub_steps`` are owned by this step and sit exactly one level
    deeper; an empty list marks a leaf.
    """

    expression: str
    result: int
    explanation: str
    depth: int = 0
    sub_steps: list["CalculationStep"] = field(default_factory=list)

    @property
    def has_sub_steps(self) -> bool:
        return bool(self.sub_steps)

    def walk(self) -> Iterator["CalculationStep"]:
        """Yield this step and all descendants depth-first."""
        yield self
        for sub in self.sub_steps:
            yield from sub.walk()

    @property
    def max_depth(self) -> int:
        return max(s.depth for s in self.walk())


@dataclass
class Solution:
    """A complete worked derivation produced by one method."""

    method: MethodName
    optimal_reason: str
    steps: list[CalculationStep] = field(default_factory=list)
    validated: bool = False
    validation_errors: list[str] = field(default_factory=list)

    @property
    def final_result(self) -> Optional[int]:
        """Result of the last top-level step, or ``None`` when there are no steps."""
        if not self.steps:
            return None
        return self.steps[-1].result

    @property
    def step_count(self) -> int:
        return len(self.steps)


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
