"""Pick the cheapest applicable method for ``num1 × num2`` and explain the choice.

Pipeline: validate operands → filter the registry to applicable methods
(optionally restricted to an allow-list) → composite-score and stable-sort →
generate the top three solutions → cross-validate them → narrate.
"""
from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterable, Optional

from .cache import BoundedCache
from .constants import (
    ABSOLUTE_MAX_VALUE,
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    MAX_SAFE_INTEGER,
    ExplanationThresholds,
    ScoringWeights,
)
from .errors import CrossValidationError, InputValidationError, SelectorInvariantError
from .methods.base import BaseMethod
from .methods.registry import build_methods
from .solution import MethodName, Solution
from .validator import cross_validate

__all__ = [
    "MethodScore",
    "RankedMethod",
    "AlternativeMethod",
    "MethodRanking",
    "MethodSelector",
    "select_optimal_method",
]

logger = logging.getLogger(__name__)

TOP_N = 3


@dataclass(frozen=True)
class MethodScore:
    method: BaseMethod
    cost: float
    quality: float
    composite_score: float


@dataclass
class RankedMethod:
    method: MethodName
    display_name: str
    solution: Solution
    cost_score: float
    quality_score: float
    composite_score: float


@dataclass
class AlternativeMethod(RankedMethod):
    why_not_optimal: str = ""


@dataclass
class MethodRanking:
    optimal: RankedMethod
    alternatives: list[AlternativeMethod] = field(default_factory=list)
    comparison_summary: str = ""

    @property
    def answer(self) -> Optional[int]:
        return self.optimal.solution.final_result

    def solution_for(self, method: MethodName | str) -> Optional[Solution]:
        """Solution generated by ``method`` for this problem, if it was ranked."""
        name = MethodName(method)
        for entry in (self.optimal, *self.alternatives):
            if entry.method is name:
                return entry.solution
        return None


def _coerce_operand(value: Any, num1: Any, num2: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InputValidationError("Both operands must be finite numbers", num1, num2)
    if isinstance(value, numbers.Integral):
        return int(value)
    if not math.isfinite(float(value)):
        raise InputValidationError("Both operands must be finite numbers", num1, num2)
    return value  # type: ignore[return-value]


class MethodSelector:
    """Ranks the registry's methods for a problem.

    Each selector owns fresh method instances; the factorization cache may be
    injected to share it between selectors.
    """

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        thresholds: ExplanationThresholds = DEFAULT_THRESHOLDS,
        factorization_cache: Optional[BoundedCache] = None,
    ) -> None:
        self.methods: tuple[BaseMethod, ...] = build_methods(factorization_cache)
        self.weights = weights
        self.thresholds = thresholds

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------
    @staticmethod
    def validate_inputs(num1: Any, num2: Any) -> tuple[int, int]:
        """Return the operands as ``int`` or raise :class:`InputValidationError`.

        Integral floats (``47.0``) are accepted; ``bool`` is not a number here.
        """
        a = _coerce_operand(num1, num1, num2)
        b = _coerce_operand(num2, num1, num2)

        if a == 0 or b == 0:
            raise InputValidationError(
                "Multiplication by zero is not supported. Please provide non-zero integers.",
                num1,
                num2,
            )
        if not float(a).is_integer() or not float(b).is_integer():
            raise InputValidationError(
                f"Only integer multiplication is supported. Received: {num1}, {num2}",
                num1,
                num2,
            )
        a, b = int(a), int(b)
        if abs(a) > ABSOLUTE_MAX_VALUE or abs(b) > ABSOLUTE_MAX_VALUE:
            raise InputValidationError(
                f"Operands exceed maximum allowed value ({ABSOLUTE_MAX_VALUE:,}). "
                "Please use smaller numbers.",
                num1,
                num2,
            )
        if abs(a * b) > MAX_SAFE_INTEGER:
            raise InputValidationError(
                "Product would exceed the safe integer range. "
                f"Maximum safe product is {MAX_SAFE_INTEGER:,}. Please use smaller numbers.",
                num1,
                num2,
            )
        return a, b

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def score(self, method: BaseMethod, num1: int, num2: int) -> MethodScore:
        cost = method.compute_cost(num1, num2)
        quality = method.quality_score(num1, num2)
        return MethodScore(method, cost, quality, self.weights.composite(cost, quality))

    def _candidates(
        self, num1: int, num2: int, allowed_methods: Optional[Iterable[MethodName | str]]
    ) -> list[BaseMethod]:
        applicable = [m for m in self.methods if m.is_applicable(num1, num2)]
        if not allowed_methods:
            return applicable
        try:
            allowed = {MethodName(m) for m in allowed_methods}
        except ValueError as exc:
            raise InputValidationError(f"Unknown method in allow-list: {exc}") from exc
        restricted = [m for m in applicable if m.name in allowed]
        if restricted:
            return restricted
        logger.info(
            "none of %s applies to %s × %s; using all applicable methods",
            sorted(a.value for a in allowed),
            num1,
            num2,
        )
        return applicable

    def rank(
        self,
        num1: int,
        num2: int,
        allowed_methods: Optional[Iterable[MethodName | str]] = None,
    ) -> list[MethodScore]:
        """Applicable methods sorted by composite score; ties keep registry order."""
        candidates = self._candidates(num1, num2, allowed_methods)
        if not candidates:
            logger.error("no applicable method for %s × %s", num1, num2)
            raise SelectorInvariantError(f"No applicable methods found for {num1} × {num2}")
        scores = sorted(
            (self.score(m, num1, num2) for m in candidates),
            key=lambda s: s.composite_score,
        )
        logger.debug(
            "ranking for %s × %s: %s",
            num1,
            num2,
            [(s.method.name.value, round(s.composite_score, 3)) for s in scores],
        )
        return scores

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_optimal_method(
        self,
        num1: Any,
        num2: Any,
        allowed_methods: Optional[Iterable[MethodName | str]] = None,
    ) -> MethodRanking:
        """Rank the methods for ``num1 × num2`` and solve with the top three."""
        num1, num2 = self.validate_inputs(num1, num2)
        scores = self.rank(num1, num2, allowed_methods)
        optimal, alternatives = scores[0], scores[1:TOP_N]

        solutions = [s.method.generate_solution(num1, num2) for s in (optimal, *alternatives)]
        if not cross_validate(num1, num2, solutions):
            error = CrossValidationError(
                num1, num2, {sol.method.value: sol.final_result for sol in solutions}
            )
            logger.error("%s", error)
            raise error

        return MethodRanking(
            optimal=RankedMethod(
                method=optimal.method.name,
                display_name=optimal.method.display_name,
                solution=solutions[0],
                cost_score=optimal.cost,
                quality_score=optimal.quality,
                composite_score=optimal.composite_score,
            ),
            alternatives=[
                AlternativeMethod(
                    method=alt.method.name,
                    display_name=alt.method.display_name,
                    solution=solution,
                    cost_score=alt.cost,
                    quality_score=alt.quality,
                    composite_score=alt.composite_score,
                    why_not_optimal=self.explain_why_not_optimal(optimal, alt, num1, num2),
                )
                for alt, solution in zip(alternatives, solutions[1:])
            ],
            comparison_summary=self.comparison_summary(optimal, alternatives, num1, num2),
        )

    # ------------------------------------------------------------------
    # Narrative
    # ------------------------------------------------------------------
    def explain_why_not_optimal(
        self, optimal: MethodScore, alternative: MethodScore, num1: int, num2: int
    ) -> str:
        t = self.thresholds
        cost_diff = alternative.cost - optimal.cost
        quality_diff = alternative.quality - optimal.quality
        composite_diff = alternative.composite_score - optimal.composite_score
        best = optimal.method.display_name

        reasons: list[str] = []
        costs = f"{alternative.cost:.1f} vs {optimal.cost:.1f}"
        if cost_diff > t.significant_cost_diff:
            if optimal.cost > 0:
                reasons.append(
                    f"it requires {cost_diff / optimal.cost * 100:.0f}% more "
                    f"computational effort (cost {costs})"
                )
            else:
                reasons.append(f"it requires more computational effort (cost {costs})")
        elif cost_diff > t.moderate_cost_diff:
            reasons.append(f"it has higher computational cost ({costs})")

        if quality_diff < -t.quality_diff:
            reasons.append("it is less mathematically elegant for these specific numbers")

        if not reasons or composite_diff < t.composite_diff:
            reasons.append(
                f"the composite score slightly favors {best} "
                f"({optimal.composite_score:.2f} vs {alternative.composite_score:.2f})"
            )

        return (
            f"{alternative.method.display_name} is not optimal because "
            + ", and ".join(reasons)
            + f", while {best} better exploits the structure of {num1} × {num2}."
        )

    def comparison_summary(
        self,
        optimal: MethodScore,
        alternatives: list[MethodScore],
        num1: int,
        num2: int,
    ) -> str:
        lines = [
            f"## Method Selection for {num1} × {num2}",
            "",
            f"**Optimal Method: {optimal.method.display_name}**",
            "",
            f"This method was selected with a composite score of {optimal.composite_score:.2f} "
            f"(cost: {optimal.cost:.1f}, quality: {optimal.quality:.2f}).",
            "",
            f"**Why this method?** {optimal.method.characteristic(num1, num2)}",
            "",
        ]
        if alternatives:
            lines += [
                "### Alternative Methods",
                "",
                "While other methods could solve this problem, they are less optimal:",
                "",
            ]
            for index, alt in enumerate(alternatives, start=1):
                lines += [
                    f"{index}. **{alt.method.display_name}**",
                    f"   - Cost: {alt.cost:.1f}, Quality: {alt.quality:.2f}, "
                    f"Composite: {alt.composite_score:.2f}",
                    f"   - {alt.method.characteristic(num1, num2)}",
                    "",
                ]
        else:
            lines += ["No other methods are applicable for this problem.", ""]
        lines += [
            "### Why Method Selection Matters",
            "",
            "Different multiplication problems have different structural properties. "
            "Recognizing these properties and choosing the appropriate method reduces "
            "cognitive load and helps develop deeper mathematical intuition.",
        ]
        return "\n".join(lines) + "\n"


@lru_cache(maxsize=1)
def _default_selector() -> MethodSelector:
    return MethodSelector()


def select_optimal_method(
    num1: Any,
    num2: Any,
    allowed_methods: Optional[Iterable[MethodName | str]] = None,
) -> MethodRanking:
    """Module-level shortcut using a shared default :class:`MethodSelector`."""
    return _default_selector().select_optimal_method(num1, num2, allowed_methods)
