"""Difference of squares: ``(m - d)(m + d) = m² - d²``."""
from __future__ import annotations

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, fmt, product_step

__all__ = ["DifferenceSquaresMethod"]


def _midpoint(num1: int, num2: int) -> tuple[int, int] | None:
    """``(m, d)`` with ``num1, num2 == m ∓ d``, or ``None`` for an odd sum."""
    if (num1 + num2) % 2:
        return None
    return (num1 + num2) // 2, abs(num1 - num2) // 2


class DifferenceSquaresMethod(BaseMethod):
    name = MethodName.DIFFERENCE_SQUARES
    display_name = "Difference of Squares"

    def is_applicable(self, num1: int, num2: int) -> bool:
        split = _midpoint(num1, num2)
        if split is None:
            return False
        avg, diff = split
        if diff > 10:
            return False
        return abs(avg) % 5 == 0 or abs(avg) <= 20

    def compute_cost(self, num1: int, num2: int) -> float:
        split = _midpoint(num1, num2)
        if split is None:
            return float("inf")
        avg, diff = split
        if avg % 10 == 0:
            cost = 1.0
        elif avg % 5 == 0:
            cost = 2.0
        else:
            cost = 4.0
        return cost + diff * 0.5 + count_digits(avg) * 0.5

    def quality_score(self, num1: int, num2: int) -> float:
        split = _midpoint(num1, num2)
        if split is None:
            return 0.0
        avg, diff = split
        if avg % 10 == 0 and diff <= 5:
            return 0.9
        if avg % 5 == 0 and diff <= 5:
            return 0.7
        if abs(avg) <= 20 and diff <= 5:
            return 0.6
        return 0.5

    def characteristic(self, num1: int, num2: int) -> str:
        avg, _ = _midpoint(num1, num2) or (0, 0)
        return (
            f"The numbers are equidistant from {avg} (difference: {abs(num1 - num2)}), "
            "allowing efficient use of the difference of squares identity: "
            "(a-b)(a+b) = a² - b²."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        avg, diff = _midpoint(num1, num2) or (0, 0)
        return (
            f"Numbers {num1} and {num2} are symmetric around {avg}, making difference "
            f"of squares ideal. The midpoint {avg} is easy to square, and the small "
            f"distance {diff} minimizes the subtraction."
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        avg, diff = _midpoint(num1, num2)  # type: ignore[misc]
        product = num1 * num2
        smaller, larger = min(num1, num2), max(num1, num2)
        a, b = fmt(avg), fmt(diff)
        avg_sq, diff_sq = avg * avg, diff * diff
        return [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=(
                    f"Recognize that {smaller} and {larger} are symmetric around {avg} "
                    f"(both {diff} away from {avg})"
                ),
            ),
            CalculationStep(
                expression=f"({a} - {b}) * ({a} + {b})",
                result=product,
                explanation=(
                    f"Rewrite as ({avg} - {diff})({avg} + {diff}) to apply the "
                    "difference of squares identity"
                ),
            ),
            CalculationStep(
                expression=f"{a} * {a} - {b} * {b}",
                result=product,
                explanation="Apply the identity: (a - b)(a + b) = a² - b²",
                sub_steps=[
                    product_step(avg, avg, 1, f"Calculate {avg}² = {avg_sq}"),
                    product_step(diff, diff, 1, f"Calculate {diff}² = {diff_sq}"),
                ],
            ),
            CalculationStep(
                expression=f"{avg_sq} - {diff_sq}",
                result=product,
                explanation=f"Subtract: {avg_sq} - {diff_sq} = {product}",
            ),
        ]
