"""Squares of numbers ending in 5: ``(10n + 5)² = 100·n(n + 1) + 25``."""
from __future__ import annotations

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, fmt, product_step

__all__ = ["SquaringEnd5Method"]


class SquaringEnd5Method(BaseMethod):
    name = MethodName.SQUARING_END_5
    display_name = "Squaring Numbers Ending in 5"

    def is_applicable(self, num1: int, num2: int) -> bool:
        if num1 != num2:
            return False
        magnitude = abs(num1)
        return magnitude >= 5 and magnitude % 10 == 5

    def compute_cost(self, num1: int, num2: int) -> float:
        prefix = abs(num1) // 10
        if prefix >= 100:
            return 3.0
        if prefix >= 10:
            return 2.0
        return 1.5

    def quality_score(self, num1: int, num2: int) -> float:
        return 1.0 if self.is_applicable(num1, num2) else 0.0

    def characteristic(self, num1: int, num2: int) -> str:
        return "The number ends in 5, so its square is n(n+1) followed by 25."

    def reason_for(self, num1: int, num2: int) -> str:
        prefix = abs(num1) // 10
        return (
            f"{abs(num1)} ends in 5: multiply {prefix} by {prefix + 1} and append 25"
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        magnitude = abs(num1)
        prefix = magnitude // 10
        first = prefix * (prefix + 1)
        square = first * 100 + 25
        return [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=num1 * num2,
                explanation=(
                    f"Recognize {magnitude} ends in 5, so we can use the squaring-end-5 shortcut"
                ),
            ),
            product_step(
                prefix,
                prefix + 1,
                0,
                f"Multiply the prefix ({prefix}) by the next number: "
                f"{prefix} * {prefix + 1} = {first}",
            ),
            CalculationStep(
                expression=f"{first} * 100 + 25",
                result=square,
                explanation=f"Append 25 to get the answer: {first} * 100 + 25 = {square}",
            ),
        ]
