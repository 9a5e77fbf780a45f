"""Same tens, units summing to ten: ``(10n + a)(10n + b) = 100·n(n + 1) + ab``."""
from __future__ import annotations

import math

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, fmt, product_step, sign_step

__all__ = ["SumToTenMethod"]


class SumToTenMethod(BaseMethod):
    name = MethodName.SUM_TO_TEN
    display_name = "Sum-to-Ten Multiplication"

    def is_applicable(self, num1: int, num2: int) -> bool:
        a, b = abs(num1), abs(num2)
        if a < 10 or b < 10:
            return False
        same_tens = (a // 10) % 10 == (b // 10) % 10
        units_sum_10 = a % 10 + b % 10 == 10
        if a < 100 and b < 100:
            return same_tens and units_sum_10
        return same_tens and units_sum_10 and a // 100 == b // 100

    def compute_cost(self, num1: int, num2: int) -> float:
        base = abs(num1) // 10
        if base < 10:
            base_cost = 1.5 if base >= 5 else 1.0
        else:
            base_cost = 3.0 + math.log10(base)
        return 2.0 + base_cost

    def quality_score(self, num1: int, num2: int) -> float:
        return 0.95 if self.is_applicable(num1, num2) else 0.0

    def characteristic(self, num1: int, num2: int) -> str:
        return (
            "The numbers share their leading digits and their units sum to 10, so the "
            "product is n(n+1) followed by the product of the units."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        base = abs(num1) // 10
        return (
            f"{abs(num1)} and {abs(num2)} share the prefix {base} and their units sum to 10, "
            f"so the answer is {base} × {base + 1} followed by the units product"
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        a, b = abs(num1), abs(num2)
        base = a // 10
        units1, units2 = a % 10, b % 10
        first = base * (base + 1)
        second = units1 * units2
        magnitude = first * 100 + second
        product = num1 * num2

        steps = [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=(
                    f"Recognize Sum-to-Ten pattern: same tens digit ({base % 10}), "
                    f"units sum to 10 ({units1} + {units2} = 10)"
                ),
            ),
            product_step(
                base,
                base + 1,
                0,
                f"Multiply base by next number: {base} × {base + 1} = {first}",
            ),
            CalculationStep(
                expression=f"{units1} * {units2}",
                result=second,
                explanation=f"Multiply units: {units1} × {units2} = {second}",
            ),
            CalculationStep(
                expression=f"{first} * 100 + {second}",
                result=magnitude,
                explanation=f"Concatenate: {first} followed by {second:02d} = {magnitude}",
            ),
        ]
        negative = sign_step(magnitude, product)
        if negative is not None:
            steps.append(negative)
        return steps
