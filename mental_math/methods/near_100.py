"""Both operands near 100: ``(100 + a)(100 + b) = 10000 + 100(a + b) + ab``."""
from __future__ import annotations

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, fmt, is_near, sign_step

__all__ = ["Near100Method"]

_REACH = 15


def _deviations(num1: int, num2: int) -> tuple[int, int]:
    return abs(num1) - 100, abs(num2) - 100


class Near100Method(BaseMethod):
    name = MethodName.NEAR_100
    display_name = "Near 100"

    def is_applicable(self, num1: int, num2: int) -> bool:
        return is_near(abs(num1), 100, _REACH) and is_near(abs(num2), 100, _REACH)

    def compute_cost(self, num1: int, num2: int) -> float:
        a, b = _deviations(num1, num2)
        return (abs(a) + abs(b)) * 0.3

    def quality_score(self, num1: int, num2: int) -> float:
        a, b = map(abs, _deviations(num1, num2))
        if a <= 5 and b <= 5:
            return 0.95
        if a <= 10 and b <= 10:
            return 0.85
        return 0.7

    def characteristic(self, num1: int, num2: int) -> str:
        return (
            "Both numbers are close to 100, allowing the use of the specialized "
            "(100-a)(100-b) = 100² - 100(a+b) + ab pattern."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        a, b = _deviations(num1, num2)
        return (
            f"Both numbers are close to 100 (deviations {a:+d} and {b:+d}), so only "
            "the small deviations need to be multiplied"
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        a, b = _deviations(num1, num2)
        product = num1 * num2
        total, dev_product = a + b, a * b
        middle = 100 * total
        magnitude = 10000 + middle + dev_product

        def signed(x: int) -> str:
            return f"100 {'+' if x >= 0 else '-'} {abs(x)}"

        steps = [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=f"Recognize: {abs(num1)} = {signed(a)}, {abs(num2)} = {signed(b)}",
            ),
            CalculationStep(
                expression=f"({signed(a)}) * ({signed(b)})",
                result=magnitude,
                explanation="Rewrite both numbers as deviations from 100",
            ),
            CalculationStep(
                expression=f"10000 + 100 * ({fmt(a)} + {fmt(b)}) + {fmt(a)} * {fmt(b)}",
                result=magnitude,
                explanation="Apply: (100+a)(100+b) = 10000 + 100(a+b) + ab",
                sub_steps=[
                    CalculationStep(
                        expression=f"100 * ({fmt(a)} + {fmt(b)})",
                        result=middle,
                        explanation=f"Scale the sum of deviations by 100: 100 * {total} = {middle}",
                        depth=1,
                        sub_steps=[
                            CalculationStep(
                                expression=f"{fmt(a)} + {fmt(b)}",
                                result=total,
                                explanation=f"Sum of deviations: {a} + {b} = {total}",
                                depth=2,
                            ),
                            CalculationStep(
                                expression=f"100 * {fmt(total)}",
                                result=middle,
                                explanation=f"100 * {total} = {middle}",
                                depth=2,
                            ),
                        ],
                    ),
                    CalculationStep(
                        expression=f"{fmt(a)} * {fmt(b)}",
                        result=dev_product,
                        explanation=f"Product of deviations: {a} * {b} = {dev_product}",
                        depth=1,
                    ),
                ],
            ),
            CalculationStep(
                expression=f"10000 + {fmt(middle)} + {fmt(dev_product)}",
                result=magnitude,
                explanation=f"Calculate: 10000 + {middle} + {dev_product} = {magnitude}",
            ),
        ]
        negative = sign_step(magnitude, product)
        if negative is not None:
            steps.append(negative)
        return steps
