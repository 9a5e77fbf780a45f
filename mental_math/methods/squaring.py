"""Squaring near a multiple of ten: ``(a ± b)² = a² ± 2ab + b²``."""
from __future__ import annotations

import math

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, fmt, nearest_round, product_step

__all__ = ["SquaringMethod"]


def _anchor(n: int) -> tuple[int, int]:
    """``(a, b)`` with ``|n| == a + b``, ``a`` the nearest multiple of ten."""
    magnitude = abs(n)
    a = nearest_round(magnitude)
    return a, magnitude - a


class SquaringMethod(BaseMethod):
    name = MethodName.SQUARING
    display_name = "Squaring"

    def is_applicable(self, num1: int, num2: int) -> bool:
        return num1 == num2

    def compute_cost(self, num1: int, num2: int) -> float:
        if num1 != num2:
            return math.inf
        _, b = _anchor(num1)
        return abs(b) * 0.5 + count_digits(num1)

    def quality_score(self, num1: int, num2: int) -> float:
        if num1 != num2:
            return 0.0
        _, b = _anchor(num1)
        if abs(b) <= 3:
            return 0.9
        if abs(b) <= 5:
            return 0.8
        return 0.7

    def characteristic(self, num1: int, num2: int) -> str:
        return (
            f"Both numbers are identical ({num1}), so squaring techniques "
            "provide the most direct path to the answer."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        a, b = _anchor(num1)
        return (
            f"Squaring {abs(num1)} is easiest by expanding around the round number {a} "
            f"(distance {abs(b)})"
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        if num1 != num2:
            raise ValueError("Squaring method requires num1 == num2")
        n = abs(num1)
        a, diff = _anchor(num1)
        b = abs(diff)
        op = "+" if diff >= 0 else "-"
        product = num1 * num2
        a_sq, two_ab, b_sq = a * a, 2 * a * b, b * b
        return [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=f"Recognize this is {n}² (squaring)",
            ),
            CalculationStep(
                expression=f"({a} {op} {b}) * ({a} {op} {b})",
                result=product,
                explanation=f"Rewrite {n} as {a} {op} {b}",
            ),
            CalculationStep(
                expression=f"{a} * {a} {op} 2 * {a} * {b} + {b} * {b}",
                result=product,
                explanation=f"Apply (a {op} b)² = a² {op} 2ab + b²",
                sub_steps=[
                    product_step(a, a, 1, f"{a}² = {a_sq}"),
                    CalculationStep(
                        expression=f"2 * {a} * {b}",
                        result=two_ab,
                        explanation=f"2 * {a} * {b} = {two_ab}",
                        depth=1,
                    ),
                    product_step(b, b, 1, f"{b}² = {b_sq}"),
                ],
            ),
            CalculationStep(
                expression=f"{a_sq} {op} {two_ab} + {b_sq}",
                result=product,
                explanation=(
                    f"{'Add' if op == '+' else 'Calculate'}: "
                    f"{a_sq} {op} {two_ab} + {b_sq} = {product}"
                ),
            ),
        ]
