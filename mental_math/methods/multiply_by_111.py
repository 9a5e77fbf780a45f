"""Multiplying by 111: ``111n = 100n + 10n + n``."""
from __future__ import annotations

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, fmt, sign_step

__all__ = ["MultiplyBy111Method"]


def _other(num1: int, num2: int) -> int:
    return abs(num2) if abs(num1) == 111 else abs(num1)


class MultiplyBy111Method(BaseMethod):
    name = MethodName.MULTIPLY_BY_111
    display_name = "Multiply by 111"

    def is_applicable(self, num1: int, num2: int) -> bool:
        return abs(num1) == 111 or abs(num2) == 111

    def compute_cost(self, num1: int, num2: int) -> float:
        other = _other(num1, num2)
        if 1 <= other <= 9:
            return 1.0
        return 2.0 + (count_digits(other) - 2) * 0.5

    def quality_score(self, num1: int, num2: int) -> float:
        if not self.is_applicable(num1, num2):
            return 0.0
        other = _other(num1, num2)
        if 1 <= other <= 9:
            return 0.98
        if other < 100:
            return 0.92
        return 0.85

    def characteristic(self, num1: int, num2: int) -> str:
        return "One factor is 111, which splits into 100 + 10 + 1."

    def reason_for(self, num1: int, num2: int) -> str:
        other = _other(num1, num2)
        if 1 <= other <= 9:
            return f"A single digit times 111 repeats the digit: {other}{other}{other}"
        return f"Multiplying {other} by 111 is {other} × 100 + {other} × 10 + {other}"

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        other = _other(num1, num2)
        magnitude = other * 111
        product = num1 * num2

        if 1 <= other <= 9:
            steps = [
                CalculationStep(
                    expression=f"{fmt(num1)} * {fmt(num2)}",
                    result=product,
                    explanation=(
                        'Single digit times 111 creates a "repdigit" '
                        "(the digit repeated 3 times)"
                    ),
                ),
                CalculationStep(
                    expression=f"{other} * 111",
                    result=magnitude,
                    explanation=(
                        f"{other} x 111 = {other}{other}{other} "
                        f"(the digit {other} repeated three times)"
                    ),
                ),
            ]
        else:
            times100, times10 = other * 100, other * 10
            partial = times100 + times10
            steps = [
                CalculationStep(
                    expression=f"{fmt(num1)} * {fmt(num2)}",
                    result=product,
                    explanation=(
                        "Multiplying by 111 = multiplying by 100 + 10 + 1 "
                        "(since 111 = 100 + 10 + 1)"
                    ),
                ),
                CalculationStep(
                    expression=f"{other} * 100",
                    result=times100,
                    explanation=f"Multiply by 100: {other} x 100 = {times100}",
                ),
                CalculationStep(
                    expression=f"{other} * 10",
                    result=times10,
                    explanation=f"Multiply by 10: {other} x 10 = {times10}",
                ),
                CalculationStep(
                    expression=f"{times100} + {times10}",
                    result=partial,
                    explanation=f"Add the first two products: {times100} + {times10} = {partial}",
                ),
                CalculationStep(
                    expression=f"{partial} + {other}",
                    result=magnitude,
                    explanation=f"Add the original number: {partial} + {other} = {magnitude}",
                ),
            ]
        negative = sign_step(magnitude, product)
        if negative is not None:
            steps.append(negative)
        return steps
