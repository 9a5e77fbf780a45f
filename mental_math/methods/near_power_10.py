"""Near a power of ten: ``(P ± d) · c = P·c ± d·c``."""
from __future__ import annotations

from ..constants import POWERS_OF_TEN
from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, fmt, product_step, sign_step

__all__ = ["NearPower10Method", "nearest_power_of_10"]


def nearest_power_of_10(n: int) -> tuple[int, int]:
    """Return ``(P, d)`` for the power of ten nearest ``|n|``; ``d`` is signed.

    Earlier powers win ties.
    """
    magnitude = abs(n)
    power = POWERS_OF_TEN[0]
    best = abs(magnitude - power)
    for candidate in POWERS_OF_TEN:
        if abs(magnitude - candidate) < best:
            power, best = candidate, abs(magnitude - candidate)
    return power, n - (-power if n < 0 else power)


class NearPower10Method(BaseMethod):
    name = MethodName.NEAR_POWER_10
    display_name = "Near Powers of 10"

    @staticmethod
    def _near(n: int) -> bool:
        power, diff = nearest_power_of_10(n)
        return abs(diff) <= power * 0.1

    def is_applicable(self, num1: int, num2: int) -> bool:
        return self._near(num1) or self._near(num2)

    def compute_cost(self, num1: int, num2: int) -> float:
        def cost(n: int) -> float:
            power, diff = nearest_power_of_10(n)
            return abs(diff) + count_digits(power) * 0.5

        return min(cost(num1), cost(num2))

    def quality_score(self, num1: int, num2: int) -> float:
        _, d1 = nearest_power_of_10(num1)
        _, d2 = nearest_power_of_10(num2)
        if d1 == 0 or d2 == 0:
            return 0.95
        if abs(d1) <= 3 or abs(d2) <= 3:
            return 0.8
        return 0.6

    def _pick(self, num1: int, num2: int) -> tuple[int, int, int, int]:
        """``(near, other, power, diff)`` over magnitudes.

        An operand within 10% of its power beats one that is not; after that
        the smaller ``|diff|`` wins, ``num1`` on ties.
        """
        a, b = abs(num1), abs(num2)
        near, other = min(
            ((a, b), (b, a)),
            key=lambda pair: (not self._near(pair[0]), abs(nearest_power_of_10(pair[0])[1])),
        )
        power, diff = nearest_power_of_10(near)
        return near, other, power, diff

    def characteristic(self, num1: int, num2: int) -> str:
        power = self._pick(num1, num2)[2]
        return (
            f"At least one number is close to {power}, a power of 10, "
            "making place-value manipulation highly efficient."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        near, _, power, _ = self._pick(num1, num2)
        return f"{near} is close to {power}, making multiplication by power of 10 easy"

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        near, other, power, diff = self._pick(num1, num2)
        product = num1 * num2
        magnitude = near * other
        gap = abs(diff)
        op = "+" if diff >= 0 else "-"

        steps = [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=f"Recognize {near} = {power} {op} {gap}, which is near a power of 10",
            )
        ]
        power_product = power * other
        if gap == 0:
            steps.append(
                CalculationStep(
                    expression=f"{power} * {other}",
                    result=magnitude,
                    explanation=f"Multiplying by {power} appends {count_digits(power) - 1} zero(s)",
                )
            )
        else:
            gap_product = gap * other
            steps += [
                CalculationStep(
                    expression=f"({power} {op} {gap}) * {other}",
                    result=magnitude,
                    explanation=f"Rewrite {near} as {power} {op} {gap}",
                ),
                CalculationStep(
                    expression=f"{power} * {other} {op} {gap} * {other}",
                    result=magnitude,
                    explanation=f"Distribute: {power} × {other} {op} {gap} × {other}",
                    sub_steps=[
                        CalculationStep(
                            expression=f"{power} * {other}",
                            result=power_product,
                            explanation=(
                                f"{power} × {other} = {power_product} (easy - just shift decimal)"
                            ),
                            depth=1,
                        ),
                        product_step(gap, other, 1, f"{gap} × {other} = {gap_product}"),
                    ],
                ),
                CalculationStep(
                    expression=f"{power_product} {op} {gap_product}",
                    result=magnitude,
                    explanation=(
                        f"{'Add' if diff >= 0 else 'Subtract'}: "
                        f"{power_product} {op} {gap_product} = {magnitude}"
                    ),
                ),
            ]
        signed = sign_step(magnitude, product)
        if signed is not None:
            steps.append(signed)
        return steps
