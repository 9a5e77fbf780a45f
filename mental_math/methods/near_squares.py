"""Near squares: ``n(n + k) = n² + kn`` for small ``k``."""
from __future__ import annotations

from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, product_step

__all__ = ["NearSquaresMethod", "NICE_SQUARES"]

MAX_DIFFERENCE = 5

# Squares of 1..20 and of multiples of 5 up to 100.
NICE_SQUARES = frozenset(
    {n * n for n in range(1, 21)} | {n * n for n in range(25, 101, 5)}
)


def _split(num1: int, num2: int) -> tuple[int, int]:
    n = min(num1, num2)
    return n, max(num1, num2) - n


class NearSquaresMethod(BaseMethod):
    name = MethodName.NEAR_SQUARES
    display_name = "Near Squares"

    def is_applicable(self, num1: int, num2: int) -> bool:
        if num1 <= 0 or num2 <= 0 or num1 == num2:
            return False
        return abs(num1 - num2) <= MAX_DIFFERENCE

    def compute_cost(self, num1: int, num2: int) -> float:
        n, k = _split(num1, num2)
        cost = 3.0
        if n * n in NICE_SQUARES:
            cost -= 1.0
        elif n % 10 == 0:
            cost -= 0.8
        elif n % 5 == 0:
            cost -= 0.5
        elif n <= 20:
            cost -= 0.3
        return cost + k * 0.3 + count_digits(n) * 0.2

    def quality_score(self, num1: int, num2: int) -> float:
        n, k = _split(num1, num2)
        if n * n in NICE_SQUARES and k <= 2:
            return 0.9
        if n % 5 == 0 and k <= 3:
            return 0.85
        if n <= 20 and k <= 2:
            return 0.75
        if k <= 3:
            return 0.6
        return 0.5

    def characteristic(self, num1: int, num2: int) -> str:
        n, k = _split(num1, num2)
        return f"The numbers differ by only {k}, so the product is {n}² plus {k} × {n}."

    def reason_for(self, num1: int, num2: int) -> str:
        n, k = _split(num1, num2)
        return f"{n + k} = {n} + {k}, so the product is a square plus a small correction"

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        n, k = _split(num1, num2)
        larger = n + k
        n_sq, k_n = n * n, k * n
        product = num1 * num2
        square_note = (
            f"{n}² = {n_sq} is a well-known square"
            if n_sq in NICE_SQUARES
            else f"Calculate {n}² = {n_sq}"
        )
        return [
            CalculationStep(
                expression=f"{num1} * {num2}",
                result=product,
                explanation=(
                    f"Recognize that {larger} = {n} + {k}, so we can use the identity "
                    "n(n+k) = n^2 + k*n"
                ),
            ),
            CalculationStep(
                expression=f"{n} * ({n} + {k})",
                result=product,
                explanation=f"Rewrite as {n} x ({n} + {k}) to apply the near-squares formula",
            ),
            CalculationStep(
                expression=f"{n} * {n} + {k} * {n}",
                result=product,
                explanation="Apply the identity: n(n+k) = n^2 + k*n",
                sub_steps=[
                    product_step(n, n, 1, square_note),
                    product_step(k, n, 1, f"Calculate {k} x {n} = {k_n}"),
                ],
            ),
            CalculationStep(
                expression=f"{n_sq} + {k_n}",
                result=product,
                explanation=f"Add: {n_sq} + {k_n} = {product}",
            ),
        ]
