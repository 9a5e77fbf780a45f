"""Factorization: ``a · b = f · (g · b)`` when ``a = f · g``."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..cache import BoundedCache
from ..constants import FACTORIZATION_CACHE_SIZE
from ..solution import CalculationStep, MethodName
from .base import BaseMethod, count_digits, fmt, product_step, sign_step

__all__ = ["FactorPair", "FactorizationMethod", "score_factor_pair"]


@dataclass(frozen=True)
class FactorPair:
    factor1: int
    factor2: int
    score: float  # lower is better


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def score_factor_pair(f1: int, f2: int) -> float:
    """Mental-math convenience of ``f1 × f2``; negative scores are useful."""
    score = 0.0
    for f in (f1, f2):
        if f < 10:
            score -= 3
        if _is_power_of_two(f):
            score -= 2
        if f % 5 == 0:
            score -= 1
        if f % 10 == 0:
            score -= 2
    return score + (count_digits(f1) + count_digits(f2)) * 0.5


class FactorizationMethod(BaseMethod):
    name = MethodName.FACTORIZATION
    display_name = "Factorization"

    def __init__(self, cache: Optional[BoundedCache[int, tuple[FactorPair, ...]]] = None) -> None:
        self.cache = cache if cache is not None else BoundedCache(FACTORIZATION_CACHE_SIZE)

    @staticmethod
    def _factorize(magnitude: int) -> tuple[FactorPair, ...]:
        pairs = [
            FactorPair(i, magnitude // i, score_factor_pair(i, magnitude // i))
            for i in range(2, math.isqrt(magnitude) + 1)
            if magnitude % i == 0
        ]
        # sorted() is stable: equal scores keep the smaller first factor first
        return tuple(sorted(pairs, key=lambda p: p.score))

    def find_useful_factorizations(self, n: int) -> tuple[FactorPair, ...]:
        """Factor pairs of ``|n|`` sorted by ascending score (cached by ``|n|``)."""
        return self.cache.get_or_compute(abs(n), self._factorize)

    def _best(self, n: int) -> Optional[FactorPair]:
        pairs = self.find_useful_factorizations(n)
        return pairs[0] if pairs else None

    def _best_score(self, n: int, default: float) -> float:
        best = self._best(n)
        return best.score if best is not None else default

    def is_applicable(self, num1: int, num2: int) -> bool:
        return any(
            p.score < 0
            for n in (num1, num2)
            for p in self.find_useful_factorizations(n)
        )

    def compute_cost(self, num1: int, num2: int) -> float:
        return min(self._best_score(num1, math.inf), self._best_score(num2, math.inf)) + 15

    def quality_score(self, num1: int, num2: int) -> float:
        best = min(self._best_score(num1, 10), self._best_score(num2, 10))
        if best <= -5:
            return 0.9
        if best <= -3:
            return 0.8
        if best <= 0:
            return 0.7
        return 0.5

    def _pick(self, num1: int, num2: int) -> tuple[int, int, FactorPair]:
        """``(to_factor, other, pair)`` over magnitudes; lower best score wins."""
        if self._best_score(num1, math.inf) <= self._best_score(num2, math.inf):
            to_factor, other = abs(num1), abs(num2)
        else:
            to_factor, other = abs(num2), abs(num1)
        pair = self._best(to_factor)
        if pair is None:
            raise ValueError(f"No useful factorization found for {num1} × {num2}")
        return to_factor, other, pair

    def characteristic(self, num1: int, num2: int) -> str:
        return (
            "The numbers have convenient factorizations that simplify "
            "the multiplication into easier sub-problems."
        )

    def reason_for(self, num1: int, num2: int) -> str:
        to_factor, _, pair = self._pick(num1, num2)
        return (
            f"{to_factor} factors nicely as {pair.factor1} * {pair.factor2}, "
            "making the calculation simpler"
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        to_factor, other, pair = self._pick(num1, num2)
        product = num1 * num2
        magnitude = to_factor * other
        small, big = sorted((pair.factor1, pair.factor2))
        intermediate = big * other

        steps = [
            CalculationStep(
                expression=f"{fmt(num1)} * {fmt(num2)}",
                result=product,
                explanation=f"Recognize that {to_factor} = {pair.factor1} * {pair.factor2}",
            ),
            CalculationStep(
                expression=f"{pair.factor1} * {pair.factor2} * {other}",
                result=magnitude,
                explanation=f"Rewrite as {pair.factor1} * {pair.factor2} * {other}",
            ),
            CalculationStep(
                expression=f"{small} * ({big} * {other})",
                result=magnitude,
                explanation=f"Regroup: multiply {big} * {other} first, then by {small}",
                sub_steps=[
                    product_step(big, other, 1, f"{big} * {other} = {intermediate}"),
                ],
            ),
            CalculationStep(
                expression=f"{small} * {intermediate}",
                result=magnitude,
                explanation=f"{small} * {intermediate} = {magnitude}",
            ),
        ]
        signed = sign_step(magnitude, product)
        if signed is not None:
            steps.append(signed)
        return steps
