"""Distributive property / place-value partition: ``(a ± b)·c = ac ± bc``.

Always applicable; this is the universal fallback of the selector.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from ..solution import CalculationStep, MethodName
from .base import (
    BaseMethod,
    count_digits,
    decompose,
    decompose_full_place_value,
    generate_recursive_sub_steps,
    sign_step,
)

__all__ = ["DistributiveMethod", "PlacePartition", "choose_optimal_partition"]


@dataclass(frozen=True)
class PlacePartition:
    """Non-zero ``parts`` joined by ``op`` (``"+"`` or ``"-"``)."""

    parts: tuple[int, ...]
    op: str = "+"
    kind: str = "additive"  # additive | subtractive | multi-additive | round

    @property
    def text(self) -> str:
        if len(self.parts) == 1:
            return str(self.parts[0])
        return "(" + f" {self.op} ".join(map(str, self.parts)) + ")"


def _make(parts: list[int], subtractive: bool = False, kind: str | None = None) -> PlacePartition:
    parts = [p for p in parts if p != 0]
    if len(parts) == 1:
        return PlacePartition((parts[0],), kind="round")
    return PlacePartition(
        tuple(parts),
        op="-" if subtractive else "+",
        kind=kind or ("subtractive" if subtractive else "additive"),
    )


def choose_optimal_partition(n: int) -> PlacePartition:
    """Pick the partition of a positive ``n`` that is easiest to distribute.

    ``28 → 30 - 2``, ``23 → 20 + 3``, ``97 → 100 - 3``, ``997 → 1000 - 3``,
    ``347 → 300 + 40 + 7``; two-digit multiples of ten stay whole.
    """
    tens, ones = decompose(n)
    digits = count_digits(n)

    if ones == 0 and digits <= 2:
        return _make([n])

    if digits >= 3:
        lower_k = n // 1000 * 1000
        upper_k = lower_k + 1000
        if 0 < upper_k - n <= 5 and upper_k <= 2000:
            return _make([upper_k, upper_k - n], subtractive=True)
        if lower_k > 0 and 0 < n - lower_k <= 5:
            return _make([lower_k, n - lower_k])
        places = decompose_full_place_value(n)
        if len(places) >= 2:
            return _make(places, kind="multi-additive")

    if n >= 85 and 0 < 100 - n <= 5:
        return _make([100, 100 - n], subtractive=True)

    lower = n // 10 * 10
    upper = lower + 10
    to_lower, to_upper = n - lower, upper - n
    if 0 < to_lower <= 5 and to_lower < to_upper:
        return _make([lower, to_lower])
    if 0 < to_upper <= 5:
        return _make([upper, to_upper], subtractive=True)
    return _make([tens, ones])


def _explain_partition(n: int, partition: PlacePartition) -> str:
    if partition.kind == "round" and n < 10:
        return f"{n} is a single digit - no partition needed"
    if partition.kind == "round":
        return f"{n} is already a round number - no partition needed"
    if partition.kind == "multi-additive":
        return f"Partition {n} by full place value into {' + '.join(map(str, partition.parts))}"
    head, tail = partition.parts
    shown = f"Partition {n} as {head} {partition.op} {tail}"
    if head % 1000 == 0:
        return f"{shown} (near round thousand)"
    if head % 100 == 0:
        return f"{shown} (near round hundred)"
    if partition.op == "-":
        return f"{shown} (subtractive is simpler)"
    if head != decompose(n)[0]:
        return f"{shown} (near round number)"
    return f"Partition {n} by place value into {head} + {tail}"


def _explain_product(part: int, other: int) -> str:
    if part % 10 == 0:
        short = part // 10
        return f"{short} × {other} = {short * other}, then append zero: {part * other}"
    if part < 10:
        return f"Single-digit multiplication: {part} × {other}"
    return f"Two-digit multiplication: {part} × {other}"


class DistributiveMethod(BaseMethod):
    name = MethodName.DISTRIBUTIVE
    display_name = "Distributive Property / Place Value Partition"
    optimal_reason = (
        "Distributive property is a general-purpose method that works for any "
        "multiplication by breaking numbers into simpler parts."
    )

    def is_applicable(self, num1: int, num2: int) -> bool:
        return True

    def compute_cost(self, num1: int, num2: int) -> float:
        d1, d2 = count_digits(num1), count_digits(num2)
        sub_multiplications = d1 * d2
        digit_complexity = (d1 + d2) * 0.8
        memory_chunks = min(d1 * 2, 7)  # working-memory cap
        magnitude = max(abs(num1), abs(num2))
        penalty = math.log10(magnitude) if magnitude > 1000 else 0.0
        return sub_multiplications + digit_complexity + memory_chunks * 0.5 + penalty

    def quality_score(self, num1: int, num2: int) -> float:
        return 0.5

    def characteristic(self, num1: int, num2: int) -> str:
        return (
            "The distributive property provides a systematic approach "
            "that works for any multiplication through place-value partition."
        )

    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        a, b = abs(num1), abs(num2)
        product = num1 * num2
        partition = choose_optimal_partition(a)
        products = [part * b for part in partition.parts]
        magnitude = a * b

        sub_steps = [
            CalculationStep(
                expression=f"{part} * {b}",
                result=part * b,
                explanation=_explain_product(part, b),
                depth=1,
                sub_steps=generate_recursive_sub_steps(part, b, 2),
            )
            for part in partition.parts
        ]

        steps = [
            CalculationStep(
                expression=f"{partition.text} * {b}",
                result=magnitude,
                explanation=_explain_partition(a, partition),
            )
        ]
        if partition.kind == "round":
            steps.append(
                CalculationStep(
                    expression=f"{a} * {b}",
                    result=magnitude,
                    explanation="Direct multiplication with round number",
                    sub_steps=sub_steps,
                )
            )
        else:
            op = f" {partition.op} "
            if partition.kind == "multi-additive":
                rule = "Apply distributive property to each place value"
            else:
                rule = (
                    f"Apply distributive property: a(b {partition.op} c) = "
                    f"ab {partition.op} ac"
                )
            steps += [
                CalculationStep(
                    expression=op.join(f"{part} * {b}" for part in partition.parts),
                    result=magnitude,
                    explanation=rule,
                ),
                CalculationStep(
                    expression=op.join(map(str, products)),
                    result=magnitude,
                    explanation="Calculate each product separately",
                    sub_steps=sub_steps,
                ),
                CalculationStep(
                    expression=str(magnitude),
                    result=magnitude,
                    explanation=(
                        "Subtract the partial products"
                        if partition.op == "-"
                        else "Add the partial products"
                    ),
                ),
            ]
        negative = sign_step(magnitude, product)
        if negative is not None:
            steps.append(negative)
        return steps

    def reason_for(self, num1: int, num2: int) -> str:
        partition = choose_optimal_partition(abs(num1))
        if partition.kind == "round":
            return self.optimal_reason
        return f"{self.optimal_reason} Here {abs(num1)} = {partition.text.strip('()')}."

