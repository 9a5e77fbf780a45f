"""Capability contract and decomposition helpers shared by all methods."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..constants import MAX_SUBSTEP_DEPTH
from ..errors import InvalidSolutionError
from ..solution import CalculationStep, MethodName, Solution
from ..validator import validate_solution

if TYPE_CHECKING:  # pragma: no cover
    from ..study_content import StudyContent

__all__ = [
    "BaseMethod",
    "Partition",
    "count_digits",
    "is_near",
    "decompose",
    "decompose_full_place_value",
    "nearest_round",
    "is_trivial_multiplication",
    "choose_partition",
    "generate_recursive_sub_steps",
    "product_step",
    "sign_step",
    "fmt",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Number helpers
# ---------------------------------------------------------------------------

def count_digits(n: int) -> int:
    return len(str(abs(int(n))))


def is_near(n: int, target: int, threshold: int | float) -> bool:
    return abs(n - target) <= threshold


def decompose(n: int) -> tuple[int, int]:
    """Split ``|n|`` into ``(tens, ones)`` so that ``tens + ones == |n|``."""
    magnitude = abs(n)
    ones = magnitude % 10
    return magnitude - ones, ones


def decompose_full_place_value(n: int) -> list[int]:
    """``347 → [300, 40, 7]``; zero digits are skipped, ``0 → [0]``."""
    magnitude = abs(n)
    parts = []
    place = 10 ** (count_digits(magnitude) - 1)
    while place >= 1:
        digit = magnitude // place
        if digit:
            parts.append(digit * place)
            magnitude -= digit * place
        place //= 10
    return parts or [0]


def nearest_round(n: int, base: int = 10) -> int:
    """Nearest multiple of ``base``, ties rounded away from zero."""
    sign = -1 if n < 0 else 1
    return sign * ((abs(n) + base // 2) // base * base)


def fmt(n: int) -> str:
    """Render an operand for an expression, parenthesising negatives."""
    return f"({n})" if n < 0 else str(n)


def is_trivial_multiplication(a: int, b: int) -> bool:
    """Products a learner is expected to know by heart.

    Zero or one, both single digits, a factor of ten, a single digit times a
    two-digit multiple of ten, or two two-digit multiples of ten.
    """
    a, b = abs(a), abs(b)
    if a <= 1 or b <= 1:
        return True
    if a < 10 and b < 10:
        return True
    if a == 10 or b == 10:
        return True
    if a < 10 and b % 10 == 0 and b < 100:
        return True
    if b < 10 and a % 10 == 0 and a < 100:
        return True
    return a % 10 == 0 and b % 10 == 0 and a < 100 and b < 100


# ---------------------------------------------------------------------------
# Recursive breakdown
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Partition:
    """``value == base - part`` when ``subtractive`` else ``base + part``."""

    base: int
    part: int
    subtractive: bool

    @property
    def op(self) -> str:
        return "-" if self.subtractive else "+"

    @property
    def text(self) -> str:
        return f"({self.base} {self.op} {self.part})"


def choose_partition(n: int) -> Optional[Partition]:
    """Partition a positive ``n`` for the recursive breakdown.

    Within 1..5 below the next multiple of ten → subtractive, otherwise
    tens + ones. A multiple of ten splits off its leading place value
    (``350 → 300 + 50``). Single digits and single place values (``40``,
    ``300``) return ``None``.
    """
    if n < 10:
        return None
    ones = n % 10
    if ones == 0:
        place = 10 ** (count_digits(n) - 1)
        lead = n // place * place
        rest = n - lead
        if rest == 0:
            return None
        return Partition(lead, rest, subtractive=False)
    upper = n - ones + 10
    if upper - n <= 5:
        return Partition(upper, upper - n, subtractive=True)
    return Partition(n - ones, ones, subtractive=False)


def _explain_product(a: int, b: int) -> str:
    if is_trivial_multiplication(a, b):
        return f"Basic fact: {a} × {b} = {a * b}"
    return f"Multiply {a} × {b}"


def product_step(
    a: int,
    b: int,
    depth: int,
    explanation: str | None = None,
    max_depth: int = MAX_SUBSTEP_DEPTH,
) -> CalculationStep:
    """Leaf-or-subtree step for ``a * b`` at ``depth``."""
    return CalculationStep(
        expression=f"{fmt(a)} * {fmt(b)}",
        result=a * b,
        explanation=explanation or _explain_product(a, b),
        depth=depth,
        sub_steps=generate_recursive_sub_steps(a, b, depth + 1, max_depth),
    )


def generate_recursive_sub_steps(
    a: int, b: int, depth: int, max_depth: int = MAX_SUBSTEP_DEPTH
) -> list[CalculationStep]:
    """Break ``a × b`` into a bounded tree of easier products.

    All returned steps sit at ``depth``; each product step recurses with
    ``depth + 1``. Returns ``[]`` when the product is trivial, when
    ``depth >= max_depth``, or when neither operand can be partitioned.
    Operands are magnitudes; negative input yields a leaf.
    """
    if depth >= max_depth or is_trivial_multiplication(a, b):
        return []
    if a < 0 or b < 0:
        return []

    first_is_target = count_digits(a) > count_digits(b) or (
        count_digits(a) == count_digits(b) and a >= b
    )
    candidates = [(a, b, True), (b, a, False)] if first_is_target else [(b, a, False), (a, b, True)]

    for target, other, target_first in candidates:
        partition = choose_partition(target)
        if partition is not None:
            break
    else:
        return []

    product = a * b

    def pair(x: int | str) -> str:
        return f"{x} * {other}" if target_first else f"{other} * {x}"

    left, right = partition.base * other, partition.part * other
    steps = [
        CalculationStep(
            expression=pair(partition.text),
            result=product,
            explanation=(
                f"Break down {target} {'as' if partition.subtractive else 'into'} "
                f"{partition.base} {partition.op} {partition.part}"
            ),
            depth=depth,
        ),
        CalculationStep(
            expression=f"{pair(partition.base)} {partition.op} {pair(partition.part)}",
            result=product,
            explanation="Apply distributive property",
            depth=depth,
        ),
    ]
    for part in (partition.base, partition.part):
        x, y = (part, other) if target_first else (other, part)
        steps.append(product_step(x, y, depth, max_depth=max_depth))
    steps.append(
        CalculationStep(
            expression=f"{left} {partition.op} {right}",
            result=product,
            explanation="Subtract the products" if partition.subtractive else "Add the products",
            depth=depth,
        )
    )
    return steps


def sign_step(magnitude: int, product: int) -> Optional[CalculationStep]:
    """Final ``-1 * |p|`` step for a negative product, else ``None``."""
    if product >= 0:
        return None
    return CalculationStep(
        expression=f"-1 * {magnitude}",
        result=-magnitude,
        explanation="Apply the negative sign from the original multiplication",
        depth=0,
    )


# ---------------------------------------------------------------------------
# Capability contract
# ---------------------------------------------------------------------------

class BaseMethod(ABC):
    """One algebraic technique for computing ``num1 × num2`` mentally.

    Subclasses are stateless apart from injected caches, so a single
    instance can score and solve any number of problems.
    """

    name: MethodName
    display_name: str
    optimal_reason: str = ""

    @abstractmethod
    def is_applicable(self, num1: int, num2: int) -> bool:
        ...

    @abstractmethod
    def compute_cost(self, num1: int, num2: int) -> float:
        """Heuristic cognitive effort; lower is easier, ``inf`` if inapplicable."""

    @abstractmethod
    def quality_score(self, num1: int, num2: int) -> float:
        """Heuristic elegance in ``[0, 1]``; higher is better."""

    @abstractmethod
    def _build_steps(self, num1: int, num2: int) -> list[CalculationStep]:
        ...

    def characteristic(self, num1: int, num2: int) -> str:
        """One sentence describing why this technique fits ``num1 × num2``."""
        return self.optimal_reason

    def reason_for(self, num1: int, num2: int) -> str:
        """``optimal_reason`` text of the generated solution."""
        return self.optimal_reason

    def generate_solution(self, num1: int, num2: int) -> Solution:
        """Build and self-validate the derivation for ``num1 × num2``.

        Raises :class:`InvalidSolutionError` when the generated steps fail
        validation; that is a defect in the method, not a user error.
        """
        steps = self._build_steps(num1, num2)
        solution = Solution(
            method=self.name, optimal_reason=self.reason_for(num1, num2), steps=steps
        )
        validation = validate_solution(num1, num2, solution)
        if not validation.valid:
            logger.error(
                "%s produced an invalid solution for %s × %s: %s",
                self.name.value,
                num1,
                num2,
                validation.errors,
            )
            raise InvalidSolutionError(self.name.value, validation.errors)
        solution.validated = True
        return solution

    def generate_study_content(self) -> "StudyContent":
        from ..study_content import content_for

        return content_for(self.name)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"<{type(self).__name__} {self.name.value}>"

