"""Static study material per method plus worked examples from the selector."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .solution import MethodName, Solution

if TYPE_CHECKING:  # pragma: no cover
    from .selector import MethodSelector

__all__ = [
    "StudyContent",
    "StudyExample",
    "content_for",
    "get_learning_order",
    "get_prerequisites",
    "get_next_methods",
    "generate_examples",
    "EXAMPLE_PAIRS",
]

M = MethodName


@dataclass(frozen=True)
class StudyContent:
    method: MethodName
    introduction: str
    mathematical_foundation: str
    when_to_use: tuple[str, ...] = ()
    when_not_to_use: tuple[str, ...] = ()
    common_mistakes: tuple[str, ...] = ()
    practice_strategies: tuple[str, ...] = ()
    prerequisites: tuple[MethodName, ...] = ()
    next_methods: tuple[MethodName, ...] = ()


@dataclass
class StudyExample:
    num1: int
    num2: int
    solution: Solution
    pedagogical_notes: list[str] = field(default_factory=list)
    common_mistakes: list[str] = field(default_factory=list)


_CONTENT: dict[MethodName, StudyContent] = {
    M.DISTRIBUTIVE: StudyContent(
        method=M.DISTRIBUTIVE,
        introduction=(
            "The distributive property is the foundational technique for mental math: "
            "a(b + c) = ab + ac. Split one number into easy parts, multiply each part, "
            "and combine. 47 × 8 becomes 40 × 8 + 7 × 8 = 320 + 56 = 376."
        ),
        mathematical_foundation=(
            "Distributivity is one of the ring axioms of the integers. It holds for "
            "differences as well, a(b - c) = ab - ac, which is what makes subtractive "
            "partitions such as 47 = 50 - 3 work."
        ),
        when_to_use=(
            "When no specialized method applies efficiently",
            "As a reliable fallback for any multiplication",
            "When a number is close to a round value (subtractive partition)",
            "For 3+ digit numbers using full place-value decomposition",
        ),
        when_not_to_use=(
            "Numbers symmetric around a round midpoint (Difference of Squares)",
            "One number very close to 10, 100 or 1000 (Near Powers of 10)",
            "A number multiplied by itself (Squaring)",
            "Both numbers between 85 and 115 (Near 100)",
        ),
        common_mistakes=(
            "Forgetting to add all partial products",
            "Dropping zeros when multiplying by tens or hundreds",
            "Forgetting the sign of a subtractive partition",
        ),
        practice_strategies=(
            "Start with single-digit multipliers before two-digit × two-digit",
            "Keep a running total instead of holding every partial product",
            "Estimate first to check the answer's magnitude",
        ),
        next_methods=(M.NEAR_POWER_10, M.FACTORIZATION),
    ),
    M.DIFFERENCE_SQUARES: StudyContent(
        method=M.DIFFERENCE_SQUARES,
        introduction=(
            "When two numbers sit the same distance from a round midpoint, their product "
            "is the midpoint squared minus the distance squared: 47 × 53 = 50² - 3² = 2491."
        ),
        mathematical_foundation="(m - d)(m + d) = m² - md + md - d² = m² - d².",
        when_to_use=(
            "The sum of the two numbers is even",
            "The midpoint is a multiple of 5 or 10, or small",
            "The numbers are at most 20 apart",
        ),
        when_not_to_use=(
            "The midpoint is not an integer",
            "The midpoint is hard to square",
        ),
        common_mistakes=(
            "Calculating the midpoint incorrectly",
            "Adding the squared distance instead of subtracting it",
        ),
        practice_strategies=(
            "Memorize squares of multiples of 5 up to 100",
            "Practice spotting pairs that straddle a multiple of ten",
        ),
        prerequisites=(M.DISTRIBUTIVE,),
        next_methods=(M.SQUARING,),
    ),
    M.NEAR_POWER_10: StudyContent(
        method=M.NEAR_POWER_10,
        introduction=(
            "A number just above or below 10, 100 or 1000 can be rewritten as that power "
            "plus or minus a small offset: 98 × 47 = 100 × 47 - 2 × 47 = 4606."
        ),
        mathematical_foundation=(
            "(P ± d) × c = P × c ± d × c. Multiplying by a power of ten only shifts digits, "
            "so all the real work is in the small product d × c."
        ),
        when_to_use=("One number is within 10% of 10, 100, 1000 or 10000",),
        when_not_to_use=("Both numbers are far from any power of ten",),
        common_mistakes=(
            "Choosing the wrong power of 10",
            "Getting the sign wrong when the number is above or below the power",
        ),
        practice_strategies=("Drill multiplying two-digit numbers by 1-9 quickly",),
        prerequisites=(M.DISTRIBUTIVE,),
        next_methods=(M.NEAR_100,),
    ),
    M.FACTORIZATION: StudyContent(
        method=M.FACTORIZATION,
        introduction=(
            "Split one number into convenient factors and regroup: "
            "24 × 35 = 3 × (8 × 35) = 3 × 280 = 840."
        ),
        mathematical_foundation=(
            "Multiplication is associative and commutative, so a × b = (f × g) × b = "
            "f × (g × b) whenever a = f × g."
        ),
        when_to_use=(
            "A number has small factors, powers of two, or multiples of 5",
            "Factors combine with the other number to make round values",
        ),
        when_not_to_use=("Both numbers are prime or have only awkward factors",),
        common_mistakes=(
            "Choosing factors that do not simplify the problem",
            "Not recognizing useful pairs like 25 × 4 = 100",
        ),
        practice_strategies=("List factor pairs of common two-digit numbers",),
        prerequisites=(M.DISTRIBUTIVE,),
    ),
    M.SQUARING: StudyContent(
        method=M.SQUARING,
        introduction=(
            "Square a number by expanding around the nearest multiple of ten: "
            "73² = 70² + 2 × 70 × 3 + 3² = 5329."
        ),
        mathematical_foundation="(a ± b)² = a² ± 2ab + b².",
        when_to_use=("Both numbers are the same",),
        when_not_to_use=("The numbers differ",),
        common_mistakes=(
            "Forgetting to double the middle term",
            "Adding b² with the wrong sign",
        ),
        practice_strategies=("Memorize squares up to 25",),
        prerequisites=(M.DISTRIBUTIVE, M.DIFFERENCE_SQUARES),
    ),
    M.NEAR_100: StudyContent(
        method=M.NEAR_100,
        introduction=(
            "When both numbers are close to 100, work with their deviations: "
            "97 × 103 = 10000 + 100 × (-3 + 3) + (-3) × 3 = 9991."
        ),
        mathematical_foundation="(100 + a)(100 + b) = 10000 + 100(a + b) + ab.",
        when_to_use=("Both numbers are between 85 and 115",),
        when_not_to_use=("Either number is more than 15 away from 100",),
        common_mistakes=(
            "Confusing deficits below 100 with surpluses above it",
            "Forgetting that ab is negative when one number is above and one below",
        ),
        practice_strategies=("Practice products of single-digit deviations",),
        prerequisites=(M.DISTRIBUTIVE, M.NEAR_POWER_10),
    ),
    M.SUM_TO_TEN: StudyContent(
        method=M.SUM_TO_TEN,
        introduction=(
            "Two numbers with the same tens digit whose units add to 10 multiply quickly: "
            "44 × 46 = (4 × 5) followed by (4 × 6) = 2024."
        ),
        mathematical_foundation=(
            "(10n + a)(10n + b) = 100n² + 10n(a + b) + ab = 100n(n + 1) + ab when a + b = 10."
        ),
        when_to_use=("Same leading digits and units summing to 10",),
        when_not_to_use=("Units do not sum to 10",),
        common_mistakes=("Forgetting the leading zero when the units product is below 10",),
        practice_strategies=("Generate pairs like 32 × 38 and 71 × 79 and drill them",),
        prerequisites=(M.DISTRIBUTIVE,),
        next_methods=(M.DIFFERENCE_SQUARES,),
    ),
    M.SQUARING_END_5: StudyContent(
        method=M.SQUARING_END_5,
        introduction=(
            "Squares of numbers ending in 5 follow a pattern: multiply the prefix by the "
            "next number and append 25. 75² = 7 × 8 = 56, then 5625."
        ),
        mathematical_foundation="(10n + 5)² = 100n² + 100n + 25 = 100n(n + 1) + 25.",
        when_to_use=("Squaring a number that ends in 5",),
        when_not_to_use=("The number does not end in 5",),
        common_mistakes=("Multiplying the prefix by itself instead of by the next number",),
        practice_strategies=("Square 15, 25, ..., 95 until automatic",),
        prerequisites=(M.SQUARING,),
        next_methods=(M.SUM_TO_TEN,),
    ),
    M.NEAR_SQUARES: StudyContent(
        method=M.NEAR_SQUARES,
        introduction=(
            "When two numbers differ by a small k, start from the square of the smaller: "
            "25 × 27 = 25² + 2 × 25 = 675."
        ),
        mathematical_foundation="n(n + k) = n² + kn.",
        when_to_use=("Positive numbers at most 5 apart, the smaller one easy to square",),
        when_not_to_use=("The smaller number's square is not known",),
        common_mistakes=("Adding k² instead of k × n",),
        practice_strategies=("Pair this with memorized squares of 1-20 and multiples of 5",),
        prerequisites=(M.SQUARING, M.DISTRIBUTIVE),
        next_methods=(M.DIFFERENCE_SQUARES,),
    ),
    M.MULTIPLY_BY_111: StudyContent(
        method=M.MULTIPLY_BY_111,
        introduction=(
            "111 = 100 + 10 + 1, so n × 111 = 100n + 10n + n. "
            "A single digit becomes a repdigit: 7 × 111 = 777."
        ),
        mathematical_foundation="111n = (100 + 10 + 1)n = 100n + 10n + n.",
        when_to_use=("One factor is 111",),
        when_not_to_use=("Neither factor is 111",),
        common_mistakes=("Misaligning the shifted copies when adding",),
        practice_strategies=("Practice the digit-sum shortcut for two-digit numbers",),
        prerequisites=(M.DISTRIBUTIVE,),
    ),
}

EXAMPLE_PAIRS: dict[MethodName, tuple[tuple[int, int], ...]] = {
    M.DISTRIBUTIVE: ((47, 89), (23, 67), (34, 56)),
    M.DIFFERENCE_SQUARES: ((47, 53), (96, 104), (43, 57)),
    M.NEAR_POWER_10: ((98, 47), (102, 35), (997, 23)),
    M.FACTORIZATION: ((25, 48), (35, 24), (125, 56)),
    M.SQUARING: ((73, 73), (25, 25), (67, 67)),
    M.NEAR_100: ((97, 94), (103, 98), (88, 96)),
    M.SUM_TO_TEN: ((44, 46), (73, 77), (124, 126)),
    M.SQUARING_END_5: ((35, 35), (75, 75), (115, 115)),
    M.NEAR_SQUARES: ((25, 27), (30, 33), (15, 17)),
    M.MULTIPLY_BY_111: ((7, 111), (111, 23), (111, 345)),
}

_NOTES: dict[MethodName, tuple[str, ...]] = {
    M.DISTRIBUTIVE: (
        "Notice how we partition the first number to simplify the multiplication.",
        "Each partial product is easier to compute than the original problem.",
    ),
    M.DIFFERENCE_SQUARES: (
        "First identify the midpoint between the two numbers.",
        "Apply the formula: midpoint² - deviation².",
    ),
    M.NEAR_POWER_10: (
        "Express the number as power_of_10 ± small_offset.",
        "The multiplication by a power of 10 is trivial: just shift digits.",
    ),
    M.FACTORIZATION: (
        "Look for factors that combine to make round numbers.",
        "Rearrange factors using commutativity and associativity.",
    ),
    M.SQUARING: (
        "Decompose the number around the nearest multiple of ten.",
        "Each term of a² ± 2ab + b² is simpler than the original square.",
    ),
    M.NEAR_100: (
        "Calculate each number's deviation from 100.",
        "The adjustment is the product of the deviations.",
    ),
    M.SUM_TO_TEN: ("The first part is n × (n + 1); the last two digits are the units product.",),
    M.SQUARING_END_5: ("The answer always ends in 25.",),
    M.NEAR_SQUARES: ("Start from a square you already know, then add k copies of n.",),
    M.MULTIPLY_BY_111: ("Shift the number twice and add the three copies.",),
}

_LEARNING_ORDER: tuple[MethodName, ...] = (
    M.DISTRIBUTIVE,
    M.NEAR_POWER_10,
    M.FACTORIZATION,
    M.DIFFERENCE_SQUARES,
    M.NEAR_100,
    M.SQUARING,
    M.SQUARING_END_5,
    M.SUM_TO_TEN,
    M.NEAR_SQUARES,
    M.MULTIPLY_BY_111,
)


def content_for(method: MethodName | str) -> StudyContent:
    return _CONTENT[MethodName(method)]


def get_prerequisites(method: MethodName | str) -> list[MethodName]:
    return list(content_for(method).prerequisites)


def get_next_methods(method: MethodName | str) -> list[MethodName]:
    return list(content_for(method).next_methods)


def get_learning_order() -> list[MethodName]:
    """All methods ordered so that every prerequisite precedes its dependants."""
    return list(_LEARNING_ORDER)


def generate_examples(
    method: MethodName | str, selector: Optional["MethodSelector"] = None
) -> list[StudyExample]:
    """Worked examples for ``method`` built from real selector output.

    Each canned pair is run through the selector; the requested method's
    solution is used when it was ranked, otherwise the optimal one.
    """
    from .selector import MethodSelector

    name = MethodName(method)
    selector = selector or MethodSelector()
    examples = []
    for num1, num2 in EXAMPLE_PAIRS[name]:
        ranking = selector.select_optimal_method(num1, num2)
        solution = ranking.solution_for(name) or ranking.optimal.solution
        examples.append(
            StudyExample(
                num1=num1,
                num2=num2,
                solution=solution,
                pedagogical_notes=list(_NOTES[name]),
                common_mistakes=list(_CONTENT[name].common_mistakes),
            )
        )
    return examples
