"""
Property-based tests using Hypothesis.

They exercise the whole selector over random operands: whatever method wins,
its derivation must be valid and every ranked method must agree on the product.
"""
from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis.strategies import integers, sampled_from

from mental_math.errors import InputValidationError
from mental_math.methods import build_methods
from mental_math.selector import MethodSelector
from mental_math.validator import validate_solution

SELECTOR = MethodSelector()

operands = integers(min_value=-2000, max_value=2000).filter(lambda n: n != 0)


@given(a=operands, b=operands)
@settings(max_examples=60, deadline=None)
def test_optimal_solution_is_correct(a: int, b: int) -> None:
    ranking = SELECTOR.select_optimal_method(a, b)
    assert ranking.answer == a * b
    assert ranking.optimal.solution.validated


@given(a=operands, b=operands)
@settings(max_examples=60, deadline=None)
def test_ranked_methods_agree(a: int, b: int) -> None:
    ranking = SELECTOR.select_optimal_method(a, b)
    assert len(ranking.alternatives) <= 2
    assert all(alt.solution.final_result == a * b for alt in ranking.alternatives)
    assert all(
        alt.composite_score >= ranking.optimal.composite_score for alt in ranking.alternatives
    )


@given(a=operands, b=operands)
@settings(max_examples=40, deadline=None)
def test_selection_is_deterministic(a: int, b: int) -> None:
    assert SELECTOR.select_optimal_method(a, b) == MethodSelector().select_optimal_method(a, b)


@given(a=integers(min_value=1, max_value=400), b=integers(min_value=1, max_value=400),
       index=sampled_from(range(10)))
@settings(max_examples=80, deadline=None)
def test_every_applicable_method_is_self_consistent(a: int, b: int, index: int) -> None:
    method = build_methods()[index]
    if not method.is_applicable(a, b):
        return
    solution = method.generate_solution(a, b)
    assert solution.final_result == a * b
    assert validate_solution(a, b, solution).valid
    assert all(step.max_depth <= 3 for step in solution.steps)


@given(b=operands)
def test_zero_is_always_rejected(b: int) -> None:
    with pytest.raises(InputValidationError, match="zero"):
        SELECTOR.select_optimal_method(0, b)
