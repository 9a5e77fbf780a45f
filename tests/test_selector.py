from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any

import pytest

from mental_math import select_optimal_method
from mental_math.constants import ABSOLUTE_MAX_VALUE, ScoringWeights
from mental_math.errors import (
    CrossValidationError,
    InputValidationError,
    SelectorInvariantError,
)
from mental_math.methods import REGISTRY_ORDER, DistributiveMethod, Near100Method, SquaringMethod
from mental_math.selector import MethodScore, MethodSelector
from mental_math.solution import CalculationStep, MethodName, Solution

M = MethodName


@pytest.mark.parametrize(
    "num1, num2, method, answer",
    [
        (47, 53, M.DIFFERENCE_SQUARES, 2491),
        (97, 103, M.NEAR_100, 9991),
        (73, 73, M.SQUARING, 5329),
        (98, 47, M.NEAR_POWER_10, 4606),
        (24, 35, M.FACTORIZATION, 840),
        (44, 46, M.SUM_TO_TEN, 2024),
        (75, 75, M.SQUARING_END_5, 5625),
    ],
)
def test_scenarios(num1: int, num2: int, method: MethodName, answer: int) -> None:
    ranking = MethodSelector().select_optimal_method(num1, num2)
    assert ranking.optimal.method is method
    assert ranking.answer == answer
    assert ranking.optimal.solution.validated
    assert all(alt.solution.final_result == answer for alt in ranking.alternatives)


def test_ranking_order_and_scores() -> None:
    scores = MethodSelector().rank(97, 103)
    assert [s.method.name for s in scores[:3]] == [
        M.NEAR_100,
        M.DIFFERENCE_SQUARES,
        M.NEAR_POWER_10,
    ]
    assert [round(s.composite_score, 2) for s in scores[:3]] == [1.10, 2.44, 2.78]


def test_at_most_two_alternatives() -> None:
    ranking = MethodSelector().select_optimal_method(97, 103)
    assert [alt.method for alt in ranking.alternatives] == [M.DIFFERENCE_SQUARES, M.NEAR_POWER_10]

    ranking = MethodSelector().select_optimal_method(73, 73)
    assert [alt.method for alt in ranking.alternatives] == [M.DISTRIBUTIVE]


def test_ties_keep_registry_order() -> None:
    selector = MethodSelector(weights=ScoringWeights(cost=0.0, quality=0.0))
    names = [s.method.name for s in selector.rank(97, 103)]
    assert names == [n for n in REGISTRY_ORDER if n in names]
    assert names[0] is M.DISTRIBUTIVE


def test_selection_is_deterministic() -> None:
    selector = MethodSelector()
    assert selector.select_optimal_method(24, 35) == selector.select_optimal_method(24, 35)
    assert MethodSelector().select_optimal_method(24, 35) == select_optimal_method(24, 35)


def test_allow_list_restricts_candidates() -> None:
    ranking = MethodSelector().select_optimal_method(97, 103, [M.DISTRIBUTIVE, "difference-squares"])
    assert ranking.optimal.method is M.DIFFERENCE_SQUARES
    assert [alt.method for alt in ranking.alternatives] == [M.DISTRIBUTIVE]


def test_allow_list_falls_back_when_nothing_applies(caplog: Any) -> None:
    with caplog.at_level(logging.INFO, logger="mental_math.selector"):
        ranking = MethodSelector().select_optimal_method(97, 103, ["squaring"])
    assert ranking.optimal.method is M.NEAR_100
    assert "using all applicable methods" in caplog.text


def test_allow_list_rejects_unknown_names() -> None:
    with pytest.raises(InputValidationError):
        MethodSelector().select_optimal_method(97, 103, ["guesswork"])


@pytest.mark.parametrize(
    "num1, num2, message",
    [
        (0, 5, "Multiplication by zero"),
        (5, 0, "Multiplication by zero"),
        (float("nan"), 5, "finite numbers"),
        (float("inf"), 5, "finite numbers"),
        ("47", 5, "finite numbers"),
        (True, 5, "finite numbers"),
        (1.5, 5, "Only integer multiplication"),
        (5, ABSOLUTE_MAX_VALUE + 1, "exceed maximum allowed value"),
        (ABSOLUTE_MAX_VALUE, ABSOLUTE_MAX_VALUE, "safe integer range"),
    ],
)
def test_rejected_inputs(num1: Any, num2: Any, message: str) -> None:
    with pytest.raises(InputValidationError, match=message) as exc:
        MethodSelector().select_optimal_method(num1, num2)
    assert len(exc.value.values) == 2


@pytest.mark.parametrize("num1,num2", [(0, 47), (1.5, 5), (5, ABSOLUTE_MAX_VALUE + 1)])
def test_rejected_inputs_never_reach_the_methods(monkeypatch: Any, num1: Any, num2: Any) -> None:
    selector = MethodSelector()

    def _fail(*_args: Any) -> bool:
        raise AssertionError("method consulted for rejected input")

    for method in selector.methods:
        monkeypatch.setattr(method, "is_applicable", _fail)
        monkeypatch.setattr(method, "generate_solution", _fail)
    with pytest.raises(InputValidationError):
        selector.select_optimal_method(num1, num2)


def test_integral_floats_are_normalised() -> None:
    a, b = MethodSelector.validate_inputs(47.0, 53)
    assert (a, b) == (47, 53)
    assert isinstance(a, int)
    assert select_optimal_method(47.0, 53.0).answer == 2491


def test_negative_operands() -> None:
    ranking = MethodSelector().select_optimal_method(-47, 53)
    assert ranking.answer == -2491
    ranking = MethodSelector().select_optimal_method(-97, -103)
    assert ranking.answer == 9991


def test_cross_validation_failure(monkeypatch: Any, caplog: Any) -> None:
    selector = MethodSelector()
    distributive = next(m for m in selector.methods if m.name is M.DISTRIBUTIVE)
    bogus = Solution(M.DISTRIBUTIVE, "", [CalculationStep("2 * 3", 6, "bogus")], validated=True)
    monkeypatch.setattr(distributive, "generate_solution", lambda num1, num2: bogus)

    with caplog.at_level(logging.ERROR, logger="mental_math.selector"):
        with pytest.raises(CrossValidationError) as exc:
            selector.select_optimal_method(47, 53)
    assert exc.value.results == {"difference-squares": 2491, "distributive": 6}
    assert "Cross-validation failed for 47 × 53" in caplog.text


def test_no_applicable_method() -> None:
    selector = MethodSelector()
    selector.methods = ()
    with pytest.raises(SelectorInvariantError):
        selector.select_optimal_method(47, 53)


def _score(method: Any, cost: float, quality: float, composite: float) -> MethodScore:
    return MethodScore(method, cost, quality, composite)


def test_explanation_for_much_higher_cost() -> None:
    selector = MethodSelector()
    text = selector.explain_why_not_optimal(
        _score(Near100Method(), 2.0, 0.9, 1.0),
        _score(DistributiveMethod(), 5.0, 0.9, 3.0),
        97,
        103,
    )
    assert text == (
        "Distributive Property / Place Value Partition is not optimal because it requires "
        "150% more computational effort (cost 5.0 vs 2.0), while Near 100 better exploits "
        "the structure of 97 × 103."
    )


def test_explanation_when_optimal_cost_is_zero() -> None:
    text = MethodSelector().explain_why_not_optimal(
        _score(Near100Method(), 0.0, 0.95, 0.02),
        _score(DistributiveMethod(), 3.0, 0.95, 1.82),
        100,
        100,
    )
    assert "it requires more computational effort (cost 3.0 vs 0.0)" in text


def test_explanation_moderate_cost_and_elegance() -> None:
    text = MethodSelector().explain_why_not_optimal(
        _score(Near100Method(), 3.0, 0.95, 1.82),
        _score(SquaringMethod(), 3.5, 0.7, 2.22),
        44,
        46,
    )
    assert text == (
        "Squaring is not optimal because it has higher computational cost (3.5 vs 3.0), "
        "and it is less mathematically elegant for these specific numbers, "
        "and the composite score slightly favors Near 100 (1.82 vs 2.22), "
        "while Near 100 better exploits the structure of 44 × 46."
    )


def test_explanation_falls_back_to_composite() -> None:
    text = MethodSelector().explain_why_not_optimal(
        _score(Near100Method(), 1.0, 0.9, 1.0),
        _score(SquaringMethod(), 1.0, 0.9, 1.1),
        10,
        10,
    )
    assert "because the composite score slightly favors Near 100 (1.00 vs 1.10)" in text


def test_alternatives_carry_explanations() -> None:
    ranking = MethodSelector().select_optimal_method(97, 103)
    first = ranking.alternatives[0]
    assert first.why_not_optimal.startswith("Difference of Squares is not optimal because")
    assert first.why_not_optimal.endswith("better exploits the structure of 97 × 103.")


def test_comparison_summary() -> None:
    summary = MethodSelector().select_optimal_method(73, 73).comparison_summary
    assert summary.startswith("## Method Selection for 73 × 73\n\n**Optimal Method: Squaring**\n\n")
    assert "composite score of 2.14 (cost: 3.5, quality: 0.90)" in summary
    assert "**Why this method?** Both numbers are identical (73)" in summary
    assert "1. **Distributive Property / Place Value Partition**" in summary
    assert "### Why Method Selection Matters" in summary
    assert summary.endswith("deeper mathematical intuition.\n")


def test_comparison_summary_without_alternatives() -> None:
    ranking = MethodSelector().select_optimal_method(47, 53, ["distributive"])
    assert ranking.alternatives == []
    assert "No other methods are applicable for this problem." in ranking.comparison_summary


def test_solution_for() -> None:
    ranking = MethodSelector().select_optimal_method(97, 103)
    assert ranking.solution_for("near-100") is ranking.optimal.solution
    assert ranking.solution_for(M.NEAR_POWER_10) is ranking.alternatives[1].solution
    assert ranking.solution_for(M.SQUARING) is None


def test_ranking_serialises_to_json() -> None:
    ranking = MethodSelector().select_optimal_method(47, 53)
    payload = json.loads(json.dumps(asdict(ranking)))
    assert payload["optimal"]["method"] == "difference-squares"
    assert payload["optimal"]["solution"]["steps"][-1]["result"] == 2491
    assert payload["alternatives"][0]["why_not_optimal"]
