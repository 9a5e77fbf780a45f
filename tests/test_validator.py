from __future__ import annotations

from mental_math.solution import CalculationStep, MethodName, Solution
from mental_math.validator import (
    cross_validate,
    infer_operator,
    validate_solution,
    validate_step,
)


def _step(expr: str, result: int, depth: int = 0, subs: list[CalculationStep] | None = None,
          explanation: str = "x") -> CalculationStep:
    return CalculationStep(expr, result, explanation, depth, subs or [])


def _diff_squares_solution() -> Solution:
    return Solution(
        method=MethodName.DIFFERENCE_SQUARES,
        optimal_reason="symmetric around 50",
        steps=[
            _step("47 * 53", 2491),
            _step("(50 - 3) * (50 + 3)", 2491),
            _step(
                "50 * 50 - 3 * 3",
                2491,
                subs=[_step("50 * 50", 2500, 1), _step("3 * 3", 9, 1)],
            ),
            _step("2500 - 9", 2491),
        ],
    )


def test_valid_step_with_sub_steps() -> None:
    step = _step("20 * 3 + 4 * 3", 72, subs=[_step("20 * 3", 60, 1), _step("4 * 3", 12, 1)])
    result = validate_step(step)
    assert result.valid
    assert result.errors == []


def test_wrong_result_is_reported() -> None:
    result = validate_step(_step("6 * 7", 43))
    assert not result.valid
    assert "evaluates to 42" in result.errors[0]


def test_unparseable_expression_is_reported() -> None:
    result = validate_step(_step("six * seven", 42))
    assert not result.valid
    assert result.errors[0].startswith('Failed to evaluate expression "six * seven"')


def test_missing_explanation_only_warns() -> None:
    result = validate_step(_step("6 * 7", 42, explanation=""))
    assert result.valid
    assert result.warnings == ["Step has no explanation"]


def test_sub_step_depth_must_be_parent_plus_one() -> None:
    step = _step("20 * 3 + 4 * 3", 72, subs=[_step("20 * 3", 60, 2), _step("4 * 3", 12, 1)])
    result = validate_step(step)
    assert not result.valid
    assert any("expected 1" in e for e in result.errors)


def test_depth_cap() -> None:
    result = validate_step(_step("2 * 3", 6, depth=4))
    assert not result.valid
    assert "exceeds maximum of 3" in result.errors[0]


def test_sub_steps_that_do_not_recombine_are_rejected() -> None:
    step = _step(
        "20 * 3 + 4 * 3",
        72,
        subs=[_step("5 * 12", 60, 1), _step("2 * 5", 10, 1)],
        explanation="Add the products",
    )
    result = validate_step(step)
    assert not result.valid
    assert "combined with '+' give 70" in result.errors[-1]


def test_sub_steps_may_form_a_chain() -> None:
    step = _step(
        "28 * 47",
        1316,
        subs=[
            _step("(30 - 2) * 47", 1316, 1),
            _step("30 * 47 - 2 * 47", 1316, 1),
            _step("30 * 47", 1410, 1),
            _step("2 * 47", 94, 1),
            _step("1410 - 94", 1316, 1),
        ],
    )
    assert validate_step(step).valid


def test_chain_must_end_by_combining_earlier_results() -> None:
    step = _step("47 * 53", 2491, subs=[_step("1 + 1", 2, 1), _step("2491", 2491, 1)])
    result = validate_step(step)
    assert not result.valid
    assert "recombined give 2491" in result.errors[-1]


def test_chain_ending_in_unrelated_literals_is_rejected() -> None:
    step = _step("47 * 53", 2491, subs=[_step("1 + 1", 2, 1), _step("1 + 2490", 2491, 1)])
    assert not validate_step(step).valid


def test_chain_may_scale_an_earlier_result() -> None:
    step = _step(
        "100 * (-3 + 5)",
        200,
        subs=[_step("-3 + 5", 2, 1), _step("100 * 2", 200, 1)],
    )
    assert validate_step(step).valid


def test_literal_terms_contribute_their_own_value() -> None:
    step = _step(
        "10000 + 100 * (3 + 4) + 3 * 4",
        10712,
        subs=[_step("100 * (3 + 4)", 700, 1), _step("3 * 4", 12, 1)],
    )
    assert validate_step(step).valid


def test_valid_solution() -> None:
    result = validate_solution(47, 53, _diff_squares_solution())
    assert result.valid, result.errors


def test_solution_without_steps() -> None:
    empty = Solution(MethodName.DISTRIBUTIVE, "")
    result = validate_solution(2, 3, empty)
    assert not result.valid
    assert result.errors == ["Solution has no steps"]


def test_solution_with_wrong_final_answer() -> None:
    solution = Solution(MethodName.DISTRIBUTIVE, "", steps=[_step("2 * 4", 8)])
    result = validate_solution(2, 3, solution)
    assert not result.valid
    assert "Final answer 8 does not match direct multiplication 2 × 3 = 6" in result.errors[0]


def test_top_level_step_must_have_depth_zero() -> None:
    solution = Solution(MethodName.DISTRIBUTIVE, "", steps=[_step("2 * 3", 6, depth=1)])
    result = validate_solution(2, 3, solution)
    assert not result.valid
    assert "Step 1 is top-level but has depth 1" in result.errors


def test_progression_gap_is_a_warning() -> None:
    solution = Solution(
        MethodName.DISTRIBUTIVE, "", steps=[_step("2 * 3", 6), _step("1 + 5", 6), _step("3 * 2", 6)]
    )
    result = validate_solution(2, 3, solution)
    assert result.valid


def test_cross_validate() -> None:
    good = _diff_squares_solution()
    other = Solution(MethodName.DISTRIBUTIVE, "", steps=[_step("47 * 53", 2491)])
    wrong = Solution(MethodName.NEAR_100, "", steps=[_step("47 * 54", 2538)])
    assert cross_validate(47, 53, [good, other])
    assert not cross_validate(47, 53, [good, wrong])
    assert not cross_validate(47, 53, [])
    assert not cross_validate(47, 53, [Solution(MethodName.SQUARING, "")])


def test_infer_operator() -> None:
    assert infer_operator(_step("1 - 1", 0, explanation="Subtract the products")) == "-"
    assert infer_operator(_step("1 + 1", 2, explanation="Add the products")) == "+"
    assert infer_operator(_step("2 * 2", 4, explanation="Regroup the factors")) == "*"
    assert infer_operator(_step("2", 2, explanation="Done")) is None
