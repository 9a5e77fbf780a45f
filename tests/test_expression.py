from __future__ import annotations

import pytest

from mental_math.errors import ExpressionError
from mental_math.expression import (
    evaluate_expression,
    is_literal,
    split_factors,
    split_terms,
)


def test_evaluate_respects_precedence() -> None:
    assert evaluate_expression("2 + 3 * 4") == 14
    assert evaluate_expression("(50 - 3) * 53") == 2491


def test_evaluate_returns_int_for_integral_division() -> None:
    value = evaluate_expression("10 / 2")
    assert value == 5
    assert isinstance(value, int)


def test_evaluate_keeps_fractional_results() -> None:
    assert evaluate_expression("7 / 2") == pytest.approx(3.5)


def test_evaluate_handles_signed_operands() -> None:
    assert evaluate_expression("(-3) * 5") == -15
    assert evaluate_expression("-1 * 4606") == -4606


@pytest.mark.parametrize(
    "expr",
    [
        "",
        "   ",
        "2 ** 3",
        "7 // 2",
        "__import__('os')",
        "x + 1",
        "1 / 0",
        "(1 + 2",
        "1 +" * 200,
    ],
)
def test_evaluate_rejects_bad_input(expr: str) -> None:
    with pytest.raises(ExpressionError):
        evaluate_expression(expr)


def test_split_terms_keeps_signs() -> None:
    assert split_terms("4900 - 2 * 70 * 3 + 9") == [
        (1, "4900"),
        (-1, "2 * 70 * 3"),
        (1, "9"),
    ]


def test_split_terms_ignores_nested_and_unary_signs() -> None:
    assert split_terms("(-10) * (-10) - 3 * 3") == [(1, "(-10) * (-10)"), (-1, "3 * 3")]
    assert split_terms("100 * ((-3) + 3)") == [(1, "100 * ((-3) + 3)")]


def test_split_factors() -> None:
    assert split_factors("3 * (8 * 35)") == ["3", "(8 * 35)"]
    assert split_factors("(8 * 35)") == ["8", "35"]


def test_is_literal() -> None:
    assert is_literal("10000")
    assert is_literal("(-50)")
    assert not is_literal("50 * 3")
    assert not is_literal("(8 * 35)")
