"""Safe arithmetic evaluation of step expressions.

Step expressions are restricted to integers, decimals, ``+ - * /`` and
parentheses. The text is whitelisted first and only then handed to SymPy,
which parses it with exact integer/rational arithmetic.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Union

from .constants import MAX_EXPRESSION_LENGTH
from .errors import ExpressionError

__all__ = [
    "evaluate_expression",
    "split_terms",
    "split_factors",
    "is_literal",
    "literal_value",
]

Number = Union[int, float]

_ALLOWED_CHARS = re.compile(r"^[0-9+\-*/().\s]+$")
_LITERAL = re.compile(r"^[+-]?\d+(\.\d+)?$")


def evaluate_expression(expression: str) -> Number:
    """Evaluate ``expression`` and return an ``int`` when the value is integral.

    Raises :class:`ExpressionError` for anything outside the four-operation
    grammar, for division by zero and for malformed input.
    """
    if not isinstance(expression, str):
        raise ExpressionError("Expression must be a string")
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(
            f"Expression exceeds maximum length of {MAX_EXPRESSION_LENGTH} characters"
        )
    if not expression.strip():
        raise ExpressionError("Expression cannot be empty")
    if not _ALLOWED_CHARS.match(expression):
        raise ExpressionError(
            "Expression contains invalid characters. "
            "Only numbers, +, -, *, /, (, ), and . are allowed"
        )
    normalized = re.sub(r"\s+", "", expression)
    if "**" in normalized or "//" in normalized:
        raise ExpressionError(f"Unsupported operator in expression '{expression}'")
    return _evaluate(normalized)


@lru_cache(maxsize=4096)
def _evaluate(normalized: str) -> Number:
    import sympy as sp
    from sympy.parsing.sympy_parser import parse_expr, standard_transformations

    try:
        expr = parse_expr(normalized, transformations=standard_transformations, evaluate=True)
    except Exception as exc:
        raise ExpressionError(f"Could not parse expression '{normalized}': {exc}") from exc

    if expr.has(sp.zoo, sp.nan, sp.oo, -sp.oo):
        raise ExpressionError("Division by zero")
    if not getattr(expr, "is_number", False):
        raise ExpressionError(f"Expression '{normalized}' is not numeric")

    if expr.is_Integer:
        return int(expr)
    value = float(expr)
    # Prefer exact integers when close
    if abs(value - round(value)) < 1e-9:
        return int(round(value))
    return value


def _binary_positions(expression: str, operators: str) -> list[int]:
    """Return indices of depth-0 binary ``operators`` in ``expression``."""
    positions: list[int] = []
    depth = 0
    prev = ""
    for idx, ch in enumerate(expression):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and ch in operators:
            # '+'/'-' right after another operator or '(' is a unary sign
            if ch in "+-" and (prev == "" or prev in "+-*/("):
                pass
            else:
                positions.append(idx)
        if not ch.isspace():
            prev = ch
    return positions


def _strip_outer_parens(text: str) -> str:
    text = text.strip()
    while text.startswith("(") and text.endswith(")"):
        depth = 0
        for idx, ch in enumerate(text):
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            if depth == 0 and idx < len(text) - 1:
                return text
        text = text[1:-1].strip()
    return text


def split_terms(expression: str) -> list[tuple[int, str]]:
    """Split at top-level ``+``/``-`` into ``(sign, term)`` pairs.

    ``"4900 - 2 * 70 * 3 + 9"`` → ``[(1, "4900"), (-1, "2 * 70 * 3"), (1, "9")]``.
    """
    body = _strip_outer_parens(expression)
    cuts = _binary_positions(body, "+-")
    terms: list[tuple[int, str]] = []
    start, sign = 0, 1
    for pos in cuts:
        terms.append((sign, body[start:pos].strip()))
        sign = -1 if body[pos] == "-" else 1
        start = pos + 1
    terms.append((sign, body[start:].strip()))
    return terms


def split_factors(expression: str) -> list[str]:
    """Split a single term at top-level ``*``."""
    body = _strip_outer_parens(expression)
    cuts = _binary_positions(body, "*")
    factors: list[str] = []
    start = 0
    for pos in cuts:
        factors.append(body[start:pos].strip())
        start = pos + 1
    factors.append(body[start:].strip())
    return factors


def is_literal(term: str) -> bool:
    """True for a bare (possibly parenthesised, signed) number."""
    return bool(_LITERAL.match(re.sub(r"\s+", "", _strip_outer_parens(term))))


def literal_value(term: str) -> Number:
    return evaluate_expression(_strip_outer_parens(term))
