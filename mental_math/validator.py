"""Validation of calculation steps and complete solutions.

Every solution a method generates passes through :func:`validate_solution`
before it leaves the method, and the selector additionally runs
:func:`cross_validate` over all solutions it generated for one problem.
Neither function raises: callers decide what an invalid result means.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Optional, Sequence

from .constants import MAX_SUBSTEP_DEPTH
from .errors import ExpressionError
from .expression import (
    Number,
    evaluate_expression,
    is_literal,
    literal_value,
    split_factors,
    split_terms,
)
from .solution import CalculationStep, Solution, ValidationResult

__all__ = ["validate_step", "validate_solution", "cross_validate", "infer_operator"]

logger = logging.getLogger(__name__)

TOLERANCE = 1e-4

_OPERATOR_WORDS = (
    ("-", re.compile(r"\b(subtract\w*|difference|minus)\b", re.IGNORECASE)),
    ("+", re.compile(r"\b(add\w*|sum|plus)\b", re.IGNORECASE)),
    ("*", re.compile(r"\b(multipl\w*|product|regroup\w*|times)\b", re.IGNORECASE)),
)


def infer_operator(step: CalculationStep) -> Optional[str]:
    """Return the operator a step's narrative states, if any."""
    for op, pattern in _OPERATOR_WORDS:
        if pattern.search(step.explanation or ""):
            return op
    return None


def _close(a: Number, b: Number) -> bool:
    return abs(a - b) <= TOLERANCE


def _combine_terms(step: CalculationStep) -> Optional[Number]:
    """Recombine sub-step results along the parent's top-level structure.

    Sub-steps are aligned either with every top-level term, or with the
    non-literal terms only (literal terms then contribute their own value).
    Returns ``None`` when no alignment exists.
    """
    results = [s.result for s in step.sub_steps]
    terms = split_terms(step.expression)

    if len(terms) > 1:
        if len(results) == len(terms):
            return sum(sign * r for (sign, _), r in zip(terms, results))
        open_terms = [t for t in terms if not is_literal(t[1])]
        if open_terms and len(open_terms) == len(results):
            total: Number = 0
            it = iter(results)
            for sign, term in terms:
                total += sign * (literal_value(term) if is_literal(term) else next(it))
            return total
        return None

    factors = split_factors(step.expression)
    if len(factors) > 1:
        if len(results) == len(factors):
            return math.prod(results)
        open_factors = [f for f in factors if not is_literal(f)]
        if open_factors and len(open_factors) == len(results):
            product: Number = 1
            it = iter(results)
            for factor in factors:
                product *= literal_value(factor) if is_literal(factor) else next(it)
            return product
    return None


def _chain_recombines(step: CalculationStep) -> bool:
    """True when the last sub-step combines results of the sub-steps before it.

    The last sub-step must end at the parent's value, and every top-level
    term (or factor, for a single product) must be a literal. At least one
    of those literals has to be an earlier sibling's result.
    """
    *earlier, last = step.sub_steps
    if not earlier or not _close(last.result, step.result):
        return False
    terms = split_terms(last.expression)
    parts = [t for _, t in terms] if len(terms) > 1 else split_factors(last.expression)
    if len(parts) < 2 or not all(is_literal(p) for p in parts):
        return False
    values = [literal_value(p) for p in parts]
    return any(_close(v, s.result) for v in values for s in earlier)


def _check_recombination(step: CalculationStep) -> Optional[str]:
    try:
        combined = _combine_terms(step)
    except ExpressionError:
        combined = None
    if combined is not None and _close(combined, step.result):
        return None
    try:
        if _chain_recombines(step):
            return None
    except ExpressionError:
        pass
    op = infer_operator(step)
    how = f"combined with '{op}'" if op else "recombined"
    got = combined if combined is not None else step.sub_steps[-1].result
    return (
        f"Sub-steps of \"{step.expression}\" {how} give {got}, "
        f"but the step claims {step.result}"
    )


def validate_step(step: CalculationStep) -> ValidationResult:
    """Validate one step and, recursively, its sub-steps.

    Checks: the expression evaluates to ``step.result``; an explanation is
    present (warning only); sub-steps sit exactly one level deeper, within
    the depth cap, are themselves valid, and recombine into the result.
    """
    errors: list[str] = []
    warnings: list[str] = []

    try:
        computed = evaluate_expression(step.expression)
        if not _close(computed, step.result):
            errors.append(
                f'Expression "{step.expression}" evaluates to {computed} '
                f"but step claims result is {step.result} "
                f"(difference: {abs(computed - step.result):.6f})"
            )
    except ExpressionError as exc:
        errors.append(f'Failed to evaluate expression "{step.expression}": {exc}')

    if not step.explanation or not step.explanation.strip():
        warnings.append("Step has no explanation")

    if step.depth > MAX_SUBSTEP_DEPTH:
        errors.append(f"Step depth {step.depth} exceeds maximum of {MAX_SUBSTEP_DEPTH}")

    if step.sub_steps:
        for index, sub in enumerate(step.sub_steps, start=1):
            if sub.depth != step.depth + 1:
                errors.append(
                    f"Sub-step {index} has depth {sub.depth}, expected {step.depth + 1}"
                )
            sub_validation = validate_step(sub)
            if not sub_validation.valid:
                errors.append(
                    f"Sub-step {index} (depth {sub.depth}) is invalid: "
                    + "; ".join(sub_validation.errors)
                )
            if sub_validation.warnings:
                warnings.append(
                    f"Sub-step {index} warnings: " + "; ".join(sub_validation.warnings)
                )
        problem = _check_recombination(step)
        if problem:
            errors.append(problem)

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def _is_logical_progression(prev: CalculationStep, curr: CalculationStep) -> bool:
    # Heuristic only: the next step usually mentions the previous result
    return str(abs(prev.result)) in curr.expression or prev.result == curr.result


def validate_solution(num1: int, num2: int, solution: Solution) -> ValidationResult:
    """Validate a complete solution against ``num1 × num2``."""
    errors: list[str] = []
    warnings: list[str] = []

    if not solution.steps:
        return ValidationResult(valid=False, errors=["Solution has no steps"])

    expected = num1 * num2
    final = solution.steps[-1].result
    if final != expected:
        errors.append(
            f"Final answer {final} does not match direct multiplication "
            f"{num1} × {num2} = {expected}"
        )

    for index, step in enumerate(solution.steps, start=1):
        if step.depth != 0:
            errors.append(f"Step {index} is top-level but has depth {step.depth}")
        step_validation = validate_step(step)
        if not step_validation.valid:
            errors.append(f"Step {index} is invalid: " + "; ".join(step_validation.errors))
        warnings.extend(f"Step {index}: {w}" for w in step_validation.warnings)

    for index in range(1, len(solution.steps)):
        prev, curr = solution.steps[index - 1], solution.steps[index]
        if not _is_logical_progression(prev, curr):
            warnings.append(
                f"Step {index + 1} may not follow logically from step {index}. "
                f'Previous result: {prev.result}, Current expression: "{curr.expression}"'
            )

    if errors:
        logger.debug("solution %s for %s × %s invalid: %s", solution.method, num1, num2, errors)
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def cross_validate(num1: int, num2: int, solutions: Sequence[Solution]) -> bool:
    """True when every solution ends at the same value, namely ``num1 × num2``."""
    if not solutions:
        return False
    expected = num1 * num2
    finals = [s.final_result for s in solutions]
    if finals[0] is None or finals[0] != expected:
        return False
    return all(f is not None and f == finals[0] for f in finals)
