"""Command‑line interface wrapper around :pyfunc:`mental_math.select_optimal_method`."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from . import constants as C
from .errors import InputValidationError
from .methods.registry import METHOD_CLASSES
from .selector import MethodRanking, MethodSelector
from .solution import CalculationStep, MethodName

__all__ = ["main"]


def _number(text: str) -> int | float:
    """Parse an operand leniently; range and integrality checks happen in the selector."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None


def _parse_cli(argv: list[str] | None = None) -> argparse.Namespace:  # noqa: D401 – imperative mood
    parser = argparse.ArgumentParser(description="Pick the best mental multiplication method ✔")
    parser.add_argument("num1", nargs="?", type=_number, help="First operand")
    parser.add_argument("num2", nargs="?", type=_number, help="Second operand")
    parser.add_argument(
        "--methods",
        nargs="+",
        choices=[m.value for m in MethodName],
        metavar="METHOD",
        help="Restrict the ranking to these methods (falls back to all when none applies)",
    )
    parser.add_argument("--json", action="store_true", help="Print the ranking as JSON")
    parser.add_argument("--out", help="Write JSON output to file")
    parser.add_argument("--demo", action="store_true", help="Walk through the built-in demo pairs")
    parser.add_argument(
        "--list-methods", action="store_true", help="List available methods and exit"
    )
    parser.add_argument(
        "--log-level",
        choices=["WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging level for mental_math",
    )
    ns = parser.parse_args(argv)
    if not (ns.demo or ns.list_methods) and (ns.num1 is None or ns.num2 is None):
        parser.error("NUM1 and NUM2 are required unless using --demo or --list-methods")
    return ns


def _render_step(step: CalculationStep, index: str) -> list[str]:
    pad = "   " * step.depth
    lines = [f"{pad}{index}. {step.explanation}", f"{pad}   {step.expression} = {step.result}"]
    for i, sub in enumerate(step.sub_steps, start=1):
        lines += _render_step(sub, f"{index}.{i}")
    return lines


def render_ranking(ranking: MethodRanking) -> str:
    """Plain-text walkthrough: optimal derivation, alternatives, summary."""
    best = ranking.optimal
    lines = [
        f"Optimal method: {best.display_name} (composite {best.composite_score:.2f})",
        best.solution.optimal_reason,
        "",
    ]
    for i, step in enumerate(best.solution.steps, start=1):
        lines += _render_step(step, str(i))
    lines += ["", f"Answer: {ranking.answer}"]
    if ranking.alternatives:
        lines += ["", "Alternatives:"]
        for alt in ranking.alternatives:
            lines.append(f"- {alt.display_name} (composite {alt.composite_score:.2f})")
            lines.append(f"  {alt.why_not_optimal}")
    lines += ["", ranking.comparison_summary]
    return "\n".join(lines)


def _list_methods() -> str:
    return "\n".join(f"{cls.name.value:<20} {cls.display_name}" for cls in METHOD_CLASSES)


def main(argv: list[str] | None = None) -> None:  # noqa: D401 – imperative mood
    ns = _parse_cli(argv)

    logging.basicConfig(level=logging.WARNING)
    level = getattr(logging, ns.log_level)
    pkg_logger = logging.getLogger("mental_math")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(logging.BASIC_FORMAT))
    handler.setLevel(level)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(level)

    if ns.list_methods:
        print(_list_methods())
        return

    pairs = list(C.DEMO_PAIRS) if ns.demo else [(ns.num1, ns.num2)]
    selector = MethodSelector()
    rankings: list[MethodRanking] = []
    for num1, num2 in pairs:
        try:
            rankings.append(selector.select_optimal_method(num1, num2, ns.methods))
        except InputValidationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(2)

    payload: Any = [asdict(r) for r in rankings] if ns.demo else asdict(rankings[0])
    json_out = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    if ns.out:
        Path(ns.out).write_text(json_out, "utf-8")
        print(f"✔ Ranking JSON written to {ns.out}")

    if ns.json:
        print(json_out)
    elif not ns.out:
        print("\n\n".join(render_ranking(r) for r in rankings))


if __name__ == "__main__":  # pragma: no cover
    main()
