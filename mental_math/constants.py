"""Package‑wide constants, scoring weights and demo assets."""
from __future__ import annotations

from dataclasses import dataclass

# Largest operand magnitude accepted by the selector.
ABSOLUTE_MAX_VALUE = 100_000_000

# 2**53 - 1: products beyond this are rejected so results stay exact in
# double-precision consumers of the JSON output.
MAX_SAFE_INTEGER = 9_007_199_254_740_991

# Depth cap for recursive sub-step breakdowns.
MAX_SUBSTEP_DEPTH = 3

FACTORIZATION_CACHE_SIZE = 1000

MAX_EXPRESSION_LENGTH = 500

# Powers of ten a number may be "near" for the near-power-of-10 method.
POWERS_OF_TEN = (10, 100, 1000, 10000)


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the composite score (lower composite = better method)."""

    cost: float = 0.6
    quality: float = 0.4

    def composite(self, cost: float, quality: float) -> float:
        return cost * self.cost + (1 - quality) * self.quality


@dataclass(frozen=True)
class ExplanationThresholds:
    """Thresholds of the "why not optimal" narrative cascade.

    ``significant_cost_diff``  cost gap above which effort is framed as a percentage
    ``moderate_cost_diff``     cost gap above which a plain cost comparison is given
    ``quality_diff``           quality deficit beyond which the alternative is "less elegant"
    ``composite_diff``         composite gap below which the score comparison is always added
    """

    significant_cost_diff: float = 1.0
    moderate_cost_diff: float = 0.3
    quality_diff: float = 0.2
    composite_diff: float = 0.5


DEFAULT_WEIGHTS = ScoringWeights()
DEFAULT_THRESHOLDS = ExplanationThresholds()

# Pairs shown by ``mental-math --demo``: one per headline method.
DEMO_PAIRS: tuple[tuple[int, int], ...] = (
    (47, 53),
    (97, 103),
    (73, 73),
    (98, 47),
    (24, 35),
)

__all__ = [
    "ABSOLUTE_MAX_VALUE",
    "MAX_SAFE_INTEGER",
    "MAX_SUBSTEP_DEPTH",
    "FACTORIZATION_CACHE_SIZE",
    "MAX_EXPRESSION_LENGTH",
    "POWERS_OF_TEN",
    "ScoringWeights",
    "ExplanationThresholds",
    "DEFAULT_WEIGHTS",
    "DEFAULT_THRESHOLDS",
    "DEMO_PAIRS",
]
