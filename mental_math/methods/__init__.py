"""Calculation methods and their shared decomposition helpers."""

from .base import (
    BaseMethod,
    generate_recursive_sub_steps,
    is_trivial_multiplication,
)
from .difference_squares import DifferenceSquaresMethod
from .distributive import DistributiveMethod
from .factorization import FactorizationMethod
from .multiply_by_111 import MultiplyBy111Method
from .near_100 import Near100Method
from .near_power_10 import NearPower10Method
from .near_squares import NearSquaresMethod
from .registry import METHOD_CLASSES, REGISTRY_ORDER, build_methods, method_class
from .squaring import SquaringMethod
from .squaring_end_5 import SquaringEnd5Method
from .sum_to_ten import SumToTenMethod

__all__ = [
    "BaseMethod",
    "generate_recursive_sub_steps",
    "is_trivial_multiplication",
    "DistributiveMethod",
    "DifferenceSquaresMethod",
    "NearPower10Method",
    "FactorizationMethod",
    "SquaringMethod",
    "Near100Method",
    "SumToTenMethod",
    "SquaringEnd5Method",
    "NearSquaresMethod",
    "MultiplyBy111Method",
    "METHOD_CLASSES",
    "REGISTRY_ORDER",
    "build_methods",
    "method_class",
]
