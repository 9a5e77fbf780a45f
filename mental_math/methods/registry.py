"""Closed, ordered set of calculation methods.

The order is the selector's tie-break: when two methods reach the same
composite score, the one listed first wins.
"""
from __future__ import annotations

from typing import Optional

from ..cache import BoundedCache
from ..solution import MethodName
from .base import BaseMethod
from .difference_squares import DifferenceSquaresMethod
from .distributive import DistributiveMethod
from .factorization import FactorizationMethod
from .multiply_by_111 import MultiplyBy111Method
from .near_100 import Near100Method
from .near_power_10 import NearPower10Method
from .near_squares import NearSquaresMethod
from .squaring import SquaringMethod
from .squaring_end_5 import SquaringEnd5Method
from .sum_to_ten import SumToTenMethod

__all__ = ["METHOD_CLASSES", "REGISTRY_ORDER", "build_methods", "method_class"]

METHOD_CLASSES: tuple[type[BaseMethod], ...] = (
    DistributiveMethod,
    DifferenceSquaresMethod,
    NearPower10Method,
    FactorizationMethod,
    SquaringMethod,
    Near100Method,
    SumToTenMethod,
    SquaringEnd5Method,
    NearSquaresMethod,
    MultiplyBy111Method,
)

REGISTRY_ORDER: tuple[MethodName, ...] = tuple(cls.name for cls in METHOD_CLASSES)


def build_methods(factorization_cache: Optional[BoundedCache] = None) -> tuple[BaseMethod, ...]:
    """Fresh instances of every method in registry order."""
    return tuple(
        cls(cache=factorization_cache) if cls is FactorizationMethod else cls()
        for cls in METHOD_CLASSES
    )


def method_class(name: MethodName | str) -> type[BaseMethod]:
    key = MethodName(name)
    for cls in METHOD_CLASSES:
        if cls.name is key:
            return cls
    raise KeyError(key)  # pragma: no cover - every MethodName is registered
