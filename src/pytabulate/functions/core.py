"""
Scalar function capability.

Provides the abstract base every analytic and tabulated function implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Function(ABC):
    """
    Base class for real functions of one variable.

    A function knows the closed interval it is defined on and can be evaluated
    at any abscissa. Implementations return ``nan`` where the value is undefined
    rather than raising.
    """

    @abstractmethod
    def domain_left(self) -> float:
        """Left border of the domain."""

    @abstractmethod
    def domain_right(self) -> float:
        """Right border of the domain."""

    @abstractmethod
    def value_at(self, x: float) -> float:
        """Value of the function at ``x``."""

    def __call__(self, x: float) -> float:
        return self.value_at(x)
