"""
Unit tests for the analytic functions, their combinations and integration.
"""

from __future__ import annotations

import math

import pytest

from pytabulate.exceptions import InvalidArgumentError
from pytabulate.functions import (
    Composition,
    Cos,
    Exp,
    Function,
    Log,
    Mult,
    Power,
    Scale,
    Shift,
    Sin,
    Sum,
    composition,
    integrate,
    mult,
    power,
    scale,
    shift,
    sum_of,
)
from pytabulate.tabulated import ArrayTabulatedFunction


class Line(Function):
    """``2x + 1`` on ``[-1, 3]``."""

    def domain_left(self):
        return -1.0

    def domain_right(self):
        return 3.0

    def value_at(self, x):
        return 2 * x + 1


class TestElementaryFunctions:
    """Tests for Sin, Cos, Exp and Log."""

    @pytest.mark.parametrize("function", [Sin(), Cos(), Exp()])
    def test_whole_line_domain(self, function):
        """Test that the trigonometric and exponential functions are defined everywhere."""
        assert function.domain_left() == -math.inf
        assert function.domain_right() == math.inf

    def test_values(self):
        """Test a few known values."""
        assert Sin().value_at(math.pi / 2) == 1.0
        assert Cos()(0.0) == 1.0
        assert Exp()(1.0) == math.e
        assert Log(10)(1000.0) == pytest.approx(3.0)
        assert Log()(math.e) == 1.0

    def test_undefined_values(self):
        """Test NaN and infinite results."""
        assert math.isnan(Sin().value_at(math.inf))
        assert math.isnan(Cos().value_at(-math.inf))
        assert Exp().value_at(1000.0) == math.inf
        assert math.isnan(Log().value_at(0.0))
        assert math.isnan(Log().value_at(-1.0))

    def test_log_domain(self):
        """Test the logarithm's domain."""
        assert Log(2).domain_left() == 0.0
        assert Log(2).domain_right() == math.inf

    @pytest.mark.parametrize("base", [0.0, -2.0, 1.0])
    def test_log_invalid_base(self, base):
        """Test that the base must be positive and different from one."""
        with pytest.raises(InvalidArgumentError, match="Logarithm base must be positive"):
            Log(base)

    def test_repr(self):
        """Test representations used in log messages."""
        assert repr(Sin()) == "Sin()"
        assert repr(Log(2)) == "Log(base=2)"


class TestCombinations:
    """Tests for the analytic combinations."""

    def test_shift(self):
        """Test translation of domain and values."""
        shifted = shift(Line(), 2.0, -1.0)
        assert isinstance(shifted, Shift)
        assert shifted.domain_left() == 1.0
        assert shifted.domain_right() == 5.0
        assert shifted(2.0) == Line()(0.0) - 1.0

    def test_scale(self):
        """Test stretching of domain and values."""
        scaled = scale(Line(), 2.0, 3.0)
        assert isinstance(scaled, Scale)
        assert scaled.domain_left() == -2.0
        assert scaled.domain_right() == 6.0
        assert scaled(4.0) == 3.0 * Line()(2.0)

    def test_scale_mirrors(self):
        """Test that a negative scale mirrors the domain."""
        mirrored = Scale(Line(), -1.0, 1.0)
        assert mirrored.domain_left() == -3.0
        assert mirrored.domain_right() == 1.0
        assert mirrored(-3.0) == Line()(3.0)

    def test_scale_collapses(self):
        """Test that a zero scale collapses the domain to the origin."""
        collapsed = Scale(Line(), 0.0, 2.0)
        assert collapsed.domain_left() == 0.0
        assert collapsed.domain_right() == 0.0
        assert collapsed(0.0) == 2.0

    def test_power(self):
        """Test raising to a power."""
        squared = power(Line(), 2)
        assert isinstance(squared, Power)
        assert squared(1.0) == 9.0
        assert squared.domain_left() == -1.0
        assert math.isnan(Power(Line(), 0.5)(-1.0))
        assert Power(Exp(), 2.0)(1000.0) == math.inf

    def test_sum_and_product(self):
        """Test pointwise combinations over the domain intersection."""
        total = sum_of(Line(), Log())
        product = mult(Line(), Sin())
        assert isinstance(total, Sum)
        assert isinstance(product, Mult)
        assert total.domain_left() == 0.0
        assert total.domain_right() == 3.0
        assert total(math.e) == pytest.approx(2 * math.e + 2)
        assert product.domain_left() == -1.0
        assert product(math.pi / 2) == pytest.approx(math.pi + 1)

    def test_composition(self):
        """Test composing two functions."""
        composed = composition(Exp(), Line())
        assert isinstance(composed, Composition)
        assert composed.domain_left() == -1.0
        assert composed.domain_right() == 3.0
        assert composed(0.0) == math.e

    def test_compose_with_tabulated(self):
        """Test that tabulated functions combine like any other function."""
        table = ArrayTabulatedFunction([(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)])
        combined = Sum(table, Shift(table, 0.0, 1.0))
        assert combined(1.5) == pytest.approx(2 * 2.5 + 1)
        assert combined.domain_right() == 2.0


class TestIntegrate:
    """Tests for trapezoid-rule integration."""

    def test_exponential(self):
        """Test the integral of exp over [0, 1]."""
        assert integrate(Exp(), 0.0, 1.0, 1e-3) == pytest.approx(math.e - 1, abs=1e-6)

    def test_linear_is_exact(self):
        """Test that the trapezoid rule integrates a line exactly."""
        assert integrate(Line(), 0.0, 2.0, 0.5) == pytest.approx(6.0)

    def test_partial_last_panel(self):
        """Test that the last panel stops at the upper bound."""
        assert integrate(Line(), 0.0, 1.0, 0.3) == pytest.approx(2.0)

    def test_tabulated(self):
        """Test integrating a tabulated function."""
        table = ArrayTabulatedFunction([(0.0, 0.0), (1.0, 2.0), (2.0, 0.0)])
        assert integrate(table, 0.0, 2.0, 0.25) == pytest.approx(2.0)

    def test_outside_domain(self):
        """Test that the bounds must lie inside the domain."""
        with pytest.raises(InvalidArgumentError, match="exceeds the domain"):
            integrate(Line(), -2.0, 1.0, 0.1)
        with pytest.raises(InvalidArgumentError, match="exceeds the domain"):
            integrate(Log(), -1.0, 1.0, 0.1)

    def test_empty_interval(self):
        """Test that the lower bound must be below the upper one."""
        with pytest.raises(InvalidArgumentError, match="must be less than the right one"):
            integrate(Line(), 1.0, 1.0, 0.1)

    @pytest.mark.parametrize("step", [0.0, -0.1])
    def test_non_positive_step(self, step):
        """Test that the step must be positive."""
        with pytest.raises(InvalidArgumentError, match="step must be positive"):
            integrate(Line(), 0.0, 1.0, step)
