import numpy as np
import pytest
from numpy.testing import assert_allclose

from ..merit import accept_or_refine, lagrangian, line_search, merit, merit_derivative, penalized_lagrangian
from ..problem import Problem
from ..settings import DEFAULT_OPTIONS


class TestLagrangian:

    def setup_method(self):
        self.pb = Problem(
            lambda x: x[0] ** 2.0 + x[1] ** 2.0,
            [lambda x: x[0] - 1.0],
            [lambda x: x[1] - 0.5],
            [-1.0, -1.0],
            [1.0, 1.0],
        )
        self.options = dict(DEFAULT_OPTIONS)
        self.lam = np.array([0.5])
        self.mu = np.array([2.0])

    def test_lagrangian(self):
        lag = lagrangian(self.pb, self.lam, self.mu)
        assert_allclose(lag([2.0, 1.0]), 5.0 + 0.5 + 1.0)
        assert_allclose(lag([0.0, 0.0]), -0.5 - 1.0)

    def test_penalized_lagrangian(self):
        lag = penalized_lagrangian(self.pb, self.lam, self.mu, self.options)
        assert_allclose(lag([2.0, 1.0]), 5.0 + 0.5 + 1.0 + 0.7055 * (0.5 + 0.5))

        # Satisfied inequality constraints are not penalized.
        assert_allclose(lag([0.0, 0.0]), 1.0 + 0.7055 * 0.5)

    def test_merit(self):
        fun = merit(self.pb, self.lam, -self.mu, self.options)
        assert_allclose(fun([2.0, 1.0]), 5.0 + 0.6 * 1.0 + 2.1 * 0.5)
        assert_allclose(fun([0.0, 0.0]), 2.1 * 0.5)

    @pytest.mark.parametrize('x,expected', [
        ([2.0, 1.0], 2.0 + 0.6 - 2.1),
        ([0.0, 1.0], -2.0 - 2.1),
        ([1.0, 0.5], 1.0 + 0.6 + 2.1),
        ([0.0, 0.0], 2.1),
    ])
    def test_merit_derivative(self, x, expected):
        deriv = merit_derivative(self.pb, np.array([1.0, -1.0]), self.lam, self.mu, self.options)
        assert_allclose(deriv(x), expected, atol=1e-8)

    def test_merit_derivative_finite_differences(self):
        # Away from the kinks, the derivative matches the finite differences.
        x = np.array([2.0, 1.0])
        d = np.array([0.3, -0.2])
        fun = merit(self.pb, self.lam, self.mu, self.options)
        deriv = merit_derivative(self.pb, d, self.lam, self.mu, self.options)
        h = 1e-6
        assert_allclose(deriv(x), (fun(x + h * d) - fun(x - h * d)) / (2.0 * h), atol=1e-6)


class TestLineSearch:

    def setup_method(self):
        self.options = dict(DEFAULT_OPTIONS)

    def test_minimum(self):
        step_size = line_search(lambda x: (x[0] - 0.5) ** 2.0, np.array([0.0]), np.array([1.0]), self.options)
        assert_allclose(step_size, 0.5, atol=1e-12)

    def test_increasing(self):
        step_size = line_search(lambda x: x[0], np.array([0.0]), np.array([1.0]), self.options)
        assert step_size == 0.0

    def test_decreasing(self):
        step_size = line_search(lambda x: -x[0], np.array([0.0]), np.array([1.0]), self.options)
        assert_allclose(step_size, 0.99)

    def test_nan(self):
        step_size = line_search(lambda x: np.nan if x[0] > 0.3 else -x[0], np.array([0.0]), np.array([1.0]), self.options)
        assert_allclose(step_size, 0.3)

    def test_grid(self):
        self.options['line_search_step'] = 0.25
        step_size = line_search(lambda x: -x[0], np.array([0.0]), np.array([1.0]), self.options)
        assert step_size == 0.75


class TestAcceptOrRefine:

    def setup_method(self):
        self.pb = Problem(lambda x: (x[0] - 1.0) ** 2.0, dl=[-4.0], du=[4.0])
        self.options = dict(DEFAULT_OPTIONS)
        self.lam = np.empty(0)
        self.mu = np.empty(0)

    def test_accept(self):
        x = accept_or_refine(self.pb, [0.5], [0.0], 0.5, [1.0], self.lam, self.mu, self.options)
        assert_allclose(x, [0.5])

    def test_refine(self):
        x = accept_or_refine(self.pb, [2.0], [0.0], 1.0, [2.0], self.lam, self.mu, self.options)
        assert_allclose(x, [1.0], atol=1e-12)

    @pytest.mark.parametrize('d', [[2.0], [-3.0], [3.0], [10.0]])
    def test_best_merit(self, d):
        # A rejected trial point is replaced by the best grid point.
        x = accept_or_refine(self.pb, d, [0.0], 1.0, d, self.lam, self.mu, self.options)
        fun = merit(self.pb, self.lam, self.mu, self.options)
        grid = np.arange(0.0, 1.0, self.options['line_search_step'])
        best = min(fun(np.array(d) * step_size) for step_size in grid)
        assert fun(x) <= best
