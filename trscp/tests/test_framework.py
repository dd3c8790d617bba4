import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from .. import framework
from ..framework import bfgs_update, linear_iterations, update_trust_region
from ..optimality import is_stationary
from ..problem import Problem
from ..settings import DEFAULT_OPTIONS
from ..utils import SubproblemSolverError
from . import assert_array_less_equal


def disks_problem():
    return Problem(
        lambda x: x[0] * x[1],
        [
            lambda x: (x[0] - 2.0) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
            lambda x: (x[0] - 2.5) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
        ],
        [lambda x: x[0] + x[1] - 4.0],
        [-4.0, -4.0],
        [4.0, 4.0],
    )


class TestBFGSUpdate:

    def setup_method(self):
        self.options = dict(DEFAULT_OPTIONS)
        self.rng = np.random.default_rng(0)

    @pytest.mark.parametrize('n', [1, 2, 5, 10])
    def test_symmetry_and_secant(self, n):
        a = self.rng.standard_normal((n, n))
        hess = a @ a.T + np.eye(n)
        s = self.rng.standard_normal(n)
        y = hess @ s + 0.1 * s
        hess_new = bfgs_update(hess, s, y, self.options)
        assert_array_equal(hess_new, hess_new.T)
        assert_allclose(hess_new @ s, y, rtol=1e-8, atol=1e-8)

    def test_symmetry_indefinite(self):
        hess = np.array([[1.0, 2.0], [2.0, -3.0]])
        hess_new = bfgs_update(hess, np.array([1.0, 0.5]), np.array([-0.3, 2.0]), self.options)
        assert_array_equal(hess_new, hess_new.T)

    def test_skip_null_curvature(self):
        hess = np.eye(2)
        assert_array_equal(bfgs_update(hess, np.array([1.0, 0.0]), np.array([0.0, 1.0]), self.options), hess)
        assert_array_equal(bfgs_update(hess, np.array([1.0, 0.0]), np.zeros(2), self.options), hess)
        assert_array_equal(bfgs_update(hess, np.zeros(2), np.array([1.0, 1.0]), self.options), hess)

    def test_skip_null_hessian_curvature(self):
        hess = np.array([[0.0, 0.0], [0.0, 1.0]])
        assert_array_equal(bfgs_update(hess, np.array([1.0, 0.0]), np.array([1.0, 0.0]), self.options), hess)

    def test_wrong_dimensions(self):
        with pytest.raises(ValueError):
            bfgs_update(np.eye(2), np.ones(3), np.ones(3), self.options)
        with pytest.raises(ValueError):
            bfgs_update(np.eye(2), np.ones(2), np.ones(3), self.options)


class TestUpdateTrustRegion:

    def setup_method(self):
        self.pb = Problem(lambda x: x[0], dl=[-1.0, -2.0], du=[1.0, 2.0])
        self.options = dict(DEFAULT_OPTIONS)

    def test_shrink(self):
        dl, du = update_trust_region(self.pb, [0.1, 0.0], [0.0, 0.0], self.options)
        assert_allclose(dl, [-0.4, -0.8])
        assert_allclose(du, [0.4, 0.8])

    def test_unchanged(self):
        dl, du = update_trust_region(self.pb, [1.5, 1.0], [1.0, 0.0], self.options)
        assert_array_equal(dl, [-1.0, -2.0])
        assert_array_equal(du, [1.0, 2.0])

    def test_enlarge(self):
        dl, du = update_trust_region(self.pb, [0.9, -0.4], [0.0, 0.0], self.options)
        assert_allclose(dl, [-1.8, -3.6])
        assert_allclose(du, [1.8, 3.6])

    def test_null_step(self):
        dl, du = update_trust_region(self.pb, [3.0, 3.0], [3.0, 3.0], self.options)
        assert_array_equal(dl, [-1.0, -2.0])
        assert_array_equal(du, [1.0, 2.0])

    def test_problem_unchanged(self):
        update_trust_region(self.pb, [0.1, 0.0], [0.0, 0.0], self.options)
        assert_array_equal(self.pb.dl, [-1.0, -2.0])

    @pytest.mark.parametrize('seed', range(10))
    def test_ordered_bounds(self, seed):
        rng = np.random.default_rng(seed)
        x_old = rng.standard_normal(2)
        x_new = x_old + 3.0 * rng.standard_normal(2)
        for _ in range(5):
            dl, du = update_trust_region(self.pb, x_new, x_old, self.options)
            assert_array_less_equal(dl, du)
            self.pb.set_trust_region(dl, du)
            x_old, x_new = x_new, x_new + 0.1 * rng.standard_normal(2)


class TestLinearIterations:

    def setup_method(self):
        self.options = dict(DEFAULT_OPTIONS)

    def test_stationary_start(self):
        pb = disks_problem()
        x, _, slacks, lam, mu, hess, stationary, step_size = linear_iterations(pb, [2.0, 2.0], np.eye(2), self.options)
        assert stationary
        assert_array_equal(x, [2.0, 2.0])
        assert_allclose(lam, [0.0, 0.0], atol=1e-9)
        assert_allclose(mu, [-2.0], atol=1e-9)
        assert_array_equal(hess, np.eye(2))
        assert step_size == 0.0
        assert len(slacks) == 3
        assert is_stationary(pb, x, lam, mu, self.options)

    def test_nonstationary_start(self):
        pb = Problem(
            lambda x: -x[1],
            [lambda x: -(1.0 + x[0] - 2.0 * x[1])],
            [lambda x: x[0] ** 2.0 + x[1] ** 2.0 - 1.0],
            [-1.0, -1.0],
            [1.0, 1.0],
        )
        x0 = np.array([3.0, 3.0])
        x, d, (tg, thp, thm), lam, mu, hess, stationary, step_size = linear_iterations(pb, x0, np.eye(2), self.options)
        assert not stationary
        assert lam.shape == (1,)
        assert mu.shape == (1,)
        assert_array_equal(hess, hess.T)
        assert 0.0 <= step_size < 1.0
        assert_array_less_equal(pb.dl - 1e-7, d)
        assert_array_less_equal(d, pb.du + 1e-7)

        # The merit of the equality constraint violation decreases.
        assert abs(x[0] ** 2.0 + x[1] ** 2.0 - 1.0) < abs(x0[0] ** 2.0 + x0[1] ** 2.0 - 1.0)

    @staticmethod
    def shift_dual_value(monkeypatch, shift):
        solve_dual = framework.solve_dual

        def shifted(a, b, c):
            dual_val, y = solve_dual(a, b, c)
            return dual_val + shift, y

        monkeypatch.setattr(framework, 'solve_dual', shifted)

    def test_small_duality_gap(self, monkeypatch):
        # A gap at the accuracy of the linear programming solver is tolerated.
        self.shift_dual_value(monkeypatch, 3.4e-6)
        _, _, _, lam, mu, _, stationary, _ = linear_iterations(disks_problem(), [2.0, 2.0], np.eye(2), self.options)
        assert stationary
        assert_allclose(mu, [-2.0], atol=1e-9)

    def test_large_duality_gap(self, monkeypatch):
        self.shift_dual_value(monkeypatch, 10.0)
        with pytest.raises(SubproblemSolverError):
            linear_iterations(disks_problem(), [2.0, 2.0], np.eye(2), self.options)
