import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from ..problem import Constraints, ObjectiveFunction, Problem


class TestObjectiveFunction:

    @staticmethod
    def rosen(x):
        return 100.0 * (x[1] - x[0] ** 2.0) ** 2.0 + (1.0 - x[0]) ** 2.0

    def test_simple(self):
        fun = ObjectiveFunction(self.rosen, False, True)
        assert fun.name == 'rosen'
        assert fun.n_eval == 0
        assert fun([1.0, 1.0]) == 0.0
        assert fun([0.0, 0.0]) == 1.0
        assert fun.n_eval == 2

    def test_args(self):
        fun = ObjectiveFunction(lambda x, c: c * x[0], False, False, 3.0)
        assert fun([2.0]) == 6.0

    def test_verbose(self, capsys):
        fun = ObjectiveFunction(self.rosen, True, False)
        fun([1.0, 1.0])
        captured = capsys.readouterr()
        assert captured.out.startswith('rosen(')


class TestConstraints:

    def test_single_callable(self):
        cons = Constraints(lambda x: x[0] - 1.0, False, False)
        assert len(cons) == 1
        assert_array_equal(cons([3.0, 0.0]), [2.0])

    def test_none(self):
        cons = Constraints(None, True, False)
        assert len(cons) == 0
        assert cons([1.0, 2.0]).shape == (0,)
        assert cons.jac(np.array([1.0, 2.0]), 1e-6).shape == (0, 2)
        assert cons.is_equality

    def test_not_callable(self):
        with pytest.raises(TypeError):
            Constraints([1.0], False, False)


class TestProblem:

    def setup_method(self):
        self.pb = Problem(
            lambda x: x[0] ** 2.0 + x[1] ** 2.0,
            [lambda x: x[0] + x[1] - 1.0, lambda x: -x[0]],
            [lambda x: x[0] - 2.0 * x[1]],
            [-1.0, -2.0],
            [1.0, 2.0],
        )

    def test_dimensions(self):
        assert self.pb.n == 2
        assert self.pb.m_ub == 2
        assert self.pb.m_eq == 1
        assert_array_equal(self.pb.dl, [-1.0, -2.0])
        assert_array_equal(self.pb.du, [1.0, 2.0])

    def test_call(self):
        fun_val, cub_val, ceq_val = self.pb([1.0, 2.0])
        assert fun_val == 5.0
        assert_array_equal(cub_val, [2.0, -1.0])
        assert_array_equal(ceq_val, [-3.0])

    def test_evaluate(self):
        fun_val, fun_grad, cub_val, ceq_val, cub_jac, ceq_jac = self.pb.evaluate([1.0, 2.0])
        assert fun_val == 5.0
        assert_allclose(fun_grad, [2.0, 4.0], atol=1e-8)
        assert_array_equal(cub_val, [2.0, -1.0])
        assert_array_equal(ceq_val, [-3.0])
        assert_allclose(cub_jac, [[1.0, 1.0], [-1.0, 0.0]], atol=1e-8)
        assert_allclose(ceq_jac, [[1.0, -2.0]], atol=1e-8)

    def test_n_eval(self):
        self.pb([0.0, 0.0])
        assert self.pb.n_eval == 1
        self.pb.fun_grad([0.0, 0.0])
        assert self.pb.n_eval == 5

    def test_maxcv(self):
        assert self.pb.maxcv([1.0, 2.0]) == 3.0
        assert self.pb.maxcv([0.2, 0.1]) == 0.0

    def test_wrong_point(self):
        with pytest.raises(ValueError):
            self.pb([1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            self.pb.evaluate(np.ones((2, 2)))

    def test_set_trust_region(self):
        self.pb.set_trust_region([-0.5, -0.5], [0.25, 0.25])
        assert_array_equal(self.pb.dl, [-0.5, -0.5])
        assert_array_equal(self.pb.du, [0.25, 0.25])

        # The bounds returned are copies.
        dl = self.pb.dl
        dl[0] = -10.0
        assert_array_equal(self.pb.dl, [-0.5, -0.5])

    @pytest.mark.parametrize('dl,du', [
        ([0.0, -1.0], [1.0, 1.0]),
        ([-1.0, -1.0], [1.0, -0.5]),
        ([-1.0], [1.0]),
        ([-1.0, -1.0, -1.0], [1.0, 1.0, 1.0]),
    ])
    def test_invalid_trust_region(self, dl, du):
        with pytest.raises(ValueError):
            self.pb.set_trust_region(dl, du)

    def test_missing_trust_region(self):
        with pytest.raises(ValueError):
            Problem(lambda x: x[0])
