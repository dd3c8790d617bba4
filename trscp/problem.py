import numpy as np

from .settings import PRINT_OPTIONS
from .utils import exact_1d_array, gradient


class ObjectiveFunction:
    """
    Real-valued objective function.
    """

    def __init__(self, fun, verbose, debug, *args):
        """
        Initialize the objective function.

        Parameters
        ----------
        fun : callable
            Function to evaluate.

                ``fun(x, *args) -> float``

            where ``x`` is an array with shape (n,) and `args` is a tuple.
        verbose : bool
            Whether to print the function evaluations.
        debug : bool
            Whether to make debugging tests during the execution.
        *args : tuple
            Additional arguments to be passed to the function.
        """
        if debug:
            assert callable(fun)
            assert isinstance(verbose, bool)
            assert isinstance(debug, bool)

        self._fun = fun
        self._verbose = verbose
        self._args = args
        self._n_eval = 0

    def __call__(self, x):
        """
        Evaluate the objective function.

        Parameters
        ----------
        x : array_like, shape (n,)
            Point at which the objective function is evaluated.

        Returns
        -------
        float
            Function value at `x`.
        """
        x = np.array(x, dtype=float)
        f = float(np.squeeze(self._fun(x, *self._args)))
        self._n_eval += 1
        if self._verbose:
            with np.printoptions(**PRINT_OPTIONS):
                print(f"{self.name}({x}) = {f}")
        return f

    @property
    def n_eval(self):
        """
        Number of function evaluations.

        Returns
        -------
        int
            Number of function evaluations.
        """
        return self._n_eval

    @property
    def name(self):
        """
        Name of the objective function.

        Returns
        -------
        str
            Name of the objective function.
        """
        try:
            return self._fun.__name__
        except AttributeError:
            return "fun"


class Constraints:
    """
    Ordered set of real-valued constraint functions.
    """

    def __init__(self, funs, is_equality, debug, *args):
        """
        Initialize the constraints.

        Parameters
        ----------
        funs : {callable, sequence of callable, None}
            Constraint functions, each of them with the signature

                ``fun(x, *args) -> float``

            where ``x`` is an array with shape (n,) and `args` is a tuple. An
            inequality constraint is satisfied when ``fun(x, *args) <= 0`` and
            an equality constraint when ``fun(x, *args) == 0``.
        is_equality : bool
            Whether the constraints are equality constraints.
        debug : bool
            Whether to make debugging tests during the execution.
        *args : tuple
            Additional arguments to be passed to the functions.
        """
        if funs is None:
            funs = []
        elif callable(funs):
            funs = [funs]
        else:
            funs = list(funs)
        if not all(callable(fun) for fun in funs):
            raise TypeError("The constraint functions must be callable.")
        if debug:
            assert isinstance(is_equality, bool)

        self._funs = funs
        self._is_equality = is_equality
        self._args = args

    def __len__(self):
        return len(self._funs)

    def __call__(self, x):
        """
        Evaluate the constraint functions.

        Parameters
        ----------
        x : array_like, shape (n,)
            Point at which the constraint functions are evaluated.

        Returns
        -------
        `numpy.ndarray`, shape (m,)
            Constraint values at `x`.
        """
        x = np.array(x, dtype=float)
        return np.array([float(np.squeeze(fun(x, *self._args))) for fun in self._funs])

    def jac(self, x, step):
        """
        Approximate the Jacobian matrix of the constraint functions.

        Parameters
        ----------
        x : `numpy.ndarray`, shape (n,)
            Point at which the Jacobian matrix is approximated.
        step : float
            Difference step.

        Returns
        -------
        `numpy.ndarray`, shape (m, n)
            Approximated Jacobian matrix, whose rows are the gradients of the
            constraint functions at `x`.
        """
        jac = np.empty((len(self._funs), x.size))
        for i, fun in enumerate(self._funs):
            jac[i, :] = gradient(lambda y: float(np.squeeze(fun(y, *self._args))), x, step)
        return jac

    @property
    def is_equality(self):
        """
        Whether the constraints are equality constraints.

        Returns
        -------
        bool
            Whether the constraints are equality constraints.
        """
        return self._is_equality


class Problem:
    """
    Nonlinearly constrained optimization problem.

    The problem is to minimize ``fun(x)`` subject to ``cub(x) <= 0`` and
    ``ceq(x) == 0``. The steps of the method are restricted to the trust region
    ``dl <= d <= du``, which is the only part of the problem that changes during
    the optimization procedure.
    """

    def __init__(self, fun, cub=None, ceq=None, dl=None, du=None, args=(), diff_step=None, verbose=False, debug=False):
        """
        Initialize the nonlinear problem.

        Parameters
        ----------
        fun : callable
            Objective function ``fun(x, *args) -> float``.
        cub : {callable, sequence of callable}, optional
            Inequality constraint functions ``cub[j](x, *args) <= 0``.
        ceq : {callable, sequence of callable}, optional
            Equality constraint functions ``ceq[r](x, *args) == 0``.
        dl : array_like, shape (n,)
            Lower bounds of the trust region.
        du : array_like, shape (n,)
            Upper bounds of the trust region.
        args : tuple, optional
            Additional arguments to be passed to the functions.
        diff_step : float, optional
            Central-difference step used to approximate the gradients.
        verbose : bool, optional
            Whether to print the objective function evaluations.
        debug : bool, optional
            Whether to make debugging tests during the execution.

        Raises
        ------
        ValueError
            If the trust region does not contain the origin in its interior.
        """
        if dl is None or du is None:
            raise ValueError("The bounds of the trust region must be provided.")
        if not isinstance(args, tuple):
            args = (args,)
        if diff_step is None:
            diff_step = np.cbrt(np.finfo(float).eps)
        self._fun = ObjectiveFunction(fun, verbose, debug, *args)
        self._cub = Constraints(cub, False, debug, *args)
        self._ceq = Constraints(ceq, True, debug, *args)
        self._diff_step = float(diff_step)
        self._debug = debug
        self._dl = None
        self._du = None
        self.set_trust_region(dl, du)

    def __call__(self, x):
        """
        Evaluate the objective and constraint functions.

        Parameters
        ----------
        x : array_like, shape (n,)
            Point at which the functions are evaluated.

        Returns
        -------
        float
            Objective function value.
        `numpy.ndarray`, shape (m_ub,)
            Inequality constraint values.
        `numpy.ndarray`, shape (m_eq,)
            Equality constraint values.
        """
        x = self._check_point(x)
        return self._fun(x), self._cub(x), self._ceq(x)

    def evaluate(self, x):
        """
        Evaluate the functions and approximate their gradients.

        Parameters
        ----------
        x : array_like, shape (n,)
            Point at which the functions are evaluated.

        Returns
        -------
        float
            Objective function value.
        `numpy.ndarray`, shape (n,)
            Gradient of the objective function.
        `numpy.ndarray`, shape (m_ub,)
            Inequality constraint values.
        `numpy.ndarray`, shape (m_eq,)
            Equality constraint values.
        `numpy.ndarray`, shape (m_ub, n)
            Jacobian matrix of the inequality constraints.
        `numpy.ndarray`, shape (m_eq, n)
            Jacobian matrix of the equality constraints.
        """
        x = self._check_point(x)
        fun_val, cub_val, ceq_val = self(x)
        fun_grad = self.fun_grad(x)
        cub_jac = self.cub_jac(x)
        ceq_jac = self.ceq_jac(x)
        return fun_val, fun_grad, cub_val, ceq_val, cub_jac, ceq_jac

    def fun(self, x):
        return self._fun(self._check_point(x))

    def cub(self, x):
        return self._cub(self._check_point(x))

    def ceq(self, x):
        return self._ceq(self._check_point(x))

    def fun_grad(self, x):
        return gradient(self._fun, self._check_point(x), self._diff_step)

    def cub_jac(self, x):
        return self._cub.jac(self._check_point(x), self._diff_step)

    def ceq_jac(self, x):
        return self._ceq.jac(self._check_point(x), self._diff_step)

    def maxcv(self, x, cub_val=None, ceq_val=None):
        """
        Evaluate the maximum constraint violation.

        Parameters
        ----------
        x : array_like, shape (n,)
            Point at which the maximum constraint violation is evaluated.
        cub_val : array_like, shape (m_ub,), optional
            Values of the inequality constraints. If not provided, the
            inequality constraints are evaluated at `x`.
        ceq_val : array_like, shape (m_eq,), optional
            Values of the equality constraints. If not provided, the equality
            constraints are evaluated at `x`.

        Returns
        -------
        float
            Maximum constraint violation at `x`.
        """
        if cub_val is None:
            cub_val = self.cub(x)
        if ceq_val is None:
            ceq_val = self.ceq(x)
        return max(np.max(cub_val, initial=0.0), np.max(np.abs(ceq_val), initial=0.0))

    def set_trust_region(self, dl, du):
        """
        Replace the bounds of the trust region.

        Parameters
        ----------
        dl : array_like, shape (n,)
            New lower bounds of the trust region.
        du : array_like, shape (n,)
            New upper bounds of the trust region.

        Raises
        ------
        ValueError
            If the bounds are inconsistent.
        """
        dl = exact_1d_array(dl, "The lower bounds of the trust region must be a vector.")
        du = exact_1d_array(du, "The upper bounds of the trust region must be a vector.")
        if dl.size != du.size:
            raise ValueError("The bounds of the trust region must have the same size.")
        if self._dl is not None and dl.size != self.n:
            raise ValueError("The dimension of the trust region cannot change.")
        if not (np.all(dl < 0.0) and np.all(du > 0.0)):
            raise ValueError("The trust region must contain the origin in its interior.")
        self._dl = dl
        self._du = du

    @property
    def n(self):
        """
        Number of variables.

        Returns
        -------
        int
            Number of variables.
        """
        return self._dl.size

    @property
    def m_ub(self):
        """
        Number of inequality constraints.

        Returns
        -------
        int
            Number of inequality constraints.
        """
        return len(self._cub)

    @property
    def m_eq(self):
        """
        Number of equality constraints.

        Returns
        -------
        int
            Number of equality constraints.
        """
        return len(self._ceq)

    @property
    def dl(self):
        """
        Lower bounds of the trust region.

        Returns
        -------
        `numpy.ndarray`, shape (n,)
            Lower bounds of the trust region.
        """
        return np.copy(self._dl)

    @property
    def du(self):
        """
        Upper bounds of the trust region.

        Returns
        -------
        `numpy.ndarray`, shape (n,)
            Upper bounds of the trust region.
        """
        return np.copy(self._du)

    @property
    def n_eval(self):
        """
        Number of objective function evaluations.

        Returns
        -------
        int
            Number of objective function evaluations.
        """
        return self._fun.n_eval

    @property
    def fun_name(self):
        """
        Name of the objective function.

        Returns
        -------
        str
            Name of the objective function.
        """
        return self._fun.name

    def _check_point(self, x):
        x = exact_1d_array(x, "The point must be a vector.")
        if x.size != self.n:
            raise ValueError(f"The point must have {self.n} components, got {x.size}.")
        return x
