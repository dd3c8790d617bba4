import logging

import numpy as np

from .settings import Options
from .utils import exact_1d_array

_log = logging.getLogger(__name__)


def is_stationary(pb, x, lam, mu, options):
    r"""
    Check whether a point satisfies approximately the KKT conditions.

    The conditions are

    .. math::

        \begin{aligned}
            & \lambda_j \ge 0, ~ g_j(x) \le 0, ~ \lambda_j g_j(x) = 0, ~ \text{for all } j,\\
            & h_r(x) = 0, ~ \text{for all } r,\\
            & \nabla f(x) + \textstyle\sum_j \lambda_j \nabla g_j(x) + \sum_r \mu_r \nabla h_r(x) = 0.
        \end{aligned}

    The first four conditions are checked up to the feasibility tolerance and
    the last one up to the stationarity tolerance, componentwise.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    x : array_like, shape (n,)
        Point to check.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    options : dict
        Options of the solver.

    Returns
    -------
    bool
        Whether `x` is an approximate KKT point.
    """
    lam = np.atleast_1d(np.asarray(lam, dtype=float))
    mu = np.atleast_1d(np.asarray(mu, dtype=float))
    if lam.size != pb.m_ub or mu.size != pb.m_eq:
        raise ValueError("The number of Lagrange multipliers does not match the number of constraints.")
    _, fun_grad, cub_val, ceq_val, cub_jac, ceq_jac = pb.evaluate(x)
    tol = options[Options.FEASIBILITY_TOL]
    lag_grad = fun_grad + cub_jac.T @ lam + ceq_jac.T @ mu
    conditions = [
        np.all(lam >= -tol),
        np.all(cub_val <= tol),
        np.all(np.abs(ceq_val) <= tol),
        np.all(np.abs(lam * cub_val) <= tol),
        np.all(np.abs(lag_grad) <= options[Options.STATIONARITY_TOL]),
    ]
    _log.debug(f"KKT conditions at {exact_1d_array(x, 'The point must be a vector.')}: {conditions}")
    return bool(all(conditions))
