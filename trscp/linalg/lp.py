import logging

import numpy as np
from scipy.optimize import linprog

from ..utils import InfeasibleSubproblemError, SubproblemSolverError, exact_1d_array, exact_2d_array

_log = logging.getLogger(__name__)


def solve_primal(a, b, c, n, m_ub, m_eq):
    r"""
    Solve the primal linear subproblem.

    The linear program is

    .. math::

        \min_{z \in \mathbb{R}^{n + m_{\text{ub}} + 2 m_{\text{eq}}}} c^{\mathsf{T}} z \quad \text{s.t.} \quad A z \ge b,

    where all the variables are free. The variables are split as
    ``z = [d, t_g, t_h+, t_h-]``.

    Parameters
    ----------
    a : array_like, shape (m, n + m_ub + 2 * m_eq)
        Coefficient matrix of the constraints.
    b : array_like, shape (m,)
        Right-hand side of the constraints.
    c : array_like, shape (n + m_ub + 2 * m_eq,)
        Cost vector.
    n : int
        Number of variables of the nonlinear problem.
    m_ub : int
        Number of inequality constraints of the nonlinear problem.
    m_eq : int
        Number of equality constraints of the nonlinear problem.

    Returns
    -------
    float
        Optimal value of the linear program.
    `numpy.ndarray`, shape (n,)
        Direction ``d``.
    `numpy.ndarray`, shape (m_ub,)
        Slack variables ``t_g`` of the inequality constraints.
    `numpy.ndarray`, shape (m_eq,)
        Slack variables ``t_h+`` of the equality constraints.
    `numpy.ndarray`, shape (m_eq,)
        Slack variables ``t_h-`` of the equality constraints.

    Raises
    ------
    InfeasibleSubproblemError
        If the linear program is infeasible or unbounded.
    SubproblemSolverError
        If the linear programming solver fails.
    """
    a, b, c = _check_lp(a, b, c)
    if c.size != n + m_ub + 2 * m_eq:
        raise ValueError(f"The cost vector must have {n + m_ub + 2 * m_eq} components, got {c.size}.")
    res = linprog(c, A_ub=-a, b_ub=-b, bounds=(None, None), method="highs")
    _check_status(res, "primal")
    z = res.x
    return float(res.fun), z[:n], z[n:n + m_ub], z[n + m_ub:n + m_ub + m_eq], z[n + m_ub + m_eq:]


def solve_dual(a, b, c):
    r"""
    Solve the dual of the linear subproblem.

    The linear program is

    .. math::

        \max_{y \in \mathbb{R}^m} b^{\mathsf{T}} y \quad \text{s.t.} \quad A^{\mathsf{T}} y = c, ~ y \ge 0.

    Parameters
    ----------
    a : array_like, shape (m, n_var)
        Coefficient matrix of the primal constraints.
    b : array_like, shape (m,)
        Right-hand side of the primal constraints.
    c : array_like, shape (n_var,)
        Cost vector of the primal linear program.

    Returns
    -------
    float
        Optimal value of the dual linear program.
    `numpy.ndarray`, shape (m,)
        Dual solution.

    Raises
    ------
    InfeasibleSubproblemError
        If the linear program is infeasible or unbounded.
    SubproblemSolverError
        If the linear programming solver fails.
    """
    a, b, c = _check_lp(a, b, c)
    res = linprog(-b, A_eq=a.T, b_eq=c, bounds=(0.0, None), method="highs")
    _check_status(res, "dual")
    return -float(res.fun), res.x


def _check_lp(a, b, c):
    a = exact_2d_array(a, "The coefficient matrix must be a two-dimensional array.")
    b = exact_1d_array(b, "The right-hand side must be a vector.")
    c = exact_1d_array(c, "The cost vector must be a vector.")
    if a.shape != (b.size, c.size):
        raise ValueError(f"The coefficient matrix must have shape {(b.size, c.size)}, got {a.shape}.")
    return a, b, c


def _check_status(res, name):
    if res.status == 0:
        return
    _log.debug(f"The {name} linear program terminated with status {res.status}: {res.message}")
    if res.status in (2, 3):
        kind = "infeasible" if res.status == 2 else "unbounded"
        raise InfeasibleSubproblemError(f"The {name} linear subproblem is {kind}.")
    raise SubproblemSolverError(f"The {name} linear subproblem could not be solved: {res.message}")
