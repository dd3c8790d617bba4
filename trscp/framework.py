import logging

import numpy as np

from .linalg import solve_dual, solve_primal
from .merit import lagrangian, line_search, penalized_lagrangian
from .optimality import is_stationary
from .settings import Options
from .subproblems import build_linear_subproblem, get_multipliers
from .utils import SubproblemSolverError, exact_1d_array, exact_2d_array, gradient

_log = logging.getLogger(__name__)


def bfgs_update(hess, s, y, options):
    r"""
    Update an approximation of the Hessian matrix with the BFGS formula.

    The updated matrix is

    .. math::

        H + \frac{y y^{\mathsf{T}}}{y^{\mathsf{T}} s} - \frac{H s (H s)^{\mathsf{T}}}{s^{\mathsf{T}} H s}.

    The update is skipped if one of the denominators is negligible relative
    to the norms of the vectors involved.

    Parameters
    ----------
    hess : array_like, shape (n, n)
        Symmetric approximation of the Hessian matrix.
    s : array_like, shape (n,)
        Step taken.
    y : array_like, shape (n,)
        Difference between the gradients of the Lagrangian function at the
        end and at the beginning of the step.
    options : dict
        Options of the solver.

    Returns
    -------
    `numpy.ndarray`, shape (n, n)
        Updated approximation of the Hessian matrix.
    """
    hess = exact_2d_array(hess, "The Hessian matrix must be a two-dimensional array.")
    s = exact_1d_array(s, "The step must be a vector.")
    y = exact_1d_array(y, "The gradient difference must be a vector.")
    n = s.size
    if hess.shape != (n, n) or y.size != n:
        raise ValueError("The Hessian matrix, the step, and the gradient difference have inconsistent dimensions.")

    hs = hess @ s
    ys = y @ s
    shs = s @ hs
    tol = options[Options.CURVATURE_TOL]
    if abs(ys) <= tol * np.linalg.norm(y) * np.linalg.norm(s) or abs(shs) <= tol * np.linalg.norm(s) * np.linalg.norm(hs):
        _log.debug(f"BFGS update skipped (y^T s = {ys}, s^T H s = {shs})")
        return hess
    hess = hess + np.outer(y, y) / ys - np.outer(hs, hs) / shs
    return 0.5 * (hess + hess.T)


def update_trust_region(pb, x_new, x_old, options):
    """
    Update the trust region according to the last step.

    The largest ratio between the components of the step and the
    corresponding bounds of the trust region measures how much of the trust
    region has been used. The trust region is shrunk if this ratio is small and
    enlarged if it is large.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    x_new : array_like, shape (n,)
        Point at the end of the step.
    x_old : array_like, shape (n,)
        Point at the beginning of the step.
    options : dict
        Options of the solver.

    Returns
    -------
    `numpy.ndarray`, shape (n,)
        New lower bounds of the trust region.
    `numpy.ndarray`, shape (n,)
        New upper bounds of the trust region.
    """
    step = exact_1d_array(x_new, "The point must be a vector.") - exact_1d_array(x_old, "The point must be a vector.")
    dl, du = pb.dl, pb.du
    if step.size != dl.size:
        raise ValueError(f"The step must have {dl.size} components, got {step.size}.")
    ratio = np.max(np.maximum(step / dl, step / du))
    if ratio < options[Options.RADIUS_DEC]:
        factor = ratio / options[Options.RADIUS_DEC]
    elif ratio > options[Options.RADIUS_INC]:
        factor = 2.0 * ratio
    else:
        factor = 1.0

    # A null step would collapse the trust region.
    if factor > 0.0:
        dl *= factor
        du *= factor
    _log.debug(f"Trust-region ratio: {ratio}, scaling factor: {factor}")
    return dl, du


def linear_iterations(pb, x, hess, options):
    """
    Perform the linear iterations of an outer iteration.

    Each linear iteration solves the linear subproblem at the current point
    and its dual, estimates the Lagrange multipliers, and stops if the current
    point is stationary. Otherwise, the point is moved along the direction of
    the linear subproblem, the step size being obtained by a line search on the
    penalized Lagrangian function, and the Hessian approximation is updated.
    The next directions must be conjugate to the previous ones with respect to
    the Hessian approximation.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    x : array_like, shape (n,)
        Starting point.
    hess : array_like, shape (n, n)
        Approximation of the Hessian matrix of the Lagrangian function.
    options : dict
        Options of the solver.

    Returns
    -------
    `numpy.ndarray`, shape (n,)
        Final point.
    `numpy.ndarray`, shape (n,)
        Last direction.
    tuple of `numpy.ndarray`
        Last slack variables ``(t_g, t_h+, t_h-)``.
    `numpy.ndarray`, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    `numpy.ndarray`, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    `numpy.ndarray`, shape (n, n)
        Updated approximation of the Hessian matrix.
    bool
        Whether the final point is stationary.
    float
        Last step size.

    Raises
    ------
    InfeasibleSubproblemError
        If a linear subproblem is infeasible or unbounded.
    SubproblemSolverError
        If the linear programming solver fails or if the optimal values of a
        linear subproblem and its dual differ.
    """
    x = exact_1d_array(x, "The point must be a vector.")
    hess = np.copy(exact_2d_array(hess, "The Hessian matrix must be a two-dimensional array."))
    n, m_ub, m_eq = pb.n, pb.m_ub, pb.m_eq
    tol = options[Options.TOL]
    feasibility_tol = options[Options.FEASIBILITY_TOL]
    directions = []
    k = 1
    while True:
        a, b, c = build_linear_subproblem(pb, x, directions, hess, options)
        primal_val, d, tg, thp, thm = solve_primal(a, b, c, n, m_ub, m_eq)
        dual_val, y = solve_dual(a, b, c)
        # Gap relative to the magnitude of the terms of b^T y.
        gap = abs(primal_val - dual_val)
        gap_scale = max(1.0, abs(primal_val), abs(dual_val), np.linalg.norm(b) * np.linalg.norm(y))
        if gap > options[Options.DUALITY_TOL] * gap_scale:
            raise SubproblemSolverError(f"The optimal values of the linear subproblem ({primal_val}) and of its dual ({dual_val}) differ.")
        if gap > 0.0:
            _log.debug(f"Duality gap of the linear subproblem: {gap} (scale {gap_scale})")
        lam, mu = get_multipliers(y, m_ub, m_eq)
        if is_stationary(pb, x, lam, mu, options):
            return x, d, (tg, thp, thm), lam, mu, hess, True, 0.0

        # Move along the direction of the linear subproblem.
        step_size = line_search(penalized_lagrangian(pb, lam, mu, options), x, d, options)
        step = step_size * d
        x_old = x
        x = x + step

        # Update the approximation of the Hessian matrix of the Lagrangian.
        lag = lagrangian(pb, lam, mu)
        diff_step = options[Options.DIFF_STEP]
        lag_diff = gradient(lag, x, diff_step) - gradient(lag, x_old, diff_step)
        hess = bfgs_update(hess, step, lag_diff, options)
        directions.append(d)
        _log.debug(f"Linear iteration {k}: step size {step_size}, direction norm {np.linalg.norm(d)}")

        # Check the stopping criteria of the linear iterations.
        if k > n:
            break
        if np.linalg.norm(d) <= tol:
            break
        _, cub_val, ceq_val = pb(x)
        ceq_abs = np.abs(ceq_val)
        if np.all(tg >= cub_val - feasibility_tol) and np.all(thp >= ceq_abs - feasibility_tol) and np.all(thm >= ceq_abs - feasibility_tol):
            break
        if k > 1 and (np.any(tg > tol) or np.any(thp > tol) or np.any(thm > tol)):
            break
        if 1.0 - step_size <= options[Options.LINE_SEARCH_STEP] + tol:
            break
        k += 1
    return x, d, (tg, thp, thm), lam, mu, hess, False, step_size
