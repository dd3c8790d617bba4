import logging

import numpy as np

from .settings import Options

_log = logging.getLogger(__name__)


def lagrangian(pb, lam, mu):
    """
    Build the Lagrangian function of the problem.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.

    Returns
    -------
    callable
        Lagrangian function ``lag(x) -> float``.
    """
    lam = np.asarray(lam, dtype=float)
    mu = np.asarray(mu, dtype=float)

    def lag(x):
        fun_val, cub_val, ceq_val = pb(x)
        return fun_val + lam @ cub_val + mu @ ceq_val

    return lag


def penalized_lagrangian(pb, lam, mu, options):
    """
    Build the penalized Lagrangian function of the problem.

    The violations of the constraints are weighted by the multipliers, and a
    quadratic penalty on these violations is added.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    options : dict
        Options of the solver.

    Returns
    -------
    callable
        Penalized Lagrangian function ``lag(x) -> float``.
    """
    lam = np.asarray(lam, dtype=float)
    mu = np.asarray(mu, dtype=float)
    rho = options[Options.RHO]

    def lag(x):
        fun_val, cub_val, ceq_val = pb(x)
        cub_pos = np.maximum(cub_val, 0.0)
        lin = lam @ cub_pos + np.sum(np.abs(mu * ceq_val))
        quad = lam @ cub_pos ** 2.0 + np.abs(mu) @ ceq_val ** 2.0
        return fun_val + lin + rho * quad

    return lag


def merit(pb, lam, mu, options):
    """
    Build the merit function of the problem.

    The merit function is an exact penalty function whose weights are the
    absolute values of the multipliers, increased by a fixed increment.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    options : dict
        Options of the solver.

    Returns
    -------
    callable
        Merit function ``merit(x) -> float``.
    """
    lam_inc, mu_inc = _increased_multipliers(lam, mu, options)

    def fun(x):
        fun_val, cub_val, ceq_val = pb(x)
        return fun_val + lam_inc @ np.maximum(cub_val, 0.0) + mu_inc @ np.abs(ceq_val)

    return fun


def merit_derivative(pb, d, lam, mu, options):
    """
    Build the directional derivative of the merit function.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    d : array_like, shape (n,)
        Direction of the derivative.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    options : dict
        Options of the solver.

    Returns
    -------
    callable
        Directional derivative ``deriv(x) -> float`` of the merit function
        along `d`.
    """
    d = np.asarray(d, dtype=float)
    lam_inc, mu_inc = _increased_multipliers(lam, mu, options)
    tol = options[Options.TOL]

    def deriv(x):
        _, fun_grad, cub_val, ceq_val, cub_jac, ceq_jac = pb.evaluate(x)
        cub_slope = cub_jac @ d
        ceq_slope = ceq_jac @ d

        # One-sided derivatives of max(0, g) and |h|.
        cub_slope = np.where(cub_val > tol, cub_slope, np.where(cub_val >= -tol, np.maximum(cub_slope, 0.0), 0.0))
        ceq_slope = np.where(ceq_val > tol, ceq_slope, np.where(ceq_val >= -tol, np.abs(ceq_slope), -ceq_slope))
        return fun_grad @ d + lam_inc @ cub_slope + mu_inc @ ceq_slope

    return deriv


def line_search(fun, x, d, options):
    """
    Minimize a function along a direction on a regular grid.

    The step sizes ``0, h, 2h, ...`` in ``[0, 1)`` are tried, where ``h`` is
    the line-search step. Ties are broken in favor of the smallest step size.

    Parameters
    ----------
    fun : callable
        Function to be minimized ``fun(x) -> float``.
    x : `numpy.ndarray`, shape (n,)
        Starting point.
    d : `numpy.ndarray`, shape (n,)
        Search direction.
    options : dict
        Options of the solver.

    Returns
    -------
    float
        Best step size found.
    """
    step_sizes = np.arange(0.0, 1.0, options[Options.LINE_SEARCH_STEP])
    values = np.array([fun(x + step_size * d) for step_size in step_sizes])
    values[np.isnan(values)] = np.inf
    return float(step_sizes[np.argmin(values)])


def accept_or_refine(pb, x_trial, x, step_size, d, lam, mu, options):
    """
    Accept a trial point or refine it with a line search on the merit function.

    The trial point is accepted if it decreases the merit function and if it
    satisfies both the sufficient decrease condition and the curvature
    condition with respect to the directional derivative of the merit function.
    Otherwise, the best point of a grid line search along `d` is returned.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    x_trial : array_like, shape (n,)
        Trial point.
    x : array_like, shape (n,)
        Current point.
    step_size : float
        Step size along `d` that yields `x_trial` from `x`.
    d : array_like, shape (n,)
        Search direction.
    lam : array_like, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    mu : array_like, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    options : dict
        Options of the solver.

    Returns
    -------
    `numpy.ndarray`, shape (n,)
        Accepted point.
    """
    x_trial = np.asarray(x_trial, dtype=float)
    x = np.asarray(x, dtype=float)
    d = np.asarray(d, dtype=float)
    merit_fun = merit(pb, lam, mu, options)
    merit_deriv = merit_derivative(pb, d, lam, mu, options)
    merit_trial = merit_fun(x_trial)
    merit_curr = merit_fun(x)
    deriv_trial = merit_deriv(x_trial)
    deriv_curr = merit_deriv(x)
    decrease = merit_trial <= merit_curr
    sufficient_decrease = merit_trial - merit_curr <= options[Options.SIGMA] * step_size * deriv_curr
    curvature = deriv_trial >= options[Options.ETA] * deriv_curr
    if decrease and sufficient_decrease and curvature:
        return x_trial
    _log.debug(f"Trial point rejected (decrease: {decrease}, sufficient decrease: {sufficient_decrease}, curvature: {curvature})")
    step_size = line_search(merit_fun, x, d, options)
    return x + step_size * d


def _increased_multipliers(lam, mu, options):
    increment = options[Options.MERIT_INCREMENT]
    return np.abs(np.asarray(lam, dtype=float)) + increment, np.abs(np.asarray(mu, dtype=float)) + increment
