import numpy as np

from ..settings import Options
from ..utils import exact_1d_array, exact_2d_array


def build_linear_subproblem(pb, x, directions, hess, options):
    r"""
    Build the linear subproblem at a given point.

    The variables of the linear subproblem are ``z = [d, t_g, t_h+, t_h-]``,
    where ``d`` is the direction and ``t_g``, ``t_h+``, and ``t_h-`` are the
    slack variables relaxing the linearized constraints. The linear subproblem
    is

    .. math::

        \begin{aligned}
            \min        & \quad \nabla f(x)^{\mathsf{T}} d + C \big( \textstyle\sum_j t_{g, j} + \sum_r t_{h, r}^+ + \sum_r t_{h, r}^- \big)\\
            \text{s.t.} & \quad g_j(x) + \nabla g_j(x)^{\mathsf{T}} d \le t_{g, j},\\
                        & \quad h_r(x) + \nabla h_r(x)^{\mathsf{T}} d = t_{h, r}^+ - t_{h, r}^-,\\
                        & \quad (H d_k)^{\mathsf{T}} d = 0, ~ \text{for all previous directions } d_k,\\
                        & \quad d_l \le d \le d_u,\\
                        & \quad 0 \le t_{g, j} \le \max \{ 0, g_j(x) \},\\
                        & \quad 0 \le t_{h, r}^+ \le \lvert h_r(x) \rvert, ~ 0 \le t_{h, r}^- \le \lvert h_r(x) \rvert.
        \end{aligned}

    The constraints are stored row by row in the order above, each equality
    being split into two inequalities, and the whole system is negated to read
    ``A @ z >= b``. The first ``m_ub + 2 * m_eq`` rows are the linearized
    constraints, on which `get_multipliers` relies.

    Parameters
    ----------
    pb : Problem
        Problem to be solved.
    x : array_like, shape (n,)
        Point at which the problem is linearized.
    directions : sequence of array_like, shape (n,)
        Directions previously found in the current iteration.
    hess : array_like, shape (n, n)
        Approximation of the Hessian matrix of the Lagrangian function.
    options : dict
        Options of the solver.

    Returns
    -------
    `numpy.ndarray`, shape (m, n + m_ub + 2 * m_eq)
        Coefficient matrix ``A``.
    `numpy.ndarray`, shape (m,)
        Right-hand side ``b``.
    `numpy.ndarray`, shape (n + m_ub + 2 * m_eq,)
        Cost vector ``c``.
    """
    n, m_ub, m_eq = pb.n, pb.m_ub, pb.m_eq
    hess = exact_2d_array(hess, "The Hessian matrix must be a two-dimensional array.")
    if hess.shape != (n, n):
        raise ValueError(f"The Hessian matrix must have shape {(n, n)}, got {hess.shape}.")
    if len(directions) > 0:
        directions = exact_2d_array(directions, "The directions must be vectors.")
        if directions.shape[1] != n:
            raise ValueError(f"The directions must have {n} components.")
    else:
        directions = np.empty((0, n))
    _, fun_grad, cub_val, ceq_val, cub_jac, ceq_jac = pb.evaluate(x)

    eye_n = np.eye(n)
    eye_ub = np.eye(m_ub)
    eye_eq = np.eye(m_eq)

    def zeros(n_rows, n_cols):
        return np.zeros((n_rows, n_cols))

    def rows(d_block, tg_block, thp_block, thm_block):
        return np.hstack((d_block, tg_block, thp_block, thm_block))

    # The Hessian approximation is symmetric, so that each row of hd is
    # (H @ d_k)^T.
    hd = directions @ hess
    n_dir = hd.shape[0]

    blocks = [
        # (a) Linearized inequality constraints.
        (rows(cub_jac, -eye_ub, zeros(m_ub, m_eq), zeros(m_ub, m_eq)), -cub_val),
        # (b) Linearized equality constraints.
        (rows(ceq_jac, zeros(m_eq, m_ub), -eye_eq, eye_eq), -ceq_val),
        (rows(-ceq_jac, zeros(m_eq, m_ub), eye_eq, -eye_eq), ceq_val),
        # (c) Conjugacy with respect to the previous directions.
        (rows(hd, zeros(n_dir, m_ub), zeros(n_dir, m_eq), zeros(n_dir, m_eq)), np.zeros(n_dir)),
        (rows(-hd, zeros(n_dir, m_ub), zeros(n_dir, m_eq), zeros(n_dir, m_eq)), np.zeros(n_dir)),
        # (d) Trust region.
        (rows(-eye_n, zeros(n, m_ub), zeros(n, m_eq), zeros(n, m_eq)), -pb.dl),
        (rows(eye_n, zeros(n, m_ub), zeros(n, m_eq), zeros(n, m_eq)), pb.du),
        # (e) Bounds on the slack variables of the inequality constraints.
        (rows(zeros(m_ub, n), -eye_ub, zeros(m_ub, m_eq), zeros(m_ub, m_eq)), np.zeros(m_ub)),
        (rows(zeros(m_ub, n), eye_ub, zeros(m_ub, m_eq), zeros(m_ub, m_eq)), np.maximum(cub_val, 0.0)),
        # (f) and (g) Bounds on the slack variables of the equality
        # constraints.
        (rows(zeros(m_eq, n), zeros(m_eq, m_ub), -eye_eq, zeros(m_eq, m_eq)), np.zeros(m_eq)),
        (rows(zeros(m_eq, n), zeros(m_eq, m_ub), eye_eq, zeros(m_eq, m_eq)), np.abs(ceq_val)),
        (rows(zeros(m_eq, n), zeros(m_eq, m_ub), zeros(m_eq, m_eq), -eye_eq), np.zeros(m_eq)),
        (rows(zeros(m_eq, n), zeros(m_eq, m_ub), zeros(m_eq, m_eq), eye_eq), np.abs(ceq_val)),
    ]
    a_ub = np.vstack([block[0] for block in blocks])
    b_ub = np.concatenate([block[1] for block in blocks])
    c = np.r_[fun_grad, np.full(m_ub + 2 * m_eq, options[Options.PENALTY])]

    if options[Options.DEBUG]:
        assert a_ub.shape == (3 * m_ub + 6 * m_eq + 2 * n_dir + 2 * n, n + m_ub + 2 * m_eq)
        assert b_ub.size == a_ub.shape[0]
    return -a_ub, -b_ub, c


def get_multipliers(y, m_ub, m_eq):
    """
    Extract the Lagrange multipliers from a dual solution.

    Parameters
    ----------
    y : array_like, shape (m,)
        Dual solution of the linear subproblem built by
        `build_linear_subproblem`.
    m_ub : int
        Number of inequality constraints.
    m_eq : int
        Number of equality constraints.

    Returns
    -------
    `numpy.ndarray`, shape (m_ub,)
        Lagrange multipliers of the inequality constraints.
    `numpy.ndarray`, shape (m_eq,)
        Lagrange multipliers of the equality constraints.
    """
    y = exact_1d_array(y, "The dual solution must be a vector.")
    if y.size < m_ub + 2 * m_eq:
        raise ValueError(f"The dual solution must have at least {m_ub + 2 * m_eq} components, got {y.size}.")
    lam = y[:m_ub]
    mu = y[m_ub:m_ub + m_eq] - y[m_ub + m_eq:m_ub + 2 * m_eq]
    return lam, mu
