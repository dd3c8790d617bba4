import itertools
import logging

import numpy as np

_log = logging.getLogger(__name__)


def emfcq(pb, step, tol=None):
    """
    Check the extended Mangasarian-Fromovitz constraint qualification.

    The condition is checked on a regular grid covering the trust region of
    the problem. At each grid point, the gradients of the equality constraints
    must be pairwise linearly independent, and there must exist a grid
    direction orthogonal to all these gradients along which every active or
    violated inequality constraint strictly decreases.

    Parameters
    ----------
    pb : Problem
        Problem to be checked.
    step : float
        Grid spacing along each coordinate.
    tol : float, optional
        Relative tolerance on the orthogonality and the linear dependence of
        the gradients. Default is the square root of the machine epsilon.

    Returns
    -------
    bool
        Whether the constraint qualification holds at every grid point.
    """
    if step <= 0.0:
        raise ValueError("The grid spacing must be positive.")
    if tol is None:
        tol = np.sqrt(np.finfo(float).eps)
    axes = [np.arange(lower, upper + 0.5 * step, step) for lower, upper in zip(pb.dl, pb.du)]
    grid = np.array(list(itertools.product(*axes)))
    grid_norm = np.linalg.norm(grid, axis=1)
    _log.debug(f"Checking the constraint qualification on {grid.shape[0]} points")
    for x in grid:
        ceq_jac = pb.ceq_jac(x)
        ceq_norm = np.linalg.norm(ceq_jac, axis=1)
        if pb.m_eq > 1:
            if np.any(ceq_norm <= tol):
                _log.info(f"The gradient of an equality constraint vanishes at {x}")
                return False
            ceq_unit = ceq_jac / ceq_norm[:, np.newaxis]
            cos = np.abs(ceq_unit @ ceq_unit.T)
            i_upper = np.triu_indices(pb.m_eq, 1)
            if np.any(cos[i_upper] >= 1.0 - tol):
                _log.info(f"The gradients of the equality constraints are linearly dependent at {x}")
                return False

        active = pb.cub(x) >= 0.0
        cub_jac = pb.cub_jac(x)[active, :]
        orthogonal = np.all(np.abs(grid @ ceq_jac.T) <= tol * np.outer(grid_norm, ceq_norm), axis=1)
        descent = np.all(grid @ cub_jac.T < 0.0, axis=1)
        if not np.any(orthogonal & descent):
            _log.info(f"No feasible direction exists at {x}")
            return False
    return True
