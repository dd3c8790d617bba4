import logging
import warnings
from types import MappingProxyType

import numpy as np

from .emfcq import emfcq
from .framework import linear_iterations, update_trust_region
from .merit import accept_or_refine
from .optimality import is_stationary
from .problem import Problem
from .settings import ExitStatus, Options, DEFAULT_OPTIONS, PRINT_OPTIONS
from .utils import InfeasibleSubproblemError, OptimizeResult, SubproblemSolverError, exact_1d_array, get_arrays_tol

_log = logging.getLogger(__name__)


def minimize(fun, x0, args=(), cub=None, ceq=None, dl=None, du=None, options=None):
    r"""
    Minimize a scalar function using a trust-region sequential convex
    programming method.

    At each iteration, the objective and constraint functions are linearized
    and a linear program is solved for a direction within the trust region,
    the violation of the linearized constraints being relaxed by penalized
    slack variables. The Lagrange multipliers are estimated from the dual
    linear program, and the method stops as soon as the KKT conditions hold.
    Otherwise, several linear steps, conjugate with respect to a BFGS
    approximation of the Hessian matrix of the Lagrangian function, are taken
    and globalized by a merit function. The gradients are approximated by
    central finite differences.

    Parameters
    ----------
    fun : callable
        Objective function to be minimized.

            ``fun(x, *args) -> float``

        where ``x`` is an array with shape (n,) and `args` is a tuple.
    x0 : array_like, shape (n,)
        Initial guess.
    args : tuple, optional
        Extra arguments passed to the objective and constraint functions.
    cub : {callable, sequence of callable}, optional
        Inequality constraint functions ``cub[j](x, *args) <= 0``.
    ceq : {callable, sequence of callable}, optional
        Equality constraint functions ``ceq[r](x, *args) == 0``.
    dl : array_like, shape (n,), optional
        Initial lower bounds of the trust region on the steps. Each component
        must be negative. Default is ``-radius_init``.
    du : array_like, shape (n,), optional
        Initial upper bounds of the trust region on the steps. Each component
        must be positive. Default is ``radius_init``.
    options : dict, optional
        Options passed to the solver. Accepted keys are:

            disp : bool, optional
                Whether to print information about the optimization procedure.
            maxiter : int, optional
                Maximum number of iterations.
            radius_init : float, optional
                Initial half-width of the trust region, used if `dl` or `du`
                is not provided.
            tol : float, optional
                Tolerance under which a quantity is considered to be zero.
            diff_step : float, optional
                Step of the central finite differences.
            feasibility_tol : float, optional
                Tolerance on the constraint violation, the sign of the
                multipliers, and the complementary slackness.
            stationarity_tol : float, optional
                Tolerance on the gradient of the Lagrangian function.
            duality_tol : float, optional
                Relative tolerance on the difference between the optimal values
                of the linear subproblems and of their duals.
            penalty : float, optional
                Cost of the slack variables in the linear subproblems.
            rho : float, optional
                Weight of the quadratic terms of the penalized Lagrangian.
            merit_increment : float, optional
                Increment added to the multipliers in the merit function.
            sigma : float, optional
                Constant of the sufficient decrease condition.
            eta : float, optional
                Constant of the curvature condition.
            radius_inc : float, optional
                Ratio above which the trust region is enlarged.
            radius_dec : float, optional
                Ratio below which the trust region is shrunk.
            line_search_step : float, optional
                Grid spacing of the line searches.
            curvature_tol : float, optional
                Relative tolerance under which the BFGS update is skipped.
            emfcq_step : float, optional
                If provided, the extended Mangasarian-Fromovitz constraint
                qualification is checked on a grid of this spacing before the
                optimization procedure starts.
            debug : bool, optional
                Whether to perform additional checks. This option should be
                used only for debugging purposes and is highly discouraged.

    Returns
    -------
    `trscp.utils.OptimizeResult`
        Result of the optimization procedure, with the following fields:

            message : str
                Description of the cause of the termination.
            success : bool
                Whether the optimization procedure terminated successfully.
            status : int
                Termination status of the optimization procedure.
            x : `numpy.ndarray`, shape (n,)
                Solution point.
            fun : float
                Objective function value at the solution point.
            cub : `numpy.ndarray`, shape (m_ub,)
                Inequality constraint values at the solution point.
            ceq : `numpy.ndarray`, shape (m_eq,)
                Equality constraint values at the solution point.
            maxcv : float
                Maximum constraint violation at the solution point.
            lam : `numpy.ndarray`, shape (m_ub,)
                Last Lagrange multipliers of the inequality constraints.
            mu : `numpy.ndarray`, shape (m_eq,)
                Last Lagrange multipliers of the equality constraints.
            dl : `numpy.ndarray`, shape (n,)
                Final lower bounds of the trust region.
            du : `numpy.ndarray`, shape (n,)
                Final upper bounds of the trust region.
            nit : int
                Number of iterations.
            nfev : int
                Number of objective function evaluations.

        A description of the termination statuses is given below.

        .. list-table::
            :widths: 25 75
            :header-rows: 1

            * - Exit status
              - Description
            * - 0
              - A KKT point has been found.
            * - 1
              - The iterates have stagnated.
            * - 2
              - The maximum number of iterations has been exceeded.
            * - -1
              - A linear subproblem is infeasible or unbounded.
            * - -2
              - The linear programming solver failed.
            * - -3
              - The constraint qualification does not hold.

    Examples
    --------
    .. testsetup::

        import numpy as np
        np.set_printoptions(precision=3, suppress=True)

    We minimize :math:`x_1 x_2` subject to :math:`x_1 + x_2 = 4`,
    :math:`(x_1 - 2)^2 + (x_2 - 2)^2 \le 2`, and
    :math:`(x_1 - 2.5)^2 + (x_2 - 2)^2 \le 2`.

    >>> from trscp import minimize
    >>> def fun(x):
    ...     return x[0] * x[1]
    >>> cub = [
    ...     lambda x: (x[0] - 2.0) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
    ...     lambda x: (x[0] - 2.5) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
    ... ]
    >>> ceq = [lambda x: x[0] + x[1] - 4.0]
    >>> res = minimize(fun, [2.0, 2.0], cub=cub, ceq=ceq, dl=[-4.0, -4.0], du=[4.0, 4.0])
    >>> res.x
    array([2., 2.])
    """
    if options is None:
        options = {}
    else:
        options = dict(options)
    verbose = bool(options.get(Options.VERBOSE, DEFAULT_OPTIONS[Options.VERBOSE]))
    debug = bool(options.get(Options.DEBUG, DEFAULT_OPTIONS[Options.DEBUG]))

    # Initialize the problem.
    x0 = exact_1d_array(x0, "The initial guess must be a vector.")
    n = x0.size
    _set_default_options(options, n)
    options = MappingProxyType(options)
    if dl is None:
        dl = -options[Options.RHOBEG] * np.ones(n)
    if du is None:
        du = options[Options.RHOBEG] * np.ones(n)
    pb = Problem(fun, cub, ceq, dl, du, args, options[Options.DIFF_STEP], False, debug)
    if pb.n != n:
        raise ValueError(f"The trust region must have {n} components, got {pb.n}.")
    lam = np.zeros(pb.m_ub)
    mu = np.zeros(pb.m_eq)

    # Check the constraint qualification if required.
    if options[Options.EMFCQ_STEP] is not None and not emfcq(pb, options[Options.EMFCQ_STEP]):
        return _build_result(pb, x0, lam, mu, ExitStatus.CQ_ERROR, 0, options)
    if verbose:
        print(f"Starting the optimization procedure of {pb.fun_name}.")
        print(f"Number of inequality constraints: {pb.m_ub}.")
        print(f"Number of equality constraints: {pb.m_eq}.")
        print(f"Maximum number of iterations: {options[Options.MAX_ITER]}.")
        print()

    # Start the optimization procedure.
    x = x0
    hess = np.eye(n)
    history = [x]
    n_iter = 0
    while True:
        # Stop the optimization procedure if the maximum number of iterations
        # has been exceeded.
        if n_iter >= options[Options.MAX_ITER]:
            status = ExitStatus.MAX_ITER_WARNING
            break
        n_iter += 1

        # Perform the linear iterations.
        try:
            x_trial, _, _, lam, mu, hess, stationary, _ = linear_iterations(pb, x, hess, options)
        except InfeasibleSubproblemError as exc:
            _log.warning(f"{pb.fun_name}: {exc}")
            status = ExitStatus.INFEASIBLE_ERROR
            break
        except SubproblemSolverError as exc:
            _log.warning(f"{pb.fun_name}: {exc}")
            status = ExitStatus.LINPROG_ERROR
            break
        if stationary:
            status = ExitStatus.STATIONARY_SUCCESS
            break

        # Globalize the step with the merit function and update the trust
        # region accordingly.
        x_new = accept_or_refine(pb, x_trial, x, 1.0, x_trial - x, lam, mu, options)
        pb.set_trust_region(*update_trust_region(pb, x_new, x, options))
        _log.info(f"Iteration {n_iter}: x = {x_new}, trust region = [{pb.dl}, {pb.du}]")
        if verbose:
            _print_step(f"Iteration {n_iter}", pb, x_new, pb.n_eval, n_iter)
        if is_stationary(pb, x_new, lam, mu, options):
            x = x_new
            status = ExitStatus.STATIONARY_SUCCESS
            break

        # Stop if the last three accepted points coincide.
        x = x_new
        history.append(x)
        if len(history) >= 3 and all(np.all(np.abs(point - x) <= get_arrays_tol(point, x)) for point in history[-3:-1]):
            status = ExitStatus.STAGNATION_WARNING
            break

    return _build_result(pb, x, lam, mu, status, n_iter, options)


def _set_default_options(options, n):
    """
    Set the default options.
    """
    if Options.MAX_ITER in options and options[Options.MAX_ITER] <= 0:
        raise ValueError("The maximum number of iterations must be positive.")
    if Options.RHOBEG in options and options[Options.RHOBEG] <= 0.0:
        raise ValueError("The initial trust-region radius must be positive.")
    for key in (Options.DIFF_STEP, Options.LINE_SEARCH_STEP, Options.PENALTY, Options.MERIT_INCREMENT):
        if key in options and options[key] <= 0.0:
            raise ValueError(f"The option {key.value} must be positive.")
    for key in (Options.TOL, Options.FEASIBILITY_TOL, Options.STATIONARITY_TOL, Options.DUALITY_TOL, Options.CURVATURE_TOL, Options.RHO):
        if key in options and options[key] < 0.0:
            raise ValueError(f"The option {key.value} must be nonnegative.")
    if Options.LINE_SEARCH_STEP in options and options[Options.LINE_SEARCH_STEP] >= 1.0:
        raise ValueError("The line-search step must be less than one.")
    if Options.RADIUS_DEC in options and options[Options.RADIUS_DEC] <= 0.0:
        raise ValueError("The ratio below which the trust region is shrunk must be positive.")
    if Options.EMFCQ_STEP in options and options[Options.EMFCQ_STEP] is not None and options[Options.EMFCQ_STEP] <= 0.0:
        raise ValueError("The grid spacing of the constraint qualification check must be positive.")
    options.setdefault(Options.VERBOSE.value, DEFAULT_OPTIONS[Options.VERBOSE])
    options[Options.VERBOSE.value] = bool(options[Options.VERBOSE])
    options.setdefault(Options.DEBUG.value, DEFAULT_OPTIONS[Options.DEBUG])
    options[Options.DEBUG.value] = bool(options[Options.DEBUG])
    options.setdefault(Options.MAX_ITER.value, DEFAULT_OPTIONS[Options.MAX_ITER])
    options[Options.MAX_ITER.value] = int(options[Options.MAX_ITER])
    options.setdefault(Options.EMFCQ_STEP.value, DEFAULT_OPTIONS[Options.EMFCQ_STEP])
    if options[Options.EMFCQ_STEP] is not None:
        options[Options.EMFCQ_STEP.value] = float(options[Options.EMFCQ_STEP])
    for key in (
        Options.CURVATURE_TOL,
        Options.DIFF_STEP,
        Options.DUALITY_TOL,
        Options.ETA,
        Options.FEASIBILITY_TOL,
        Options.LINE_SEARCH_STEP,
        Options.MERIT_INCREMENT,
        Options.PENALTY,
        Options.RADIUS_DEC,
        Options.RADIUS_INC,
        Options.RHO,
        Options.RHOBEG,
        Options.SIGMA,
        Options.STATIONARITY_TOL,
        Options.TOL,
    ):
        options.setdefault(key.value, DEFAULT_OPTIONS[key])
        options[key.value] = float(options[key])
    if not options[Options.RADIUS_DEC] <= options[Options.RADIUS_INC]:
        raise ValueError("The ratio below which the trust region is shrunk must not exceed the ratio above which it is enlarged.")
    if not 0.0 < options[Options.SIGMA] < options[Options.ETA] < 1.0:
        raise ValueError("The constants of the line search must satisfy 0 < sigma < eta < 1.")

    # Check whether there are any unknown options.
    for key in options:
        if key not in Options.__members__.values():
            warnings.warn(f"Unknown option: {key}.", RuntimeWarning, 3)


def _build_result(pb, x, lam, mu, status, n_iter, options):
    """
    Build the result of the optimization process.
    """
    fun_val, cub_val, ceq_val = pb(x)
    result = OptimizeResult()
    result.message = {
        ExitStatus.STATIONARY_SUCCESS: "A KKT point has been found.",
        ExitStatus.STAGNATION_WARNING: "The iterates have stagnated.",
        ExitStatus.MAX_ITER_WARNING: "The optimum has not been found within the maximum number of iterations.",
        ExitStatus.INFEASIBLE_ERROR: "A linear subproblem is infeasible or unbounded.",
        ExitStatus.LINPROG_ERROR: "The linear programming solver failed.",
        ExitStatus.CQ_ERROR: "The constraint qualification does not hold.",
    }.get(status, "Unknown exit status.")
    result.success = status == ExitStatus.STATIONARY_SUCCESS
    result.status = status.value
    result.x = np.copy(x)
    result.fun = fun_val
    result.cub = cub_val
    result.ceq = ceq_val
    result.maxcv = pb.maxcv(x, cub_val, ceq_val)
    result.lam = np.copy(lam)
    result.mu = np.copy(mu)
    result.dl = pb.dl
    result.du = pb.du
    result.nit = n_iter
    result.nfev = pb.n_eval

    # Print the result if requested.
    if options[Options.VERBOSE]:
        _print_step(result.message, pb, result.x, result.nfev, result.nit)
    return result


def _print_step(message, pb, x, n_eval, n_iter):
    """
    Print information about the current state of the optimization process.
    """
    fun_val, cub_val, ceq_val = pb(x)
    print()
    print(message if message.endswith(".") else f"{message}.")
    print(f"Number of function evaluations: {n_eval}.")
    print(f"Number of iterations: {n_iter}.")
    print(f"Least value of {pb.fun_name}: {fun_val}.")
    print(f"Maximum constraint violation: {pb.maxcv(x, cub_val, ceq_val)}.")
    with np.printoptions(**PRINT_OPTIONS):
        print(f"Corresponding point: {x}.")
        print(f"Trust region: [{pb.dl}, {pb.du}].")
