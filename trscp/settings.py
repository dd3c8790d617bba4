import sys
from enum import Enum

import numpy as np


# Exit status.
class ExitStatus(Enum):
    """
    Exit statuses.
    """
    STATIONARY_SUCCESS = 0
    STAGNATION_WARNING = 1
    MAX_ITER_WARNING = 2
    INFEASIBLE_ERROR = -1
    LINPROG_ERROR = -2
    CQ_ERROR = -3


class Options(str, Enum):
    """
    Option names.
    """
    CURVATURE_TOL = 'curvature_tol'
    DEBUG = 'debug'
    DIFF_STEP = 'diff_step'
    DUALITY_TOL = 'duality_tol'
    EMFCQ_STEP = 'emfcq_step'
    ETA = 'eta'
    FEASIBILITY_TOL = 'feasibility_tol'
    LINE_SEARCH_STEP = 'line_search_step'
    MAX_ITER = 'maxiter'
    MERIT_INCREMENT = 'merit_increment'
    PENALTY = 'penalty'
    RADIUS_DEC = 'radius_dec'
    RADIUS_INC = 'radius_inc'
    RHO = 'rho'
    RHOBEG = 'radius_init'
    SIGMA = 'sigma'
    STATIONARITY_TOL = 'stationarity_tol'
    TOL = 'tol'
    VERBOSE = 'disp'


# Default options.
DEFAULT_OPTIONS = {
    Options.CURVATURE_TOL.value: np.sqrt(np.finfo(float).eps),
    Options.DEBUG.value: False,
    Options.DIFF_STEP.value: np.cbrt(np.finfo(float).eps),
    Options.DUALITY_TOL.value: 1e-4,
    Options.EMFCQ_STEP.value: None,
    Options.ETA.value: 0.9,
    Options.FEASIBILITY_TOL.value: np.sqrt(np.finfo(float).eps),
    Options.LINE_SEARCH_STEP.value: 0.01,
    Options.MAX_ITER.value: 100,
    Options.MERIT_INCREMENT.value: 0.1,
    Options.PENALTY.value: 1.0,
    Options.RADIUS_DEC.value: 0.25,
    Options.RADIUS_INC.value: 0.75,
    Options.RHO.value: 0.7055,
    Options.RHOBEG.value: 1.0,
    Options.SIGMA.value: 1e-4,
    Options.STATIONARITY_TOL.value: 1e-9,
    Options.TOL.value: 1e-12,
    Options.VERBOSE.value: False,
}


# Printing options.
PRINT_OPTIONS = {
    'threshold': 6,
    'edgeitems': 2,
    'linewidth': sys.maxsize,
    'formatter': {'float_kind': lambda x: np.format_float_scientific(x, precision=3, unique=False, pad_left=2)}
}
