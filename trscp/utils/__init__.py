from .exceptions import InfeasibleSubproblemError, SubproblemError, SubproblemSolverError
from .math import exact_1d_array, exact_2d_array, get_arrays_tol, gradient
from .structs import OptimizeResult
from ._show_versions import show_versions

__all__ = ['InfeasibleSubproblemError', 'SubproblemError', 'SubproblemSolverError', 'exact_1d_array', 'exact_2d_array', 'get_arrays_tol', 'gradient', 'OptimizeResult', 'show_versions']
