class SubproblemError(Exception):
    """
    Exception raised when a linear subproblem cannot be solved.
    """
    pass


class InfeasibleSubproblemError(SubproblemError):
    """
    Exception raised when a linear subproblem is infeasible or unbounded.
    """
    pass


class SubproblemSolverError(SubproblemError):
    """
    Exception raised when the linear programming solver fails numerically.
    """
    pass
