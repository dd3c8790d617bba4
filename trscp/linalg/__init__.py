from .lp import solve_dual, solve_primal

__all__ = ['solve_dual', 'solve_primal']
