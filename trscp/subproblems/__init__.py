from .linear import build_linear_subproblem, get_multipliers

__all__ = ['build_linear_subproblem', 'get_multipliers']
