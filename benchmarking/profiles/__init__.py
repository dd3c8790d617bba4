from .problems import BenchmarkProblem, Problems
from .utils import get_logger

__all__ = ['BenchmarkProblem', 'Problems', 'get_logger']
