import argparse
import sys

import numpy as np

from profiles import Problems, get_logger
from trscp import minimize
from trscp.settings import ExitStatus


def solve(problem, options):
    logger = get_logger(__name__)
    res = minimize(problem.fun, problem.x0, cub=problem.cub, ceq=problem.ceq, dl=problem.dl, du=problem.du, options=options)
    logger.info(f'{problem.name}: {res.message} (status {res.status}, {res.nit} iterations, {res.nfev} evaluations)')
    logger.info(f'{problem.name}: x = {res.x}, f(x) = {res.fun}, maxcv = {res.maxcv}')
    if problem.solution is not None:
        logger.info(f'{problem.name}: reference solution = {problem.solution}, distance = {np.linalg.norm(res.x - problem.solution)}')
    return res


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Solve the problems of the catalog.')
    parser.add_argument('--problems', nargs='+', default=None, help='names of the problems to solve (all by default)')
    parser.add_argument('--maxiter', default=100, type=int, help='maximum number of iterations')
    parser.add_argument('--emfcq', default=None, type=float, help='grid spacing of the constraint qualification check')
    parser.add_argument('--verbose', action='store_true', help='print the iterations')
    args = parser.parse_args()

    logger = get_logger(__name__)
    options = {'maxiter': args.maxiter, 'emfcq_step': args.emfcq, 'disp': args.verbose}
    infeasible = False
    for problem in Problems(args.problems):
        try:
            res = solve(problem, options)
        except (ArithmeticError, ValueError) as exc:
            logger.error(f'{problem.name}: {exc}')
            continue
        infeasible = infeasible or res.status == ExitStatus.INFEASIBLE_ERROR.value
    sys.exit(1 if infeasible else 0)
