import numpy as np

from .utils import get_logger


class BenchmarkProblem:
    """
    Optimization problem with a starting point and a known solution.
    """

    def __init__(self, name, fun, cub, ceq, dl, du, x0, solution=None):
        self.name = name
        self.fun = fun
        self.cub = list(cub)
        self.ceq = list(ceq)
        self.dl = np.array(dl, dtype=float)
        self.du = np.array(du, dtype=float)
        self.x0 = np.array(x0, dtype=float)
        self.solution = None if solution is None else np.array(solution, dtype=float)

    @property
    def n(self):
        return self.x0.size

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name!r}, n={self.n}, m_ub={len(self.cub)}, m_eq={len(self.ceq)})'


def _hs217():
    return BenchmarkProblem(
        '217',
        lambda x: -x[1],
        [lambda x: -(1.0 + x[0] - 2.0 * x[1])],
        [lambda x: x[0] ** 2.0 + x[1] ** 2.0 - 1.0],
        [-100.0, -100.0],
        [100.0, 100.0],
        [10.0, 10.0],
        [0.6, 0.8],
    )


def _hs221():
    return BenchmarkProblem(
        '221',
        lambda x: -x[0],
        [lambda x: -((1.0 - x[0]) ** 3.0 - x[1])],
        [],
        [-100.0, -100.0],
        [100.0, 100.0],
        [0.25, 0.25],
        [1.0, 0.0],
    )


def _hs313():
    return BenchmarkProblem(
        '313',
        lambda x: (x[0] - 20.0) ** 2.0 + (x[1] + 20.0) ** 2.0,
        [
            lambda x: x[0] + x[1] - 15.0,
            lambda x: x[0] - x[1] - 15.0,
            lambda x: -x[0] + x[1] - 15.0,
            lambda x: -x[0] - x[1] - 15.0,
        ],
        [lambda x: x[0] ** 2.0 / 100.0 + x[1] ** 2.0 / 36.0 - 1.0],
        [-100.0, -100.0],
        [100.0, 100.0],
        [0.0, 0.0],
        [7.809, -3.748],
    )


def _hs325():
    return BenchmarkProblem(
        '325',
        lambda x: x[0] ** 2.0 + x[1],
        [
            lambda x: -(-(x[0] + x[1]) + 1.0),
            lambda x: -(-(x[0] + x[1] ** 2.0) + 1.0),
        ],
        [lambda x: x[0] ** 2.0 + x[1] ** 2.0 - 9.0],
        [-100.0, -100.0],
        [100.0, 100.0],
        [-3.0, 0.0],
        [-2.732, -1.536],
    )


def _hs14():
    return BenchmarkProblem(
        '14',
        lambda x: (x[0] - 2.0) ** 2.0 + (x[1] - 1.0) ** 2.0,
        [lambda x: -(-0.25 * x[0] ** 2.0 - x[1] ** 2.0 + 1.0)],
        [lambda x: x[0] - 2.0 * x[1] + 1.0],
        [-100.0, -100.0],
        [100.0, 100.0],
        [2.0, 2.0],
        [0.8228756555322954, 0.9114378277661477],
    )


def _hs1():
    return BenchmarkProblem(
        '1',
        lambda x: 100.0 * (x[1] - x[0] ** 2.0) ** 2.0 + (1.0 - x[0]) ** 2.0,
        [lambda x: -x[1] - 1.5],
        [lambda x: x[0] - 1.0],
        [-100.0, -100.0],
        [100.0, 100.0],
        [-2.0, 1.0],
        [1.0, 1.0],
    )


def _box(width):
    # Inequalities -width <= x[i] <= width, for two variables.
    return [
        lambda x: x[0] - width,
        lambda x: x[1] - width,
        lambda x: -x[0] - width,
        lambda x: -x[1] - width,
    ]


def _trid():
    # https://www.sfu.ca/~ssurjano/trid.html
    return BenchmarkProblem(
        'Trid',
        lambda x: np.sum((x - 1.0) ** 2.0) - np.sum(x[1:] * x[:-1]),
        _box(4.0),
        [lambda x: x[0] + x[1] - 4.0],
        [-10.0, -10.0],
        [10.0, 10.0],
        [15.0, 7.5],
        [2.0, 2.0],
    )


def _bohachevsky():
    # https://www.sfu.ca/~ssurjano/boha.html
    return BenchmarkProblem(
        'Bohachevsky',
        lambda x: x[0] ** 2.0 + 2.0 * x[1] ** 2.0 - 0.3 * np.cos(3.0 * np.pi * x[0] + 4.0 * np.pi * x[1]) + 0.3,
        [
            lambda x: x[0] + x[1] - 15.0,
            lambda x: x[0] - x[1] - 15.0,
            lambda x: -x[0] + x[1] - 15.0,
            lambda x: -x[0] - x[1] - 15.0,
        ],
        [lambda x: x[1]],
        [-4.0, -4.0],
        [4.0, 4.0],
        [1.0, 0.0],
        [0.0, 0.0],
    )


def _perm():
    # https://www.sfu.ca/~ssurjano/perm0db.html
    def fun(x, beta=2.0):
        j = np.arange(1, x.size + 1)
        return sum(np.sum((j + beta) * (x ** i - 1.0 / j ** i)) ** 2.0 for i in range(1, x.size + 1))

    return BenchmarkProblem(
        'Perm',
        fun,
        _box(2.0),
        [lambda x: x[0] - 1.0],
        [-10.0, -10.0],
        [10.0, 10.0],
        [1.5, 1.5],
        [1.0, 0.5],
    )


def _sum_squares():
    return BenchmarkProblem(
        'Sum squares',
        lambda x: np.sum(np.arange(1, x.size + 1) * x ** 2.0),
        _box(4.0),
        [lambda x: x[0]],
        [-10.0, -10.0],
        [10.0, 10.0],
        [1.5, 1.5],
        [0.0, 0.0],
    )


def _disks():
    return BenchmarkProblem(
        'Disks',
        lambda x: x[0] * x[1],
        [
            lambda x: (x[0] - 2.0) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
            lambda x: (x[0] - 2.5) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
        ],
        [lambda x: x[0] + x[1] - 4.0],
        [-4.0, -4.0],
        [4.0, 4.0],
        [2.0, 2.0],
    )


CATALOG = {
    '1': _hs1,
    '14': _hs14,
    '217': _hs217,
    '221': _hs221,
    '313': _hs313,
    '325': _hs325,
    'Bohachevsky': _bohachevsky,
    'Disks': _disks,
    'Perm': _perm,
    'Sum squares': _sum_squares,
    'Trid': _trid,
}


class Problems(list):

    def __init__(self, names=None):
        super().__init__()
        logger = get_logger(__name__)
        if names is None:
            names = list(CATALOG)
        for name in names:
            if name in CATALOG:
                self.append(CATALOG[name]())
            else:
                logger.warning(f'{name}: unknown problem')
