#!/usr/bin/env python3
"""
Solve problem 217 of Hock and Schittkowski, whose solution (0.6, 0.8) lies on
the unit circle, starting far away from it.
"""
import logging

import numpy as np
from trscp import minimize, set_loglevel


if __name__ == "__main__":
    set_loglevel(logging.INFO)
    cub = [lambda x: -(1.0 + x[0] - 2.0 * x[1])]
    ceq = [lambda x: x[0] ** 2.0 + x[1] ** 2.0 - 1.0]
    res = minimize(lambda x: -x[1], [10.0, 10.0], cub=cub, ceq=ceq, dl=-100.0 * np.ones(2), du=100.0 * np.ones(2))
    print(res)
