#!/usr/bin/env python3
r"""
Minimize the product of the variables on the intersection of two disks

.. math::

    \min_{x \in \mathbb{R}^2} & \quad x_1 x_2\\
    \text{s.t.} & \quad (x_1 - 2)^2 + (x_2 - 2)^2 \le 2,\\
    & \quad (x_1 - 2.5)^2 + (x_2 - 2)^2 \le 2,\\
    & \quad x_1 + x_2 = 4.

"""
from trscp import minimize


def fun(x):
    return x[0] * x[1]


if __name__ == "__main__":
    cub = [
        lambda x: (x[0] - 2.0) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
        lambda x: (x[0] - 2.5) ** 2.0 + (x[1] - 2.0) ** 2.0 - 2.0,
    ]
    ceq = [lambda x: x[0] + x[1] - 4.0]
    res = minimize(fun, [3.0, 1.0], cub=cub, ceq=ceq, dl=[-4.0, -4.0], du=[4.0, 4.0], options={"disp": True})
    print(res)
