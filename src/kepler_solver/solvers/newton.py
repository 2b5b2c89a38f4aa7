"""
Newton-type solvers built on the iteration core kernels.

    newton_raphson   order 2
    halley           order 3
    danby_burkardt4  order 4
    danby_burkardt5  order 5

All four run the same residual/step loop around the kernel of matching
order.
"""

from __future__ import annotations

import logging
from typing import Callable

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.itercore import (
    refine_order2,
    refine_order3,
    refine_order4,
    refine_order5,
)
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import (
    keep_iterating,
    residual_scale,
    store_result,
    warn_if_exhausted,
)

logger = logging.getLogger(__name__)

Kernel = Callable[[float, float, float], float]


def _kernel_loop(name: str, kernel: Kernel, e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("%s: e=%.6f M=%.6f starter=%.15f", name, e, M_rad, x0)

    x_new = x0
    count = 0
    while True:
        x_old = x_new
        x_new = kernel(e, M_rad, x_old)
        params.sin_evaluations += 1
        params.cos_evaluations += 1
        params.function_evaluations += 1

        fx = eval_elliptic(e, M_rad, x_new)
        params.sin_evaluations += 1
        params.function_evaluations += 1

        count += 1
        dx = abs(x_new - x_old)
        df = abs(fx) * corr
        logger.debug("%s: iter %d dx=%.3e df=%.3e", name, count, dx, df)

        if not keep_iterating(dx, df, count, params):
            break

    store_result(params, x_new, dx, df)
    warn_if_exhausted(name, count, dx <= params.tol_x or df <= params.tol_f, params)
    return count


def newton_raphson(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """Newton-Raphson iteration, quadratic convergence."""
    return _kernel_loop("newton_raphson", refine_order2, e, M_rad, x0, params)


def halley(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """Halley iteration, cubic convergence."""
    return _kernel_loop("halley", refine_order3, e, M_rad, x0, params)


def danby_burkardt4(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """Danby-Burkardt iteration of order 4."""
    return _kernel_loop("danby_burkardt4", refine_order4, e, M_rad, x0, params)


def danby_burkardt5(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """Danby-Burkardt iteration of order 5."""
    return _kernel_loop("danby_burkardt5", refine_order5, e, M_rad, x0, params)
