from __future__ import annotations

import logging
import math

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import residual_scale, store_result, warn_if_exhausted

logger = logging.getLogger(__name__)


def fixed_point(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Fixed-point iteration x <- M + e sin(x).

    Only tol_f ends the loop. Since f(x(n+1)) = e (sin x(n) - sin x(n+1)),
    the reported step error |x(n+1) - x(n)| lags the residual by one
    iteration; that is the defined behaviour of this method.

    Returns:
        Number of iterations.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("fixed_point: e=%.6f M=%.6f starter=%.15f", e, M_rad, x0)

    x = x0
    count = 0
    while True:
        x_prev = x
        x = M_rad + e * math.sin(x_prev)

        fx = eval_elliptic(e, M_rad, x)
        params.sin_evaluations += 2
        params.function_evaluations += 1

        count += 1
        dx = abs(x - x_prev)
        df = abs(fx) * corr
        logger.debug("fixed_point: iter %d dx=%.3e df=%.3e", count, dx, df)

        if not (df > params.tol_f and count < params.max_iterations):
            break

    store_result(params, x, dx, df)
    warn_if_exhausted("fixed_point", count, df <= params.tol_f, params)
    return count
