from __future__ import annotations

import logging
import math

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.kepler_equation import sincos_scaled
from kepler_solver.solvers.common import (
    keep_iterating,
    residual_scale,
    store_result,
    warn_if_exhausted,
)

logger = logging.getLogger(__name__)


def laguerre_conway(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Laguerre-Conway iteration (Conway 1986), cubic convergence:
        dx = 5 f / (f' + sqrt(|16 f'^2 - 20 f e sin(x)|))

    residual_error is taken at the point before the final step.

    Returns:
        Number of iterations.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("laguerre_conway: e=%.6f M=%.6f starter=%.15f", e, M_rad, x0)

    x = x0
    count = 0
    while True:
        esinx, ecosx = sincos_scaled(x, e)
        f0 = x - esinx - M_rad
        f1 = 1.0 - ecosx
        params.sin_evaluations += 1
        params.cos_evaluations += 1
        params.function_evaluations += 1

        dx = 5.0 * f0 / (f1 + math.sqrt(abs(16.0 * f1 * f1 - 20.0 * f0 * esinx)))
        x -= dx

        count += 1
        step = abs(dx)
        df = abs(f0) * corr
        logger.debug("laguerre_conway: iter %d dx=%.3e df=%.3e", count, step, df)

        if not keep_iterating(step, df, count, params):
            break

    store_result(params, x, step, df)
    warn_if_exhausted("laguerre_conway", count, step <= params.tol_x or df <= params.tol_f, params)
    return count
