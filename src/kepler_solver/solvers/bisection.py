from __future__ import annotations

import logging

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import (
    keep_iterating,
    residual_scale,
    store_result,
    warn_if_exhausted,
)

logger = logging.getLogger(__name__)


def bisection(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Interval halving on the bracket [M, M + e].

    The supplied starter is ignored. Linear convergence; the bracket
    endpoints are accepted directly when they already satisfy tol_f.

    Returns:
        Number of iterations.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("bisection: e=%.6f M=%.6f starter=%.6f (ignored)", e, M_rad, x0)

    xl = M_rad
    xr = M_rad + e
    dx = abs(xr - xl)

    if dx < params.tol_x:
        store_result(params, 0.5 * (xl + xr), dx, 0.0)
        return 1

    fl = eval_elliptic(e, M_rad, xl)
    params.sin_evaluations += 1
    params.function_evaluations += 1
    if abs(fl) < params.tol_f:
        store_result(params, xl, dx, abs(fl) * corr)
        return 1

    fr = eval_elliptic(e, M_rad, xr)
    params.sin_evaluations += 1
    params.function_evaluations += 1
    if abs(fr) < params.tol_f:
        store_result(params, xr, dx, abs(fr) * corr)
        return 1

    count = 0
    while True:
        x = 0.5 * (xl + xr)
        fx = eval_elliptic(e, M_rad, x)
        params.sin_evaluations += 1
        params.function_evaluations += 1

        # keep the half whose endpoints still bracket the sign change
        if fl * fx < 0.0:
            xr, fr = x, fx
        else:
            xl, fl = x, fx

        count += 1
        dx = abs(xr - xl)
        df = abs(fx) * corr
        logger.debug("bisection: iter %d dx=%.3e df=%.3e", count, dx, df)

        if not keep_iterating(dx, df, count, params):
            break

    store_result(params, x, dx, df)
    warn_if_exhausted("bisection", count, dx <= params.tol_x or df <= params.tol_f, params)
    return count
