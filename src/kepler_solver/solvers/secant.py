"""
Derivative-free two-point solvers.

    secant           classic secant on the bracket [M, M + e]
    wegstein_secant  Wegstein's secant acceleration of x <- M + e sin(x)
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import (
    keep_iterating,
    residual_scale,
    store_result,
    warn_if_exhausted,
)

logger = logging.getLogger(__name__)


def secant(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Secant method started from the two points M and M + e.

    The supplied starter is ignored. Either starting point is accepted
    directly when it already satisfies tol_f.

    Returns:
        Number of iterations.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("secant: e=%.6f M=%.6f starter=%.6f (ignored)", e, M_rad, x0)

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

    x = xr
    df = abs(fr) * corr
    count = 0
    while True:
        if fr == fl:
            # flat secant, no further progress possible
            break

        x = (fr * xl - fl * xr) / (fr - fl)
        fx = eval_elliptic(e, M_rad, x)
        params.sin_evaluations += 1
        params.function_evaluations += 1

        xl, fl = xr, fr
        xr, fr = x, fx

        count += 1
        dx = abs(xr - xl)
        df = abs(fx) * corr
        logger.debug("secant: iter %d dx=%.3e df=%.3e", count, dx, df)

        if not keep_iterating(dx, df, count, params):
            break

    store_result(params, x, dx, df)
    warn_if_exhausted("secant", count, dx <= params.tol_x or df <= params.tol_f, params)
    return count


def _wegstein_step(x0: float, y0: float, x1: float, y1: float) -> Optional[float]:
    # None when the secant through (x0, y0) and (x1, y1) is degenerate
    if x1 == y1:
        return None
    q = (x0 - y0) / (x1 - y1) - 1.0
    if q == 0.0:
        return None
    return x1 + (x1 - x0) / q


def wegstein_secant(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Wegstein's secant modification of the fixed-point iteration
    g(x) = M + e sin(x). The two starting points are the starter x0 and
    its image g(x0).

    Returns:
        Number of iterations.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("wegstein_secant: e=%.6f M=%.6f starter=%.15f", e, M_rad, x0)

    y0 = M_rad + e * math.sin(x0)
    x1 = y0
    y1 = M_rad + e * math.sin(x1)
    params.sin_evaluations += 2

    count = 0
    while True:
        x2 = _wegstein_step(x0, y0, x1, y1)
        if x2 is None:
            # x1 is a fixed point of g or the secant is flat; keep x1
            x2 = x1
            dx = abs(x1 - x0)
            df = abs(eval_elliptic(e, M_rad, x1)) * corr
            params.sin_evaluations += 1
            params.function_evaluations += 1
            break

        y2 = M_rad + e * math.sin(x2)
        params.sin_evaluations += 1

        count += 1
        dx = abs(x1 - x2)
        df = abs(eval_elliptic(e, M_rad, x2)) * corr
        params.sin_evaluations += 1
        params.function_evaluations += 1
        logger.debug("wegstein_secant: iter %d dx=%.3e df=%.3e", count, dx, df)

        x0, x1 = x1, x2
        y0, y1 = y1, y2

        if not keep_iterating(dx, df, count, params):
            break

    store_result(params, x2, dx, df)
    warn_if_exhausted("wegstein_secant", count, dx <= params.tol_x or df <= params.tol_f, params)
    return count
