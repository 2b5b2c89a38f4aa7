from __future__ import annotations

import logging
import math

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.itercore import refine_order5
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import residual_scale, store_result

logger = logging.getLogger(__name__)


def mikkola_starter(e: float, M_rad: float) -> float:
    """
    Cubic starter of Mikkola (1987), Celestial Mechanics 40, p.329-334.

    Solves s^3 + 3 a s - 2 b = 0 for s = sin(E/3), applies the O(s^5)
    correction and maps back through E = M + e (3 s - 4 s^3).
    """
    denom = 1.0 / (0.5 + 4.0 * e)
    b = 0.5 * M_rad * denom
    a = (1.0 - e) * denom
    c = math.cbrt(math.sqrt(a * a * a + b * b) + b)

    s = 0.0
    if c > 0.0:
        s = c - a / c
    s2 = s * s

    s += -0.078 * s * s2 * s2 / (1.0 + e)
    s2 = s * s

    return M_rad + e * s * (3.0 - 4.0 * s2)


def mikkola(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Mikkola's method: cubic starter plus one fifth order correction.
    The caller's starter is ignored and params.starter is overwritten.

    Returns:
        Always 1.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("mikkola: e=%.6f M=%.6f starter=%.6f (ignored)", e, M_rad, x0)

    x = mikkola_starter(e, M_rad)
    params.starter = x

    x = refine_order5(e, M_rad, x)
    params.sin_evaluations += 1
    params.cos_evaluations += 1
    params.function_evaluations += 1

    dx = abs(x - params.starter)
    df = abs(eval_elliptic(e, M_rad, x)) * corr
    params.sin_evaluations += 1
    params.function_evaluations += 1
    logger.debug("mikkola: starter=%.15f dx=%.3e df=%.3e", params.starter, dx, df)

    store_result(params, x, dx, df)
    return 1
