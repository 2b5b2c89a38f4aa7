from __future__ import annotations

import logging
import math

from kepler_solver.core.constants import PI, PI_SQUARED
from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.itercore import refine_order5
from kepler_solver.physics.kepler_equation import eval_elliptic
from kepler_solver.solvers.common import residual_scale, store_result

logger = logging.getLogger(__name__)

# alpha(e, M) = _ALPHA_0 + _ALPHA_1 (pi - M) / (1 + e)
_ALPHA_0 = 3.0 * PI_SQUARED / (PI_SQUARED - 6.0)
_ALPHA_1 = 1.6 * PI / (PI_SQUARED - 6.0)


def markley_starter(e: float, M_rad: float) -> float:
    """
    Cubic/Pade starter of Markley (1995), Celestial Mechanics 63, p.101-111.
    Valid for M in [0, pi].
    """
    alpha = _ALPHA_0 + _ALPHA_1 * (PI - M_rad) / (1.0 + e)
    d = 3.0 * (1.0 - e) + alpha * e
    q = 2.0 * alpha * d * (1.0 - e) - M_rad * M_rad
    r = 3.0 * alpha * d * (d - 1.0 + e) * M_rad + M_rad * M_rad * M_rad

    # w^(2/3)
    w = math.cbrt(abs(r) + math.sqrt(q * q * q + r * r))
    w *= w

    if w > 0.0:
        return (2.0 * r * w / (w * w + q * w + q * q) + M_rad) / d
    return 0.0


def markley(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Markley's method: closed form starter followed by exactly one fifth
    order correction. The caller's starter is ignored and params.starter is
    overwritten with the internal one.

    Returns:
        Always 1.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("markley: e=%.6f M=%.6f starter=%.6f (ignored)", e, M_rad, x0)

    x = markley_starter(e, M_rad)
    params.starter = x

    x = refine_order5(e, M_rad, x)
    params.sin_evaluations += 1
    params.cos_evaluations += 1
    params.function_evaluations += 1

    dx = abs(x - params.starter)
    df = abs(eval_elliptic(e, M_rad, x)) * corr
    params.sin_evaluations += 1
    params.function_evaluations += 1
    logger.debug("markley: starter=%.15f dx=%.3e df=%.3e", params.starter, dx, df)

    store_result(params, x, dx, df)
    return 1
