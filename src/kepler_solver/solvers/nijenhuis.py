"""
Nijenhuis (1991), Celestial Mechanics 51, p.319-330.

Three stages:
    1. rough starter: Mikkola cubic in region D (M < 0.4, e > 0.6),
       otherwise the S7 starter handed in by the caller
    2. refined starter: one Newton step on the quintic in s (region D), or
       one Halley step on the sn(x) approximation of Kepler's equation
    3. final correction: generalized Newton of order NIJENHUIS_STEPS + 1
       evaluated through a continuant recurrence
"""

from __future__ import annotations

import logging
import math
from typing import List

from kepler_solver.core.constants import HALF_PI, NIJENHUIS_STEPS, PI
from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.kepler_equation import eval_elliptic, sincos_scaled
from kepler_solver.solvers.common import residual_scale, store_result

logger = logging.getLogger(__name__)

# region D boundaries (ad hoc)
_REGION_D_MAX_M = 0.4
_REGION_D_MIN_E = 0.6

# sn(x) = x (1 + x^2 (a + b x^2)) and its derivative, fitted to sin(x) on [0, pi/2]
_SN_A = -0.16605
_SN_B = 0.00761
_SND_A = -0.49815
_SND_B = 0.03805


def _sn(x: float) -> float:
    if x > HALF_PI:
        return _sn(PI - x)
    x2 = x * x
    return x * (1.0 + x2 * (_SN_A + _SN_B * x2))


def _sn_prime(x: float) -> float:
    if x > HALF_PI:
        return -_sn_prime(PI - x)
    x2 = x * x
    return 1.0 + x2 * (_SND_A + _SND_B * x2)


def _region_d_starter(e: float, M_rad: float) -> float:
    e1 = 1.0 - e

    # rough: s^3 + 3 p s - 2 q = 0, cancellation-free root
    frac = 1.0 / (0.5 + 4.0 * e)
    p = e1 * frac
    q = 0.5 * M_rad * frac
    z = math.cbrt(math.sqrt(p * p * p + q * q) + q)
    z *= z

    s = 0.0
    if z > 0.0:
        s = 2.0 * q / (z + p + p * p / z)

    # refined: one Newton step on g(s) = (3/40) s^5 + ((4e + 0.5)/3) s^3 + (1 - e) s - M/3
    s2 = s * s
    if s > 0.0:
        s -= 0.075 * s * s2 * s2 / (e1 + s2 * (1.0 / frac + 0.375 * s2))
    s2 = s * s

    return M_rad + e * s * (3.0 - 4.0 * s2)


def _sn_halley_starter(e: float, M_rad: float, x0: float) -> float:
    f2 = e * _sn(x0)
    f0 = x0 - f2 - M_rad
    f1 = 1.0 - e * _sn_prime(x0)
    return x0 - f0 / (f1 - 0.5 * f0 * f2 / f1)


def _continuant_correction(f: List[float], steps: int) -> float:
    # h[i] = f0 / K(f[i], h[1..i-1], f[i-1..1]), evaluated innermost first
    h = [0.0] * (steps + 1)
    for i in range(1, steps + 1):
        denom = f[i]
        for j in range(1, i):
            denom = denom * h[j] + f[i - j]
        h[i] = f[0] / denom
    return h[steps]


def nijenhuis(e: float, M_rad: float, x0: float, params: IterationParameters) -> int:
    """
    Nijenhuis' method, order 3 to 4.

    Args:
        e: eccentricity, 0 < e < 1
        M_rad: reduced mean anomaly in [0, pi]
        x0: S7 starter, used outside region D
        params: receives result, refined starter and errors

    Returns:
        Always 1.
    """
    corr = residual_scale(e)
    params.reset_counters()
    logger.debug("nijenhuis: e=%.6f M=%.6f starter=%.15f", e, M_rad, x0)

    if M_rad < _REGION_D_MAX_M and e > _REGION_D_MIN_E:
        x = _region_d_starter(e, M_rad)
    else:
        x = _sn_halley_starter(e, M_rad, x0)
    params.starter = x

    esinx, ecosx = sincos_scaled(x, e)
    params.sin_evaluations += 1
    params.cos_evaluations += 1

    # f(x), f'(x), f''(x)/2!, f'''(x)/3!
    f = [M_rad - x + esinx, 1.0 - ecosx, 0.5 * esinx, ecosx / 6.0]

    if x > 0.0:
        x += _continuant_correction(f, NIJENHUIS_STEPS)

    dx = abs(x - params.starter)
    df = abs(eval_elliptic(e, M_rad, x)) * corr
    params.sin_evaluations += 1
    params.function_evaluations += 1
    logger.debug("nijenhuis: starter=%.15f dx=%.3e df=%.3e", params.starter, dx, df)

    store_result(params, x, dx, df)
    return 1
