"""
Starting values for the iterative Kepler equation solvers.

Each starter maps (e, M) to a first guess of the eccentric anomaly E0.
Orders refer to the asymptotic error in the eccentricity.

References:
    OG86: Odell & Gooding (1986), Celestial Mechanics 38, p.307-334
    Smith (1979), Celestial Mechanics 19, p.163-166
    Ng (1979), Celestial Mechanics 20, p.243-249
    Encke (1850), Astron. Nachr. 30, p.277-292
    Charles & Tatum (1998), Cel. Mech. Dyn. Astron. 69, p.357-372
"""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, Mapping, Tuple, Union

from kepler_solver.core.constants import PI, PI_SQUARED
from kepler_solver.core.errors import ErrorCode
from kepler_solver.physics.kepler_equation import sincos, sincos_scaled

logger = logging.getLogger(__name__)


class StarterMethod(IntEnum):
    NONE = 0
    S0 = 1    # pi, O(e^0)
    S1 = 2    # OG86 S1, O(e^1)
    S2 = 3    # OG86 S2, O(e^2)
    S3 = 4    # OG86 S3, O(e^3)
    S4 = 5    # OG86 S4, O(e^1)
    S5 = 6    # Smith, O(e^3)
    S6 = 7    # OG86 S6, O(e^1)
    S7 = 8    # OG86 S7, O(e^1)
    S8 = 9    # OG86 S8, O(e^3)
    S9 = 10   # OG86 S9, O(e^4)
    S10 = 11  # Ng, O(e^0)
    S11 = 12  # OG86 S11, O(e^4)
    S12 = 13  # OG86 S12, O(e^1)
    S13 = 14  # Encke, O(e^6)
    S14 = 15  # Charles & Tatum, O(e^1)


def starter_s0(e: float, M_rad: float) -> float:
    """E0 = pi."""
    return PI


def starter_s1(e: float, M_rad: float) -> float:
    """E0 = M."""
    return M_rad


def starter_s2(e: float, M_rad: float) -> float:
    """E0 = M + e sin(M)."""
    return M_rad + e * math.sin(M_rad)


def starter_s3(e: float, M_rad: float) -> float:
    """E0 = M + e sin(M) (1 + e cos(M))."""
    esinx, ecosx = sincos_scaled(M_rad, e)
    return M_rad + esinx * (1.0 + ecosx)


def starter_s4(e: float, M_rad: float) -> float:
    """E0 = M + e."""
    return M_rad + e


def starter_s5(e: float, M_rad: float) -> float:
    """E0 = M + e sin(M) / (1 - sin(M + e) + sin(M))  (Smith 1979)."""
    sinx = math.sin(M_rad)
    return M_rad + e * sinx / (1.0 - math.sin(M_rad + e) + sinx)


def starter_s6(e: float, M_rad: float) -> float:
    """E0 = (M + e pi) / (1 + e)."""
    return (M_rad + e * PI) / (1.0 + e)


def starter_s7(e: float, M_rad: float) -> float:
    """E0 = min{M / (1 - e), S4, S6}."""
    bound = M_rad / (1.0 - e) if e < 1.0 else math.inf
    return min(bound, starter_s4(e, M_rad), starter_s6(e, M_rad))


def starter_s8(e: float, M_rad: float) -> float:
    """E0 = S3 + e^4 (pi - S3) / (20 pi)."""
    x = starter_s3(e, M_rad)
    return x + (0.05 / PI) * e * e * e * e * (PI - x)


def starter_s9(e: float, M_rad: float) -> float:
    """E0 = M + e sin(M) / sqrt(1 - 2 e cos(M) + e^2)."""
    # singular at (e, M) = (1, 0)
    if e < 1.0 and M_rad > 0.0:
        # 1 - 2 e cos(M) + e^2 = (1 - e)^2 + 4 e sin^2(M/2)
        e1 = 1.0 - e
        sin_half = math.sin(0.5 * M_rad)
        denom = e1 * e1 + 4.0 * e * sin_half * sin_half
        if denom > 0.0:
            return M_rad + e * math.sin(M_rad) / math.sqrt(denom)
    return M_rad


def starter_s10(e: float, M_rad: float) -> float:
    """
    Ng (1979) cubic starter:
        q = 2 (1 - e) / e,  r = 3 M / e,  s = cbrt(sqrt(q^3 + r^2) + r)
        E0 = s - q / s
    """
    if e > 0.0:
        q = 2.0 * (1.0 - e) / e
        r = 3.0 * M_rad / e
        s = math.cbrt(math.sqrt(q * q * q + r * r) + r)
        if s != 0.0:
            return s - q / s
    return M_rad


# S11 coefficients: (a, b, c) = -(3^(1/3) - 8/9) / 6 * (1, -9, 2)
_S11_A = -0.922267802364199155721e-1
_S11_B = 0.830041022127779240149e+0
_S11_C = -0.184453560472839831144e+0


def starter_s11(e: float, M_rad: float) -> float:
    """
    OG86 fourth order starter:
        E0 = M + e sin(M) [1 + 2 e cos(M)/3 + e^2 (1 - 48 cos(M) + 19 cos(2M))/36
                           + e^3 (a + b cos(M) + c cos(2M))]
             / cbrt(1 - [1 + e e1 (1 + e1)^2] e cos(M)),   e1 = 1 - e
    """
    if not e < 1.0:
        return M_rad

    sinx, cosx = sincos(M_rad)
    e1 = 1.0 - e
    cos2x = 2.0 * cosx * cosx - 1.0
    ecosx = e * cosx
    esinx = e * sinx

    numerator = (
        1.0
        + ecosx * 2.0 / 3.0
        + e * e * (1.0 - 48.0 * cosx + 19.0 * cos2x) / 36.0
        + e * e * e * (_S11_A + _S11_B * cosx + _S11_C * cos2x)
    )
    denom = math.cbrt(1.0 - (1.0 + e * e1 * (1.0 + e1) * (1.0 + e1)) * ecosx)
    if denom == 0.0:
        # argument cancels to zero for e near 1 and tiny M
        return M_rad
    return M_rad + esinx * numerator / denom


_S12_A = (PI - 1.0) * (PI - 1.0) / (PI + 2.0 / 3.0)
_S12_B = 2.0 * (PI - 1.0 / 6.0) * (PI - 1.0 / 6.0) / (PI + 2.0 / 3.0)


def starter_s12(e: float, M_rad: float) -> float:
    """E0 = e E(M, e=1) + (1 - e) M, with a rational fit for E(M, e=1)."""
    w = PI - M_rad
    return e * (PI - _S12_A * w / (_S12_B - w)) + (1.0 - e) * M_rad


def starter_s13(e: float, M_rad: float) -> float:
    """
    Encke (1850):
        x  = atan2(e sin(M), 1 - e cos(M))
        y  = M + sin(x) - x
        E0 = atan2(sin(y), cos(y) - e)

    Both angles go through atan2 so the quadrant follows the signs of the
    numerator and denominator instead of a branch.
    """
    esinx, ecosx = sincos_scaled(M_rad, e)
    x = math.atan2(esinx, 1.0 - ecosx)
    y = M_rad + math.sin(x) - x
    siny, cosy = sincos(y)
    return math.atan2(siny, cosy - e)


def starter_s14(e: float, M_rad: float) -> float:
    """E0 = M + e [cbrt(pi^2 M) - pi sin(M) / 15 - M]  (Charles & Tatum)."""
    return M_rad + e * (math.cbrt(PI_SQUARED * M_rad) - PI * math.sin(M_rad) / 15.0 - M_rad)


_STARTERS: Mapping[StarterMethod, Callable[[float, float], float]] = MappingProxyType({
    StarterMethod.S0: starter_s0,
    StarterMethod.S1: starter_s1,
    StarterMethod.S2: starter_s2,
    StarterMethod.S3: starter_s3,
    StarterMethod.S4: starter_s4,
    StarterMethod.S5: starter_s5,
    StarterMethod.S6: starter_s6,
    StarterMethod.S7: starter_s7,
    StarterMethod.S8: starter_s8,
    StarterMethod.S9: starter_s9,
    StarterMethod.S10: starter_s10,
    StarterMethod.S11: starter_s11,
    StarterMethod.S12: starter_s12,
    StarterMethod.S13: starter_s13,
    StarterMethod.S14: starter_s14,
})


def resolve_starter(method: Union[StarterMethod, int]) -> Union[Callable[[float, float], float], None]:
    """Starter function for a tag, or None if the tag is unknown."""
    try:
        return _STARTERS.get(StarterMethod(method))
    except ValueError:
        return None


def starter(e: float, M_rad: float, method: Union[StarterMethod, int]) -> Tuple[float, ErrorCode]:
    """
    Evaluate the chosen starter.

    Args:
        e: eccentricity
        M_rad: mean anomaly (rad), normally reduced to [0, pi]
        method: StarterMethod tag

    Returns:
        (E0, NONE), or (0.0, BAD_STARTER_METHOD) for an unknown tag.
    """
    func = resolve_starter(method)
    if func is None:
        return 0.0, ErrorCode.BAD_STARTER_METHOD

    x0 = func(e, M_rad)
    logger.debug("starter %s: e=%.6f M=%.6f E0=%.15f", func.__name__, e, M_rad, x0)
    return x0, ErrorCode.NONE
