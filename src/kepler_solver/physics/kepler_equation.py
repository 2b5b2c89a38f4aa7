# Kepler's equation in its three forms, plus trig helpers

from __future__ import annotations

import math
from typing import Tuple


def eval_elliptic(e: float, M_rad: float, x_rad: float) -> float:
    """
    Elliptic Kepler equation residual:
        f(x) = x - e sin(x) - M

    With M_rad = 0 this returns the mean anomaly belonging to eccentric
    anomaly x_rad.
    """
    return x_rad - e * math.sin(x_rad) - M_rad


def eval_hyperbolic(e: float, M_rad: float, x_rad: float) -> float:
    """Hyperbolic Kepler equation residual: f(x) = e sinh(x) - x - M."""
    return e * math.sinh(x_rad) - x_rad - M_rad


def eval_parabolic(M_rad: float, x_rad: float) -> float:
    """
    Parabolic (Barker) equation residual in the true anomaly x:
        s = tan(x/2),  f(x) = s + s^3/3 - M
    """
    s = math.tan(0.5 * x_rad)
    return s + s * s * s / 3.0 - M_rad


def sincos(x_rad: float) -> Tuple[float, float]:
    """
    (sin x, cos x) from a single tan(x/2) evaluation (half-angle identities).
    """
    t = math.tan(0.5 * x_rad)
    cd = 1.0 / (1.0 + t * t)
    return 2.0 * t * cd, (1.0 - t * t) * cd


def sincos_scaled(x_rad: float, e: float) -> Tuple[float, float]:
    """(e sin x, e cos x) from a single tan(x/2) evaluation."""
    s, c = sincos(x_rad)
    return e * s, e * c


def true_anomaly(e: float, x_rad: float) -> float:
    """
    True anomaly from the eccentric anomaly (e < 1) or the hyperbolic
    anomaly (e > 1). Stumpff (1958), eqs. (II;14) and (III;50).

    Args:
        e: eccentricity, e >= 0 and e != 1
        x_rad: eccentric / hyperbolic anomaly (rad)

    Returns:
        True anomaly in (-pi, pi] (rad)
    """
    if e < 1.0:
        return 2.0 * math.atan(math.sqrt((1.0 + e) / (1.0 - e)) * math.tan(0.5 * x_rad))
    return 2.0 * math.atan(math.sqrt((e + 1.0) / (e - 1.0)) * math.tanh(0.5 * x_rad))
