"""
Single-step correction kernels for the elliptic Kepler equation.

All kernels share the Danby-Burkardt nested form. With
    f0 = M - x0 + e sin(x0)
    f1 = 1 - e cos(x0)
    f2 = e sin(x0) / 2,  f3 = e cos(x0) / 6,  f4 = -e sin(x0) / 24
each order reuses the previous increment:
    d1 = f0 / f1
    d2 = f0 / (f1 + f2 d1)
    d3 = f0 / (f1 + f2 d2 + f3 d2^2)
    d4 = f0 / (f1 + f2 d3 + f3 d3^2 + f4 d3^3)
and returns x0 + d(N-1) for order N. No convergence loop here.

Reference: Danby & Burkardt (1983), Celestial Mechanics 31, p.95-107
"""

from __future__ import annotations

from typing import Tuple

from kepler_solver.core.constants import DERIVATIVE_GUARD
from kepler_solver.physics.kepler_equation import sincos_scaled


def _taylor_terms(e: float, M_rad: float, x0: float) -> Tuple[float, float, float, float]:
    # (f0, f1, e sin x0, e cos x0); f1 carries the zero-derivative guard
    esx, ecx = sincos_scaled(x0, e)
    f0 = M_rad - x0 + esx
    f1 = 1.0 - ecx + DERIVATIVE_GUARD
    return f0, f1, esx, ecx


def refine_order2(e: float, M_rad: float, x0: float) -> float:
    """Newton-Raphson step, quadratic convergence."""
    f0, f1, _esx, _ecx = _taylor_terms(e, M_rad, x0)
    return x0 + f0 / f1


def refine_order3(e: float, M_rad: float, x0: float) -> float:
    """Halley step, cubic convergence."""
    f0, f1, esx, _ecx = _taylor_terms(e, M_rad, x0)
    f2 = esx / 2.0

    dx = f0 / f1
    dx = f0 / (f1 + f2 * dx)
    return x0 + dx


def refine_order4(e: float, M_rad: float, x0: float) -> float:
    """Danby-Burkardt step, quartic convergence."""
    f0, f1, esx, ecx = _taylor_terms(e, M_rad, x0)
    f2 = esx / 2.0
    f3 = ecx / 6.0

    dx = f0 / f1
    dx = f0 / (f1 + f2 * dx)
    dx = f0 / (f1 + f2 * dx + f3 * dx * dx)
    return x0 + dx


def refine_order5(e: float, M_rad: float, x0: float) -> float:
    """
    Danby-Burkardt step, quintic convergence.

    Denominators are evaluated in nested (Horner) form, the grouping a
    fused multiply-add chain would use, to keep rounding error down.
    """
    f0, f1, esx, ecx = _taylor_terms(e, M_rad, x0)
    f2 = esx / 2.0
    f3 = ecx / 6.0
    f4 = -esx / 24.0

    dx = f0 / f1
    dx = f0 / (dx * f2 + f1)
    dx = f0 / (dx * (dx * f3 + f2) + f1)
    dx = f0 / (dx * (dx * (dx * f4 + f3) + f2) + f1)
    return x0 + dx
