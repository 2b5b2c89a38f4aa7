# Input validation, eccentricity classification and angle reduction

from __future__ import annotations

import math
from enum import Enum
from typing import Tuple

from kepler_solver.core.constants import ECCENTRICITY_EPSILON, PI, TWO_PI
from kepler_solver.core.errors import ErrorCode


class EccentricityDomain(Enum):
    INVALID = "invalid"
    CIRCULAR = "circular"
    ELLIPTIC = "elliptic"
    PARABOLIC = "parabolic"
    HYPERBOLIC = "hyperbolic"


def check_value(x: float) -> ErrorCode:
    """BAD_VALUE for NaN or +/-Infinity, NONE otherwise."""
    return ErrorCode.NONE if math.isfinite(x) else ErrorCode.BAD_VALUE


def classify(e: float) -> Tuple[EccentricityDomain, ErrorCode]:
    """
    Categorize an eccentricity value.

    Bands (eps = ECCENTRICITY_EPSILON):
        e < 0                 -> INVALID
        |e| <= eps            -> CIRCULAR (-0.0 included)
        eps < e < 1 - eps     -> ELLIPTIC
        1 - eps <= e <= 1+eps -> PARABOLIC
        e > 1 + eps           -> HYPERBOLIC

    Returns:
        (domain, error code); non-finite input gives (INVALID, BAD_VALUE),
        negative input (INVALID, BAD_ECCENTRICITY).
    """
    if check_value(e) != ErrorCode.NONE:
        return EccentricityDomain.INVALID, ErrorCode.BAD_VALUE

    if e > ECCENTRICITY_EPSILON:
        if e < 1.0 - ECCENTRICITY_EPSILON:
            return EccentricityDomain.ELLIPTIC, ErrorCode.NONE
        if e > 1.0 + ECCENTRICITY_EPSILON:
            return EccentricityDomain.HYPERBOLIC, ErrorCode.NONE
        return EccentricityDomain.PARABOLIC, ErrorCode.NONE

    if e < 0.0:
        return EccentricityDomain.INVALID, ErrorCode.BAD_ECCENTRICITY

    return EccentricityDomain.CIRCULAR, ErrorCode.NONE


def reduce_angle(angle_rad: float) -> float:
    """
    Reduce an angle to (-pi, pi].

    Values already inside the interval come back unchanged, so the
    reduction is idempotent. Non-finite input is returned as is.
    """
    if not math.isfinite(angle_rad):
        return angle_rad
    if -PI < angle_rad <= PI:
        return angle_rad

    x = angle_rad - math.floor(angle_rad / TWO_PI) * TWO_PI
    if x > PI:
        x -= TWO_PI
    if x < -PI:
        x += TWO_PI
    return x
