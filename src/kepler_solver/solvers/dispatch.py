"""
Entry point of the Kepler equation solver.

solve_kepler_equation() validates the input, classifies the eccentricity,
reduces the mean anomaly, picks a starter and runs the chosen solver. It
never raises for numeric input; the returned ErrorCode must be checked
before the result is used.
"""

from __future__ import annotations

import logging
from typing import Tuple, Union

from kepler_solver.core.constants import TWO_PI
from kepler_solver.core.errors import ErrorCode
from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.domain import EccentricityDomain, check_value, classify, reduce_angle
from kepler_solver.physics.starters import StarterMethod, starter
from kepler_solver.solvers.registry import SolverMethod, resolve_solver

logger = logging.getLogger(__name__)


def _solve_elliptic(
    e: float,
    M_rad: float,
    starter_method: Union[StarterMethod, int],
    solver_method: Union[SolverMethod, int],
    params: IterationParameters,
) -> Tuple[float, ErrorCode]:
    status = ErrorCode.NONE

    # reduce to (-pi, pi], then solve on [0, pi] and mirror
    M_red = reduce_angle(M_rad)
    negative = M_red < 0.0
    if negative:
        M_red = -M_red

    # Nijenhuis refines the S7 starter internally
    if solver_method == SolverMethod.NIJENHUIS:
        starter_method = StarterMethod.S7

    x0, starter_status = starter(e, M_red, starter_method)
    if starter_status != ErrorCode.NONE:
        status = ErrorCode.BAD_STARTER_METHOD
        x0 = M_red + e
        logger.debug("unknown starter %r, falling back to M + e = %.15f", starter_method, x0)
    params.starter = x0

    descriptor = resolve_solver(solver_method)
    if descriptor is None:
        logger.debug("unknown solver %r", solver_method)
        params.result = 0.0
        return 0.0, ErrorCode.BAD_SOLVER_METHOD

    params.iteration_count = descriptor.solve(e, M_red, x0, params)

    if negative:
        params.result = TWO_PI - params.result

    return params.result, status


def solve_kepler_equation(
    e: float,
    M_rad: float,
    starter_method: Union[StarterMethod, int],
    solver_method: Union[SolverMethod, int],
    params: IterationParameters,
) -> Tuple[float, ErrorCode]:
    """
    Solve Kepler's equation M = E - e sin(E) for the eccentric anomaly E.

    Args:
        e: eccentricity; only the elliptic and circular domains are solved
        M_rad: mean anomaly (rad), any finite value
        starter_method: StarterMethod tag for the initial guess
        solver_method: SolverMethod tag for the iteration scheme
        params: caller-owned settings, updated in place with the result
            and iteration statistics

    Returns:
        (E, error code). E is 0.0 for BAD_VALUE, BAD_ECCENTRICITY and
        BAD_SOLVER_METHOD. BAD_STARTER_METHOD is not fatal: the solve ran
        with the fallback starter M + e.

    Notes:
        - parabolic and hyperbolic eccentricities are not solved and are
          reported as BAD_ECCENTRICITY
        - running out of iterations is not an error; inspect
          params.step_error / params.residual_error (or params.converged)
    """
    params.reset_outputs()

    if check_value(e) != ErrorCode.NONE or check_value(M_rad) != ErrorCode.NONE:
        logger.debug("non-finite input e=%r M=%r", e, M_rad)
        return 0.0, ErrorCode.BAD_VALUE

    params.clamp()

    domain, _status = classify(e)
    logger.debug("e=%.12g classified as %s", e, domain.value)

    if domain is EccentricityDomain.INVALID:
        logger.debug("rejected eccentricity e=%r", e)
        return 0.0, ErrorCode.BAD_ECCENTRICITY

    if domain is EccentricityDomain.CIRCULAR:
        params.result = M_rad
        return M_rad, ErrorCode.NONE

    if domain is EccentricityDomain.ELLIPTIC:
        return _solve_elliptic(e, M_rad, starter_method, solver_method, params)

    # parabolic and hyperbolic solvers are not implemented
    logger.debug("no solver for %s orbits", domain.value)
    return 0.0, ErrorCode.BAD_ECCENTRICITY
