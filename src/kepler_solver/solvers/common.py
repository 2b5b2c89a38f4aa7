# Helpers shared by the solver bank

from __future__ import annotations

import logging

from kepler_solver.core.params import IterationParameters

logger = logging.getLogger(__name__)


def residual_scale(e: float) -> float:
    """
    Factor e / (1 - e) turning |f(x)| into an angular error estimate,
    since f'(x) ~ 1 - e near x = 0.
    """
    return e / (1.0 - e)


def keep_iterating(step_error: float, residual_error: float, count: int, params: IterationParameters) -> bool:
    """Loop condition: neither tolerance met and iterations left."""
    return (
        step_error > params.tol_x
        and residual_error > params.tol_f
        and count < params.max_iterations
    )


def store_result(params: IterationParameters, x: float, step_error: float, residual_error: float) -> None:
    params.result = x
    params.step_error = step_error
    params.residual_error = residual_error


def warn_if_exhausted(name: str, count: int, converged: bool, params: IterationParameters) -> None:
    # Non-convergence is not an error code; it is only reported here
    if not converged and count >= params.max_iterations:
        logger.warning(
            "%s: stopped after %d iterations without convergence (dx=%.3e, df=%.3e)",
            name, count, params.step_error, params.residual_error,
        )
