from __future__ import annotations

import math
from dataclasses import dataclass

from kepler_solver.core.constants import (
    DEFAULT_MAX_ITERATIONS,
    MAX_ITERATIONS_FACTOR,
    MIN_TOLERANCE,
)
from kepler_solver.core.errors import ErrorCode


def _valid_tolerance(tol: float) -> bool:
    return math.isfinite(tol) and MIN_TOLERANCE < tol < 1.0


@dataclass
class IterationParameters:
    """
    Caller-owned settings and statistics for one solve call.

    Inputs (caller may override, repaired by clamp() at solve time):
        tol_f: tolerance for the scaled residual |f(x)|
        tol_x: tolerance for the step |x(n+1) - x(n)|
        max_iterations: iteration cap, 0 < max_iterations < 10 * default

    Outputs (written by the solver entry point):
        result: eccentric anomaly (rad), best effort on non-convergence
        starter: starting value actually used; some solvers derive their own
        residual_error: |f(x)| * e / (1 - e) at termination
        step_error: |dx| at termination
        iteration_count: refinement steps performed

    Diagnostic counters (sin/cos/Kepler-function evaluations) are reset by
    every solver and never influence the iteration.
    """
    tol_f: float = MIN_TOLERANCE
    tol_x: float = MIN_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    result: float = 0.0
    starter: float = 0.0
    residual_error: float = 0.0
    step_error: float = 0.0
    iteration_count: int = 0

    sin_evaluations: int = 0
    cos_evaluations: int = 0
    function_evaluations: int = 0

    def set_tol_f(self, tol: float) -> ErrorCode:
        """Set tol_f; rejects values outside (MIN_TOLERANCE, 1) and keeps the old one."""
        if not _valid_tolerance(tol):
            return ErrorCode.BAD_TOLERANCE
        self.tol_f = tol
        return ErrorCode.NONE

    def set_tol_x(self, tol: float) -> ErrorCode:
        """Set tol_x; rejects values outside (MIN_TOLERANCE, 1) and keeps the old one."""
        if not _valid_tolerance(tol):
            return ErrorCode.BAD_TOLERANCE
        self.tol_x = tol
        return ErrorCode.NONE

    def set_max_iterations(self, max_iterations: int) -> ErrorCode:
        """Set the iteration cap; must satisfy 0 < n < 10 * DEFAULT_MAX_ITERATIONS."""
        if not (0 < max_iterations < MAX_ITERATIONS_FACTOR * DEFAULT_MAX_ITERATIONS):
            return ErrorCode.BAD_VALUE
        self.max_iterations = int(max_iterations)
        return ErrorCode.NONE

    def clamp(self) -> int:
        """
        Silently replace unusable settings by library defaults.

        Tolerances below MIN_TOLERANCE (including 0), not below 1, or not
        finite fall back to MIN_TOLERANCE. An iteration cap outside the
        valid range (including 0) falls back to DEFAULT_MAX_ITERATIONS.

        Returns:
            Number of fields that were replaced.
        """
        replaced = 0
        if not (math.isfinite(self.tol_f) and MIN_TOLERANCE <= self.tol_f < 1.0):
            self.tol_f = MIN_TOLERANCE
            replaced += 1
        if not (math.isfinite(self.tol_x) and MIN_TOLERANCE <= self.tol_x < 1.0):
            self.tol_x = MIN_TOLERANCE
            replaced += 1
        if not (0 < self.max_iterations < MAX_ITERATIONS_FACTOR * DEFAULT_MAX_ITERATIONS):
            self.max_iterations = DEFAULT_MAX_ITERATIONS
            replaced += 1
        return replaced

    def reset_outputs(self) -> None:
        self.result = 0.0
        self.starter = 0.0
        self.residual_error = 0.0
        self.step_error = 0.0
        self.iteration_count = 0
        self.reset_counters()

    def reset_counters(self) -> None:
        self.sin_evaluations = 0
        self.cos_evaluations = 0
        self.function_evaluations = 0

    @property
    def converged(self) -> bool:
        """True if the last solve stopped on its step or residual tolerance."""
        return self.step_error <= self.tol_x or self.residual_error <= self.tol_f
