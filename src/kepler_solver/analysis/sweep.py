from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple, Type, Union

from kepler_solver.core.constants import TWO_PI
from kepler_solver.core.errors import ErrorCode
from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.starters import StarterMethod
from kepler_solver.solvers.dispatch import solve_kepler_equation
from kepler_solver.solvers.registry import SolverMethod


@dataclass
class SweepGridSpec:
    """
    Defines an (e, M) grid for convergence diagnostics.

    Eccentricities are sampled on [e_min, e_max], mean anomalies on
    [0, 2 pi) with n_mean_anomaly points.
    """
    e_min: float = 0.0
    e_max: float = 0.99
    n_eccentricity: int = 12
    n_mean_anomaly: int = 36

    def __post_init__(self):
        if not (0.0 <= self.e_min <= self.e_max < 1.0):
            raise ValueError(f"Eccentricity range must satisfy 0 <= e_min <= e_max < 1. Got: [{self.e_min}, {self.e_max}]")
        if self.n_eccentricity < 1:
            raise ValueError("n_eccentricity must be positive.")
        if self.n_mean_anomaly < 1:
            raise ValueError("n_mean_anomaly must be positive.")

    def eccentricities(self) -> List[float]:
        if self.n_eccentricity == 1:
            return [self.e_min]
        step = (self.e_max - self.e_min) / (self.n_eccentricity - 1)
        return [self.e_min + i * step for i in range(self.n_eccentricity)]

    def mean_anomalies(self) -> List[float]:
        step = TWO_PI / self.n_mean_anomaly
        return [i * step for i in range(self.n_mean_anomaly)]


@dataclass
class SweepSample:
    e: float
    M_rad: float
    result: float
    error: ErrorCode
    iterations: int
    step_error: float
    residual_error: float
    function_evaluations: int


@dataclass
class SweepLog:
    """
    Outputs of one sweep: one sample per grid point, keyed by
    (starter, solver) name pair.
    """
    samples: Dict[Tuple[str, str], List[SweepSample]] = field(default_factory=dict)

    def record(self, starter_name: str, solver_name: str, sample: SweepSample) -> None:
        self.samples.setdefault((starter_name, solver_name), []).append(sample)

    def max_iterations_used(self, starter_name: str, solver_name: str) -> int:
        key = (starter_name, solver_name)
        if key not in self.samples:
            raise ValueError(f"No samples recorded for {key}.")
        return max(s.iterations for s in self.samples[key])

    def max_round_trip_error(self, starter_name: str, solver_name: str) -> float:
        """Largest |E - e sin(E) - M| over the recorded samples (M taken mod 2 pi)."""
        key = (starter_name, solver_name)
        if key not in self.samples:
            raise ValueError(f"No samples recorded for {key}.")
        worst = 0.0
        for s in self.samples[key]:
            if s.error != ErrorCode.NONE:
                continue
            diff = math.remainder(s.result - s.e * math.sin(s.result) - s.M_rad, TWO_PI)
            worst = max(worst, abs(diff))
        return worst


def _tag_name(enum_cls: Type[IntEnum], value: Union[IntEnum, int]) -> str:
    try:
        return enum_cls(value).name
    except ValueError:
        return str(value)


def run_sweep(
    spec: SweepGridSpec,
    starter_method: Union[StarterMethod, int],
    solver_method: Union[SolverMethod, int],
    params: Optional[IterationParameters] = None,
    log: Optional[SweepLog] = None,
) -> SweepLog:
    """
    Solve Kepler's equation at every grid point with one starter/solver pair.

    Each grid point is a separate scalar solve; the parameter settings
    (tolerances, iteration cap) are copied for every call so the caller's
    instance is never shared between solves.
    """
    template = params if params is not None else IterationParameters()
    out = log if log is not None else SweepLog()
    starter_name = _tag_name(StarterMethod, starter_method)
    solver_name = _tag_name(SolverMethod, solver_method)

    for e in spec.eccentricities():
        for M in spec.mean_anomalies():
            p = IterationParameters(
                tol_f=template.tol_f,
                tol_x=template.tol_x,
                max_iterations=template.max_iterations,
            )
            result, err = solve_kepler_equation(e, M, starter_method, solver_method, p)
            out.record(starter_name, solver_name, SweepSample(
                e=e,
                M_rad=M,
                result=result,
                error=err,
                iterations=p.iteration_count,
                step_error=p.step_error,
                residual_error=p.residual_error,
                function_evaluations=p.function_evaluations,
            ))

    return out
