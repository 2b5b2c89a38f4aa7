# Static table of the available solver algorithms

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Union

from kepler_solver.core.params import IterationParameters
from kepler_solver.solvers.bisection import bisection
from kepler_solver.solvers.fixed_point import fixed_point
from kepler_solver.solvers.laguerre_conway import laguerre_conway
from kepler_solver.solvers.markley import markley
from kepler_solver.solvers.mikkola import mikkola
from kepler_solver.solvers.newton import (
    danby_burkardt4,
    danby_burkardt5,
    halley,
    newton_raphson,
)
from kepler_solver.solvers.nijenhuis import nijenhuis
from kepler_solver.solvers.secant import secant, wegstein_secant

# solve(e, M, x0, params) -> iteration count
SolveFunction = Callable[[float, float, float, IterationParameters], int]


class SolverMethod(IntEnum):
    NONE = 0
    BISECTION = 1
    DANBY_BURKARDT4 = 2
    DANBY_BURKARDT5 = 3
    FIXED_POINT = 4
    HALLEY = 5
    LAGUERRE_CONWAY = 6
    MARKLEY = 7
    MIKKOLA = 8
    NEWTON_RAPHSON = 9
    NIJENHUIS = 10
    SECANT = 11
    WEGSTEIN_SECANT = 12


@dataclass(frozen=True)
class SolverDescriptor:
    method: SolverMethod
    solve: SolveFunction
    description: str


_SOLVERS: Mapping[SolverMethod, SolverDescriptor] = MappingProxyType({
    d.method: d for d in (
        SolverDescriptor(SolverMethod.BISECTION, bisection, "Bisection method (interval halving)"),
        SolverDescriptor(SolverMethod.DANBY_BURKARDT4, danby_burkardt4, "Danby-Burkardt method of order 4"),
        SolverDescriptor(SolverMethod.DANBY_BURKARDT5, danby_burkardt5, "Danby-Burkardt method of order 5"),
        SolverDescriptor(SolverMethod.FIXED_POINT, fixed_point, "Fixed-point iteration"),
        SolverDescriptor(SolverMethod.HALLEY, halley, "Halley method"),
        SolverDescriptor(SolverMethod.LAGUERRE_CONWAY, laguerre_conway, "Laguerre-Conway method"),
        SolverDescriptor(SolverMethod.MARKLEY, markley, "Markley method"),
        SolverDescriptor(SolverMethod.MIKKOLA, mikkola, "Mikkola method"),
        SolverDescriptor(SolverMethod.NEWTON_RAPHSON, newton_raphson, "Newton-Raphson method"),
        SolverDescriptor(SolverMethod.NIJENHUIS, nijenhuis, "Nijenhuis method"),
        SolverDescriptor(SolverMethod.SECANT, secant, "Secant method"),
        SolverDescriptor(SolverMethod.WEGSTEIN_SECANT, wegstein_secant, "Wegstein's secant modification"),
    )
})

_INVALID_SOLVER = "invalid solver method"


def resolve_solver(method: Union[SolverMethod, int]) -> Optional[SolverDescriptor]:
    """Descriptor for a solver tag, or None if the tag is unknown."""
    try:
        return _SOLVERS.get(SolverMethod(method))
    except ValueError:
        return None


def describe_solver(method: Union[SolverMethod, int]) -> str:
    descriptor = resolve_solver(method)
    return descriptor.description if descriptor is not None else _INVALID_SOLVER


def available_solvers() -> List[SolverMethod]:
    return list(_SOLVERS.keys())
