"""
Tests for the individual solver algorithms on a reduced mean anomaly.
"""
import math
import pytest

from kepler_solver.core.params import IterationParameters
from kepler_solver.physics.starters import starter_s4, starter_s7
from kepler_solver.solvers.bisection import bisection
from kepler_solver.solvers.fixed_point import fixed_point
from kepler_solver.solvers.laguerre_conway import laguerre_conway
from kepler_solver.solvers.markley import markley, markley_starter
from kepler_solver.solvers.mikkola import mikkola, mikkola_starter
from kepler_solver.solvers.newton import (
    danby_burkardt4,
    danby_burkardt5,
    halley,
    newton_raphson,
)
from kepler_solver.solvers.nijenhuis import nijenhuis
from kepler_solver.solvers.secant import secant, wegstein_secant

ITERATIVE = [
    bisection,
    danby_burkardt4,
    danby_burkardt5,
    halley,
    laguerre_conway,
    newton_raphson,
    secant,
    wegstein_secant,
]

ECCENTRICITIES = [0.01, 0.1, 0.3, 0.5, 0.7, 0.9]
MEAN_ANOMALIES = [0.0, 0.05, 0.5, 1.0, 2.0, 3.0, math.pi]


def residual(e, M, E):
    return abs(E - e * math.sin(E) - M)


@pytest.mark.parametrize("solver", ITERATIVE, ids=lambda f: f.__name__)
def test_iterative_solvers_round_trip(solver):
    for e in ECCENTRICITIES:
        for M in MEAN_ANOMALIES:
            p = IterationParameters()
            count = solver(e, M, starter_s4(e, M), p)
            assert 1 <= count <= p.max_iterations
            assert residual(e, M, p.result) < 1e-12, (e, M)


def test_fixed_point_round_trip_moderate_eccentricity():
    for e in [0.01, 0.1, 0.3, 0.6]:
        for M in MEAN_ANOMALIES:
            p = IterationParameters()
            fixed_point(e, M, starter_s4(e, M), p)
            assert residual(e, M, p.result) < 1e-12, (e, M)


def test_fixed_point_step_lags_residual():
    p = IterationParameters(tol_f=1e-6, tol_x=1e-6)
    fixed_point(0.5, 1.0, 1.0, p)
    # the last step is the one that brought the residual under tol_f
    assert p.residual_error <= p.tol_f
    assert p.step_error > p.residual_error


@pytest.mark.parametrize("solver", [markley, mikkola, nijenhuis], ids=lambda f: f.__name__)
def test_single_shot_solvers(solver):
    for e in ECCENTRICITIES + [0.99]:
        for M in MEAN_ANOMALIES:
            p = IterationParameters()
            count = solver(e, M, starter_s7(e, M), p)
            assert count == 1
            assert residual(e, M, p.result) < 1e-12, (e, M)


def test_markley_and_mikkola_overwrite_starter():
    e, M = 0.6, 1.1

    p = IterationParameters()
    markley(e, M, 123.0, p)
    assert p.starter == markley_starter(e, M)

    p = IterationParameters()
    mikkola(e, M, 123.0, p)
    assert p.starter == mikkola_starter(e, M)


@pytest.mark.parametrize("solver", [bisection, secant], ids=lambda f: f.__name__)
def test_bracketing_solvers_ignore_starter(solver):
    e, M = 0.4, 1.3
    a = IterationParameters()
    b = IterationParameters()
    solver(e, M, 0.0, a)
    solver(e, M, 3.0, b)
    assert a.result == b.result
    assert a.iteration_count == b.iteration_count


def test_bisection_accepts_endpoint_root():
    # M = 0: the left bracket end is already the root
    p = IterationParameters()
    assert bisection(0.5, 0.0, 0.5, p) == 1
    assert p.result == 0.0


def test_newton_converges_fast():
    p = IterationParameters()
    count = newton_raphson(0.567, 1.234, 1.234, p)
    assert count < 10
    assert abs(p.result - 1.787712770105486) < 1e-13


def test_higher_order_needs_no_more_iterations():
    e, M = 0.7, 0.8
    counts = []
    for solver in [newton_raphson, halley, danby_burkardt4, danby_burkardt5]:
        p = IterationParameters()
        counts.append(solver(e, M, M, p))
    assert counts == sorted(counts, reverse=True)


def test_iteration_cap_is_respected():
    p = IterationParameters(max_iterations=2)
    assert newton_raphson(0.9, 0.3, math.pi, p) <= 2

    p = IterationParameters(max_iterations=3)
    assert bisection(0.9, 0.3, 0.0, p) <= 3


def test_evaluation_counters():
    p = IterationParameters()
    count = newton_raphson(0.3, 1.0, 1.0, p)
    assert p.function_evaluations == 2 * count
    assert p.cos_evaluations == count
