import math
import pytest

from kepler_solver.physics.itercore import (
    refine_order2,
    refine_order3,
    refine_order4,
    refine_order5,
)

KERNELS = [refine_order2, refine_order3, refine_order4, refine_order5]


@pytest.mark.parametrize("e, M, E", [
    (0.1, 1.0, 1.088597752397894),
    (0.3, 0.05, 0.071402575646418),
])
def test_higher_order_single_step_is_more_accurate(e, M, E):
    errors = [abs(k(e, M, M) - E) for k in KERNELS]
    assert errors[0] > errors[1] > errors[2] > errors[3]


def test_order2_is_plain_newton_step():
    e, M, x0 = 0.4, 1.0, 1.2
    f = x0 - e * math.sin(x0) - M
    fp = 1 - e * math.cos(x0)
    assert abs(refine_order2(e, M, x0) - (x0 - f / fp)) < 1e-15


def test_fixed_point_of_every_kernel():
    e, M, E = 0.5, 2.0, 2.354242758222781
    for k in KERNELS:
        assert abs(k(e, M, E) - E) < 1e-14


def test_zero_derivative_is_guarded():
    # f' = 1 - e cos(0) = 0 at (e, M, x0) = (1, 0, 0)
    for k in KERNELS:
        x = k(1.0, 0.0, 0.0)
        assert math.isfinite(x)
