from __future__ import annotations

import math

# Library version (year.month)
VERSION: str = "2019.11"

# Angles
PI: float = math.pi
TWO_PI: float = 2.0 * math.pi
HALF_PI: float = 0.5 * math.pi
PI_SQUARED: float = math.pi * math.pi

# Smallest accepted iteration tolerance, also the default for tol_f / tol_x
MIN_TOLERANCE: float = 1e-15

# Default iteration cap; caller supplied caps must stay below factor * default
DEFAULT_MAX_ITERATIONS: int = 100
MAX_ITERATIONS_FACTOR: int = 10

# Half-width of the circular / parabolic bands around e = 0 and e = 1
ECCENTRICITY_EPSILON: float = 1e-10

# Added to f'(x) so the kernels survive f'(x) = 0 at (e, x) = (1, 0)
DERIVATIVE_GUARD: float = 1e-19

# Generalized Newton steps in Nijenhuis' final correction
NIJENHUIS_STEPS: int = 3
