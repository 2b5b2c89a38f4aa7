"""
Error taxonomy shared by every solver component.

Solve calls never raise for numeric input; they hand back an ErrorCode next
to the numeric result. Callers must check the code before trusting the
number (a 0.0 result on error carries no meaning).
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Union


class ErrorCode(IntEnum):
    NONE = 0
    BAD_ECCENTRICITY = 1
    BAD_VALUE = 2
    BAD_STARTER_METHOD = 3
    BAD_SOLVER_METHOD = 4
    BAD_TOLERANCE = 5


_ERROR_MESSAGES: Mapping[ErrorCode, str] = MappingProxyType({
    ErrorCode.NONE: "no error occurred",
    ErrorCode.BAD_ECCENTRICITY: "bad value for eccentricity",
    ErrorCode.BAD_VALUE: "bad value for parameter (INF or NaN)",
    ErrorCode.BAD_STARTER_METHOD: "bad starter method",
    ErrorCode.BAD_SOLVER_METHOD: "bad solver method",
    ErrorCode.BAD_TOLERANCE: "bad value for error tolerance",
})

_UNKNOWN_ERROR = "unknown error code"


def describe_error(code: Union[ErrorCode, int]) -> str:
    """
    Look up the fixed message for an error code.

    Args:
        code: ErrorCode member or its integer value

    Returns:
        Message text; unknown codes get a generic message.
    """
    try:
        return _ERROR_MESSAGES[ErrorCode(code)]
    except ValueError:
        return _UNKNOWN_ERROR
