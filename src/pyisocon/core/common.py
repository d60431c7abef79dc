"""
common.py

Typedefs, constants and error types shared by the contour assembly code.
"""
import logging

logger: logging.Logger = logging.getLogger(__name__)


# *******
# GLOBALS
# *******

# Iso-level value. Levels are compared by exact value, never with a tolerance.
Level = float

# Typedefs for readability.
ContourHandle = int
PointIndex = int

# Used for accessing numpy shape for clarity sake
ROWS = 0
COLS = 1
PLACEHOLDER_HANDLE = -1

# ***********************
# TESTING FLAGS
CHECK_VALIDITY: bool = False

#
# ***********************


# ******
# Errors
# ******

class InternalLinkError(RuntimeError):
    """
    Internal-consistency fault raised when an invariant of the assembly engine
    is violated, e.g. a contour could not be extended or connected at an end
    the registry reported, or a cycle graph still branches after its cycles
    were removed.

    This signals a defect in the segment producer or in the assembler itself,
    never an ordinary data condition.
    """


class MalformedInputError(ValueError):
    """
    Raised for input that is rejected before assembly begins: empty or
    non-finite levels, events at unknown levels or unreadable event files.
    """


def formatted_point_list(points: list, delim: str = " ") -> str:
    """
    Format a list of points for log messages.

    :param points: [in] points to format
    :param delim: [in] delimiter between points
    :return: formatted string
    """
    return delim.join(f"({p[0]}, {p[1]})" for p in points)
