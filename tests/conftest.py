"""
Holding fixtures that pertain to all tests: small segment event streams for
the contour shapes the assembly engine has to handle.
"""

import logging

import pytest

from pyisocon.core.common import Level
from pyisocon.core.point import Point, SegmentEvent
from pyisocon.utils.contour_testing_utils import (events_from_polyline,
                                                  points_from_coordinates)

logger: logging.Logger = logging.getLogger(__name__)

LEVEL: Level = 1.0


@pytest.fixture(scope="session")
def square_points() -> list[Point]:
    """
    Closed unit square, first point repeated at the end.
    """
    return points_from_coordinates([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])


@pytest.fixture(scope="session")
def square_events(square_points: list[Point]) -> list[SegmentEvent]:
    """
    Four segments p0-p1, p1-p2, p2-p3, p3-p0 at level 1.0.
    """
    return events_from_polyline(square_points, LEVEL)


@pytest.fixture(scope="session")
def figure_eight_points() -> list[Point]:
    """
    Open chain A0 A X L1 L2 X B that touches itself once at X = (2, 0).
    """
    return points_from_coordinates(
        [(0, 0), (1, 0), (2, 0), (3, 1), (3, -1), (2, 0), (4, 0)])


@pytest.fixture(scope="session")
def figure_eight_events(figure_eight_points: list[Point]) -> list[SegmentEvent]:
    """
    Six segments of the self-touching chain, in chain order.
    """
    return events_from_polyline(figure_eight_points, LEVEL)


@pytest.fixture(scope="session")
def double_touch_points() -> list[Point]:
    """
    Open chain S X a b X Y c d Y E touching itself at X = (1, 0) and
    Y = (4, 0).
    """
    return points_from_coordinates(
        [(0, 0), (1, 0), (2, 1), (2, -1), (1, 0),
         (4, 0), (5, 1), (5, -1), (4, 0), (6, 0)])


@pytest.fixture(scope="session")
def double_touch_events(double_touch_points: list[Point]) -> list[SegmentEvent]:
    """
    Nine segments of the doubly self-touching chain, in chain order.
    """
    return events_from_polyline(double_touch_points, LEVEL)
