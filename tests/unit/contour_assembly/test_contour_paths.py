"""
Test the segment-to-path entry point
"""

import math

import numpy as np
import numpy.testing as npt
import pytest

from pyisocon.contour_assembly.assembler import AssemblyParameters
from pyisocon.contour_assembly.contour_paths import (ContourPath,
                                                     compute_contour_paths,
                                                     validate_levels)
from pyisocon.core.common import Level, MalformedInputError
from pyisocon.core.point import Point, Segment, SegmentEvent
from pyisocon.utils.contour_testing_utils import same_cycle


def test_validate_levels_sorts() -> None:
    assert validate_levels([3, 1.5, -2]) == [-2.0, 1.5, 3.0]


@pytest.mark.parametrize("levels", [[], [1.0, math.nan], [math.inf], [-math.inf, 0.0]])
def test_validate_levels_rejects(levels: list[Level]) -> None:
    """
    Empty and non-finite level lists are rejected before assembly.
    """
    with pytest.raises(MalformedInputError):
        validate_levels(levels)


def test_square_path(square_events: list[SegmentEvent],
                     square_points: list[Point]) -> None:
    """
    The square becomes one closed (5, 2) path.
    """
    paths: dict[Level, list[ContourPath]] = compute_contour_paths(square_events)

    assert list(paths) == [1.0]
    assert len(paths[1.0]) == 1
    pa: ContourPath = paths[1.0][0]
    assert pa.level == 1.0
    assert pa.is_loop
    assert pa.points.shape == (5, 2)
    assert pa.points.dtype == np.float64
    assert same_cycle(pa.points, square_points)
    assert not pa.is_degenerate


def test_levels_ascending_and_complete(square_events: list[SegmentEvent]) -> None:
    """
    Every requested level is present in ascending order, even without paths.
    """
    shifted: list[SegmentEvent] = [event._replace(level=0.5) for event in square_events[:2]]

    paths: dict[Level, list[ContourPath]] = compute_contour_paths(
        square_events + shifted, levels=[2.0, 1.0, 0.5])

    assert list(paths) == [0.5, 1.0, 2.0]
    assert paths[2.0] == []
    assert len(paths[0.5]) == 1
    assert not paths[0.5][0].is_loop
    assert paths[0.5][0].points.shape == (3, 2)
    assert paths[1.0][0].is_loop


def test_unknown_level_rejected(square_events: list[SegmentEvent]) -> None:
    with pytest.raises(MalformedInputError):
        compute_contour_paths(square_events, levels=[2.0])


def test_transforms_applied() -> None:
    """
    The coordinate transforms map grid space to the caller's space.
    """
    events: list[SegmentEvent] = [
        SegmentEvent(0, 0, Segment(Point(0.0, 0.0), Point(1.0, 2.0)), 1.0)]

    paths: dict[Level, list[ContourPath]] = compute_contour_paths(
        events,
        transform_x=lambda x: 10.0 * x,
        transform_y=lambda y: y + 0.5)

    pa: np.ndarray = paths[1.0][0].points
    npt.assert_allclose(np.sort(pa[:, 0]), [0.0, 10.0])
    npt.assert_allclose(np.sort(pa[:, 1]), [0.5, 2.5])


def test_excision_choice_gives_same_pieces(figure_eight_events: list[SegmentEvent]) -> None:
    """
    Quick and complete excision agree on a single self-touch.
    """
    def _pieces(quick: bool) -> list[tuple[bool, frozenset]]:
        paths = compute_contour_paths(figure_eight_events,
                                      parameters=AssemblyParameters(quick_excision=quick))
        return sorted((pa.is_loop, frozenset(map(tuple, pa.points.tolist())))
                      for pa in paths[1.0])

    assert _pieces(True) == _pieces(False)
    assert [is_loop for is_loop, _ in _pieces(True)] == [False, True]


def test_degenerate_path() -> None:
    empty = ContourPath(level=0.0, points=np.zeros((0, 2)), is_loop=False)
    point = ContourPath(level=0.0, points=np.ones((3, 2)), is_loop=True)
    line = ContourPath(level=0.0, points=np.array([[0.0, 0.0], [1.0, 0.0]]), is_loop=False)

    assert empty.is_degenerate
    assert point.is_degenerate
    assert not line.is_degenerate
