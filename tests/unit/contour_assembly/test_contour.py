"""
Test contour extension, connection and path output
"""

import numpy as np
import numpy.testing as npt
import pytest

from pyisocon.contour_assembly.contour import Contour, is_loop
from pyisocon.contour_assembly.contour_set import ContourSet
from pyisocon.contour_assembly.endpoint_registry import EndpointRegistry
from pyisocon.core.point import Point, Segment

S = Point(0.0, 0.0)
A1 = Point(1.0, 0.0)
A2 = Point(2.0, 0.0)
B1 = Point(0.0, 1.0)
B2 = Point(0.0, 2.0)


def _register(contours: ContourSet, ends: EndpointRegistry, *built: Contour) -> None:
    """
    Add contours to the set and register their open ends.
    """
    for c in built:
        handle: int = contours.add(c)
        ends.insert(c.front(), handle)
        ends.insert(c.back(), handle)


def test_new_contour_from_segment() -> None:
    """
    A founding segment (p1, p2) starts as backward=[p2], forward=[p1].
    """
    c: Contour = Contour.from_segment(Segment(S, A1), 1.0)

    assert c.backward == [A1]
    assert c.forward == [S]
    assert c.front() == A1
    assert c.back() == S
    assert c.points() == [A1, S]
    assert not c.is_loop
    assert len(c) == 2


def test_empty_sequences_rejected() -> None:
    """
    Both point sequences must hold at least one point.
    """
    with pytest.raises(AssertionError):
        Contour(1.0, backward=[], forward=[S])
    with pytest.raises(AssertionError):
        Contour.from_points(1.0, [S])


def test_extend_front_and_back() -> None:
    """
    Segments touching the front grow backward, segments touching the back
    grow forward, and the registry follows the open ends.
    """
    contours = ContourSet()
    ends = EndpointRegistry(1.0)
    c: Contour = Contour.from_points(1.0, [S, A1])
    _register(contours, ends, c)

    assert c.extend(Segment(B1, S), ends)
    assert c.front() == B1
    assert ends.lookup(B1) == c.handle
    assert S not in ends

    assert c.extend(Segment(A1, A2), ends)
    assert c.back() == A2
    assert ends.lookup(A2) == c.handle
    assert A1 not in ends

    assert c.points() == [B1, S, A1, A2]


def test_extend_without_shared_end_fails() -> None:
    """
    Extension fails and leaves everything untouched when no end matches.
    """
    contours = ContourSet()
    ends = EndpointRegistry(1.0)
    c: Contour = Contour.from_points(1.0, [S, A1])
    _register(contours, ends, c)

    assert not c.extend(Segment(B1, B2), ends)
    assert c.points() == [S, A1]
    assert len(ends) == 2


@pytest.mark.parametrize("a_points, b_points, expected", [
    # front-front
    ([S, A1, A2], [S, B1, B2], [B2, B1, S, A1, A2]),
    # front-back
    ([S, A1, A2], [B2, B1, S], [B2, B1, S, A1, A2]),
    # back-front
    ([A2, A1, S], [S, B1, B2], [A2, A1, S, B1, B2]),
    # back-back
    ([A2, A1, S], [B2, B1, S], [A2, A1, S, B1, B2]),
])
def test_connect_orientations(a_points: list[Point],
                              b_points: list[Point],
                              expected: list[Point]) -> None:
    """
    All four orientation cases merge into one coherent path and register the
    two outer ends.
    """
    contours = ContourSet()
    ends = EndpointRegistry(1.0)
    a: Contour = Contour.from_points(1.0, a_points)
    b: Contour = Contour.from_points(1.0, b_points)
    _register(contours, ends, a, b)

    assert a.connect(b, ends)

    assert a.points() == expected
    assert S not in ends
    assert ends.lookup(expected[0]) == a.handle
    assert ends.lookup(expected[-1]) == a.handle
    assert len(ends) == 2


def test_connect_with_long_backward() -> None:
    """
    Connecting a contour with a multi-point backward sequence keeps the order.
    """
    m = Point(5.0, 5.0)
    n = Point(6.0, 6.0)
    contours = ContourSet()
    ends = EndpointRegistry(1.0)
    a: Contour = Contour.from_points(1.0, [S, A1])
    b = Contour(1.0, backward=[m, B1, S], forward=[n, B2])
    _register(contours, ends, a, b)
    assert b.points() == [S, B1, m, n, B2]

    assert a.connect(b, ends)

    assert a.points() == [B2, n, m, B1, S, A1]


def test_connect_without_shared_end_fails() -> None:
    """
    Connection fails when the contours share no open end.
    """
    contours = ContourSet()
    ends = EndpointRegistry(1.0)
    a: Contour = Contour.from_points(1.0, [S, A1])
    b: Contour = Contour.from_points(1.0, [B1, B2])
    _register(contours, ends, a, b)

    assert not a.connect(b, ends)
    assert a.points() == [S, A1]
    assert len(ends) == 4


def test_path_and_transforms() -> None:
    """
    Paths are (N, 2) float arrays with optional column transforms.
    """
    c: Contour = Contour.from_points(1.0, [S, A1, A2])

    npt.assert_array_equal(c.path(), np.array([[0, 0], [1, 0], [2, 0]], dtype=np.float64))
    npt.assert_allclose(c.path(lambda x: 10 * x + 1, lambda y: -y),
                        np.array([[1, 0], [11, 0], [21, 0]], dtype=np.float64))


def test_is_loop() -> None:
    """
    Test closure tagging for contours and path arrays.
    """
    loop: Contour = Contour.from_points(1.0, [S, A1, B1, S])

    assert loop.is_loop
    assert is_loop(loop.path())
    assert not is_loop(np.array([[0.0, 0.0], [1.0, 0.0]]))
    assert not is_loop(np.zeros((0, 2)))
