"""
point.py

Value types for grid-space points and level-tagged line segments as they are
emitted by a CONREC-style segment producer.
"""

from dataclasses import dataclass
from typing import NamedTuple

from pyisocon.core.common import Level


class Point(NamedTuple):
    """
    Immutable grid-space point.
    Two points are the same endpoint iff both coordinates compare equal; no
    tolerance is applied. The segment producer must interpolate a shared cell
    edge to the identical value for both neighbouring cells.
    """
    x: float
    y: float


@dataclass(frozen=True)
class Segment():
    """
    Unordered pair of points lying on a contour line within one grid cell.
    """
    p1: Point
    p2: Point

    @property
    def is_degenerate(self) -> bool:
        """
        Return true iff both endpoints coincide.
        """
        return self.p1 == self.p2

    def other(self, p: Point) -> Point:
        """
        Return the endpoint opposite to p.

        :param p: [in] one of the endpoints of the segment
        :return: the other endpoint
        """
        if p == self.p1:
            return self.p2
        assert p == self.p2
        return self.p1


class SegmentEvent(NamedTuple):
    """
    One segment produced for a grid cell crossing an iso-level.
    The cell indices are carried through for the producer's benefit only.
    """
    i: int
    j: int
    segment: Segment
    level: Level


def make_segment(x1: float, y1: float, x2: float, y2: float) -> Segment:
    """
    Build a segment from raw coordinates.
    """
    return Segment(Point(float(x1), float(y1)), Point(float(x2), float(y2)))
