"""
contour.py

Growable bidirectional point sequence representing one contour line at a
single iso-level.
"""

import logging
from collections.abc import Callable

import numpy as np

from pyisocon.contour_assembly.endpoint_registry import EndpointRegistry
from pyisocon.core.common import (PLACEHOLDER_HANDLE, ROWS, ContourHandle,
                                  Level)
from pyisocon.core.point import Point, Segment

logger: logging.Logger = logging.getLogger(__name__)

# Coordinate transform applied to a whole column of coordinates.
CoordinateTransform = Callable[[np.ndarray], np.ndarray]


class Contour():
    """
    A contour holds points lying sequentially along a contour line at height z.

    The points are split into two sequences that meet in the middle: the full
    path is reverse(backward) followed by forward. The front of the contour is
    the last element of backward and the back is the last element of forward,
    so both ends grow by appending.
    """

    def __init__(self, z: Level, backward: list[Point], forward: list[Point]) -> None:
        """
        :param z:        [in] iso-level of the contour
        :param backward: [in] points from the middle towards the front
        :param forward:  [in] points from the middle towards the back
        """
        # backward and forward must each always have at least one entry.
        assert len(backward) > 0
        assert len(forward) > 0
        self.__z: Level = z
        self.backward: list[Point] = backward
        self.forward: list[Point] = forward

        # Assigned by the owning ContourSet.
        self.handle: ContourHandle = PLACEHOLDER_HANDLE

    @classmethod
    def from_segment(cls, segment: Segment, z: Level) -> "Contour":
        """
        Start a contour with the end points of a segment.
        """
        return cls(z, backward=[segment.p2], forward=[segment.p1])

    @classmethod
    def from_points(cls, z: Level, points: list[Point]) -> "Contour":
        """
        Build a contour from an ordered point sequence, front first.
        """
        assert len(points) >= 2
        return cls(z, backward=[points[0]], forward=list(points[1:]))

    @property
    def z(self) -> Level:
        """
        Iso-level of the contour.
        """
        return self.__z

    def front(self) -> Point:
        """
        Return the first point in the contour.
        """
        assert len(self.backward) > 0
        return self.backward[-1]

    def back(self) -> Point:
        """
        Return the last point in the contour.
        """
        assert len(self.forward) > 0
        return self.forward[-1]

    @property
    def is_loop(self) -> bool:
        """
        True iff the contour is a closed loop.
        """
        return self.front() == self.back()

    def __len__(self) -> int:
        return len(self.backward) + len(self.forward)

    def points(self) -> list[Point]:
        """
        Return the flattened point sequence, front first.
        """
        return self.backward[::-1] + self.forward

    def path(self,
             transform_x: CoordinateTransform | None = None,
             transform_y: CoordinateTransform | None = None) -> np.ndarray:
        """
        Return the contour as an (N, 2) array of coordinates.

        :param transform_x: [in] optional transform applied to the x column
        :param transform_y: [in] optional transform applied to the y column
        :return: float64 array, front first
        """
        pa: np.ndarray = np.array(self.points(), dtype=np.float64).reshape(-1, 2)
        if transform_x is not None:
            pa[:, 0] = transform_x(pa[:, 0])
        if transform_y is not None:
            pa[:, 1] = transform_y(pa[:, 1])
        assert pa.shape == (len(self), 2)
        return pa

    def extend(self, segment: Segment, ends: EndpointRegistry) -> bool:
        """
        Add the segment to the contour, updating the ends registry.

        :param segment: [in] segment with one endpoint at the front or back
        :param ends: [in, out] open-end registry of the contour's level
        :return: true iff the extension was successful
        """
        front: Point = self.front()
        if front in (segment.p1, segment.p2):
            end: Point = segment.other(front)
            self.backward.append(end)
            ends.remove(front)
            ends.insert(end, self.handle)
            return True

        back: Point = self.back()
        if back in (segment.p1, segment.p2):
            end = segment.other(back)
            self.forward.append(end)
            ends.remove(back)
            ends.insert(end, self.handle)
            return True

        return False

    def connect(self, b: "Contour", ends: EndpointRegistry) -> bool:
        """
        Connect the contour b with the receiver, updating the ends registry.
        b is consumed and must be discarded by the caller.

        :param b: [in] contour sharing an open end with the receiver
        :param ends: [in, out] open-end registry of the contour's level
        :return: true iff the connection was successful
        """
        assert b is not self
        assert b.z == self.z

        front: Point = self.front()
        if front == b.front():
            ends.remove(front)
            ends.insert(b.back(), self.handle)
            self.backward.extend(b.backward[-2::-1])
            self.backward.extend(b.forward)
            return True
        if front == b.back():
            ends.remove(front)
            ends.insert(b.front(), self.handle)
            self.backward.extend(b.forward[-2::-1])
            self.backward.extend(b.backward)
            return True

        back: Point = self.back()
        if back == b.front():
            ends.remove(back)
            ends.insert(b.back(), self.handle)
            self.forward.extend(b.backward[-2::-1])
            self.forward.extend(b.forward)
            return True
        if back == b.back():
            ends.remove(back)
            ends.insert(b.front(), self.handle)
            self.forward.extend(b.forward[-2::-1])
            self.forward.extend(b.backward)
            return True

        return False

    def __repr__(self) -> str:
        return f"Contour(z={self.z}, handle={self.handle}, points={len(self)})"


def is_loop(pa: np.ndarray) -> bool:
    """
    Return true iff a path array is a closed loop.

    :param pa: [in] (N, 2) path array
    """
    if pa.shape[ROWS] == 0:
        return False
    return bool(np.array_equal(pa[0], pa[-1]))
