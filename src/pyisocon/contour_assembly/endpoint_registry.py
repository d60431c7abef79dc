"""
endpoint_registry.py

Per-level mapping from open contour ends to the contour currently ending there.
"""

import logging
from collections.abc import Iterator

from pyisocon.core.common import ContourHandle, Level
from pyisocon.core.point import Point

logger: logging.Logger = logging.getLogger(__name__)


class EndpointRegistry():
    """
    Registry of the open ends of every live contour at a single iso-level.

    Every key is the front or back of exactly one live contour. A contour that
    closes on itself is retired: its closing point leaves the open-end map and
    is remembered separately so that a later segment touching it can be
    reported as a fault instead of being silently attached.
    """

    def __init__(self, level: Level) -> None:
        """
        :param level: [in] iso-level whose ends are registered here
        """
        self.__level: Level = level
        self.__ends: dict[Point, ContourHandle] = {}
        self.__retired: dict[Point, ContourHandle] = {}

    @property
    def level(self) -> Level:
        """
        Iso-level of the registry.
        """
        return self.__level

    def lookup(self, point: Point) -> ContourHandle | None:
        """
        Return the handle of the contour with an open end at point, or None.
        """
        return self.__ends.get(point)

    def insert(self, point: Point, handle: ContourHandle) -> None:
        """
        Register point as an open end of the contour with the given handle,
        replacing any previous owner.
        """
        self.__ends[point] = handle

    def remove(self, point: Point) -> None:
        """
        Remove the open end at point if present.
        """
        self.__ends.pop(point, None)

    def retire(self, point: Point) -> None:
        """
        Move the open end at point into the set of closed-loop points.

        :param point: [in] front (== back) of a contour that just closed
        """
        handle: ContourHandle | None = self.__ends.pop(point, None)
        assert handle is not None
        self.__retired[point] = handle
        logger.debug("Retired closed contour %s at (%s, %s) on level %s",
                     handle, point.x, point.y, self.__level)

    def retired_owner(self, point: Point) -> ContourHandle | None:
        """
        Return the handle of the closed contour whose closure point is point,
        or None.
        """
        return self.__retired.get(point)

    def items(self) -> Iterator[tuple[Point, ContourHandle]]:
        """
        Iterate over (open end, owner) pairs.
        """
        return iter(self.__ends.items())

    def __contains__(self, point: Point) -> bool:
        return point in self.__ends

    def __len__(self) -> int:
        return len(self.__ends)
