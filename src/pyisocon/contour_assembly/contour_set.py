"""
contour_set.py

Working collection of contours addressed by stable integer handles.
"""

import logging
from collections.abc import Iterator

from pyisocon.contour_assembly.contour import Contour
from pyisocon.core.common import PLACEHOLDER_HANDLE, ContourHandle

logger: logging.Logger = logging.getLogger(__name__)


class ContourSet():
    """
    Slot map of live contours. Handles are never reused, so two handles
    compare equal iff they name the same contour. Iteration follows insertion
    order.
    """

    def __init__(self) -> None:
        self.__contours: dict[ContourHandle, Contour] = {}
        self.__next_handle: ContourHandle = 0

    def add(self, contour: Contour) -> ContourHandle:
        """
        Take ownership of the contour and assign it a fresh handle.

        :param contour: [in, out] contour without a handle
        :return: handle of the contour
        """
        assert contour.handle == PLACEHOLDER_HANDLE
        handle: ContourHandle = self.__next_handle
        self.__next_handle += 1
        contour.handle = handle
        self.__contours[handle] = contour
        return handle

    def remove(self, handle: ContourHandle) -> Contour:
        """
        Release the contour with the given handle and return it.
        """
        contour: Contour = self.__contours.pop(handle)
        contour.handle = PLACEHOLDER_HANDLE
        return contour

    def handles(self) -> list[ContourHandle]:
        """
        Snapshot of the live handles, safe to iterate while mutating the set.
        """
        return list(self.__contours)

    def __getitem__(self, handle: ContourHandle) -> Contour:
        return self.__contours[handle]

    def __contains__(self, handle: ContourHandle) -> bool:
        return handle in self.__contours

    def __iter__(self) -> Iterator[Contour]:
        return iter(self.__contours.values())

    def __len__(self) -> int:
        return len(self.__contours)
