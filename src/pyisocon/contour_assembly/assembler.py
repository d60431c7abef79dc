"""
assembler.py

Incremental assembly of contour lines from the unordered stream of per-cell
segments emitted by a CONREC-style producer. Each iso-level is assembled in
isolation with its own endpoint registry and contour set.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pyisocon.contour_assembly.contour import Contour
from pyisocon.contour_assembly.contour_set import ContourSet
from pyisocon.contour_assembly.endpoint_registry import EndpointRegistry
from pyisocon.contour_assembly.excise_loops import excise_loops
from pyisocon.core.common import (CHECK_VALIDITY, ContourHandle,
                                  InternalLinkError, Level)
from pyisocon.core.point import Point, Segment, SegmentEvent

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class AssemblyParameters():
    """
    Parameters for contour assembly.
    """
    # If true, use the linear-time heuristic when a contour touches itself once
    quick_excision: bool = True
    # If true, check the open-end invariant after each level is drained
    check_validity: bool = CHECK_VALIDITY


class LevelAssembly():
    """
    Working state for a single iso-level: the open-end registry and the set
    of contours built so far. Nothing here is shared with other levels.
    """

    def __init__(self, level: Level) -> None:
        """
        :param level: [in] iso-level being assembled
        """
        self.__level: Level = level
        self.__ends = EndpointRegistry(level)
        self.__contours = ContourSet()
        self.__finalized: bool = False

    @property
    def level(self) -> Level:
        """
        Iso-level being assembled.
        """
        return self.__level

    @property
    def ends(self) -> EndpointRegistry:
        """
        Open-end registry of the level.
        """
        return self.__ends

    @property
    def contours(self) -> ContourSet:
        """
        Working contour set of the level.
        """
        return self.__contours

    def add_segment(self, segment: Segment) -> None:
        """
        Add a segment to the level, creating, extending or merging contours.

        :param segment: [in] segment at this level
        """
        assert not self.__finalized
        if segment.is_degenerate:
            logger.debug("Skipping zero-length segment at (%s, %s) on level %s",
                         segment.p1.x, segment.p1.y, self.__level)
            return

        p1: Point = segment.p1
        p2: Point = segment.p2
        for p in (p1, p2):
            closed: ContourHandle | None = self.__ends.retired_owner(p)
            if closed is not None:
                raise InternalLinkError(
                    f"internal link: segment touches closed contour {closed} at {p} "
                    f"on level {self.__level}")

        h1: ContourHandle | None = self.__ends.lookup(p1)
        h2: ContourHandle | None = self.__ends.lookup(p2)

        # New segment.
        if h1 is None and h2 is None:
            c: Contour = Contour.from_segment(segment, self.__level)
            handle: ContourHandle = self.__contours.add(c)
            self.__ends.insert(p1, handle)
            self.__ends.insert(p2, handle)
            logger.debug("New contour %s on level %s", handle, self.__level)
            return

        if h1 is not None:
            # Add p2 to the end of p1's contour.
            if not self.__contours[h1].extend(segment, self.__ends):
                raise InternalLinkError(
                    f"internal link: contour {h1} has no open end at {p1}")
        elif h2 is not None:
            # Add p1 to the end of p2's contour.
            if not self.__contours[h2].extend(segment, self.__ends):
                raise InternalLinkError(
                    f"internal link: contour {h2} has no open end at {p2}")

        if h1 == h2:
            # The segment joined both ends of one contour.
            c = self.__contours[h1]
            if not c.is_loop:
                raise InternalLinkError(
                    f"internal link: contour {h1} did not close on level {self.__level}")
            self.__ends.retire(c.front())
            logger.debug("Closed contour %s with %s points on level %s",
                         h1, len(c), self.__level)
            return

        # Join contours.
        if h1 is not None and h2 is not None:
            if not self.__contours[h1].connect(self.__contours[h2], self.__ends):
                raise InternalLinkError(
                    f"internal link: contours {h1} and {h2} share no open end")
            self.__contours.remove(h2)
            logger.debug("Connected contour %s into %s on level %s", h2, h1, self.__level)

    def validate_open_ends(self) -> bool:
        """
        Return true iff every registered end is the front or back of exactly
        one open contour and every open contour has both of its distinct ends
        registered.
        """
        for p, handle in self.__ends.items():
            if handle not in self.__contours:
                logger.error("End %s registered to missing contour %s", p, handle)
                return False
            c: Contour = self.__contours[handle]
            if c.is_loop or p not in (c.front(), c.back()):
                logger.error("End %s is not an open end of contour %s", p, handle)
                return False

        for c in self.__contours:
            if c.is_loop:
                if c.front() in self.__ends:
                    logger.error("Closed contour %s still has a registered end", c.handle)
                    return False
                continue
            if self.__ends.lookup(c.front()) != c.handle or self.__ends.lookup(c.back()) != c.handle:
                logger.error("Contour %s has an unregistered end", c.handle)
                return False

        return True

    def finalize(self, quick: bool = True, check_validity: bool = False) -> list[Contour]:
        """
        Excise loops from crossed contours and freeze the level.

        :param quick: [in] allow quick excision for single self-touches
        :param check_validity: [in] check the open-end invariant first
        :return: finished contours of the level
        """
        assert not self.__finalized
        if check_validity or logger.getEffectiveLevel() == logging.DEBUG:
            if not self.validate_open_ends():
                raise InternalLinkError(
                    f"Inconsistent endpoint registry on level {self.__level}")

        # Excise loops from crossed paths.
        for handle in self.__contours.handles():
            excise_loops(self.__contours, handle, quick)

        self.__finalized = True
        finished: list[Contour] = list(self.__contours)
        logger.info("Level %s: %s contours, %s closed", self.__level, len(finished),
                    sum(1 for c in finished if c.is_loop))
        return finished


class ContourAssembler():
    """
    Consumes segment events for any number of levels and builds the contours
    of each level in its own LevelAssembly. The assembler can be passed
    directly as the per-segment callback of a segment producer.
    """

    def __init__(self, parameters: AssemblyParameters | None = None) -> None:
        """
        :param parameters: [in] assembly parameters, defaults if None
        """
        self.__parameters: AssemblyParameters = (
            parameters if parameters is not None else AssemblyParameters())
        self.__levels: dict[Level, LevelAssembly] = {}

    @property
    def parameters(self) -> AssemblyParameters:
        """
        Assembly parameters.
        """
        return self.__parameters

    @property
    def levels(self) -> list[Level]:
        """
        Levels that received at least one segment, ascending.
        """
        return sorted(self.__levels)

    def level_assembly(self, level: Level) -> LevelAssembly:
        """
        Return the working state for a level, creating it on first use.
        """
        assembly: LevelAssembly | None = self.__levels.get(level)
        if assembly is None:
            assembly = LevelAssembly(level)
            self.__levels[level] = assembly
        return assembly

    def add_segment(self, segment: Segment, level: Level) -> None:
        """
        Add a segment at the given level.
        """
        self.level_assembly(level).add_segment(segment)

    def add_event(self, event: SegmentEvent) -> None:
        """
        Add one producer event; the cell indices are ignored.
        """
        self.add_segment(event.segment, event.level)

    def add_events(self, events: Iterable[SegmentEvent]) -> None:
        """
        Consume an event stream in order.
        """
        for event in events:
            self.add_event(event)

    def __call__(self, i: int, j: int, segment: Segment, level: Level) -> None:
        self.add_segment(segment, level)

    def finalize(self) -> dict[Level, list[Contour]]:
        """
        Finish every level and return its contours, keyed by level in
        ascending order.
        """
        finished: dict[Level, list[Contour]] = {}
        for level in self.levels:
            finished[level] = self.__levels[level].finalize(
                self.__parameters.quick_excision,
                self.__parameters.check_validity)
        return finished
