"""
excise_loops.py

Loop excision for contours whose path crosses itself, typically at a saddle.
A crossed contour is split into closed elementary loops and the remaining
linear chains, all at the contour's level.
"""

import logging

from pyisocon.contour_assembly.contour import Contour
from pyisocon.contour_assembly.contour_set import ContourSet
from pyisocon.contour_assembly.cycle_graph import CycleGraph
from pyisocon.core.common import (ContourHandle, PointIndex,
                                  formatted_point_list)
from pyisocon.core.point import Point

logger: logging.Logger = logging.getLogger(__name__)


def count_crossovers(contour: Contour) -> int:
    """
    Count the points the contour revisits. The back of the contour is not
    counted so that a closed loop's closing point is not a crossover.

    :param contour: [in] contour to inspect
    :return: number of repeated points
    """
    seen: set[Point] = set()
    crossovers: int = 0
    for p in contour.backward + contour.forward[:-1]:
        if p in seen:
            crossovers += 1
        seen.add(p)
    return crossovers


def excise_quick(contours_ref: ContourSet, handle: ContourHandle) -> list[ContourHandle]:
    """
    Heuristic loop excision. A loop is cut out between the two occurrences of
    every repeated point that is neither the first nor the last point of the
    path. This is only reliable for a single self-touch.

    :param contours_ref: [in, out] working contour set holding the contour
    :param handle: [in] contour to excise loops from
    :return: handles of the contour and of every loop added
    """
    contour: Contour = contours_ref[handle]
    wp: list[Point] = contour.points()
    first: Point = wp[0]
    last: Point = wp[-1]
    handles: list[ContourHandle] = [handle]

    seen: dict[Point, PointIndex] = {}
    j: PointIndex = 0
    while j < len(wp):
        p: Point = wp[j]
        i: PointIndex | None = seen.get(p)
        if i is not None and p not in (first, last):
            loop: Contour = Contour.from_points(contour.z, wp[i:j + 1])
            handles.append(contours_ref.add(loop))
            logger.debug("Quick excision of %s point loop at (%s, %s)", len(loop), p.x, p.y)
            wp = wp[:i] + wp[j:]
            seen = {q: k for q, k in seen.items() if k <= i}
            j = i + 1
        else:
            seen[p] = j
            j += 1

    contour.backward = [wp[0]]
    contour.forward = wp[1:]
    return handles


def excise_general(contours_ref: ContourSet, handle: ContourHandle) -> list[ContourHandle]:
    """
    Complete loop excision by elementary-cycle search over the contour's cycle
    graph. Every cycle becomes a closed contour and the linear paths left once
    the cycles are removed become open contours. The input contour is
    removed from the set unless it holds no cycle.

    :param contours_ref: [in, out] working contour set holding the contour
    :param handle: [in] contour to excise loops from
    :return: handles of the replacement contours
    """
    contour: Contour = contours_ref[handle]
    g = CycleGraph(contour.points())
    num_edges: int = g.num_edges
    cycles: list[list[PointIndex]] = g.remove_cycles()
    if len(cycles) == 0:
        return [handle]

    # Raises if the graph still branches; the contour stays untouched then.
    paths: list[list[Point]] = g.linear_paths()
    contours_ref.remove(handle)

    handles: list[ContourHandle] = []
    for cycle in cycles:
        loop: list[Point] = g.subpath(cycle)
        logger.debug("Loop: %s", formatted_point_list(loop))
        handles.append(contours_ref.add(Contour.from_points(contour.z, loop)))
    for path in paths:
        handles.append(contours_ref.add(Contour.from_points(contour.z, path)))

    logger.debug("Excised %s loops and %s chains from %s edges on level %s",
                 len(cycles), len(paths), num_edges, contour.z)
    return handles


def excise_loops(contours_ref: ContourSet,
                 handle: ContourHandle,
                 quick: bool = True) -> list[ContourHandle]:
    """
    Find loops within the contour that do not include its start and end and
    move them into their own contours.

    :param contours_ref: [in, out] working contour set holding the contour
    :param handle: [in] contour to excise loops from
    :param quick: [in] use the heuristic path when exactly one point repeats
    :return: handles of the contours that replace the input contour
    """
    if quick:
        # Find cases we can guarantee don't need a complete analysis.
        crossovers: int = count_crossovers(contours_ref[handle])
        if crossovers == 0:
            return [handle]
        if crossovers == 1:
            return excise_quick(contours_ref, handle)

    return excise_general(contours_ref, handle)
