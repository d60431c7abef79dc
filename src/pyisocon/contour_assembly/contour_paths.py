"""
contour_paths.py

Entry point turning a stream of level-tagged segments into finished contour
paths grouped by iso-level, ready for a renderer to stroke.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from pyisocon.contour_assembly.assembler import (AssemblyParameters,
                                                 ContourAssembler)
from pyisocon.contour_assembly.contour import (Contour, CoordinateTransform,
                                               is_loop)
from pyisocon.core.common import ROWS, Level, MalformedInputError
from pyisocon.core.point import SegmentEvent

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContourPath():
    """
    Finished contour line at one iso-level.
    """
    level: Level
    # (N, 2) float64 array of coordinates, front first
    points: np.ndarray
    # True iff the first and last points coincide
    is_loop: bool

    @property
    def is_degenerate(self) -> bool:
        """
        True iff the path has fewer than two distinct points, so there is
        nothing to stroke.
        """
        if self.points.shape[ROWS] == 0:
            return True
        return np.unique(self.points, axis=0).shape[ROWS] < 2


def validate_levels(levels: Iterable[Level]) -> list[Level]:
    """
    Check that levels are usable for assembly and return them sorted
    ascending.

    :param levels: [in] iso-levels
    :return: sorted levels
    :raises MalformedInputError: if levels is empty or holds non-finite values
    """
    checked: list[Level] = []
    for z in levels:
        if not math.isfinite(z):
            raise MalformedInputError(f"contour: non-finite level {z}")
        checked.append(float(z))
    if len(checked) == 0:
        raise MalformedInputError("contour: no levels given")
    return sorted(checked)


def contour_path(contour: Contour,
                 transform_x: CoordinateTransform | None = None,
                 transform_y: CoordinateTransform | None = None) -> ContourPath:
    """
    Build the output record of a finished contour.
    """
    pa: np.ndarray = contour.path(transform_x, transform_y)
    return ContourPath(level=contour.z, points=pa, is_loop=is_loop(pa))


def compute_contour_paths(events: Iterable[SegmentEvent],
                          levels: Sequence[Level] | None = None,
                          parameters: AssemblyParameters | None = None,
                          transform_x: CoordinateTransform | None = None,
                          transform_y: CoordinateTransform | None = None
                          ) -> dict[Level, list[ContourPath]]:
    """
    Assemble segment events into contour paths.

    :param events: [in] segment events from a segment producer
    :param levels: [in] iso-levels the events belong to; the distinct event
                   levels are used if None
    :param parameters: [in] assembly parameters
    :param transform_x: [in] optional transform of the x coordinates
    :param transform_y: [in] optional transform of the y coordinates
    :return: paths keyed by level in ascending level order; every level is
             present even if it produced no path
    :raises MalformedInputError: for bad levels or events at unknown levels
    :raises InternalLinkError: if the event stream breaks assembly invariants
    """
    events = list(events)
    if levels is None:
        levels = list(dict.fromkeys(event.level for event in events))
    sorted_levels: list[Level] = validate_levels(levels)
    known: set[Level] = set(sorted_levels)

    assembler = ContourAssembler(parameters)
    for event in events:
        if event.level not in known:
            raise MalformedInputError(f"contour: segment at unknown level {event.level}")
        assembler.add_event(event)

    contours: dict[Level, list[Contour]] = assembler.finalize()

    paths: dict[Level, list[ContourPath]] = {z: [] for z in sorted_levels}
    for z, level_contours in contours.items():
        paths[z] = [contour_path(c, transform_x, transform_y) for c in level_contours]

    logger.info("Assembled %s paths over %s levels from %s segments",
                sum(len(p) for p in paths.values()), len(paths), len(events))
    return paths
