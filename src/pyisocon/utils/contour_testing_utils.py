"""
Helpers to build segment event streams and compare contour geometry in tests.
"""

import random
from collections import Counter

import numpy as np

from pyisocon.contour_assembly.contour import Contour
from pyisocon.core.common import Level
from pyisocon.core.point import Point, Segment, SegmentEvent

# Undirected adjacency between two points.
Edge = tuple[Point, Point]


def points_from_coordinates(coordinates: list[tuple[float, float]]) -> list[Point]:
    """
    Convert coordinate pairs to points.
    """
    return [Point(float(x), float(y)) for x, y in coordinates]


def events_from_polyline(points: list[Point], level: Level) -> list[SegmentEvent]:
    """
    Split a polyline into one segment event per consecutive point pair.

    :param points: [in] polyline points
    :param level: [in] level of every event
    :return: events in polyline order
    """
    return [SegmentEvent(i, 0, Segment(points[i], points[i + 1]), level)
            for i in range(len(points) - 1)]


def shuffled_events(events: list[SegmentEvent],
                    seed: int,
                    flip: bool = True) -> list[SegmentEvent]:
    """
    Return the events in a reproducible random order, optionally with the
    endpoints of some segments swapped.
    """
    rng = random.Random(seed)
    shuffled: list[SegmentEvent] = list(events)
    rng.shuffle(shuffled)
    if flip:
        shuffled = [event._replace(segment=Segment(event.segment.p2, event.segment.p1))
                    if rng.random() < 0.5 else event
                    for event in shuffled]
    return shuffled


def _edge(p: Point, q: Point) -> Edge:
    """
    Helper method.
    """
    return (p, q) if p <= q else (q, p)


def adjacency_edges(points: list[Point]) -> Counter[Edge]:
    """
    Multiset of undirected point-to-point adjacencies along a path.
    """
    return Counter(_edge(points[i], points[i + 1]) for i in range(len(points) - 1))


def contour_edges(contours: list[Contour]) -> Counter[Edge]:
    """
    Union of the adjacency multisets of several contours.
    """
    edges: Counter[Edge] = Counter()
    for c in contours:
        edges.update(adjacency_edges(c.points()))
    return edges


def event_edges(events: list[SegmentEvent]) -> Counter[Edge]:
    """
    Multiset of the undirected segments in an event stream.
    """
    return Counter(_edge(event.segment.p1, event.segment.p2) for event in events)


def same_cycle(path: np.ndarray, expected: list[Point]) -> bool:
    """
    Return true iff the closed path visits the expected closed point sequence
    in either direction, starting anywhere.

    :param path: [in] (N, 2) closed path array with first == last
    :param expected: [in] closed point sequence with first == last
    """
    actual: list[Point] = [Point(float(x), float(y)) for x, y in path[:-1]]
    ring: list[Point] = list(expected[:-1])
    if len(actual) != len(ring):
        return False
    for candidate in (ring, ring[::-1]):
        for shift in range(len(candidate)):
            if candidate[shift:] + candidate[:shift] == actual:
                return True
    return False
