"""
cycle_graph.py

Directed multigraph built from the point sequence of a single contour, used to
find the loops a self-crossing contour has to be split into.

Nodes are the indices of the first occurrence of each distinct point in the
sequence and edges are the transitions between consecutive points, so a point
that the sequence revisits folds onto one node and exposes the crossing as a
cycle. Elementary cycles are enumerated with networkx.
"""

import logging
from collections import Counter

import networkx as nx

from pyisocon.core.common import InternalLinkError, PointIndex
from pyisocon.core.point import Point

logger: logging.Logger = logging.getLogger(__name__)

# Adjacency restricted to distinct successors, sorted for deterministic output.
Adjacency = dict[PointIndex, list[PointIndex]]


def elementary_cycles(adjacency: Adjacency) -> list[list[PointIndex]]:
    """
    Enumerate all elementary cycles of a directed graph. Every cycle is
    returned as a node path starting at its least node and ending where it
    started, so a loop hanging off a path starts at the crossing point.

    :param adjacency: [in] successor lists keyed by node
    :return: cycles sorted by length, then by node path
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(adjacency)
    graph.add_edges_from((u, w) for u, successors in adjacency.items() for w in successors)

    cycles: list[list[PointIndex]] = []
    for ring in nx.simple_cycles(graph):
        k: int = ring.index(min(ring))
        cycles.append(ring[k:] + ring[:k] + [ring[k]])
    cycles.sort(key=lambda cycle: (len(cycle), cycle))
    return cycles


# **********
# CycleGraph
# **********

class CycleGraph():
    """
    Directed multigraph of the transitions along a point path.
    Edge multiplicities are kept so that removing cycles never drops a
    transition that the path takes more than once.
    """

    def __init__(self, path: list[Point]) -> None:
        """
        :param path: [in] flattened contour points, front first
        """
        self.__path: list[Point] = path
        seen: dict[Point, PointIndex] = {}
        for i, p in enumerate(path):
            if p not in seen:
                seen[p] = i

        self.__edges: dict[PointIndex, Counter[PointIndex]] = {
            node: Counter() for node in seen.values()}
        for i in range(len(path) - 1):
            self.__edges[seen[path[i]]][seen[path[i + 1]]] += 1

    @property
    def path(self) -> list[Point]:
        """
        Point path the graph was built from.
        """
        return self.__path

    @property
    def nodes(self) -> list[PointIndex]:
        """
        Node indices in path order.
        """
        return list(self.__edges)

    @property
    def num_edges(self) -> int:
        """
        Number of edges counted with multiplicity.
        """
        return sum(sum(out.values()) for out in self.__edges.values())

    def out_degree(self, u: PointIndex) -> int:
        """
        Outgoing edges of u counted with multiplicity.
        """
        return sum(self.__edges[u].values())

    def in_degree(self, v: PointIndex) -> int:
        """
        Incoming edges of v counted with multiplicity.
        """
        return sum(out[v] for out in self.__edges.values())

    def adjacency(self) -> Adjacency:
        """
        Distinct successors of every node that still has edges.
        """
        return {u: sorted(w for w, k in out.items() if k > 0)
                for u, out in self.__edges.items()}

    def subpath(self, nodes: list[PointIndex]) -> list[Point]:
        """
        Return the points of the given node indices.
        """
        return [self.__path[n] for n in nodes]

    def has_cycle(self, cycle: list[PointIndex]) -> bool:
        """
        Return true iff every edge of the cycle is still present often enough.
        """
        needed: Counter[tuple[PointIndex, PointIndex]] = Counter(zip(cycle, cycle[1:]))
        return all(self.__edges[u][v] >= k for (u, v), k in needed.items())

    def remove(self, cycle: list[PointIndex]) -> None:
        """
        Remove one copy of each edge of the cycle.

        :param cycle: [in] node path with first == last
        """
        assert cycle[0] == cycle[-1]
        for u, v in zip(cycle, cycle[1:]):
            assert self.__edges[u][v] > 0
            self.__edges[u][v] -= 1
            if self.__edges[u][v] == 0:
                del self.__edges[u][v]

    def remove_cycles(self) -> list[list[PointIndex]]:
        """
        Peel edge-disjoint elementary cycles off the graph until none remain.
        Shorter cycles are taken first among those found in one enumeration.

        :return: removed cycles, each with first == last
        """
        removed: list[list[PointIndex]] = []
        while True:
            cycles: list[list[PointIndex]] = elementary_cycles(self.adjacency())
            if not cycles:
                return removed
            for cycle in cycles:
                if self.has_cycle(cycle):
                    self.remove(cycle)
                    removed.append(cycle)
            logger.debug("Removed %s cycles, %s edges remain", len(removed), self.num_edges)

    def linear_paths(self) -> list[list[Point]]:
        """
        Return the linear paths left in the graph. The graph must have had its
        cycles removed; the edges are consumed.

        :return: point paths, each with at least two points
        """
        for u in self.__edges:
            if self.out_degree(u) > 1 or self.in_degree(u) > 1:
                raise InternalLinkError(
                    f"contour: not a linear path at point {self.__path[u]}")

        in_degree: Counter[PointIndex] = Counter()
        for out in self.__edges.values():
            in_degree.update(out)

        paths: list[list[Point]] = []
        for u in self.__edges:
            if not self.__edges[u] or in_degree[u] > 0:
                continue
            curr: list[Point] = [self.__path[u]]
            v: PointIndex = u
            while self.__edges[v]:
                w: PointIndex = next(iter(self.__edges[v]))
                del self.__edges[v][w]
                curr.append(self.__path[w])
                v = w
            paths.append(curr)

        if self.num_edges > 0:
            raise InternalLinkError("contour: cycle left in linear path graph")

        return paths
