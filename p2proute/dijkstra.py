"""Dijkstra's shortest path search with the hooks Yen's algorithm needs."""

from __future__ import annotations

import heapq
import itertools
from collections import deque

from p2proute.graph import DISCONNECT, Graph
from p2proute.graph_elements import Path, Vertex


class DijkstraShortestPath:
    """Shortest paths over a :class:`Graph`, honouring its removed parts."""

    def __init__(self, graph: Graph) -> None:
        self._graph = graph
        self._distance: dict[Vertex, float] = {}
        self._predecessor: dict[Vertex, Vertex] = {}
        self._determined: set[int] = set()
        self._candidates: list[tuple[float, int, Vertex]] = []
        self._queued: dict[Vertex, int] = {}
        self._counter = itertools.count()

    def clear(self) -> None:
        """Forget all distances, predecessors and pending candidates."""
        self._distance.clear()
        self._predecessor.clear()
        self._determined.clear()
        self._candidates.clear()
        self._queued.clear()

    def _push(self, vertex: Vertex, distance: float) -> None:
        # Equal distances leave the queue in the order they entered it.
        seq = next(self._counter)
        self._queued[vertex] = seq
        heapq.heappush(self._candidates, (distance, seq, vertex))

    def _pop(self) -> Vertex | None:
        while self._candidates:
            _, seq, vertex = heapq.heappop(self._candidates)
            if self._queued.get(vertex) == seq:
                del self._queued[vertex]
                return vertex
        return None

    def shortest_path(self, source: Vertex, sink: Vertex) -> Path:
        """The shortest path from ``source`` to ``sink``.

        An unreachable sink gives an empty path of weight DISCONNECT.
        """
        self._determine(source, sink, forward=True)
        weight = self._distance.get(sink, DISCONNECT)
        vertices: list[Vertex] = []
        if weight < DISCONNECT:
            current = sink
            while True:
                vertices.append(current)
                predecessor = self._predecessor.get(current)
                if predecessor is None:
                    break
                current = predecessor
                if current is source:
                    break
            vertices.append(source)
            vertices.reverse()
        return Path(vertices, weight)

    def shortest_path_tree(self, root: Vertex) -> None:
        """Compute distances from every vertex to ``root`` over reversed edges."""
        self._determine(None, root, forward=False)

    def start_distance(self, vertex: Vertex) -> float:
        """The known distance of ``vertex``; KeyError if it has none."""
        return self._distance[vertex]

    def set_start_distance(self, vertex: Vertex, weight: float) -> None:
        self._distance[vertex] = weight

    def set_predecessor(self, vertex: Vertex, predecessor: Vertex) -> None:
        self._predecessor[vertex] = predecessor

    def _determine(self, source: Vertex | None, sink: Vertex | None, forward: bool) -> None:
        self.clear()
        end = sink if forward else source
        start = source if forward else sink
        self._distance[start] = 0.0
        start.weight = 0.0
        self._push(start, 0.0)

        while (current := self._pop()) is not None:
            if current is end:
                break
            self._determined.add(current.id)
            self._improve(current, forward)

    def _improve(self, current: Vertex, forward: bool) -> None:
        graph = self._graph
        neighbours = (
            graph.adjacent_vertices(current) if forward else graph.precedent_vertices(current)
        )
        base = self._distance.get(current, DISCONNECT)
        for neighbour in neighbours:
            if neighbour.id in self._determined:
                continue
            step = (
                graph.edge_weight(current, neighbour)
                if forward
                else graph.edge_weight(neighbour, current)
            )
            distance = base + step
            known = self._distance.get(neighbour)
            if known is None or known > distance:
                self._distance[neighbour] = distance
                self._predecessor[neighbour] = current
                neighbour.weight = distance
                self._push(neighbour, distance)

    def update_cost_forward(self, vertex: Vertex) -> Path | None:
        """Relax ``vertex`` over its successors in a tree built towards a root.

        Returns the path from ``vertex`` along the predecessor chain if its
        cost improved to something finite, otherwise None.
        """
        cost = DISCONNECT
        self._distance.setdefault(vertex, DISCONNECT)

        for successor in self._graph.adjacent_vertices(vertex):
            distance = self._distance.get(successor, DISCONNECT)
            distance += self._graph.edge_weight(vertex, successor)
            if self._distance[vertex] > distance:
                self._distance[vertex] = distance
                self._predecessor[vertex] = successor
                cost = distance

        if cost >= DISCONNECT:
            return None

        vertices = [vertex]
        predecessor = self._predecessor.get(vertex)
        while predecessor is not None:
            vertices.append(predecessor)
            predecessor = self._predecessor.get(predecessor)
        return Path(vertices, cost)

    def correct_cost_backward(self, vertex: Vertex) -> None:
        """Propagate an improved cost of ``vertex`` to its predecessors."""
        pending = deque([vertex])
        while pending:
            current = pending.popleft()
            cost = self._distance.setdefault(current, 0.0)
            for previous in self._graph.precedent_vertices(current):
                known = self._distance.get(previous, DISCONNECT)
                fresh = cost + self._graph.edge_weight(previous, current)
                if known > fresh:
                    self._distance[previous] = fresh
                    self._predecessor[previous] = current
                    pending.append(previous)