"""Yen's algorithm for the k shortest loopless paths between two vertices."""

from __future__ import annotations

import heapq
import itertools
from typing import Iterator

from p2proute.dijkstra import DijkstraShortestPath
from p2proute.graph import Graph
from p2proute.graph_elements import Path, Vertex


class YenKShortestPaths:
    """Produces paths from ``source`` to ``target`` in order of increasing weight.

    The search works on its own copy of the graph, so the graph passed in is
    left untouched.
    """

    def __init__(
        self, graph: Graph, source: Vertex | None = None, target: Vertex | None = None
    ) -> None:
        self._graph = graph.copy()
        self._source = source
        self._target = target
        self._results: list[Path] = []
        self._derivation: dict[Path, Vertex] = {}
        self._candidates: list[tuple[float, int, Path]] = []
        self._counter = itertools.count()
        self.generated_path_count = 0
        self._init()

    @property
    def results(self) -> list[Path]:
        """The paths produced so far."""
        return list(self._results)

    def clear(self) -> None:
        """Drop all results and pending candidates."""
        self.generated_path_count = 0
        self._derivation.clear()
        self._results.clear()
        self._candidates.clear()

    def _init(self) -> None:
        self.clear()
        if self._source is not None and self._target is not None:
            shortest = self.shortest_path(self._source, self._target)
            if len(shortest) > 1:
                self._add_candidate(shortest, self._source)

    def _add_candidate(self, path: Path, derivation: Vertex) -> None:
        heapq.heappush(self._candidates, (path.weight, next(self._counter), path))
        self._derivation[path] = derivation

    def shortest_path(self, source: Vertex, target: Vertex) -> Path:
        """The single shortest path in the working graph."""
        return DijkstraShortestPath(self._graph).shortest_path(source, target)

    def has_next(self) -> bool:
        return bool(self._candidates)

    def __iter__(self) -> Iterator[Path]:
        while self.has_next():
            yield self.next_path()

    def next_path(self) -> Path:
        """The next shortest path; IndexError when there are none left."""
        if not self._candidates:
            raise IndexError("no more paths")
        graph = self._graph
        _, _, current = heapq.heappop(self._candidates)
        self._results.append(current)

        derivation = self._derivation[current]
        prefix = current.sub_path(derivation)
        if prefix is None:
            prefix = list(current.vertices)
        prefix_length = len(prefix)

        for earlier in self._results[:-1]:
            earlier_prefix = earlier.sub_path(derivation)
            if earlier_prefix is None or earlier_prefix != prefix:
                continue
            successor = earlier[prefix_length + 1]
            graph.remove_edge((derivation.id, successor.id))

        path_length = len(current)
        for vertex, following in zip(current.vertices, current.vertices[1:]):
            graph.remove_vertex(vertex.id)
            graph.remove_edge((vertex.id, following.id))

        reverse_tree = DijkstraShortestPath(graph)
        reverse_tree.shortest_path_tree(self._target)

        for i in range(path_length - 2, -1, -1):
            recovered = current[i]
            graph.recover_removed_vertex(recovered.id)
            done = recovered.id == derivation.id

            sub = reverse_tree.update_cost_forward(recovered)
            if sub is not None:
                self.generated_path_count += 1
                reverse_tree.correct_cost_backward(recovered)
                self._add_candidate(
                    self._compose(current, recovered, sub), recovered
                )

            successor = current[i + 1]
            graph.recover_removed_edge((recovered.id, successor.id))

            cost = graph.edge_weight(recovered, successor) + reverse_tree.start_distance(
                successor
            )
            if reverse_tree.start_distance(recovered) > cost:
                reverse_tree.set_start_distance(recovered, cost)
                reverse_tree.set_predecessor(recovered, successor)
                reverse_tree.correct_cost_backward(recovered)

            if done:
                break

        graph.recover_removed_edges()
        graph.recover_removed_vertices()
        return current

    def _compose(self, current: Path, spur: Vertex, sub: Path) -> Path:
        cost = 0.0
        vertices: list[Vertex] = []
        for j, vertex in enumerate(current.vertices):
            if vertex.id == spur.id:
                break
            cost += self._graph.original_edge_weight(vertex, current[j + 1])
            vertices.append(vertex)
        vertices.extend(sub.vertices)
        return Path(vertices, cost + sub.weight)

    def shortest_paths(self, source: Vertex, target: Vertex, top_k: int) -> list[Path]:
        """Restart the search and return up to ``top_k`` shortest paths."""
        self._source = source
        self._target = target
        self._init()
        for _ in range(top_k):
            if not self.has_next():
                break
            self.next_path()
        return list(self._results)