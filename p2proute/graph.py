"""A directed weighted graph with temporary removal of vertices and edges."""

from __future__ import annotations

import os
import sys

from p2proute.graph_elements import Vertex, parse_node_id

DISCONNECT = sys.float_info.max
"""Weight reported for edges that do not exist or are removed."""

_TERMINATOR = -1

Edge = tuple[int, int]


class GraphFormatError(ValueError):
    """Raised when a graph description cannot be read."""


class Graph:
    """Directed graph of :class:`Vertex` objects keyed by node id."""

    DISCONNECT = DISCONNECT

    def __init__(self) -> None:
        self._vertices: list[Vertex] = []
        self._index: dict[int, Vertex] = {}
        self._fanout: dict[Vertex, dict[Vertex, None]] = {}
        self._fanin: dict[Vertex, dict[Vertex, None]] = {}
        self._weights: dict[Edge, float] = {}
        self._removed_vertices: set[int] = set()
        self._removed_edges: set[Edge] = set()

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Graph:
        """Read a graph description file."""
        with open(path, encoding="utf-8") as handle:
            return cls.parse(handle.read())

    @classmethod
    def parse(cls, text: str) -> Graph:
        """Build a graph from its text form.

        The first token is the number of vertices; then follow whitespace
        separated triples of start label, end label and weight. A start label
        that parses to -1 ends the edge list. A repeated edge overwrites the
        earlier one.
        """
        tokens = iter(text.split())
        first = next(tokens, None)
        if first is None:
            raise GraphFormatError("graph description is empty")
        try:
            declared = int(first)
        except ValueError as exc:
            raise GraphFormatError(f"invalid vertex count {first!r}") from exc

        graph = cls()
        for start_word in tokens:
            start_id = parse_node_id(start_word)
            if start_id == _TERMINATOR:
                break
            end_word = next(tokens, None)
            weight_word = next(tokens, None)
            if end_word is None or weight_word is None:
                raise GraphFormatError(f"incomplete edge starting at {start_word!r}")
            try:
                weight = float(weight_word)
            except ValueError as exc:
                raise GraphFormatError(f"invalid edge weight {weight_word!r}") from exc
            graph.add_edge(start_id, parse_node_id(end_word), weight)

        if declared != graph.vertex_count:
            raise GraphFormatError(
                f"The number of nodes in the graph is {graph.vertex_count} "
                f"instead of {declared}"
            )
        return graph

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        """All vertices in the order they were created."""
        return tuple(self._vertices)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self._weights)

    def _vertex_for(self, node_id: int) -> Vertex:
        vertex = self._index.get(node_id)
        if vertex is None:
            vertex = Vertex(node_id)
            self._index[node_id] = vertex
            self._vertices.append(vertex)
        return vertex

    def add_edge(self, start_id: int, end_id: int, weight: float) -> None:
        """Add or overwrite the directed edge ``start_id -> end_id``."""
        start = self._vertex_for(start_id)
        end = self._vertex_for(end_id)
        self._weights[(start_id, end_id)] = weight
        self._fanin.setdefault(end, {})[start] = None
        self._fanout.setdefault(start, {})[end] = None

    def copy(self) -> Graph:
        """A graph sharing the vertices, with its own edges and no removals."""
        other = Graph()
        other._vertices = list(self._vertices)
        other._index = dict(self._index)
        other._fanout = {v: dict(n) for v, n in self._fanout.items()}
        other._fanin = {v: dict(n) for v, n in self._fanin.items()}
        other._weights = dict(self._weights)
        return other

    def vertex(self, node_id: int) -> Vertex | None:
        """The vertex with this id, created if new; None if it is removed."""
        if node_id in self._removed_vertices:
            return None
        return self._vertex_for(node_id)

    def original_edge_weight(self, source: Vertex, sink: Vertex) -> float:
        """Edge weight ignoring removals, or DISCONNECT if there is no edge."""
        return self._weights.get((source.id, sink.id), DISCONNECT)

    def edge_weight(self, source: Vertex, sink: Vertex) -> float:
        """Edge weight, or DISCONNECT if the edge or an end is removed."""
        if (
            source.id in self._removed_vertices
            or sink.id in self._removed_vertices
            or (source.id, sink.id) in self._removed_edges
        ):
            return DISCONNECT
        return self.original_edge_weight(source, sink)

    def adjacent_vertices(self, vertex: Vertex) -> list[Vertex]:
        """Successors of ``vertex`` reachable over edges that are not removed."""
        if vertex.id in self._removed_vertices:
            return []
        return [
            successor
            for successor in self._fanout.get(vertex, {})
            if successor.id not in self._removed_vertices
            and (vertex.id, successor.id) not in self._removed_edges
        ]

    def precedent_vertices(self, vertex: Vertex) -> list[Vertex]:
        """Predecessors of ``vertex`` over edges that are not removed."""
        if vertex.id in self._removed_vertices:
            return []
        return [
            predecessor
            for predecessor in self._fanin.get(vertex, {})
            if predecessor.id not in self._removed_vertices
            and (predecessor.id, vertex.id) not in self._removed_edges
        ]

    def remove_edge(self, edge: Edge) -> None:
        self._removed_edges.add(tuple(edge))

    def remove_vertex(self, vertex_id: int) -> None:
        self._removed_vertices.add(vertex_id)

    def recover_removed_edges(self) -> None:
        self._removed_edges.clear()

    def recover_removed_vertices(self) -> None:
        self._removed_vertices.clear()

    def recover_removed_edge(self, edge: Edge) -> None:
        """Restore one removed edge; KeyError if it was not removed."""
        self._removed_edges.remove(tuple(edge))

    def recover_removed_vertex(self, vertex_id: int) -> None:
        """Restore one removed vertex; KeyError if it was not removed."""
        self._removed_vertices.remove(vertex_id)