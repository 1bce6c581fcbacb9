"""Route lookup over a road graph stored in a file."""

from __future__ import annotations

import os

from p2proute.dijkstra import DijkstraShortestPath
from p2proute.graph import Graph
from p2proute.graph_elements import parse_node_id
from p2proute.yen import YenKShortestPaths

DEFAULT_GRAPH_FILE = "grid_16_200_graph"


def _split_route(route: str) -> list[str]:
    return [item for item in route.split(" ") if item]


class RoutingAPI:
    """Collects routes as lists of edges (two node labels each).

    Every route computed is remembered; each computation appends the edge
    lists of all remembered routes again, so earlier routes keep the lowest
    indices.
    """

    def __init__(self, graph_file: str | os.PathLike[str] = DEFAULT_GRAPH_FILE) -> None:
        self._graph_file = graph_file
        self._routes: list[str] = []
        self._edge_lists: list[list[str]] = []

    def _process_routes(self) -> None:
        self._edge_lists.extend(_split_route(route) for route in self._routes)

    def generate_paths(self, start: str, end: str, limit: int) -> None:
        """Compute up to ``limit`` shortest routes between two node labels."""
        graph = Graph.from_file(self._graph_file)
        source = graph.vertex(parse_node_id(start))
        target = graph.vertex(parse_node_id(end))
        paths = YenKShortestPaths(graph, source, target)
        counter = 0
        while paths.has_next() and counter < limit:
            counter += 1
            self._routes.append(paths.next_path().edge_list())
        self._process_routes()

    def shortest_path(self, start: str, end: str) -> list[str]:
        """Compute the shortest route and return the first remembered edge list."""
        graph = Graph.from_file(self._graph_file)
        search = DijkstraShortestPath(graph)
        result = search.shortest_path(
            graph.vertex(parse_node_id(start)), graph.vertex(parse_node_id(end))
        )
        self._routes.append(result.edge_list())
        self._process_routes()
        return list(self._edge_lists[0])

    def k_routes(self, k: int) -> list[list[str]]:
        """The first ``k`` remembered edge lists; IndexError if there are fewer."""
        if k > len(self._edge_lists):
            raise IndexError(f"only {len(self._edge_lists)} routes are known, {k} requested")
        return [list(edges) for edges in self._edge_lists[:k]]