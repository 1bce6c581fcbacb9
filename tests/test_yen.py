import pytest

from p2proute.dijkstra import DijkstraShortestPath
from p2proute.graph import Graph
from p2proute.yen import YenKShortestPaths

# C=1, D=2, E=3, F=4, G=5, H=6
EDGES = [
    (1, 2, 3.0),
    (1, 3, 2.0),
    (2, 4, 4.0),
    (3, 2, 1.0),
    (3, 4, 2.0),
    (3, 5, 3.0),
    (4, 5, 2.0),
    (4, 6, 1.0),
    (5, 6, 2.0),
]


@pytest.fixture
def graph():
    g = Graph()
    for start, end, weight in EDGES:
        g.add_edge(start, end, weight)
    return g


def _ids(path):
    return [v.id for v in path]


def _cost(graph, path):
    return sum(graph.original_edge_weight(a, b) for a, b in zip(path.vertices, path.vertices[1:]))


def test_first_two_paths(graph):
    yen = YenKShortestPaths(graph, graph.vertex(1), graph.vertex(6))
    first = yen.next_path()
    second = yen.next_path()
    assert [_ids(first), _ids(second)] == [[1, 3, 4, 6], [1, 3, 5, 6]]


def test_first_path_matches_dijkstra(graph):
    source, target = graph.vertex(1), graph.vertex(6)
    expected = DijkstraShortestPath(graph).shortest_path(source, target)
    yen = YenKShortestPaths(graph, source, target)
    assert _ids(yen.next_path()) == _ids(expected)


def test_all_paths_are_ordered_distinct_and_simple(graph):
    source, target = graph.vertex(1), graph.vertex(6)
    paths = list(YenKShortestPaths(graph, source, target))
    weights = [p.weight for p in paths]
    assert weights == sorted(weights)
    id_lists = [tuple(_ids(p)) for p in paths]
    assert len(set(id_lists)) == len(id_lists)
    for path in paths:
        assert path[0] is source
        assert path[len(path) - 1] is target
        assert len(set(_ids(path))) == len(path)
        assert path.weight == _cost(graph, path)


def test_original_graph_is_untouched(graph):
    source, target = graph.vertex(1), graph.vertex(6)
    before = DijkstraShortestPath(graph).shortest_path(source, target)
    list(YenKShortestPaths(graph, source, target))
    after = DijkstraShortestPath(graph).shortest_path(source, target)
    assert _ids(after) == _ids(before)
    assert after.weight == before.weight


def test_shortest_paths_limits_and_matches_iteration(graph):
    source, target = graph.vertex(1), graph.vertex(6)
    iterated = list(YenKShortestPaths(graph, source, target))
    limited = YenKShortestPaths(graph).shortest_paths(source, target, 2)
    assert len(limited) == 2
    assert [_ids(p) for p in limited] == [_ids(p) for p in iterated[:2]]


def test_unreachable_target_has_no_paths(graph):
    yen = YenKShortestPaths(graph, graph.vertex(6), graph.vertex(1))
    assert yen.has_next() is False
    with pytest.raises(IndexError):
        yen.next_path()


def test_without_endpoints_nothing_is_queued(graph):
    yen = YenKShortestPaths(graph)
    assert yen.has_next() is False


def test_generated_count_grows(graph):
    yen = YenKShortestPaths(graph, graph.vertex(1), graph.vertex(6))
    yen.next_path()
    assert yen.generated_path_count > 0
    assert len(yen.results) == 1


def test_clear_empties_state(graph):
    yen = YenKShortestPaths(graph, graph.vertex(1), graph.vertex(6))
    yen.next_path()
    yen.clear()
    assert yen.has_next() is False
    assert yen.results == []
    assert yen.generated_path_count == 0