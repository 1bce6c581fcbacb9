import pytest

from p2proute.routing_api import RoutingAPI

GRAPH_TEXT = "4\nA1 A2 1\nA2 A3 1\nA1 A3 5\nA3 A4 1\nA2 A4 6\n"


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "road_graph"
    path.write_text(GRAPH_TEXT, encoding="utf-8")
    return path


def test_shortest_path_edge_list(graph_file):
    api = RoutingAPI(graph_file)
    assert api.shortest_path("A1", "A4") == ["A1A2", "A2A3", "A3A4"]


def test_edges_chain_together(graph_file):
    api = RoutingAPI(graph_file)
    api.generate_paths("A1", "A4", 3)
    for route in api.k_routes(3):
        assert route[0][:2] == "A1"
        assert route[-1][2:] == "A4"
        for first, second in zip(route, route[1:]):
            assert first[2:] == second[:2]


def test_generate_paths_first_route_is_shortest(graph_file):
    api = RoutingAPI(graph_file)
    api.generate_paths("A1", "A4", 2)
    routes = api.k_routes(2)
    shortest = RoutingAPI(graph_file).shortest_path("A1", "A4")
    assert routes[0] == shortest
    assert routes[1] != routes[0]


def test_shortest_path_returns_first_remembered_route(graph_file):
    api = RoutingAPI(graph_file)
    api.generate_paths("A1", "A4", 2)
    first = api.k_routes(1)[0]
    assert api.shortest_path("A2", "A4") == first


def test_k_routes_beyond_known_raises(graph_file):
    api = RoutingAPI(graph_file)
    api.generate_paths("A1", "A4", 1)
    with pytest.raises(IndexError):
        api.k_routes(2)


def test_missing_graph_file_raises(tmp_path):
    api = RoutingAPI(tmp_path / "absent")
    with pytest.raises(FileNotFoundError):
        api.shortest_path("A1", "A4")