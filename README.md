# p2proute

Two small toolkits for vehicular-network experiments:

* **Road routing**: a directed, weighted road graph with Dijkstra's
  shortest path and Yen's algorithm for the *k* shortest loopless paths.
* **Peer-to-peer parking information**: a cache that vehicles use to hold
  reports about parking sites. The cache rolls reports up into a hierarchy of
  grid aggregates, ranks entries by relevance and builds size-limited
  reports (at most 20 entries) to pass on to other vehicles.

The package uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Road graphs

A graph description starts with the number of vertices. After it come
whitespace-separated triples: start node, end node and weight. A repeated
edge overwrites the earlier one.

Node names are two-character labels, a row symbol and a digit, such as `A0`
or `B3`. `parse_node_id` turns a label into an integer id (each character
counts as one decimal digit, `ord(char) - ord("0")`), and `format_node_id`
turns an id back into its label. A start token whose id decodes to -1, such
as `/`, ends the edge list.

```
4
A0 A1 1.0
A1 A2 1.0
A0 A2 3.0
A2 A3 1.0
```

```python
from p2proute.graph import Graph
from p2proute.graph_elements import parse_node_id
from p2proute.dijkstra import DijkstraShortestPath
from p2proute.yen import YenKShortestPaths

graph = Graph.from_file("roads.txt")        # or Graph.parse(text)
source = graph.vertex(parse_node_id("A0"))
target = graph.vertex(parse_node_id("A3"))

path = DijkstraShortestPath(graph).shortest_path(source, target)
print(path.weight, path.route_string())     # 3.0 A0->A1->A2->A3->

for path in YenKShortestPaths(graph, source, target):
    print(path.weight, path.edge_list())
```

An empty description, a bad vertex count or weight, an incomplete edge, or a
vertex count that does not match the edges listed raises `GraphFormatError`
(a `ValueError`). An unreachable target gives an empty `Path` whose weight is
`Graph.DISCONNECT`.

A `Path` holds its `vertices` and `weight` and offers `vertex_labels()`,
`route_string()` (`"A0->A1->"`), `edge_list()` (edges as concatenated label
pairs, `"A0A1 A1A2"`), `sub_path(vertex)` and `format()`.

Edges and vertices can be taken out of a graph for a while with
`remove_edge`, `remove_vertex` and put back with the `recover_removed_*`
methods. `YenKShortestPaths` works on its own copy of the graph, so the graph
passed to it is not changed. `shortest_paths(source, target, top_k)` restarts
the search and returns up to `top_k` paths at once.

### Route lists

`RoutingAPI` reads a graph file (by default `grid_16_200_graph` in the
working directory) on every call and keeps the routes it has computed as
lists of edge strings such as `["A0A1", "A1A2", "A2A3"]`:

```python
from p2proute.routing_api import RoutingAPI

api = RoutingAPI("roads.txt")
api.shortest_path("A0", "A3")
api.generate_paths("A0", "A3", limit=3)
routes = api.k_routes(2)
```

Every call appends the edge lists of *all* routes remembered so far, so
earlier routes keep the lowest indices and can appear more than once.
`shortest_path` returns the first remembered edge list. `k_routes(k)` raises
`IndexError` when fewer than `k` edge lists are known.

## Parking information cache

```python
import random

from p2proute.resources import Position
from p2proute.cache import Cache
from p2proute.sites import ParkingSite
from p2proute.correctness import CorrectnessStats, measure_correctness

rng = random.Random(1)
sites = [ParkingSite.random(n, Position(100.0 * n, 0.0, 50.0), rng) for n in range(5)]

cache = Cache()
for site in sites:
    site.drift(rng)
    cache.update(site.report(time=10.0))

here = Position(0.0, 0.0, 0.0)
outgoing = cache.get_report(here, 12.0)     # at most 20 entries, most relevant first

stats = CorrectnessStats()
colour = measure_correctness(cache, sites, here, 12.0, stats)
print(stats.hit_ratio(), colour)
```

`Cache.get_report` first drops entries older than 500 seconds and rebuilds the
grid aggregates, then picks the most relevant site records
(`AtomicInformation`) and aggregates (`AggregateInformation`) into a
`ResourceReport`. `Cache.occupancy` estimates one site's occupancy as a
`CacheHit`, which tells whether the answer came from an exact report
(level 0), from an aggregate level, or was a miss.

`measure_correctness` compares the cache's estimates with each site's true
occupancy, updates a `CorrectnessStats` (hits, misses, accuracy samples and
hit levels) and returns the colour string from `accuracy_color` for the mean
accuracy, or `None` when no site was found in the cache.

## What this package does not do

There is no simulator here and no command-line program. Nothing sends or
receives messages over a network or schedules events: the caller decides
when sites drift and report, which reports reach which cache, and what time
it is.