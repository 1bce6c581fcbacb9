"""Vertices, paths and the two-character node labels of the road graph."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from itertools import pairwise
from typing import Iterator

_ZERO = ord("0")
SEPARATOR_LINE = "*" * 45


def parse_node_id(word: str) -> int:
    """Turn a node label such as ``"A1"`` into its integer id.

    Every character contributes ``ord(char) - ord("0")`` as one decimal digit,
    so a label and the decimal spelling of its id name the same node.
    """
    return reduce(lambda acc, char: acc * 10 + ord(char) - _ZERO, word, 0)


def format_node_id(node_id: int) -> str:
    """Turn an integer node id back into its two-character label."""
    letter, number = divmod(abs(node_id), 10)
    if node_id < 0:
        letter, number = -letter, -number
    return chr((letter + _ZERO) % 256) + str(number)


@dataclass(eq=False)
class Vertex:
    """A graph vertex; two vertices are the same only if they are one object."""

    id: int
    weight: float = 0.0

    def label(self) -> str:
        """The vertex id written as a node label."""
        return format_node_id(self.id)


@dataclass(eq=False)
class Path:
    """An ordered list of vertices together with its total cost."""

    vertices: list[Vertex]
    weight: float

    def __post_init__(self) -> None:
        self.vertices = list(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> Vertex:
        return self.vertices[index]

    def sub_path(self, ending_vertex: Vertex) -> list[Vertex] | None:
        """The vertices before ``ending_vertex``, or None if it is not on the path."""
        try:
            position = self.vertices.index(ending_vertex)
        except ValueError:
            return None
        return self.vertices[:position]

    def vertex_labels(self) -> list[str]:
        """The labels of the vertices, in path order."""
        return [vertex.label() for vertex in self.vertices]

    def route_string(self) -> str:
        """The labels each followed by ``->``."""
        return "".join(f"{label}->" for label in self.vertex_labels())

    def edge_list(self) -> str:
        """The path as space-separated edges, each edge written as two labels."""
        labels = self.vertex_labels()
        if len(labels) == 1:
            return labels[0]
        return " ".join(start + end for start, end in pairwise(labels))

    def format(self) -> str:
        """A printable block showing cost, length and route."""
        return (
            f"Cost: {self.weight:g} Length: {len(self)}\n"
            f"{self.route_string()}\n"
            f"{SEPARATOR_LINE}\n"
        )