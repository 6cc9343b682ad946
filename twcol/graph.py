from __future__ import annotations
from typing import Generic, Iterator, List, Tuple, TypeVar

N = TypeVar("N")
E = TypeVar("E")


class Graph(Generic[N, E]):
    """
    Undirected graph with 0-based integer node handles.

    Parallel edges and self-loops are stored as given.
    edges: list of (u, v) in insertion order
    adjacency: adjacency list, one entry per edge endpoint (a self-loop shows up twice)
    """

    def __init__(self) -> None:
        self.edges: List[Tuple[int, int]] = []
        self.adjacency: List[List[int]] = []
        self._node_payloads: List[N] = []
        self._edge_payloads: List[E] = []

    def add_node(self, payload: N) -> int:
        self._node_payloads.append(payload)
        self.adjacency.append([])
        return len(self._node_payloads) - 1

    def _check(self, *handles: int) -> None:
        n = self.node_count()
        for h in handles:
            if not 0 <= h < n:
                raise IndexError(f"Node {h} is outside [0, {n - 1}]")

    def add_edge(self, u: int, v: int, payload: E) -> int:
        self._check(u, v)

        self.edges.append((u, v))
        self._edge_payloads.append(payload)
        self.adjacency[u].append(v)
        self.adjacency[v].append(u)
        return len(self.edges) - 1

    def node_count(self) -> int:
        return len(self._node_payloads)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_indices(self) -> Iterator[int]:
        return iter(range(self.node_count()))

    def neighbors(self, v: int) -> List[int]:
        """Copy of the neighbours of v, one entry per incident edge end."""
        self._check(v)
        return list(self.adjacency[v])

    def contains_edge(self, u: int, v: int) -> bool:
        self._check(u, v)
        # scan the shorter list
        a, b = (u, v) if len(self.adjacency[u]) <= len(self.adjacency[v]) else (v, u)
        return b in self.adjacency[a]

    def payload(self, v: int) -> N:
        self._check(v)
        return self._node_payloads[v]

    def edge_payload(self, i: int) -> E:
        return self._edge_payloads[i]
