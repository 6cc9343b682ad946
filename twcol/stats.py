from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from .graph_io import ParseResult


@dataclass(frozen=True)
class InstanceStats:
    n_vertices: int
    declared_edges: int
    n_edges: int
    self_loops: int
    duplicate_edges: int
    isolated_vertices: int
    min_degree: int
    max_degree: int
    avg_degree: float
    density: float  # distinct non-loop edges / (n choose 2)
    treewidth: Optional[int]
    lower_bound: Optional[int]
    upper_bound: Optional[int]


def summarize(result: ParseResult) -> InstanceStats:
    """
    Plain counting over a parsed instance, for benchmark tables.

    duplicate_edges: edges whose unordered pair was already seen earlier
    degree counts every edge endpoint, so a self-loop adds 2
    """
    graph = result.graph
    n = graph.node_count()

    seen: Set[Tuple[int, int]] = set()
    self_loops = 0
    duplicates = 0
    for u, v in graph.edges:
        if u == v:
            self_loops += 1
        key = (u, v) if u < v else (v, u)
        if key in seen:
            duplicates += 1
        else:
            seen.add(key)

    degrees = [len(graph.neighbors(v)) for v in graph.node_indices()]
    distinct_simple = sum(1 for u, v in seen if u != v)
    pairs = n * (n - 1) // 2

    return InstanceStats(
        n_vertices=n,
        declared_edges=result.declared_edges,
        n_edges=graph.edge_count(),
        self_loops=self_loops,
        duplicate_edges=duplicates,
        isolated_vertices=sum(1 for d in degrees if d == 0),
        min_degree=min(degrees) if degrees else 0,
        max_degree=max(degrees) if degrees else 0,
        avg_degree=sum(degrees) / n if n else 0.0,
        density=distinct_simple / pairs if pairs else 0.0,
        treewidth=result.treewidth,
        lower_bound=result.lower_bound,
        upper_bound=result.upper_bound,
    )
