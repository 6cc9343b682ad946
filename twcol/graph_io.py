from __future__ import annotations
import io
import logging
import re
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Iterator, List, Optional, Tuple

from .errors import (
    ColIOError,
    EdgeCountMismatchError,
    MalformedEdgeLineError,
    MalformedHeaderLineError,
    MalformedProblemLineError,
    MissingProblemLineError,
    UnexpectedHeaderLineError,
    VertexOutOfBoundsError,
)
from .graph import Graph

logger = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?[0-9]+")

# header tag -> ParseResult field
_METADATA_TAGS = {"t": "treewidth", "l": "lower_bound", "u": "upper_bound"}


def _none() -> None:
    return None


@dataclass
class ParseConfig:
    # zero-argument factories for node / edge payloads
    node_factory: Callable[[], Any] = _none
    edge_factory: Callable[[], Any] = _none

    # raise EdgeCountMismatchError instead of logging a warning
    strict_edge_count: bool = False

    encoding: str = "utf-8"


@dataclass(frozen=True)
class ParseResult:
    graph: Graph
    declared_edges: int  # #EDGES from the problem line, may differ from graph.edge_count()
    treewidth: Optional[int] = None
    lower_bound: Optional[int] = None
    upper_bound: Optional[int] = None


def _read_lines(stream: BinaryIO, encoding: str) -> List[str]:
    try:
        data = stream.read()
        text = data if isinstance(data, str) else data.decode(encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise ColIOError(f"Could not read graph stream: {exc}") from exc

    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def _filtered(lines: List[str], encoding: str) -> Iterator[Tuple[int, int, str]]:
    """
    Yield (position, lineno, line) for every line that is neither too short nor a comment.

    Short means at most one byte once encoded, so a lone multi-byte character is kept.
    """
    position = 0
    for lineno, line in enumerate(lines, start=1):
        if len(line) <= 1 and len(line.encode(encoding)) <= 1:
            continue
        if line[0] == "c":
            continue
        yield position, lineno, line
        position += 1


def _unsigned(parts: List[str], idx: int) -> Optional[int]:
    """parts[idx] as a non-negative int, or None if missing / not a plain decimal."""
    if idx >= len(parts) or not _UNSIGNED.fullmatch(parts[idx]):
        return None
    return int(parts[idx])


def _scan_header(lines: Iterator[Tuple[int, int, str]]) -> Tuple[dict, Tuple[int, int, str]]:
    """
    Consume t / l / u lines up to and including the problem line.

    Returns (metadata, problem line item). A repeated t / l / u line
    overwrites the earlier value.
    """
    metadata = {}
    while True:
        item = next(lines, None)
        if item is None:
            raise MissingProblemLineError("File ends before the 'p FORMAT #NODES #EDGES' problem line")

        position, lineno, line = item
        tag = line[0]
        if tag == "p":
            return metadata, item

        field_name = _METADATA_TAGS.get(tag)
        if field_name is None:
            raise UnexpectedHeaderLineError(
                "Header may only contain c(omment), t(reewidth), l(ower bound), u(pper bound) "
                "lines before the p(roblem) line",
                line, position, lineno,
            )

        value = _unsigned(line.split(), 1)
        if value is None:
            raise MalformedHeaderLineError(
                f"Header line is not of the form '{tag} <unsigned int>'", line, position, lineno
            )

        if field_name in metadata:
            logger.debug("%s given twice in header, keeping %d", field_name, value)
        metadata[field_name] = value


def _parse_problem_line(position: int, lineno: int, line: str) -> Tuple[int, int]:
    parts = line.split()
    n_vertices = _unsigned(parts, 2)
    n_edges = _unsigned(parts, 3)
    if n_vertices is None or n_edges is None:
        raise MalformedProblemLineError(
            "Problem line is not of the form 'p FORMAT #NODES #EDGES'", line, position, lineno
        )
    return n_vertices, n_edges


def parse(stream: BinaryIO, cfg: Optional[ParseConfig] = None) -> ParseResult:
    """
    Read a DIMACS .col graph with optional treewidth annotations.

    Format:
      c comment lines (anywhere)
      t <treewidth>     optional, before the problem line
      l <lower bound>   optional, before the problem line
      u <upper bound>   optional, before the problem line
      p <tag> <n_vertices> <n_edges>
      e u v             (1-based vertex ids)

    The tag of the problem line and of edge lines is not checked. Every
    non-comment line after the problem line is an edge. Repeated edges and
    self-loops are kept. Vertex i in the file becomes node i - 1. Lines of
    at most one byte (after encoding) are skipped wherever they appear.

    The stream is read to the end but not closed.
    """
    if cfg is None:
        cfg = ParseConfig()

    lines = _filtered(_read_lines(stream, cfg.encoding), cfg.encoding)

    metadata, problem = _scan_header(lines)
    n_vertices, n_edges = _parse_problem_line(*problem)
    logger.debug("problem line: %d vertices, %d edges, metadata=%s", n_vertices, n_edges, metadata)

    graph: Graph = Graph()
    nodes = [graph.add_node(cfg.node_factory()) for _ in range(n_vertices)]

    for position, lineno, line in lines:
        parts = line.split()
        u = _unsigned(parts, 1)
        v = _unsigned(parts, 2)
        if u is None or v is None:
            raise MalformedEdgeLineError("Edge line is not of the form 'e <vertex> <vertex>'", line, position, lineno)

        if not (1 <= u <= n_vertices and 1 <= v <= n_vertices):
            raise VertexOutOfBoundsError(
                f"Vertex number in edge is outside [1, {n_vertices}]", line, position, lineno
            )

        graph.add_edge(nodes[u - 1], nodes[v - 1], cfg.edge_factory())

    if graph.edge_count() != n_edges:
        if cfg.strict_edge_count:
            raise EdgeCountMismatchError(n_edges, graph.edge_count())
        logger.warning("problem line declares %d edges, read %d", n_edges, graph.edge_count())

    return ParseResult(graph=graph, declared_edges=n_edges, **metadata)


def parse_text(text: str, cfg: Optional[ParseConfig] = None) -> ParseResult:
    if cfg is None:
        cfg = ParseConfig()
    return parse(io.BytesIO(text.encode(cfg.encoding)), cfg)


def read_col(path: str, cfg: Optional[ParseConfig] = None) -> ParseResult:
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise ColIOError(f"Could not open graph file {path}: {exc}") from exc

    with f:
        return parse(f, cfg)
