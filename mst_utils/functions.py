# for parsing
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from graph_model import Graph

logger = logging.getLogger(__name__)

# (edge_id, src, dst, weight) as handed over by an editor
EdgeSpec = Tuple[str, str, str, object]


class _Tokens:
    """Whitespace token cursor that reports what it expected when input runs out."""

    def __init__(self, text: str) -> None:
        self._tokens = text.split()
        self._pos = 0

    def next(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            raise ValueError(f"Unexpected end of input: expected {what}.")
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def next_int(self, what: str) -> int:
        tok = self.next(what)
        try:
            return int(tok)
        except ValueError as e:
            raise ValueError(f"Invalid {what}: {tok!r} is not an integer.") from e

    def remaining(self) -> List[str]:
        return self._tokens[self._pos:]


def parse_graph_text(text: str, strict_endpoints: bool = False) -> Graph:
    """
    Parse the graph text format:

      V E
      <V vertex names>
      <E lines: edgeId src dst weight>

    Tokens are whitespace separated, so line breaks are not significant. Vertex i
    (in the order listed) gets index i.

    Raises:
      ValueError: malformed or negative counts, missing tokens, non-integer weights,
        tokens left over after E edges, duplicate vertex names or edge ids, and
        (only with strict_endpoints) edges naming an undeclared vertex.
    """
    tokens = _Tokens(text)
    num_vertices = tokens.next_int("vertex count V")
    num_edges = tokens.next_int("edge count E")
    if num_vertices < 0 or num_edges < 0:
        raise ValueError(f"Counts must be non-negative, got V={num_vertices} E={num_edges}.")

    graph = Graph(num_vertices, num_edges)

    for i in range(num_vertices):
        name = tokens.next(f"vertex name #{i + 1} of {num_vertices}")
        if graph.index_of(name) is not None:
            raise ValueError(f"Duplicate vertex name: {name!r}.")
        graph.add_vertex(name, i)

    seen_ids = set()
    for i in range(num_edges):
        where = f"edge #{i + 1} of {num_edges}"
        edge_id = tokens.next(f"id of {where}")
        src = tokens.next(f"source of {where}")
        dst = tokens.next(f"target of {where}")
        weight = tokens.next_int(f"weight of {where}")

        if edge_id in seen_ids:
            raise ValueError(f"Duplicate edge id: {edge_id!r}.")
        seen_ids.add(edge_id)

        unknown = [v for v in (src, dst) if graph.index_of(v) is None]
        if unknown:
            if strict_endpoints:
                raise ValueError(f"Edge {edge_id!r} references unknown vertex {unknown[0]!r}.")
            logger.warning("edge %s references unknown vertex %s; it will be rejected", edge_id, unknown[0])

        graph.add_edge(edge_id, weight, src, dst)

    extra = tokens.remaining()
    if extra:
        raise ValueError(
            f"Found {len(extra)} token(s) after the declared {num_edges} edges (first: {extra[0]!r})."
        )

    return graph


def parse_graph_file(path: Union[str, Path], strict_endpoints: bool = False) -> Graph:
    path = Path(path)
    if not path.exists():
        raise ValueError(f"File not found: {path}")
    with path.open("r", encoding="utf-8", errors="replace") as f:
        return parse_graph_text(f.read(), strict_endpoints=strict_endpoints)


def _coerce_weight(raw: object) -> int:
    """Integer weight for the text format; anything non-numeric or non-finite becomes 1."""
    try:
        w = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(w):
        return 1
    return int(w)


def format_graph_text(vertex_names: Sequence[str], edges: Iterable[EdgeSpec]) -> str:
    """
    Serialize vertices and edges into the text format read by parse_graph_text.

    Args:
      vertex_names: names in index order
      edges: (edge_id, src, dst, weight); weights are truncated to int

    Raises:
      ValueError: if a name or id is empty or contains whitespace.
    """
    edge_lines: List[str] = []
    for edge_id, src, dst, weight in edges:
        for tok in (edge_id, src, dst):
            _check_token(tok)
        edge_lines.append(f"{edge_id} {src} {dst} {_coerce_weight(weight)}")
    for name in vertex_names:
        _check_token(name)

    header = f"{len(vertex_names)} {len(edge_lines)}"
    return "\n".join([header, " ".join(vertex_names), *edge_lines]) + "\n"


def _check_token(tok: str) -> None:
    if not tok or len(tok.split()) != 1 or tok.strip() != tok:
        raise ValueError(f"Invalid token {tok!r}: names and ids must be non-empty and whitespace-free.")


# graph drawing
def circular_layout(names: Sequence[str], radius: float = 1.0) -> Dict[str, Tuple[float, float]]:
    """
    Place vertices evenly on a circle, first vertex at the top, going clockwise.

    Returns:
      name -> (x, y)
    """
    n = len(names)
    coords: Dict[str, Tuple[float, float]] = {}
    for i, name in enumerate(names):
        angle = math.pi / 2 - 2 * math.pi * i / n
        coords[name] = (radius * math.cos(angle), radius * math.sin(angle))
    return coords
