# graph_model.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """Undirected weighted edge. (src, dst) keeps the orientation it was given in."""
    id: str
    weight: int
    src: str
    dst: str


class UnionFind:
    def __init__(self, n: int) -> None:
        self.parent = list(range(n))
        self.rank = [0] * n
        self.find_calls = 0
        self.union_calls = 0

    def find(self, x: int) -> int:
        self.find_calls += 1
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        self.union_calls += 1
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        # union by rank
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return True


class Graph:
    """
    Weighted undirected graph: named vertices with dense indices, edges in input order,
    plus the disjoint-set forest Kruskal runs on.

    Vertex indices are expected to be a contiguous permutation of [0, V); the model
    trusts the caller on that and on id uniqueness (see mst_utils.functions).
    """

    def __init__(self, num_vertices: Optional[int] = None, num_edges: Optional[int] = None) -> None:
        self.declared_vertices = num_vertices
        self.declared_edges = num_edges
        self._vertices: Dict[str, int] = {}
        self._edges: List[Edge] = []
        self._forest: Optional[UnionFind] = None

    def add_vertex(self, name: str, index: int) -> None:
        self._vertices[name] = index

    def add_edge(self, edge_id: str, weight: int, src: str, dst: str) -> None:
        self._edges.append(Edge(edge_id, weight, src, dst))

    def index_of(self, name: str) -> Optional[int]:
        """Vertex index for `name`, or None if no such vertex was registered."""
        return self._vertices.get(name)

    @property
    def vertices(self) -> Dict[str, int]:
        return dict(self._vertices)

    @property
    def vertex_names(self) -> List[str]:
        return sorted(self._vertices, key=self._vertices.__getitem__)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    @property
    def num_vertices(self) -> int:
        return len(self._vertices)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def sort_edges_by_weight(self) -> List[Edge]:
        """
        Edges in non-decreasing weight order.

        sorted() is stable, so equal weights keep their input order; the stored
        edge list is left untouched.
        """
        return sorted(self._edges, key=lambda e: e.weight)

    def make_sets(self) -> None:
        """Reset the disjoint-set forest to one singleton per vertex index."""
        size = max(self._vertices.values(), default=-1) + 1
        self._forest = UnionFind(size)
        logger.debug("initialized %d singleton sets", size)

    def _require_forest(self) -> UnionFind:
        if self._forest is None:
            raise RuntimeError("make_sets() must be called before find()/union().")
        return self._forest

    def find(self, index: int) -> int:
        return self._require_forest().find(index)

    def union(self, a: int, b: int) -> bool:
        """
        Merge the sets holding `a` and `b`.

        Returns:
          True if two distinct sets were merged, False if they already shared a root
          (the edge would close a cycle).
        """
        return self._require_forest().union(a, b)

    def op_metrics(self) -> Dict[str, int]:
        forest = self._forest
        if forest is None:
            return {"find_calls": 0, "union_calls": 0}
        return {"find_calls": forest.find_calls, "union_calls": forest.union_calls}
