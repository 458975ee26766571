from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from catalog.models import TransformationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphEdge:
    to: str
    record: TransformationRecord
    is_reverse: bool


Graph = Dict[str, List[GraphEdge]]


def build_graph(records: Iterable[TransformationRecord]) -> Graph:
    """Adjacency mapping CRS code -> outgoing edges.

    Every record yields a forward edge; reversible records also yield a
    reverse edge under their target. Parallel edges are kept since they may
    differ in method or accuracy.
    """
    graph: Graph = {}
    n_edges = 0
    for rec in records:
        graph.setdefault(rec.source, []).append(GraphEdge(to=rec.target, record=rec, is_reverse=False))
        n_edges += 1
        if rec.reversible:
            graph.setdefault(rec.target, []).append(GraphEdge(to=rec.source, record=rec, is_reverse=True))
            n_edges += 1
    logger.debug("graph built: %d nodes with outgoing edges, %d edges", len(graph), n_edges)
    return graph


def node_count(graph: Graph) -> int:
    nodes = set(graph.keys())
    for edges in graph.values():
        nodes.update(e.to for e in edges)
    return len(nodes)


__all__ = ["Graph", "GraphEdge", "build_graph", "node_count"]
