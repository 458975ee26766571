"""Graph cache keyed by catalog version.

A ``PathResolver`` owns one derived graph and the version token it was built
from. ``graph_for`` rebuilds only when the catalog version changes; ``clear``
forces a rebuild on next access (tests, catalog reloads).

Sync FastAPI handlers run in a thread pool, so the read-or-rebuild sequence
is serialized with a lock; graph and version are swapped together.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from catalog.models import TransformationCatalog

from .graph import Graph, build_graph, node_count

logger = logging.getLogger(__name__)


class PathResolver:
    def __init__(self) -> None:
        self._graph: Optional[Graph] = None
        self._version: Optional[str] = None
        self._lock = threading.Lock()
        self.builds = 0

    @property
    def version(self) -> Optional[str]:
        return self._version

    def graph_for(self, catalog: TransformationCatalog) -> Graph:
        with self._lock:
            if self._graph is not None and self._version == catalog.version:
                return self._graph
            graph = build_graph(catalog.transformations)
            self._graph, self._version = graph, catalog.version
            self.builds += 1
            logger.info(
                "graph.rebuild version=%s nodes=%d records=%d",
                catalog.version,
                node_count(graph),
                len(catalog.transformations),
            )
            return graph

    def is_stale(self, catalog: TransformationCatalog) -> bool:
        return self._graph is None or self._version != catalog.version

    def clear(self) -> None:
        with self._lock:
            self._graph = None
            self._version = None


_default = PathResolver()


def get_resolver() -> PathResolver:
    return _default


__all__ = ["PathResolver", "get_resolver"]
