"""Transformation-path resolution between coordinate reference systems.

Modules:
 - graph: adjacency mapping built from catalog records (reverse edges included)
 - resolver: graph cache keyed by catalog version
 - search: bounded breadth-first path search and ranking
 - accuracy: accuracy priority and worst-case aggregation
 - complexity: step-count tiers
 - suggest: public entry point ``suggest_transformation``
"""

__all__ = [
    "graph",
    "resolver",
    "search",
    "accuracy",
    "complexity",
    "suggest",
]
