from __future__ import annotations

import math
from collections import deque
from typing import Deque, FrozenSet, List, Tuple

from catalog.models import AccuracyTier

from . import messages
from .accuracy import aggregate_accuracy, worst_priority
from .complexity import classify_complexity, precision_loss_note
from .graph import Graph, GraphEdge
from .model import TransformationPath, TransformationStep

_Frontier = Tuple[str, Tuple[TransformationStep, ...], FrozenSet[str]]


def make_step(current: str, edge: GraphEdge) -> TransformationStep:
    rec = edge.record
    return TransformationStep(
        source=current,
        target=edge.to,
        method=rec.method + messages.INVERSE_SUFFIX if edge.is_reverse else rec.method,
        accuracy=rec.accuracy,
        accuracy_tier=rec.accuracy_tier or AccuracyTier.UNKNOWN,
        operation_code=rec.operation_code,
        record_id=rec.id,
        notes=(rec.reverse_note or rec.notes) if edge.is_reverse else rec.notes,
        is_reverse=edge.is_reverse,
    )


def make_path(steps: List[TransformationStep]) -> TransformationPath:
    return TransformationPath(
        steps=steps,
        total_accuracy=aggregate_accuracy(steps),
        complexity=classify_complexity(len(steps)),
        estimated_precision_loss=precision_loss_note(len(steps)),
    )


def find_paths(
    source: str,
    target: str,
    graph: Graph,
    max_steps: int,
    max_paths: int,
) -> List[TransformationPath]:
    """Breadth-first search for chains of edges from ``source`` to ``target``.

    Cycles are avoided per branch, so two branches may pass through the same
    node. Once a chain of length L reaches the target, frontier entries that
    already hold L steps are not expanded. The search stops as soon as
    ``max_paths`` chains have been recorded.

    Results are sorted by step count, then by the least accurate step of each
    chain; remaining ties keep discovery order.
    """
    if max_steps < 1:
        raise ValueError("max_steps must be >= 1")
    if max_paths < 1:
        raise ValueError("max_paths must be >= 1")

    paths: List[TransformationPath] = []
    shortest = math.inf
    queue: Deque[_Frontier] = deque([(source, (), frozenset([source]))])

    while queue and len(paths) < max_paths:
        current, steps, visited = queue.popleft()
        depth = len(steps)
        if depth >= shortest or depth >= max_steps:
            continue

        for edge in graph.get(current, []):
            if edge.to in visited:
                continue
            step = make_step(current, edge)
            if edge.to == target:
                path = make_path(list(steps) + [step])
                paths.append(path)
                shortest = min(shortest, len(path.steps))
                if len(paths) >= max_paths:
                    break
            elif depth + 1 < max_steps:
                queue.append((edge.to, steps + (step,), visited | {edge.to}))

    return sorted(paths, key=lambda p: (len(p.steps), worst_priority(p.steps)))


__all__ = ["find_paths", "make_path", "make_step"]
