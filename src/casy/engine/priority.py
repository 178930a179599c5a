"""Priority tiers from longest-path layering of the dependency graph."""

from __future__ import annotations

import heapq
import logging
from collections import deque
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from casy.engine.errors import DependencyCycleError

if TYPE_CHECKING:
    from casy.engine.graph import DependencyGraph

logger = logging.getLogger(__name__)


class PriorityMap(Mapping[str, int]):
    """Read-only ``emitter id -> priority`` mapping.

    Iteration follows the order in which the resolver settled each emitter.
    """

    def __init__(self, priorities: dict[str, int]) -> None:
        self._priorities = dict(priorities)

    def __getitem__(self, emitter_id: str) -> int:
        return self._priorities[emitter_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._priorities)

    def __len__(self) -> int:
        return len(self._priorities)

    def __repr__(self) -> str:
        return f"PriorityMap({self._priorities!r})"

    @property
    def max_priority(self) -> int:
        return max(self._priorities.values(), default=0)


def resolve_priorities(graph: DependencyGraph) -> PriorityMap:
    """Assign each emitter ``1 + length of the longest path reaching it``.

    Trigger and order edges count alike. Emitters without predecessors get 1.
    The result depends only on the graph's edges, never on input order.

    Raises:
        DependencyCycleError: The combined relation is not acyclic.
    """
    indegree = {n: len(graph.predecessors(n)) for n in graph.nodes}
    level = dict.fromkeys(graph.nodes, 1)

    ready = [n for n, deg in indegree.items() if deg == 0]
    heapq.heapify(ready)

    priorities: dict[str, int] = {}
    while ready:
        node = heapq.heappop(ready)
        priorities[node] = level[node]
        for child in graph.dependents(node):
            level[child] = max(level[child], level[node] + 1)
            indegree[child] -= 1
            if indegree[child] == 0:
                heapq.heappush(ready, child)

    if len(priorities) != len(graph):
        remaining = set(graph.nodes) - priorities.keys()
        cycle = find_cycle(graph, remaining)
        logger.debug("Unresolved emitters: %s", ", ".join(sorted(remaining)))
        raise DependencyCycleError(cycle)

    result = PriorityMap(priorities)
    logger.debug("Resolved %d emitters into %d tier(s)", len(result), result.max_priority)
    return result


def find_cycle(graph: DependencyGraph, remaining: set[str]) -> list[str]:
    """Return one shortest loop among *remaining*, rotated to start at its smallest id."""
    best: list[str] | None = None
    for start in sorted(remaining):
        cycle = _shortest_cycle_through(graph, start, remaining)
        if cycle is None:
            continue
        pivot = cycle.index(min(cycle))
        cycle = cycle[pivot:] + cycle[:pivot]
        if best is None or (len(cycle), cycle) < (len(best), best):
            best = cycle
    return best or []


def _shortest_cycle_through(
    graph: DependencyGraph, start: str, remaining: set[str]
) -> list[str] | None:
    parent: dict[str, str] = {}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for child in graph.dependents(node):
            if child not in remaining:
                continue
            if child == start:
                path = [node]
                while path[-1] != start:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            if child not in parent:
                parent[child] = node
                queue.append(child)
    return None
