"""Topic, group and push lookup tables over a resolved graph."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from casy.emitters.descriptor import Prioritized

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from casy.emitters.descriptor import EmitterDescriptor
    from casy.engine.graph import DependencyGraph
    from casy.engine.priority import PriorityMap
    from casy.engine.settings import RootSettings

logger = logging.getLogger(__name__)


class EmitterIndex:
    """Immutable lookup tables built once per resolved graph.

    Every result is sorted by priority ascending. Ties keep discovery order:
    input order for flat lookups, breadth-first order for closures.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        priorities: PriorityMap,
        settings: RootSettings,
    ) -> None:
        self._graph = graph
        self._priorities = priorities
        self._settings = settings
        self._successors: Callable[[str], list[str]] = (
            graph.dependents if settings.topic_closure == "precedes" else graph.triggered
        )

        topics: dict[str, list[str]] = {}
        groups: dict[str, list[str]] = {}
        non_push: list[str] = []
        for emitter_id in graph.nodes:
            emitter = graph.emitter(emitter_id)
            for topic in sorted(emitter.topics):
                topics.setdefault(topic, []).append(emitter_id)
            for group in sorted(emitter.groups):
                groups.setdefault(group, []).append(emitter_id)
            if not emitter.is_push:
                non_push.append(emitter_id)

        self._topics = {t: tuple(ids) for t, ids in topics.items()}
        self._groups = {g: tuple(self._sorted(ids)) for g, ids in groups.items()}
        self._all = tuple(self._sorted(graph.nodes))
        self._non_push = tuple(self._sorted(self._closure(non_push)))
        logger.debug(
            "Indexed %d topic(s), %d group(s), %d non-push emitter(s)",
            len(self._topics),
            len(self._groups),
            len(self._non_push),
        )

    def _sorted(self, ids: Iterable[str]) -> list[str]:
        # sort is stable, so equal priorities keep the incoming order
        return sorted(ids, key=self._priorities.__getitem__)

    def _closure(self, seeds: Iterable[str]) -> list[str]:
        """Follow closure edges forward from *seeds* until nothing new is reached."""
        seen = dict.fromkeys(seeds)
        queue = deque(seen)
        while queue:
            node = queue.popleft()
            for child in self._successors(node):
                if child not in seen:
                    seen[child] = None
                    queue.append(child)
        return list(seen)

    def _wrap(self, ids: Iterable[str]) -> list[Prioritized[EmitterDescriptor]]:
        return [Prioritized(self._graph.emitter(i), self._priorities[i]) for i in ids]

    def topics(self) -> list[str]:
        return sorted(self._topics)

    def groups(self) -> list[str]:
        return sorted(self._groups)

    def all(self) -> list[Prioritized[EmitterDescriptor]]:
        return self._wrap(self._all)

    def non_push(self) -> list[Prioritized[EmitterDescriptor]]:
        """Emitters without topics, plus everything they trigger."""
        return self._wrap(self._non_push)

    def by_group(self, name: str) -> list[Prioritized[EmitterDescriptor]]:
        """Emitters tagged with *name*; groups are flat, so no closure applies."""
        return self._wrap(self._groups.get(name, ()))

    def by_topics(self, requested: Iterable[str]) -> list[Prioritized[EmitterDescriptor]]:
        """Emitters matching any of *requested*, closed over trigger edges."""
        wanted = {requested} if isinstance(requested, str) else set(requested)
        settings = self._settings

        if settings.all_emitters_topic is not None and settings.all_emitters_topic in wanted:
            return self.all()

        seeds: set[str] = set()
        for topic in wanted:
            seeds.update(self._topics.get(topic, ()))
        if (
            settings.all_non_push_emitters_topic is not None
            and settings.all_non_push_emitters_topic in wanted
        ):
            seeds.update(i for i in self._graph.nodes if not self._graph.emitter(i).is_push)

        ordered_seeds = sorted(seeds, key=self._graph.position)
        return self._wrap(self._sorted(self._closure(ordered_seeds)))
